"""Tests for config models, static profiles, env overrides, and config files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from docprep.config.processing.models import CleaningConfig, ProcessingConfig
from docprep.config.processing.static import (
    apply_env_overrides,
    get_active_profile_name,
    load_effective_config,
    load_processing_config_file,
    load_processing_profiles,
    resolve_processing_config,
)
from docprep.config.settings import Settings, env_variables_info
from docprep.services.cleaning.patterns import code_patterns, noise_patterns
from docprep.services.errors import ConfigError


def _settings(**overrides: object) -> Settings:
    """Settings isolated from any .env file."""
    return Settings(_env_file=None, **overrides)


# --- Models ---


class TestCleaningConfig:
    """CleaningConfig defaults and partial loading."""

    def test_defaults(self) -> None:
        """Constructor defaults follow the documented table."""
        cfg = CleaningConfig()
        assert cfg.enable_cleaning is True
        assert cfg.remove_base64_images is True
        assert cfg.remove_binary_data is True
        assert cfg.remove_html_tags is False
        assert cfg.normalize_whitespace is True
        assert cfg.max_string_length == 1000
        assert cfg.custom_patterns == ()

    def test_from_partial_absent_means_off(self) -> None:
        """Missing keys resolve to disabled."""
        cfg = CleaningConfig.from_partial({})
        assert cfg.enable_cleaning is False
        assert cfg.remove_base64_images is False
        assert cfg.normalize_whitespace is False
        assert cfg.max_string_length is None

    def test_pattern_catalogs_expanded(self) -> None:
        """Catalog names expand after explicit patterns."""
        cfg = CleaningConfig.from_partial({"custom_patterns": ["x+"], "pattern_catalogs": ["noise"]})
        assert cfg.custom_patterns == ("x+", *noise_patterns())

    def test_unknown_catalog(self) -> None:
        """Unknown catalog names are a config error."""
        with pytest.raises(ConfigError):
            CleaningConfig.from_partial({"pattern_catalogs": ["nope"]})

    def test_frozen(self) -> None:
        """Configs are immutable."""
        cfg = CleaningConfig()
        with pytest.raises(PydanticValidationError):
            cfg.enable_cleaning = False

    def test_rejects_zero_length(self) -> None:
        """max_string_length must be positive."""
        with pytest.raises(PydanticValidationError):
            CleaningConfig(max_string_length=0)


class TestProcessingConfig:
    """ProcessingConfig defaults and partial loading."""

    def test_defaults(self) -> None:
        """Constructor defaults."""
        cfg = ProcessingConfig()
        assert cfg.chunk_size == 4000
        assert cfg.max_document_size_mb == 10.0
        assert cfg.supported_formats == frozenset({"txt", "md"})
        assert cfg.enable_preprocessing is True
        assert cfg.cleaning == CleaningConfig()
        assert cfg.cleaning_enabled is True

    def test_formats_normalized(self) -> None:
        """Extensions are lower-cased and stripped of dots."""
        cfg = ProcessingConfig(supported_formats=[".TXT", "Md", " "])
        assert cfg.supported_formats == frozenset({"txt", "md"})

    def test_from_partial(self) -> None:
        """Missing keys resolve at load time."""
        cfg = ProcessingConfig.from_partial({})
        assert cfg.chunk_size == 4000
        assert cfg.enable_preprocessing is True
        assert cfg.max_document_size_mb is None
        assert cfg.max_document_size_bytes is None
        assert cfg.cleaning is None
        assert cfg.cleaning_enabled is False

    def test_from_partial_nested_cleaning(self) -> None:
        """A nested cleaning mapping goes through CleaningConfig.from_partial."""
        cfg = ProcessingConfig.from_partial({"cleaning": {"enable_cleaning": True}})
        assert cfg.cleaning.enable_cleaning is True
        assert cfg.cleaning.remove_base64_images is False

    def test_serialized_formats_sorted(self) -> None:
        """JSON dumps list formats in sorted order."""
        cfg = ProcessingConfig(supported_formats=["txt", "csv", "md"])
        assert cfg.model_dump(mode="json")["supported_formats"] == ["csv", "md", "txt"]

    def test_size_in_bytes(self) -> None:
        """MB limit converts to bytes."""
        assert ProcessingConfig(max_document_size_mb=1.0).max_document_size_bytes == 1024 * 1024


# --- Static profiles ---


class TestStaticProfiles:
    """Profiles shipped in static.json."""

    def test_profiles_present(self) -> None:
        """Shipped profiles load."""
        profiles = load_processing_profiles()
        assert {"default", "web", "logs", "raw"} <= set(profiles)

    def test_active_is_default(self) -> None:
        """The active profile resolves like its name."""
        assert get_active_profile_name() == "default"
        assert resolve_processing_config("active") == resolve_processing_config("default")

    def test_default_matches_model_defaults(self) -> None:
        """The default profile equals the in-code defaults."""
        assert resolve_processing_config("default") == ProcessingConfig()

    def test_web_profile_catalogs(self) -> None:
        """Catalog names in a profile expand to patterns."""
        cfg = resolve_processing_config("web")
        assert cfg.cleaning.remove_html_tags is True
        assert cfg.cleaning.custom_patterns == (*noise_patterns(), *code_patterns())

    def test_raw_profile(self) -> None:
        """The raw profile has no cleaning and no preprocessing."""
        cfg = resolve_processing_config("raw")
        assert cfg.cleaning is None
        assert cfg.enable_preprocessing is False

    def test_unknown_profile(self) -> None:
        """Unknown names raise ConfigError."""
        with pytest.raises(ConfigError):
            resolve_processing_config("missing")

    def test_inline_config(self) -> None:
        """Inline config wins over the profile name."""
        cfg = resolve_processing_config("missing", {"chunk_size": 123})
        assert cfg.chunk_size == 123

    def test_invalid_inline_config(self) -> None:
        """Invalid inline values raise ConfigError."""
        with pytest.raises(ConfigError):
            resolve_processing_config("default", {"chunk_size": 0})


# --- Environment overrides ---


class TestEnvOverrides:
    """Settings-based overrides."""

    def test_no_overrides(self) -> None:
        """Unset overrides leave the config as-is."""
        base = ProcessingConfig()
        assert apply_env_overrides(base, _settings()) is base

    def test_processing_and_cleaning_overrides(self) -> None:
        """Set overrides replace profile values."""
        cfg = apply_env_overrides(
            ProcessingConfig(),
            _settings(chunk_size=500, remove_html_tags=True, max_string_length=80),
        )
        assert cfg.chunk_size == 500
        assert cfg.cleaning.remove_html_tags is True
        assert cfg.cleaning.max_string_length == 80
        assert cfg.cleaning.remove_binary_data is True

    def test_cleaning_overrides_need_section(self) -> None:
        """Cleaning overrides do nothing without a cleaning section."""
        base = ProcessingConfig(cleaning=None)
        cfg = apply_env_overrides(base, _settings(enable_cleaning=True))
        assert cfg.cleaning is None

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Override values come from environment variables."""
        monkeypatch.setenv("CHUNK_SIZE", "123")
        monkeypatch.setenv("ENABLE_CLEANING", "off")
        monkeypatch.setenv("PROCESSING_PROFILE", "default")
        settings = _settings()
        assert settings.chunk_size == 123
        assert settings.enable_cleaning is False
        cfg = load_effective_config(settings)
        assert cfg.chunk_size == 123
        assert cfg.cleaning_enabled is False

    def test_env_variables_info(self) -> None:
        """Every override is listed with a description."""
        names = dict(env_variables_info())
        assert "CHUNK_SIZE" in names
        assert "MAX_STRING_LENGTH" in names
        assert "DOCUMENTS_ROOT" in names
        assert all(names.values())


# --- Config files ---


class TestConfigFile:
    """User-supplied JSON config files."""

    def test_nested_processing_section(self, tmp_path: Path) -> None:
        """A top-level processing key is used when present."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"processing": {"chunk_size": 100, "cleaning": {"enable_cleaning": True}}}))
        cfg = load_processing_config_file(path)
        assert cfg.chunk_size == 100
        assert cfg.cleaning.enable_cleaning is True
        assert cfg.cleaning.normalize_whitespace is False

    def test_flat_file(self, tmp_path: Path) -> None:
        """The processing mapping may sit at the top level."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"chunk_size": 42}))
        assert load_processing_config_file(path).chunk_size == 42

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise ConfigError."""
        with pytest.raises(ConfigError):
            load_processing_config_file(tmp_path / "absent.json")

    def test_bad_json(self, tmp_path: Path) -> None:
        """Malformed JSON raises ConfigError."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_processing_config_file(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Values failing validation raise ConfigError."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"chunk_size": 0}))
        with pytest.raises(ConfigError):
            load_processing_config_file(path)
