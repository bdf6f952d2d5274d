"""Static processing config loader. Read-only; no business logic."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from docprep.config.processing.models import ProcessingConfig
from docprep.config.settings import (
    CLEANING_OVERRIDE_FIELDS,
    PROCESSING_OVERRIDE_FIELDS,
    Settings,
    get_settings,
)
from docprep.services.errors import ConfigError

_config_dir = Path(__file__).resolve().parent
_config_path = _config_dir / "static.json"

_cached: dict[str, ProcessingConfig] | None = None
_active_profile: str | None = None


def _load_raw_data() -> dict:
    """Load raw JSON; used to read both profiles and active."""
    raw = _config_path.read_text(encoding="utf-8")
    return json.loads(raw)


def load_processing_profiles() -> dict[str, ProcessingConfig]:
    """Load processing profiles from static.json. Keys are profile names."""
    global _cached
    if _cached is not None:
        return _cached
    data = _load_raw_data()
    profiles = data.get("profiles", {})
    _cached = {k: ProcessingConfig.from_partial(v) for k, v in profiles.items()}
    return _cached


def get_processing_config(profile_name: str) -> ProcessingConfig | None:
    """Return processing config for the given profile, or None if missing."""
    return load_processing_profiles().get(profile_name)


def get_active_profile_name() -> str:
    """Return the profile name marked as active in static.json. Defaults to 'default' if missing."""
    global _active_profile
    if _active_profile is not None:
        return _active_profile
    data = _load_raw_data()
    _active_profile = data.get("active", "default")
    return _active_profile


def resolve_processing_config(profile_name: str, inline_config: dict[str, Any] | None = None) -> ProcessingConfig:
    """
    Resolve processing config by profile name or inline config.
    If inline_config is provided and non-empty, validate and return it.
    If profile_name is "active", use the profile marked as active in static.json.
    Raises ConfigError if the profile is unknown or the inline config is invalid.
    """
    if inline_config:
        try:
            return ProcessingConfig.from_partial(inline_config)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid processing config: {e}") from e
    if profile_name == "active":
        profile_name = get_active_profile_name()
    cfg = get_processing_config(profile_name)
    if cfg is None:
        raise ConfigError(f"Unknown processing profile: {profile_name!r}")
    return cfg


def apply_env_overrides(config: ProcessingConfig, settings: Settings | None = None) -> ProcessingConfig:
    """
    Return config with every override set in the environment applied. Cleaning
    overrides only apply when the profile has a cleaning section.
    """
    settings = settings or get_settings()
    updates: dict[str, Any] = {
        name: getattr(settings, name)
        for name in PROCESSING_OVERRIDE_FIELDS
        if getattr(settings, name) is not None
    }
    if config.cleaning is not None:
        cleaning_updates = {
            name: getattr(settings, name)
            for name in CLEANING_OVERRIDE_FIELDS
            if getattr(settings, name) is not None
        }
        if cleaning_updates:
            updates["cleaning"] = config.cleaning.model_copy(update=cleaning_updates)
    if not updates:
        return config
    return config.model_copy(update=updates)


def load_effective_config(settings: Settings | None = None) -> ProcessingConfig:
    """Resolve the configured profile and apply environment overrides."""
    settings = settings or get_settings()
    base = resolve_processing_config(settings.processing_profile)
    return apply_env_overrides(base, settings)


def load_processing_config_file(path: str | Path) -> ProcessingConfig:
    """
    Load a processing config from a user-supplied JSON file. The file may hold the
    processing mapping directly or under a top-level "processing" key.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {str(path)!r}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read config file {str(path)!r}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {str(path)!r} must contain a JSON object")
    section = data.get("processing", data)
    try:
        return ProcessingConfig.from_partial(section)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid processing config in {str(path)!r}: {e}") from e
