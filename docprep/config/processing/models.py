"""Processing and cleaning configuration models. Read-only; no business logic.

Defaults used when constructing in code:

    enable_cleaning        True
    remove_base64_images   True
    remove_binary_data     True
    remove_html_tags       False
    normalize_whitespace   True
    max_string_length      1000
    custom_patterns        ()
    chunk_size             4000
    max_document_size_mb   10.0
    supported_formats      {"txt", "md"}
    enable_preprocessing   True

Mappings loaded from profiles or requests go through ``from_partial``, where an
absent cleaning flag means disabled and an absent size limit means unlimited.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from docprep.services.cleaning.patterns import get_catalog

DEFAULT_CHUNK_SIZE = 4000
DEFAULT_SUPPORTED_FORMATS = frozenset({"txt", "md"})

_CLEANING_FLAGS = (
    "enable_cleaning",
    "remove_base64_images",
    "remove_binary_data",
    "remove_html_tags",
    "normalize_whitespace",
)


class CleaningConfig(BaseModel):
    """Toggles for the cleaning passes. Immutable once built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    enable_cleaning: bool = Field(default=True, description="Master switch; False makes clean() the identity")
    remove_base64_images: bool = Field(default=True, description="Strip data:image/...;base64 payloads")
    remove_binary_data: bool = Field(default=True, description="Replace non-text characters with spaces")
    remove_html_tags: bool = Field(default=False, description="Strip <...> tags")
    normalize_whitespace: bool = Field(default=True, description="Collapse whitespace outside fenced code blocks")
    max_string_length: int | None = Field(default=1000, ge=1, description="Hard-wrap width in characters")
    custom_patterns: tuple[str, ...] = Field(default_factory=tuple, description="Extra regexes removed in order")

    @classmethod
    def from_partial(cls, data: Mapping[str, Any]) -> "CleaningConfig":
        """
        Build from a loaded mapping. Missing flags resolve to False and a missing
        max_string_length to None. Names listed under ``pattern_catalogs`` are
        expanded into custom_patterns after any explicit patterns.
        """
        resolved = dict(data)
        catalogs = resolved.pop("pattern_catalogs", None) or []
        for flag in _CLEANING_FLAGS:
            resolved.setdefault(flag, False)
        resolved.setdefault("max_string_length", None)
        patterns = list(resolved.get("custom_patterns") or [])
        for name in catalogs:
            patterns.extend(get_catalog(name))
        resolved["custom_patterns"] = tuple(patterns)
        return cls.model_validate(resolved)


class ProcessingConfig(BaseModel):
    """Document processing parameters: chunking, limits, formats, and optional cleaning."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1, description="Max characters per chunk")
    max_document_size_mb: float | None = Field(default=10.0, gt=0, description="Document size limit (MB)")
    supported_formats: frozenset[str] = Field(default=DEFAULT_SUPPORTED_FORMATS)
    enable_preprocessing: bool = Field(default=True)
    cleaning: CleaningConfig | None = Field(default_factory=CleaningConfig)

    @field_validator("supported_formats", mode="before")
    @classmethod
    def _normalize_formats(cls, value: Any) -> frozenset[str]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, Iterable):
            return value
        return frozenset(str(v).strip().lstrip(".").lower() for v in value if str(v).strip())

    @field_serializer("supported_formats")
    def _serialize_formats(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    @property
    def max_document_size_bytes(self) -> int | None:
        if self.max_document_size_mb is None:
            return None
        return int(self.max_document_size_mb * 1024 * 1024)

    @property
    def cleaning_enabled(self) -> bool:
        return self.cleaning is not None and self.cleaning.enable_cleaning

    @classmethod
    def from_partial(cls, data: Mapping[str, Any]) -> "ProcessingConfig":
        """
        Build from a loaded mapping. Missing chunk_size is 4000, missing
        enable_preprocessing is True, a missing size limit is unlimited and a
        missing cleaning section disables cleaning.
        """
        resolved = dict(data)
        resolved.setdefault("chunk_size", DEFAULT_CHUNK_SIZE)
        resolved.setdefault("enable_preprocessing", True)
        resolved.setdefault("max_document_size_mb", None)
        resolved.setdefault("supported_formats", DEFAULT_SUPPORTED_FORMATS)
        cleaning = resolved.get("cleaning")
        if isinstance(cleaning, Mapping):
            resolved["cleaning"] = CleaningConfig.from_partial(cleaning)
        elif cleaning is None:
            resolved["cleaning"] = None
        return cls.model_validate(resolved)
