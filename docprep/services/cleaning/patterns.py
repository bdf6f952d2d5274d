"""Predefined noise pattern catalogs. Callers merge them into CleaningConfig.custom_patterns."""

from typing import Callable

from docprep.services.errors import ConfigError


def noise_patterns() -> list[str]:
    """Repeated punctuation, URL query strings, long digit runs, and letter runs (likely garbage)."""
    return [
        r"[.]{3,}",
        r"[!]{2,}",
        r"[?]{2,}",
        r"\?[^&]*&[^&]*",
        r"\b\d{10,}\b",
        r"\b[a-zA-Z]{20,}\b",
    ]


def code_patterns() -> list[str]:
    """Hex color codes and CSS class selectors."""
    return [
        r"#[0-9a-fA-F]{6}",
        r"\.[a-zA-Z][a-zA-Z0-9_-]*",
    ]


def log_patterns() -> list[str]:
    """Timestamps, log levels, and IPv4 addresses."""
    return [
        r"\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}:\d{2}",
        r"\b(DEBUG|INFO|WARN|ERROR|TRACE)\b",
        r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b",
    ]


CATALOG_REGISTRY: dict[str, Callable[[], list[str]]] = {
    "noise": noise_patterns,
    "code": code_patterns,
    "log": log_patterns,
}

CATALOG_NAMES: tuple[str, ...] = tuple(CATALOG_REGISTRY)


def get_catalog(name: str) -> list[str]:
    """Return the pattern sources for the named catalog. Raises ConfigError if unknown."""
    fn = CATALOG_REGISTRY.get(name)
    if fn is None:
        raise ConfigError(f"Unknown pattern catalog: {name!r} (expected one of {', '.join(CATALOG_NAMES)})")
    return fn()
