"""
Content cleaner: removes embedded images, binary bytes, markup, and custom noise
patterns, hard-wraps long runs, and normalizes whitespace outside fenced code blocks.
Passes run in a fixed order; each consumes the previous pass's output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from docprep.config.logging import get_logger
from docprep.config.processing.models import CleaningConfig
from docprep.services.errors import PatternCompileError
from docprep.utils.text import split_whitespace, strip_whitespace

logger = get_logger(__name__)

# Padding only at the end of the payload, so text right after "=" survives
BASE64_IMAGE_PATTERN = r"data:image/[^;]+;base64,[A-Za-z0-9+/]+={0,2}"
# Anything outside printable ASCII, CR/LF/TAB, and CJK Unified Ideographs
BINARY_DATA_PATTERN = r"[^\x20-\x7E\r\n\t\u4E00-\u9FFF]"
HTML_TAG_PATTERN = r"<[^>]*>"

CODE_FENCE = "```"


@dataclass(frozen=True)
class CompiledPattern:
    source: str
    regex: re.Pattern[str]


@dataclass(frozen=True)
class InvalidPattern:
    source: str
    reason: str


class CleaningStats(BaseModel):
    """Before/after sizes of a cleaning run, in UTF-8 bytes."""

    model_config = ConfigDict(frozen=True)

    original_length: int = Field(..., ge=0)
    cleaned_length: int = Field(..., ge=0)
    removed_chars: int = Field(..., description="Negative when hard-wrapping added newlines")
    removal_ratio: float | None = Field(default=None, description="None for empty input")


def get_cleaning_stats(original: str, cleaned: str) -> CleaningStats:
    """Compute CleaningStats for an original/cleaned pair. Has no effect on cleaning."""
    original_length = len(original.encode("utf-8"))
    cleaned_length = len(cleaned.encode("utf-8"))
    removed = original_length - cleaned_length
    ratio = removed / original_length if original_length else None
    return CleaningStats(
        original_length=original_length,
        cleaned_length=cleaned_length,
        removed_chars=removed,
        removal_ratio=ratio,
    )


def _compile_fixed(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternCompileError(pattern, str(e)) from e


def _compile_custom(source: str) -> CompiledPattern | InvalidPattern:
    try:
        return CompiledPattern(source=source, regex=re.compile(source))
    except re.error as e:
        return InvalidPattern(source=source, reason=str(e))


def split_lines(text: str) -> list[str]:
    """Split on LF, dropping a trailing CR per line and the empty tail after a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def hard_wrap(text: str, max_length: int) -> str:
    """Cut text into runs of exactly max_length characters joined by newlines. Not word-aware."""
    return "\n".join(text[i : i + max_length] for i in range(0, len(text), max_length))


def normalize_whitespace(text: str) -> str:
    """
    Collapse whitespace runs to single spaces and trim each line, except inside
    fenced code blocks. Fence lines toggle the block and are kept as-is.
    """
    result: list[str] = []
    in_code_block = False
    for line in split_lines(text):
        if strip_whitespace(line).startswith(CODE_FENCE):
            in_code_block = not in_code_block
            result.append(line)
        elif in_code_block:
            result.append(line)
        else:
            result.append(" ".join(split_whitespace(line)))
    return "\n".join(result)


class Cleaner:
    """
    Applies the configured cleaning passes to a content string.

    The three built-in filters and all custom patterns are compiled once here;
    instances hold no mutable state and can be shared across threads.
    """

    def __init__(self, config: CleaningConfig):
        self._config = config
        self._base64_image_re = _compile_fixed(BASE64_IMAGE_PATTERN)
        self._binary_data_re = _compile_fixed(BINARY_DATA_PATTERN)
        self._html_tag_re = _compile_fixed(HTML_TAG_PATTERN)
        self._custom = tuple(_compile_custom(p) for p in config.custom_patterns)
        for invalid in self.invalid_patterns:
            logger.warning(
                "Skipping invalid custom pattern",
                extra={"pattern": invalid.source, "error": invalid.reason},
            )
        logger.debug(
            "Cleaner initialized",
            extra={"enabled": config.enable_cleaning, "custom_patterns": len(self._custom)},
        )

    @property
    def config(self) -> CleaningConfig:
        return self._config

    @property
    def invalid_patterns(self) -> list[InvalidPattern]:
        """Custom patterns that failed to compile and are skipped by clean()."""
        return [p for p in self._custom if isinstance(p, InvalidPattern)]

    def clean(self, content: str) -> str:
        """Run every enabled pass in order. Identity when enable_cleaning is off."""
        cfg = self._config
        if not cfg.enable_cleaning:
            return content
        cleaned = content
        if cfg.remove_base64_images:
            cleaned = self.remove_base64_images(cleaned)
        if cfg.remove_binary_data:
            cleaned = self.remove_binary_data(cleaned)
        # Must run before hard-wrapping, which can split a tag
        if cfg.remove_html_tags:
            cleaned = self.remove_html_tags(cleaned)
        if cfg.max_string_length is not None:
            cleaned = hard_wrap(cleaned, cfg.max_string_length)
        if cfg.normalize_whitespace:
            cleaned = normalize_whitespace(cleaned)
        if self._custom:
            cleaned = self.apply_custom_patterns(cleaned)
        return cleaned

    def remove_base64_images(self, content: str) -> str:
        return self._base64_image_re.sub("", content)

    def remove_binary_data(self, content: str) -> str:
        # One space per character so neighbouring tokens do not merge
        return self._binary_data_re.sub(" ", content)

    def remove_html_tags(self, content: str) -> str:
        return self._html_tag_re.sub("", content)

    def apply_custom_patterns(self, content: str) -> str:
        for pattern in self._custom:
            if isinstance(pattern, CompiledPattern):
                content = pattern.regex.sub("", content)
        return content

    def stats(self, original: str, cleaned: str) -> CleaningStats:
        return get_cleaning_stats(original, cleaned)
