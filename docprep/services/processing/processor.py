"""
Document processor: optional cleaning, post-clean normalization, and sentence-boundary
chunking. Progress is reported to an injected observer; the processor itself never logs
per-document progress.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from docprep.config.logging import get_logger, log_extra
from docprep.config.processing.models import ProcessingConfig
from docprep.services.chunking.sentence_boundary import sentence_boundary_chunks
from docprep.services.chunking.tokenizer import count_tokens
from docprep.services.cleaning.cleaner import Cleaner, CleaningStats, InvalidPattern, split_lines
from docprep.services.processing.document import (
    Document,
    DocumentStats,
    get_document_stats,
    load_document,
    validate_document,
)
from docprep.utils.text import is_blank

logger = get_logger(__name__)

BYTE_ORDER_MARK = "\ufeff"
TAB_EXPANSION = "    "

# Observer receives (stage, details); stages: "cleaned", "preprocessed", "chunked"
ProcessingObserver = Callable[[str, dict[str, Any]], None]


def log_observer(stage: str, details: dict[str, Any]) -> None:
    """Observer that writes processing events to the module logger."""
    fields = {
        k: (v.model_dump() if isinstance(v, BaseModel) else v)
        for k, v in details.items()
    }
    logger.info("Processing stage complete", **log_extra({"stage": stage, **fields}))


class ProcessingResult(BaseModel):
    """Output of process_document / process_text."""

    model_config = ConfigDict(frozen=True)

    content: str
    chunks: list[str]
    cleaning_stats: CleaningStats | None = None


class Processor:
    """
    Orchestrates preprocessing and chunking for one ProcessingConfig.

    A Cleaner is built only when the config carries an enabled cleaning section.
    Instances are immutable after construction and safe to share.
    """

    def __init__(self, config: ProcessingConfig, observer: ProcessingObserver | None = None):
        self._config = config
        self._observer = observer
        self._cleaner = Cleaner(config.cleaning) if config.cleaning_enabled else None
        logger.debug(
            "Processor initialized",
            extra={"chunk_size": config.chunk_size, "cleaning": self._cleaner is not None},
        )

    @property
    def config(self) -> ProcessingConfig:
        return self._config

    @property
    def cleaner(self) -> Cleaner | None:
        return self._cleaner

    @property
    def invalid_patterns(self) -> list[InvalidPattern]:
        return self._cleaner.invalid_patterns if self._cleaner is not None else []

    def _notify(self, stage: str, **details: Any) -> None:
        if self._observer is not None:
            self._observer(stage, details)

    def preprocess(self, content: str) -> str:
        """Clean (if configured), collapse blank lines, normalize line endings and tabs, strip a BOM."""
        processed, _ = self._preprocess(content)
        return processed

    def _preprocess(self, content: str) -> tuple[str, CleaningStats | None]:
        if not self._config.enable_preprocessing:
            return content, None
        processed = content
        stats = None
        if self._cleaner is not None:
            processed = self._cleaner.clean(processed)
            stats = self._cleaner.stats(content, processed)
            self._notify("cleaned", stats=stats)
        # Every non-blank line becomes its own paragraph
        processed = "\n\n".join(line for line in split_lines(processed) if not is_blank(line))
        processed = processed.replace("\r\n", "\n")
        processed = processed.replace("\t", TAB_EXPANSION)
        if processed.startswith(BYTE_ORDER_MARK):
            processed = processed[len(BYTE_ORDER_MARK):]
        self._notify(
            "preprocessed",
            original_chars=len(content),
            processed_chars=len(processed),
        )
        return processed, stats

    def chunk(self, content: str) -> list[str]:
        """Split content into chunks of at most chunk_size characters, preferring sentence boundaries."""
        chunks = sentence_boundary_chunks(content, self._config.chunk_size)
        if len(chunks) > 1:
            self._notify(
                "chunked",
                chunk_count=len(chunks),
                average_chars=len(content) // len(chunks),
            )
        return chunks

    def process_text(self, text: str) -> ProcessingResult:
        """Preprocess then chunk a literal string."""
        processed, stats = self._preprocess(text)
        return ProcessingResult(content=processed, chunks=self.chunk(processed), cleaning_stats=stats)

    def process_document(self, document: Document) -> ProcessingResult:
        return self.process_text(document.content)

    def load_document(self, path: str | Path) -> Document:
        """Load a file, applying the configured size limit."""
        return load_document(path, max_bytes=self._config.max_document_size_bytes)

    def validate_document(self, document: Document) -> None:
        validate_document(document, self._config)

    def get_document_stats(self, document: Document) -> DocumentStats:
        return get_document_stats(document)

    def estimate_tokens(self, content: str) -> int:
        return count_tokens(content)
