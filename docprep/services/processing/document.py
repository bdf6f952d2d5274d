"""
Document loading, metadata extraction, validation, and stats.
Documents are immutable values built once at load time.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from docprep.config.logging import get_logger
from docprep.config.processing.models import ProcessingConfig
from docprep.services.chunking.tokenizer import count_tokens
from docprep.services.cleaning.cleaner import split_lines
from docprep.services.errors import DocumentError, ValidationError
from docprep.utils.text import split_whitespace, strip_whitespace

logger = get_logger(__name__)

# Hard cap on file loads when the config sets no size limit
DEFAULT_MAX_LOAD_BYTES = 10 * 1024 * 1024

CONTENT_TYPES: dict[str, str] = {
    "txt": "text/plain",
    "md": "text/markdown",
    "json": "application/json",
    "yaml": "text/yaml",
    "yml": "text/yaml",
    "toml": "text/toml",
    "xml": "application/xml",
    "csv": "text/csv",
}
DEFAULT_CONTENT_TYPE = "text/plain"


class DocumentMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str | None = None
    author: str | None = None
    created_at: str | None = None
    modified_at: str | None = None
    word_count: int = Field(default=0, ge=0)
    line_count: int = Field(default=0, ge=0)


class Document(BaseModel):
    """A loaded document: path, raw content, detected type, size, and derived metadata."""

    model_config = ConfigDict(frozen=True)

    path: Path
    content: str
    content_type: str
    size_bytes: int = Field(..., ge=0)
    metadata: DocumentMetadata

    @property
    def extension(self) -> str | None:
        suffix = self.path.suffix
        return suffix[1:].lower() if suffix else None


class DocumentStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    size_bytes: int
    word_count: int
    line_count: int
    content_type: str
    estimated_tokens: int


def detect_content_type(path: str | Path) -> str:
    """Map a file extension to a content type. Unknown extensions are text/plain."""
    suffix = Path(path).suffix.lstrip(".").lower()
    return CONTENT_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)


def extract_metadata(content: str) -> DocumentMetadata:
    """Word and line counts plus a title taken from the first Markdown heading, if any."""
    lines = split_lines(content)
    title = next(
        (strip_whitespace(line.lstrip("#")) for line in lines if line.startswith("#")),
        None,
    )
    return DocumentMetadata(
        title=title,
        word_count=len(split_whitespace(content)),
        line_count=len(lines),
    )


def document_from_text(text: str, name: str = "inline.txt") -> Document:
    """Wrap a literal string as a Document. name drives content-type detection and validation."""
    path = Path(name)
    return Document(
        path=path,
        content=text,
        content_type=detect_content_type(path),
        size_bytes=len(text.encode("utf-8")),
        metadata=extract_metadata(text),
    )


def resolve_document_path(path: str | Path, root: str | Path) -> Path:
    """
    Resolve path against root, following symlinks and "..". Relative paths are taken
    from root. Raises DocumentError(reason="outside_root") if the result leaves root.
    """
    root = Path(root).resolve()
    resolved = (root / Path(path)).resolve()
    if not resolved.is_relative_to(root):
        logger.warning("Rejected path outside documents root", extra={"path": str(path), "root": str(root)})
        raise DocumentError(f"Path {str(path)!r} is outside the documents root", reason="outside_root")
    return resolved


def load_document(path: str | Path, max_bytes: int | None = None) -> Document:
    """
    Read a UTF-8 text file into a Document.
    Raises DocumentError if the file is missing, larger than max_bytes, or not valid UTF-8.
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentError(f"File not found: {str(path)!r}", reason="not_found")
    limit = max_bytes if max_bytes is not None else DEFAULT_MAX_LOAD_BYTES
    try:
        size = path.stat().st_size
    except OSError as e:
        raise DocumentError(f"Cannot read file metadata for {str(path)!r}: {e}") from e
    if size > limit:
        raise DocumentError(
            f"File {str(path)!r} is {size} bytes, over the {limit} byte limit",
            reason="too_large",
        )
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentError(f"File {str(path)!r} is not valid UTF-8: {e}", reason="undecodable") from e
    except OSError as e:
        raise DocumentError(f"Cannot read file {str(path)!r}: {e}") from e
    logger.info("Document loaded", extra={"path": str(path), "size_bytes": size})
    return Document(
        path=path,
        content=content,
        content_type=detect_content_type(path),
        size_bytes=size,
        metadata=extract_metadata(content),
    )


def validate_document(document: Document, config: ProcessingConfig) -> None:
    """Raise ValidationError if the document is empty, too large, or of an unsupported format."""
    if not document.content:
        raise ValidationError("Document content is empty")
    max_bytes = config.max_document_size_bytes
    if max_bytes is not None and document.size_bytes > max_bytes:
        raise ValidationError(
            f"Document size {document.size_bytes / (1024 * 1024):.2f}MB exceeds "
            f"limit {config.max_document_size_mb}MB"
        )
    ext = document.extension
    if ext is not None and ext not in config.supported_formats:
        raise ValidationError(f"Unsupported file format: {ext!r}")


def get_document_stats(document: Document) -> DocumentStats:
    return DocumentStats(
        size_bytes=document.size_bytes,
        word_count=document.metadata.word_count,
        line_count=document.metadata.line_count,
        content_type=document.content_type,
        estimated_tokens=count_tokens(document.content),
    )
