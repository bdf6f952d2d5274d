"""Request/response schemas for the processing and cleaning endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from docprep.services.chunking.chunker import ChunkRecord
from docprep.services.cleaning.cleaner import CleaningStats
from docprep.services.processing.document import DocumentStats


class CleaningOptions(BaseModel):
    """Per-request cleaning overrides. Unset fields keep the active profile's value."""

    enable_cleaning: bool | None = None
    remove_base64_images: bool | None = None
    remove_binary_data: bool | None = None
    remove_html_tags: bool | None = None
    normalize_whitespace: bool | None = None
    max_string_length: int | None = Field(default=None, ge=1, le=1_000_000)
    custom_patterns: list[str] | None = Field(default=None, max_length=100)
    pattern_catalogs: list[str] | None = Field(default=None, description="noise|code|log")


class ProcessTextRequest(BaseModel):
    """POST /process/text request body."""

    text: str = Field(..., min_length=1, description="Raw document text")
    name: str = Field(default="inline.txt", min_length=1, max_length=255, description="Name used for the document id")
    chunk_size: int | None = Field(default=None, ge=1, le=1_000_000, description="Optional override for chunk size")
    cleaning: CleaningOptions | None = None


class ProcessFileRequest(BaseModel):
    """POST /process/file request body."""

    file_path: str = Field(..., min_length=1, description="Path of a text file, relative to the documents root or absolute inside it")
    chunk_size: int | None = Field(default=None, ge=1, le=1_000_000, description="Optional override for chunk size")


class ProcessResponse(BaseModel):
    document_id: str
    chunk_count: int = Field(..., ge=0)
    chunks: list[ChunkRecord] = Field(default_factory=list)
    cleaning_stats: CleaningStats | None = None
    estimated_tokens: int = Field(..., ge=0, description="Estimated tokens in the processed content")
    invalid_patterns: list[str] = Field(default_factory=list, description="Custom patterns skipped as invalid")
    processed_at: datetime


class ProcessFileResponse(ProcessResponse):
    title: str | None = None
    document_stats: DocumentStats


class CleanRequest(BaseModel):
    """POST /clean request body."""

    text: str = Field(..., description="Text to clean")
    cleaning: CleaningOptions | None = None


class CleanResponse(BaseModel):
    cleaned_text: str
    stats: CleaningStats
    invalid_patterns: list[str] = Field(default_factory=list)
