"""Environment-based application settings. Read-only; no business logic."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="docprep", description="Service name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level name")

    # Processing profile from config/processing/static.json ("active" follows the file's active key)
    processing_profile: str = Field(default="active", description="Processing profile name")

    # /process/file only reads files under this directory
    documents_root: Path = Field(default=Path("."), description="Directory that file processing may read from")
    token_encoding: str = Field(default="cl100k_base", description="tiktoken encoding used for token counts")

    # Overrides applied on top of the selected profile; unset means keep the profile value
    chunk_size: int | None = Field(default=None, ge=1, description="Chunk size in characters")
    max_document_size_mb: float | None = Field(default=None, gt=0, description="Maximum document size (MB)")
    enable_preprocessing: bool | None = Field(default=None, description="Enable preprocessing")
    enable_cleaning: bool | None = Field(default=None, description="Enable content cleaning")
    remove_base64_images: bool | None = Field(default=None, description="Remove base64 images")
    remove_binary_data: bool | None = Field(default=None, description="Remove binary data")
    remove_html_tags: bool | None = Field(default=None, description="Remove HTML tags")
    normalize_whitespace: bool | None = Field(default=None, description="Normalize whitespace")
    max_string_length: int | None = Field(default=None, ge=1, description="Hard-wrap width (characters)")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Use for app lifetime."""
    return Settings()


# Settings fields that override the processing profile, grouped by target model
PROCESSING_OVERRIDE_FIELDS = ("chunk_size", "max_document_size_mb", "enable_preprocessing")
CLEANING_OVERRIDE_FIELDS = (
    "enable_cleaning",
    "remove_base64_images",
    "remove_binary_data",
    "remove_html_tags",
    "normalize_whitespace",
    "max_string_length",
)


def env_variables_info() -> list[tuple[str, str]]:
    """Return (ENV_NAME, description) for every supported processing override."""
    fields = Settings.model_fields
    return [
        (name.upper(), fields[name].description or "")
        for name in (
            "processing_profile",
            "documents_root",
            "token_encoding",
            *PROCESSING_OVERRIDE_FIELDS,
            *CLEANING_OVERRIDE_FIELDS,
        )
    ]
