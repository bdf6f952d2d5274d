"""Shared route dependencies: effective config, per-request overrides, and error translation."""

from typing import Any

from fastapi import HTTPException
from pydantic import ValidationError as PydanticValidationError

from docprep.config.processing.models import CleaningConfig, ProcessingConfig
from docprep.config.processing.static import load_effective_config
from docprep.controllers.schema.process import CleaningOptions
from docprep.services.errors import ConfigError, DocprepError, DocumentError, ValidationError

_DOCUMENT_ERROR_STATUS = {"not_found": 404, "outside_root": 403, "too_large": 413}


def get_processing_config() -> ProcessingConfig:
    """Active profile plus environment overrides. Overridable in tests via app.dependency_overrides."""
    return load_effective_config()


def apply_request_overrides(
    base: ProcessingConfig,
    chunk_size: int | None = None,
    cleaning: CleaningOptions | None = None,
) -> ProcessingConfig:
    """
    Layer request overrides onto the base config. Cleaning options replace the
    matching profile fields; pattern catalogs are appended to custom_patterns.
    """
    updates: dict[str, Any] = {}
    if chunk_size is not None:
        updates["chunk_size"] = chunk_size
    if cleaning is not None:
        merged = base.cleaning.model_dump() if base.cleaning is not None else {}
        merged.update(cleaning.model_dump(exclude_none=True))
        try:
            updates["cleaning"] = CleaningConfig.from_partial(merged)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid cleaning options: {e}") from e
    if not updates:
        return base
    return base.model_copy(update=updates)


def http_error_from(exc: DocprepError) -> HTTPException:
    """Translate a docprep error into an HTTPException with a client-safe message."""
    if isinstance(exc, DocumentError):
        return HTTPException(status_code=_DOCUMENT_ERROR_STATUS.get(exc.reason, 422), detail=str(exc))
    if isinstance(exc, (ConfigError, ValidationError)):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=500, detail="An internal error occurred.")
