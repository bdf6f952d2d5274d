"""GET /config, /config/env, /formats, /patterns/{catalog}: read-only configuration views."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from docprep.config.processing.models import ProcessingConfig
from docprep.config.settings import env_variables_info
from docprep.controllers.dependencies import get_processing_config
from docprep.controllers.schema.config import (
    EnvVariable,
    EnvVariablesResponse,
    FormatsResponse,
    PatternCatalogResponse,
)
from docprep.services.cleaning.patterns import get_catalog
from docprep.services.errors import ConfigError

router = APIRouter(tags=["config"])


@router.get("/config")
def get_config(config: ProcessingConfig = Depends(get_processing_config)) -> dict[str, Any]:
    """Effective processing config: active profile plus environment overrides."""
    return config.model_dump(mode="json")


@router.get("/config/env", response_model=EnvVariablesResponse)
def list_env_variables() -> EnvVariablesResponse:
    """Environment variables that override the processing profile."""
    return EnvVariablesResponse(
        variables=[EnvVariable(name=name, description=desc) for name, desc in env_variables_info()]
    )


@router.get("/formats", response_model=FormatsResponse)
def list_supported_formats(config: ProcessingConfig = Depends(get_processing_config)) -> FormatsResponse:
    return FormatsResponse(supported_formats=sorted(config.supported_formats))


@router.get("/patterns/{catalog}", response_model=PatternCatalogResponse)
def get_pattern_catalog(catalog: str) -> PatternCatalogResponse:
    """Pattern sources for a named catalog (noise, code, log)."""
    try:
        patterns = get_catalog(catalog)
    except ConfigError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return PatternCatalogResponse(catalog=catalog, patterns=patterns)
