"""Response schemas for the config and pattern catalog endpoints."""

from pydantic import BaseModel, Field


class EnvVariable(BaseModel):
    name: str
    description: str


class EnvVariablesResponse(BaseModel):
    variables: list[EnvVariable] = Field(default_factory=list)


class FormatsResponse(BaseModel):
    supported_formats: list[str] = Field(default_factory=list)


class PatternCatalogResponse(BaseModel):
    catalog: str
    patterns: list[str]
