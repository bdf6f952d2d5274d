"""FastAPI app entry: config, logging, health, and centralized error handling."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from docprep.config.logging import configure_logging, get_logger
from docprep.config.processing.static import load_effective_config
from docprep.config.settings import get_settings
from docprep.controllers.routes.config import router as config_router
from docprep.controllers.routes.process import router as process_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: logging and a config check so a bad profile fails fast."""
    settings = get_settings()
    configure_logging()
    logger.info("Application starting", extra={"app_name": settings.app_name, "environment": settings.environment})
    config = load_effective_config(settings)
    logger.info(
        "Processing config loaded",
        extra={
            "profile": settings.processing_profile,
            "chunk_size": config.chunk_size,
            "cleaning": config.cleaning_enabled,
        },
    )
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="docprep",
    description="Clean text documents and split them into bounded chunks",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(process_router)
app.include_router(config_router)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up."""
    return {"status": "ok"}


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: do not leak stack traces or internal details to the client."""
    logger.exception("Unhandled error", extra={"error": type(exc).__name__})
    return JSONResponse(
        content={"detail": "An internal error occurred."},
        status_code=500,
    )
