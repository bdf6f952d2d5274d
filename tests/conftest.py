"""
Pytest configuration and fixtures for docprep tests.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from docprep.config.processing.models import CleaningConfig, ProcessingConfig
from docprep.config.settings import Settings, get_settings
from docprep.controllers.dependencies import get_processing_config
from docprep.main import app
from docprep.services.cleaning.cleaner import Cleaner


def only(**flags: object) -> CleaningConfig:
    """CleaningConfig with every pass off except the given ones."""
    return CleaningConfig.from_partial({"enable_cleaning": True, **flags})


@pytest.fixture
def make_cleaner():
    """Factory: build a Cleaner with only the named passes enabled."""

    def _make(**flags: object) -> Cleaner:
        return Cleaner(only(**flags))

    return _make


@pytest.fixture
def plain_config() -> ProcessingConfig:
    """Preprocessing on, no cleaner."""
    return ProcessingConfig(cleaning=None)


@pytest.fixture
def default_config() -> ProcessingConfig:
    return ProcessingConfig()


@pytest.fixture
def documents_root(tmp_path) -> Path:
    """Directory the test client may read files from."""
    return tmp_path


@pytest.fixture
def client(default_config: ProcessingConfig, documents_root: Path):
    """Test client pinned to the built-in defaults and a temporary documents root."""
    settings = Settings(_env_file=None, documents_root=documents_root)
    app.dependency_overrides[get_processing_config] = lambda: default_config
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
