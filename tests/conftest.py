# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides in-memory stores, services and apps in both image modes
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("IMAGE_STORAGE_MODE", "inline")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from core.models.kinds import unique_constraints
from core.services.record_service import RecordService
from lib.record_store import InMemoryRecordStore


# =============================================================================
# Helpers
# =============================================================================

class FakeUpload:
    """Minimal stand-in for fastapi.UploadFile."""

    def __init__(self, filename: str | None, content: bytes, content_type: str | None):
        self.filename = filename
        self.content_type = content_type
        self._content = content

    async def read(self) -> bytes:
        return self._content


# A 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000000000200015e2b0e2e0000"
    "000049454e44ae426082"
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory store with the production unique constraints."""
    return InMemoryRecordStore(unique_fields=unique_constraints())


@pytest.fixture
def records(store):
    return RecordService(store)


@pytest.fixture
def inline_settings():
    return Settings(STORE_BACKEND="memory", IMAGE_STORAGE_MODE="inline")


@pytest.fixture
def stored_settings(tmp_path):
    return Settings(
        STORE_BACKEND="memory",
        IMAGE_STORAGE_MODE="stored",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        PUBLIC_BASE_URL="http://testserver",
    )


@pytest.fixture
def inline_client(inline_settings, store):
    """TestClient for an inline (Base64) deployment."""
    return TestClient(create_app(settings=inline_settings, store=store))


@pytest.fixture
def stored_client(stored_settings, store):
    """TestClient for a stored-file deployment."""
    return TestClient(create_app(settings=stored_settings, store=store))


@pytest.fixture
def upload_dir(stored_settings):
    from pathlib import Path

    return Path(stored_settings.UPLOAD_DIR)


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def sample_project():
    """Sample inline-mode project payload."""
    return {
        "name": "  Skyline Towers  ",
        "description": "Mixed-use development downtown",
        "imageBase64": "QQ==",
        "imageType": "image/png",
    }


@pytest.fixture
def sample_contact_form():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "mobile": "(555) 012-3456",
        "city": "Austin",
    }
