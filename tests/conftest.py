# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds a fresh app per test with in-memory services swapped in
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("STORAGE_BUCKET", "test-bucket")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.dependencies import get_business_service, get_report_service, get_storage_service
from app.main import create_app
from core.models.business import BusinessCreate
from tests.fakes import (
    FakeBusinessService,
    FakeReportService,
    InMemoryStore,
    RecordingStorageService,
)

# Smallest valid JPEG: SOI + EOI markers around a JFIF header
JPEG_BYTES = (
    b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
    b"\xff\xd9"
)
MP4_BYTES = b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings_overrides():
    """Per-test Settings overrides; tests override this fixture to tweak limits."""
    return {}


@pytest.fixture
def app_settings(settings_overrides):
    return get_settings().model_copy(update=settings_overrides)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def storage():
    return RecordingStorageService()


@pytest.fixture
def app(app_settings, store, storage):
    application = create_app(app_settings)
    application.dependency_overrides[get_business_service] = lambda: FakeBusinessService(store)
    application.dependency_overrides[get_report_service] = lambda: FakeReportService(store)
    application.dependency_overrides[get_storage_service] = lambda: storage
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def business_payload():
    """Joe's Deli, as the dashboard would post it."""
    return {
        "name": "Joe's Deli",
        "ownerName": "Joe Smith",
        "ownerPhone": "5551234567",
        "category": "Restaurant",
        "city": "Boston",
    }


@pytest.fixture
def business(store, business_payload):
    """A business already in the store."""
    return store.add_business(BusinessCreate.model_validate(business_payload))


@pytest.fixture
def report_fields(business):
    return {
        "businessId": str(business.id),
        "sales": "250.50",
        "expenses": "80.25",
        "customerCount": "34",
    }


@pytest.fixture
def image_file():
    return ("storefront.jpg", JPEG_BYTES, "image/jpeg")


@pytest.fixture
def video_file():
    return ("walkthrough.mp4", MP4_BYTES, "video/mp4")
