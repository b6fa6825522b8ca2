# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import Settings

REQUIRED = {
    "SUPABASE_URL": "https://test-project.supabase.co",
    "SUPABASE_SERVICE_KEY": "test-service-key",
    "STORAGE_BUCKET": "test-bucket",
}


@pytest.fixture
def env(monkeypatch):
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    for name in ("ENVIRONMENT", "PORT", "CORS_ORIGINS", "MAX_IMAGE_SIZE_BYTES"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(env):
    settings = Settings(_env_file=None)

    assert settings.PORT == 4000
    assert settings.ENVIRONMENT == "development"
    assert settings.MAX_IMAGE_SIZE_BYTES == 5_000_000
    assert settings.MAX_VIDEO_SIZE_BYTES == 50_000_000
    assert settings.STORAGE_REGION == "us-east-1"
    assert settings.is_development


@pytest.mark.parametrize("missing", sorted(REQUIRED))
def test_missing_required_variable(env, missing):
    env.delenv(missing)

    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None)

    assert missing in str(exc_info.value)


def test_url_must_be_http(env):
    env.setenv("SUPABASE_URL", "ftp://example.com")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_url_trailing_slash_is_stripped(env):
    env.setenv("SUPABASE_URL", "https://test-project.supabase.co/")

    assert Settings(_env_file=None).SUPABASE_URL == "https://test-project.supabase.co"


def test_port_from_environment(env):
    env.setenv("PORT", "8080")

    assert Settings(_env_file=None).PORT == 8080


def test_invalid_environment(env):
    env.setenv("ENVIRONMENT", "staging")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_cors_origins_list(env):
    env.setenv("CORS_ORIGINS", "http://localhost:3000, https://ovasight.app ,")

    assert Settings(_env_file=None).cors_origins_list == [
        "http://localhost:3000",
        "https://ovasight.app",
    ]


def test_multipart_ceiling_fits_both_files(env):
    settings = Settings(_env_file=None)

    assert settings.max_multipart_body_bytes == 5_000_000 + 50_000_000 + 1024 * 1024
