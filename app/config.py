# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are validated when this module is imported, so a missing or
# malformed variable stops the process before the server starts listening.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Database (Supabase Postgres)
    # -------------------------------------------------------------------------
    # Required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        min_length=1,
        description="Supabase service_role key, used for both tables and storage"
    )

    # -------------------------------------------------------------------------
    # Object Storage (Supabase Storage)
    # -------------------------------------------------------------------------

    STORAGE_BUCKET: str = Field(
        ...,
        min_length=1,
        description="Bucket that receives report photos and videos"
    )

    STORAGE_REGION: str = Field(
        default="us-east-1",
        min_length=1,
        description="Storage region, recorded on uploaded objects"
    )

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "production", "test"] = Field(
        default="development",
        description="Runtime mode"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=4000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Request Size Limits
    # -------------------------------------------------------------------------

    MAX_BODY_SIZE_BYTES: int = Field(
        default=10 * 1024 * 1024,
        ge=1024,
        description="Ceiling for JSON and url-encoded request bodies"
    )

    MAX_IMAGE_SIZE_BYTES: int = Field(
        default=5_000_000,
        ge=1,
        description="Ceiling for the report `image` file"
    )

    MAX_VIDEO_SIZE_BYTES: int = Field(
        default=50_000_000,
        ge=1,
        description="Ceiling for the report `video` file"
    )

    MULTIPART_OVERHEAD_BYTES: int = Field(
        default=1024 * 1024,
        ge=0,
        description="Allowance for form fields and multipart boundaries"
    )

    # -------------------------------------------------------------------------
    # Pagination
    # -------------------------------------------------------------------------

    DEFAULT_PAGE_SIZE: int = Field(default=10, ge=1)

    MAX_PAGE_SIZE: int = Field(
        default=100,
        ge=1,
        description="Larger `limit` query values are clamped to this"
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------

    RATE_LIMIT_ENABLED: bool = Field(default=True)

    TRUST_PROXY_HEADERS: bool = Field(
        default=False,
        description="Use the first X-Forwarded-For hop as the client address"
    )

    API_RATE_LIMIT: int = Field(default=100, ge=1)
    API_RATE_WINDOW_SECONDS: int = Field(default=15 * 60, ge=1)

    UPLOAD_RATE_LIMIT: int = Field(default=10, ge=1)
    UPLOAD_RATE_WINDOW_SECONDS: int = Field(default=15 * 60, ge=1)

    CREATE_RATE_LIMIT: int = Field(default=5, ge=1)
    CREATE_RATE_WINDOW_SECONDS: int = Field(default=60 * 60, ge=1)

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("SUPABASE_URL")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("SUPABASE_URL must be an http(s) URL")
        return value.rstrip("/")

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def max_multipart_body_bytes(self) -> int:
        """Largest multipart body that can carry one image and one video."""
        return (
            self.MAX_IMAGE_SIZE_BYTES
            + self.MAX_VIDEO_SIZE_BYTES
            + self.MULTIPART_OVERHEAD_BYTES
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
