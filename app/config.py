# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.IMAGE_STORAGE_MODE)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance, or passed
    explicitly to `create_app()` (tests build their own instances).
    """

    # -------------------------------------------------------------------------
    # Record Store
    # -------------------------------------------------------------------------

    STORE_BACKEND: Literal["supabase", "memory"] | None = Field(
        default=None,
        description="Record store backend. Defaults to supabase when SUPABASE_URL is set, else memory"
    )

    SUPABASE_URL: str | None = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str | None = Field(
        default=None,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Image Storage
    # -------------------------------------------------------------------------
    # Exactly one strategy is active per deployment.

    IMAGE_STORAGE_MODE: Literal["inline", "stored"] = Field(
        default="inline",
        description="inline = Base64 in the record, stored = multipart upload written to UPLOAD_DIR"
    )

    UPLOAD_DIR: str = Field(
        default="uploads",
        description="Flat directory holding stored-mode image files"
    )

    UPLOAD_URL_PREFIX: str = Field(
        default="/uploads",
        description="Path prefix the upload directory is served under"
    )

    PUBLIC_BASE_URL: str = Field(
        default="http://localhost:5000",
        description="Base URL used to build absolute image URLs for stored files"
    )

    MAX_IMAGE_SIZE_MB: int = Field(
        default=15,
        ge=1,
        le=100,
        description="Maximum size of an uploaded image file in MB"
    )

    MAX_REQUEST_BODY_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum size of a JSON or form-encoded request body in MB"
    )

    ALLOWED_IMAGE_EXTENSIONS: str = Field(
        default=".jpg,.jpeg,.png,.gif,.svg",
        description="Allowed image file extensions (comma-separated)"
    )

    ALLOWED_IMAGE_TYPES: str = Field(
        default="image/jpeg,image/jpg,image/png,image/gif,image/svg+xml",
        description="Allowed image content types (comma-separated)"
    )

    DEFAULT_IMAGE_TYPE: str = Field(
        default="image/jpeg",
        description="MIME type assumed for inline images sent without imageType"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_PREFIX: str = Field(
        default="/api",
        description="Path prefix for every API route"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

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

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def store_backend(self) -> str:
        """Resolve the effective store backend."""
        if self.STORE_BACKEND:
            return self.STORE_BACKEND
        return "supabase" if self.SUPABASE_URL else "memory"

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def allowed_extensions_list(self) -> list[str]:
        """
        Parse ALLOWED_IMAGE_EXTENSIONS string into a list.

        Example: ".png, .JPG" -> [".png", ".jpg"]
        """
        return [ext.strip().lower() for ext in self.ALLOWED_IMAGE_EXTENSIONS.split(",")]

    @property
    def allowed_types_list(self) -> list[str]:
        """Parse ALLOWED_IMAGE_TYPES string into a list."""
        return [mime.strip().lower() for mime in self.ALLOWED_IMAGE_TYPES.split(",")]

    @property
    def max_image_size_bytes(self) -> int:
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024

    @property
    def max_request_body_bytes(self) -> int:
        return self.MAX_REQUEST_BODY_MB * 1024 * 1024

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

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
