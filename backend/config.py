"""
Gallery configuration — all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Database
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")
    DB_POOL_MIN_SIZE: int = int(os.environ.get("DB_POOL_MIN_SIZE", "2"))
    DB_POOL_MAX_SIZE: int = int(os.environ.get("DB_POOL_MAX_SIZE", "20"))

    # CDN storage zone (S3-compatible API)
    CDN_STORAGE_ENDPOINT: str = os.environ.get("CDN_STORAGE_ENDPOINT", "")
    CDN_ACCESS_KEY: str = os.environ.get("CDN_ACCESS_KEY", "")
    CDN_SECRET_KEY: str = os.environ.get("CDN_SECRET_KEY", "")
    CDN_STORAGE_ZONE: str = os.environ.get("CDN_STORAGE_ZONE", "gallery")
    CDN_STORAGE_FOLDER: str = os.environ.get("CDN_STORAGE_FOLDER", "media")
    CDN_PUBLIC_URL: str = os.environ.get("CDN_PUBLIC_URL", "https://gallery.b-cdn.net")

    # Auth
    JWT_SECRET: str = os.environ.get("JWT_SECRET", "")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_HOURS: int = int(os.environ.get("JWT_EXPIRY_HOURS", "24"))

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
    SITE_TITLE: str = os.environ.get("SITE_TITLE", "Character Gallery")

    @property
    def ASSET_BASE_URL(self) -> str:
        """Public URL prefix for media files: <cdn>/<folder>."""
        return f"{self.CDN_PUBLIC_URL.rstrip('/')}/{self.CDN_STORAGE_FOLDER}"

    @property
    def SECURE_COOKIES(self) -> bool:
        return self.ENVIRONMENT != "development"


# Singleton instance
settings = Settings()

# Validate required settings (skip CDN credentials in test mode)
_testing = os.environ.get("TESTING", "").lower() == "true"

if not settings.DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is required")
if not settings.JWT_SECRET:
    raise RuntimeError("JWT_SECRET environment variable is required")

if not _testing:
    if not settings.CDN_STORAGE_ENDPOINT:
        raise RuntimeError("CDN_STORAGE_ENDPOINT environment variable is required")
    if not settings.CDN_ACCESS_KEY:
        raise RuntimeError("CDN_ACCESS_KEY environment variable is required")
    if not settings.CDN_SECRET_KEY:
        raise RuntimeError("CDN_SECRET_KEY environment variable is required")
