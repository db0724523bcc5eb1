"""
Configuration management for the gallery API and upload proxy.
Uses Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Photo Gallery API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Metadata API for the photo gallery and its admin dashboard"
    # Empty prefix keeps the routes at /photos, /albums, /content like the deployed worker
    API_PREFIX: str = ""

    LOG_LEVEL: str = "INFO"

    # Database Configuration
    # postgresql:// URLs are rewritten to the asyncpg driver in database.py
    DATABASE_URL: str = "sqlite+aiosqlite:///./gallery.db"
    AUTO_CREATE_TABLES: bool = True

    DEFAULT_PHOTO_LIMIT: int = 100

    # ImgBB Configuration (upload proxy)
    IMGBB_API_URL: str = "https://api.imgbb.com/1/upload"
    IMGBB_API_KEY: str = ""
    IMGBB_TIMEOUT_SECONDS: float = 30.0
    UPLOAD_MAX_PART_BYTES: int = 32 * 1024 * 1024

    # Origins echoed back by the upload proxy. The first entry is the
    # fallback for unknown origins, so keep the production site first.
    UPLOAD_ALLOWED_ORIGINS: List[str] = [
        "https://photo-wisarut.web.app",
        "https://photo-wisarut.firebaseapp.com",
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Admin Configuration
    # Comma separated list, e.g. "me@example.com, partner@example.com"
    ADMIN_EMAILS: str = ""
    # Off by default: the gallery front-end gates admin pages itself
    ENFORCE_ADMIN_AUTH: bool = False

    # JWT Configuration
    # SECRET_KEY should be a long random string (e.g., generated with: openssl rand -hex 32)
    JWT_SECRET_KEY: str = "your-secret-key-change-this-in-production-use-openssl-rand-hex-32"
    ADMIN_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


# Global settings instance
settings = Settings()
