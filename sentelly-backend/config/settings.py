"""
Application Configuration Module

Centralizes all application settings using Pydantic Settings.
Environment variables are loaded from .env file automatically.

Usage:
    from config.settings import settings

    print(settings.DATABASE_URL)
    print(settings.GEMINI_MODEL)
"""

from pydantic_settings import BaseSettings
from pydantic import Field, ConfigDict
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Variable names are case-insensitive.
    """

    # ==========================================================================
    # Persistence (document collections + object storage)
    # ==========================================================================
    DATABASE_URL: Optional[str] = Field(
        default="sqlite+aiosqlite:///./sentelly.db",
        description="Async SQLAlchemy URL. Empty disables word/activity persistence"
    )
    WORDS_COLLECTION: str = Field(
        default="words",
        description="Collection (table) holding cached word definitions"
    )
    ACTIVITY_COLLECTION: str = Field(
        default="activities",
        description="Collection (table) holding activity events"
    )
    STORAGE_DIR: str = Field(
        default="storage",
        description="Root directory of the object storage"
    )
    STORAGE_BUCKET_ID: str = Field(
        default="pronunciation",
        description="Bucket holding generated pronunciation audio"
    )

    # ==========================================================================
    # External API Keys
    # ==========================================================================
    GOOGLE_API_KEY: Optional[str] = Field(
        default=None,
        description="Google Gemini API key for definitions and spelling correction"
    )
    ELEVENLABS_API_KEY: Optional[str] = Field(
        default=None,
        description="ElevenLabs API key for pronunciation audio"
    )

    # ==========================================================================
    # Vendor Models
    # ==========================================================================
    GEMINI_MODEL: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model used for definitions and spelling checks"
    )
    ELEVENLABS_VOICE_ID: str = Field(
        default="21m00Tcm4TlvDq8ikWAM",
        description="Default ElevenLabs voice ID (Rachel)"
    )
    ELEVENLABS_MODEL: str = Field(
        default="eleven_monolingual_v1",
        description="ElevenLabs model for TTS"
    )

    # ==========================================================================
    # In-process audio cache
    # ==========================================================================
    AUDIO_CACHE_TTL_SECONDS: int = Field(
        default=24 * 60 * 60,
        description="Lifetime of in-memory pronunciation audio entries"
    )
    AUDIO_CACHE_MAX_ENTRIES: int = Field(
        default=500,
        description="Upper bound on in-memory pronunciation audio entries"
    )

    # ==========================================================================
    # Redis Configuration (rate limiting)
    # ==========================================================================
    REDIS_URL: Optional[str] = Field(
        default=None,
        description="Redis connection URL for rate limiting storage"
    )

    # ==========================================================================
    # CORS Configuration
    # ==========================================================================
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    @property
    def cors_origins_list(self) -> list:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def persistence_enabled(self) -> bool:
        """Whether a persistence backend is configured."""
        return bool(self.DATABASE_URL)

    # ==========================================================================
    # Application Settings
    # ==========================================================================
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )
    APP_NAME: str = Field(
        default="Sentelly",
        description="Application name for OpenAPI docs"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()


# Singleton instance for easy import
settings = get_settings()
