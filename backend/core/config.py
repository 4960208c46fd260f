"""
Centralized configuration for the Catalog Match backend.

All environment variables and settings should be defined here
to avoid duplication across modules.
"""
import os
from functools import lru_cache


class Settings:
    """Application settings loaded from environment variables."""

    # CORS - comma-separated list of allowed origins
    ALLOWED_ORIGINS: list = os.environ.get(
        "ALLOWED_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")

    # Claude API (brief writer)
    CLAUDE_API_KEY: str = os.environ.get("CLAUDE_API_KEY", "")
    CLAUDE_API_URL: str = "https://api.anthropic.com/v1/messages"
    CLAUDE_BRIEF_MODEL: str = os.environ.get("CLAUDE_BRIEF_MODEL", "claude-haiku-4-5-20251001")

    # API key for protecting destructive endpoints (optional)
    API_KEY: str = os.environ.get("CATALOG_MATCH_API_KEY", "")

    # Optional override for sourcing/catalog_match/field_config.json
    FIELD_CONFIG_PATH: str = os.environ.get("CATALOG_MATCH_FIELD_CONFIG", "")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for easy import
settings = get_settings()
