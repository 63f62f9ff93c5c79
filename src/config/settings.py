"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Generative backend
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    backend_timeout_seconds: float = 60.0  # Default per-dispatch backend timeout
    backend_temperature: float | None = None  # None keeps the model default

    log_level: str = "INFO"

    # Server
    api_host: str = "127.0.0.1"
    api_port: int = 8000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
