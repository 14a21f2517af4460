"""
Configuration settings for the arsenal CLI.

Uses Pydantic Settings for environment variable management with .env file support.
These are application settings; the per-project credentials written by
``arsenal init`` live in ``.arsenal/config.json`` (see ``arsenal.core.credential_store``).
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ARSENAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Backend API
    # ========================================
    api_url: str = Field(
        default="https://arsenal-backend-production.up.railway.app",
        description="Base URL of the Arsenal backend (http://127.0.0.1:8000 for local dev)",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every backend request",
    )

    # ========================================
    # Local Storage
    # ========================================
    config_dir_name: str = Field(
        default=".arsenal",
        description="Per-project directory holding config and pending learnings",
    )
    config_file_name: str = Field(
        default="config.json",
        description="Credential file inside the config directory",
    )
    learnings_dir_name: str = Field(
        default="learnings",
        description="Pending learnings directory inside the config directory",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="WARNING",
        description="Loguru level for the stderr sink",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
