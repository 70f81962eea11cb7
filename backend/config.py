"""
Configuration and settings for the board backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service and admin scripts."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Firebase Realtime Database
    firebase_database_url: Optional[str] = Field(
        default=None, env="FIREBASE_DATABASE_URL"
    )
    firebase_credentials_path: Optional[str] = Field(
        default=None, env="FIREBASE_CREDENTIALS_PATH"
    )

    # Local fallback cache (any SQLAlchemy URL)
    local_cache_url: Optional[str] = Field(
        default="sqlite:///join_board_cache.db", env="LOCAL_CACHE_URL"
    )

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, env="USE_IN_MEMORY_BACKENDS"
    )
    seed_demo_data_on_startup: bool = Field(
        default=True, env="SEED_DEMO_DATA_ON_STARTUP"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
