"""
Configuration for the extension-side coach.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CoachSettings(BaseSettings):
    """Client settings, read from COACH_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="COACH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    RELAY_URL: str = Field(default="http://localhost:3000")
    HEALTH_TIMEOUT_SECONDS: float = Field(default=5.0)
    REQUEST_TIMEOUT_SECONDS: float = Field(default=15.0)

    HISTORY_PATH: Path = Field(default=Path.home() / ".dsa-coach" / "history.json")
    HISTORY_MAX_AGE_DAYS: int = Field(default=7)


@lru_cache()
def get_coach_settings() -> CoachSettings:
    return CoachSettings()
