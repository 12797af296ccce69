"""
Configuration settings for the lexiscore difficulty engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path",
    )

    # ========================================
    # History windows
    # ========================================
    history_scope: Literal["session", "item"] = Field(
        default="item",
        description="Where recent failures and latencies are drawn from: whole session or the item itself",
    )
    recent_event_window: int | None = Field(
        default=None,
        ge=1,
        description="How many of the most recent events count as 'recent' (None = all)",
    )

    # ========================================
    # Timing
    # ========================================
    away_threshold_ms: float = Field(
        default=30000.0,
        gt=0,
        description="Responses slower than this are treated as the user stepping away",
    )
    baseline_seed_ms: float | None = Field(
        default=None,
        gt=0,
        description="Baseline response time assumed for items without timing history (None = no timing factor until one exists)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
