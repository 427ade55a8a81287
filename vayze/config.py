"""
Vayze — Engine Configuration

Loads the few tunable knobs of the decision engine from environment variables
(prefixed ``VAYZE_``) and an optional .env file using Pydantic Settings.  The
defaults reproduce the behaviour of the mobile app exactly; a host only needs
to set something here when it wants different review timing or log output.

A cached ``get_settings()`` helper is provided so every service receives the
same validated instance without re-parsing the environment.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Central configuration for the Vayze engine."""

    model_config = SettingsConfigDict(
        env_prefix="VAYZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Logging
    # ------------------------------------------------------------------ #
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # ------------------------------------------------------------------ #
    # Review scheduling
    # ------------------------------------------------------------------ #
    REVIEW_DELAY_DAYS: int = 7          # reviewScheduledFor = createdAt + delay
    REVIEW_DUE_BUFFER_HOURS: int = 24   # reviews become due this early

    # ------------------------------------------------------------------ #
    # Aggregates
    # ------------------------------------------------------------------ #
    TREND_WINDOW_DAYS: int = 30         # recent vs. previous window length

    @field_validator("REVIEW_DELAY_DAYS", "REVIEW_DUE_BUFFER_HOURS", "TREND_WINDOW_DAYS")
    @classmethod
    def _must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, validated ``Settings`` instance.

    Using ``@lru_cache`` guarantees the .env file is read and validated
    exactly once per process lifetime::

        from vayze.config import get_settings
        settings = get_settings()
    """
    return Settings()
