"""Configuration management for cellfmt.

Preview sample values and logging level are loaded from environment
variables or a .env file. Every call to ``get_settings`` builds a fresh
settings object; nothing is cached at module level.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cellfmt.exceptions import ConfigurationError

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class CellFmtSettings(BaseSettings):
    """Application settings loaded from environment variables and .env files.

    Priority (highest to lowest):
      1. Explicit constructor arguments
      2. Environment variables (CELLFMT_SAMPLE_DATE, CELLFMT_LOG_LEVEL, etc.)
      3. .env file in current directory
    """

    model_config = SettingsConfigDict(
        env_prefix="CELLFMT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Number preview samples
    sample_positive: Annotated[float, Field(description="Sample for the positive zone")] = 1234.56
    sample_negative: Annotated[float, Field(description="Sample for the negative zone")] = -1234.56
    sample_text: Annotated[str, Field(description="Sample for the text zone")] = "Input"

    # Date/time preview samples
    sample_date: Annotated[
        datetime, Field(description="Sample timestamp for clock and date previews")
    ] = datetime(2025, 10, 25, 14, 30)
    sample_duration_seconds: Annotated[
        float, Field(description="Sample elapsed time in seconds for duration previews")
    ] = 100000

    log_level: Annotated[str, Field(description="Root log level for the CLI")] = "WARNING"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {v!r}")
        return v

    @field_validator("sample_duration_seconds")
    @classmethod
    def validate_duration(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"sample_duration_seconds must be >= 0, got {v}")
        return v

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def get_settings(**overrides) -> CellFmtSettings:
    """Build the application settings, applying keyword overrides."""
    try:
        return CellFmtSettings(**overrides)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
