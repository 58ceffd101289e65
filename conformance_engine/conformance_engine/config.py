"""Conformance checker configuration loaded from environment variables."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with GPKG_CHECK_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="GPKG_CHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    debug: bool = False

    # Logging
    log_level: LogLevel = LogLevel.WARNING
    structured_logging: bool = False

    # Store access
    read_only: bool = True

    # Report gpkg_contents entries without a matching table as failures.
    strict_contents_references: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.upper()
        return v

    def effective_log_level(self) -> int:
        """Return the numeric logging level, forcing DEBUG when ``debug`` is set."""
        if self.debug:
            return logging.DEBUG
        return logging.getLevelName(self.log_level.value)


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings (read_only=%s)", settings.read_only)

    return settings
