"""
Unified application settings.

Aggregates all configuration sections into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: pydantic, All config modules
System role: Central configuration aggregator for the application
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator

from firefli.configs.base import FirefliSettings
from firefli.configs.celery_config import CelerySettings
from firefli.configs.cron import CronSettings
from firefli.configs.database import DatabaseSettings
from firefli.configs.integrations import IntegrationSettings
from firefli.configs.sessions import SessionSettings


class Settings(FirefliSettings):
    """Unified application settings aggregating all config sections."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: str = Field(default="INFO", description="Root log level name")

    database: DatabaseSettings = DatabaseSettings()
    integrations: IntegrationSettings = IntegrationSettings()
    sessions: SessionSettings = SessionSettings()
    cron: CronSettings = CronSettings()
    celery: CelerySettings = CelerySettings()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are read once; later changes need a restart
    (or get_settings.cache_clear() in tests).

    Returns:
        Settings: Application settings instance

    Usage:
        from firefli.configs import get_settings
        settings = get_settings()
    """
    return Settings()
