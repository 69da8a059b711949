"""
Scheduler settings.

Shared secret for the HTTP cron routes and intervals for the beat schedule.

Dependencies: pydantic_settings
System role: Periodic trigger configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from firefli.configs.base import FirefliSettings


class CronSettings(FirefliSettings):
    """Cron authentication and schedule."""

    model_config = SettingsConfigDict(env_prefix="CRON_")

    secret: str | None = Field(
        default=None,
        description="Shared secret expected in X-Cron-Secret or Authorization",
    )
    reconcile_interval_seconds: int = Field(
        default=60,
        description="Interval between reconciliation passes",
    )
    birthday_hour_utc: int = Field(
        default=12,
        description="UTC hour at which birthday announcements run",
    )
