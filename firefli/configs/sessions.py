"""
Session lifecycle settings.

Defaults used by the reconciler and the notification dispatcher.

Dependencies: pydantic_settings
System role: Session lifecycle and notification pacing configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from firefli.configs.base import FirefliSettings


class SessionSettings(FirefliSettings):
    """Session reconciliation and notification pacing."""

    model_config = SettingsConfigDict(env_prefix="SESSIONS_")

    default_duration_minutes: int = Field(
        default=30,
        description="Duration applied when a session row carries none",
    )
    concluded_label: str = Field(
        default="Concluded",
        description="Status label persisted when a session ends",
    )
    send_delay_seconds: float = Field(
        default=1.0,
        description="Pause between consecutive sends to the same destination",
    )
