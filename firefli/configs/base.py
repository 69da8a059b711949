"""
Shared settings base.

Every configuration section reads the process environment first and an
optional .env file second; each section only chooses its env prefix.

Dependencies: pydantic_settings
System role: Common loading rules for all configuration sections
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class FirefliSettings(BaseSettings):
    """Base for configuration sections (case-insensitive keys, unknown keys ignored)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
