"""
Outbound integration settings.

Base URLs and timeouts for the Discord REST API and the Roblox web APIs.

Dependencies: pydantic_settings
System role: HTTP client configuration for notification and lookup collaborators
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from firefli.configs.base import FirefliSettings


class IntegrationSettings(FirefliSettings):
    """Discord and Roblox HTTP client configuration."""

    model_config = SettingsConfigDict(env_prefix="INTEGRATIONS_")

    discord_api_base: str = Field(
        default="https://discord.com/api/v10",
        description="Discord REST API base URL",
    )
    roblox_users_api: str = Field(
        default="https://users.roblox.com",
        description="Roblox users API base URL",
    )
    roblox_groups_api: str = Field(
        default="https://groups.roblox.com",
        description="Roblox groups API base URL",
    )
    roblox_games_api: str = Field(
        default="https://games.roblox.com",
        description="Roblox games API base URL",
    )
    roblox_thumbnail_url: str = Field(
        default="https://www.roblox.com/headshot-thumbnail/image?userId={user_id}&width=420&height=420&format=png",
        description="Headshot URL template; {user_id} is substituted",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to every outbound call",
    )
    roblox_max_attempts: int = Field(
        default=3,
        description="Attempts for throttled Roblox lookups",
    )
