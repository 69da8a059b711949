"""
Outbound HTTP integrations.

Exports:
  - DiscordClient: Message send/edit via bot or webhook
  - RobloxClient: Username, rank and universe lookups
"""

from firefli.boundary.integrations.discord_client import DiscordClient
from firefli.boundary.integrations.roblox_client import RobloxClient

__all__ = ["DiscordClient", "RobloxClient"]
