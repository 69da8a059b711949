"""
Notification domain models.

Transition kinds, delivery destinations and the per-tenant configuration
the dispatcher resolves before sending.

Dependencies: pydantic
System role: Notification routing contracts
"""

from enum import Enum

from pydantic import BaseModel, Field


class NotificationKind(str, Enum):
    """Lifecycle transition that triggers an outbound message."""

    START = "start"
    STATUS = "status"
    CONCLUDED = "concluded"
    REVIEW_SUMMARY = "review-summary"
    BIRTHDAY = "birthday"


class DestinationType(str, Enum):
    """How a message reaches Discord."""

    BOT = "bot"
    WEBHOOK = "webhook"


class Destination(BaseModel):
    """
    Where a message is delivered.

    Bot destinations carry a token and channel id; webhook destinations
    carry the full webhook URL.
    """

    type: DestinationType
    channel_id: str | None = None
    bot_token: str | None = Field(default=None, repr=False)
    webhook_url: str | None = Field(default=None, repr=False)


class NotificationConfig(BaseModel):
    """Resolved notification settings for one workspace and kind."""

    enabled: bool = False
    destination: Destination | None = None
    templates: dict = Field(default_factory=dict, description="Per-kind template overrides")
    embed_color: str | None = None
    workspace_name: str | None = None
