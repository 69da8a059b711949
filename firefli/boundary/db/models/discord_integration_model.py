"""
Discord integration ORM model.

Bot credentials, channel routing, per-kind enable flags and embed
template overrides for a workspace.

Dependencies: sqlalchemy, firefli.boundary.db.base
System role: Tenant notification configuration persistence
"""

from sqlalchemy import JSON, BigInteger, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from firefli.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DiscordIntegrationModel(Base, UUIDMixin, TimestampMixin):
    """
    Discord bot integration for one workspace.

    Attributes:
        workspace_group_id: Owning workspace (unique)
        is_active: Master switch
        bot_token: Bot token handed over by the settings flow
        channel_id: Default channel
        session_channel_id: Channel for session start/status messages
        review_channel_id: Channel for activity review summaries
        birthday_channel_id: Channel for birthday announcements
        session_notifications_enabled: Send session lifecycle messages
        review_notifications_enabled: Send activity review summaries
        birthday_enabled: Send birthday announcements
        embed_color: Default embed colour ("#RRGGBB")
        templates: Per-kind overrides {kind: {title, description, footer, color}}
    """

    __tablename__ = "discord_integrations"

    workspace_group_id: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    bot_token: Mapped[str] = mapped_column(Text, nullable=False)
    channel_id: Mapped[str] = mapped_column(String(32), nullable=False)
    session_channel_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    review_channel_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    birthday_channel_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    session_notifications_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    review_notifications_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    birthday_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    embed_color: Mapped[str | None] = mapped_column(String(9), nullable=True)
    templates: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
