"""
Scheduled session ORM models.

A session type belongs to a workspace and defines the time-boundary
statuses; a session is one scheduled occurrence with a start and duration.

Dependencies: sqlalchemy, firefli.boundary.db.base
System role: Scheduled session persistence for the reconciler
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefli.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin


class SessionTypeModel(Base, UUIDMixin, TimestampMixin):
    """
    Session type with status thresholds.

    Attributes:
        workspace_group_id: Owning workspace (tenant partition key)
        name: Display name ("Training", "Shift")
        statuses: Ordered list of {"name": str, "timeAfter": int} thresholds
    """

    __tablename__ = "session_types"

    workspace_group_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("workspaces.group_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    statuses: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    sessions = relationship("SessionModel", back_populates="session_type")


class SessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Scheduled session.

    Lifecycle: `started_at` is set once when the reconciler first sees
    `date <= now`; `ended` is set once when `date + duration` has passed
    and is never cleared afterwards.

    Attributes:
        session_type_id: Parent session type
        name: Optional display name
        type: Free-form category ("training", "other")
        date: Scheduled start
        duration: Length in minutes
        started_at: When the session was observed started
        ended: Computed end, set when the session concludes
        last_discord_status: Last status label pushed to the notification
        discord_message_id: Notification message to edit in place
        owner_id: Host Roblox user ID
        idle_time: Seconds idle, reported at end
        messages: Chat messages, reported at end
    """

    __tablename__ = "sessions"

    session_type_id: Mapped[UUID] = mapped_column(
        ForeignKey("session_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[str] = mapped_column(String(64), nullable=False, default="other")
    date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, index=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True, default=30)
    started_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    ended: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True, index=True)
    last_discord_status: Mapped[str | None] = mapped_column(String(128), nullable=True)
    discord_message_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    owner_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    idle_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    messages: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    session_type = relationship("SessionTypeModel", back_populates="sessions")
