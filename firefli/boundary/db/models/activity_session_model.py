"""
Activity session ORM model.

A user's live attendance window in a workspace, opened by a "create"
event and closed by an "end" event.

Dependencies: sqlalchemy, firefli.boundary.db.base
System role: Attendance persistence for bulk event ingestion
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from firefli.boundary.db.base import Base, TimestampMixin, UTCDateTime, UUIDMixin


class ActivitySessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Activity session ORM model.

    Constraints:
        uq_activity_sessions_one_active: partial unique index on
        (user_id, workspace_group_id) WHERE active, so at most one open
        session per user per workspace survives concurrent inserts.

    Attributes:
        user_id: Roblox user ID
        workspace_group_id: Owning workspace
        active: True while the user is in game
        start_time: When the create event was processed
        end_time: When the end event was processed
        idle_time: Seconds idle, reported by the game agent
        messages: Chat messages sent, reported by the game agent
        universe_id: Place the user joined, when reported
        session_message: Human-readable summary
    """

    __tablename__ = "activity_sessions"
    __table_args__ = (
        Index(
            "uq_activity_sessions_one_active",
            "user_id",
            "workspace_group_id",
            unique=True,
            postgresql_where=text("active"),
            sqlite_where=text("active = 1"),
        ),
        Index("ix_activity_sessions_user_end", "user_id", "workspace_group_id", "end_time"),
    )

    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    workspace_group_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    start_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    idle_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    messages: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    universe_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    session_message: Mapped[str | None] = mapped_column(String(255), nullable=True)
