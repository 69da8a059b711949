"""
Session snapshots.

Plain copies of ORM rows taken before a transition is applied, so later
rollbacks or background work never trigger lazy loads on a closed session.

Dependencies: pydantic
System role: Session data passed between reconciler and dispatcher
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SessionSnapshot(BaseModel):
    """Scheduled session state plus the session type fields the reconciler needs."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    workspace_group_id: int
    session_type_name: str | None = None
    statuses: list[Any] = Field(default_factory=list)
    name: str | None = None
    type: str | None = None
    date: datetime
    duration: int | None = None
    started_at: datetime | None = None
    ended: datetime | None = None
    last_discord_status: str | None = None
    discord_message_id: str | None = None
    owner_id: int | None = None

    @classmethod
    def from_model(cls, session) -> "SessionSnapshot":
        """
        Build a snapshot from a SessionModel with its session type loaded.

        Args:
            session: SessionModel instance

        Returns:
            SessionSnapshot: Detached copy
        """
        session_type = session.session_type
        statuses = session_type.statuses
        return cls(
            id=session.id,
            workspace_group_id=session_type.workspace_group_id,
            session_type_name=session_type.name,
            statuses=statuses if isinstance(statuses, list) else [],
            name=session.name,
            type=session.type,
            date=session.date,
            duration=session.duration,
            started_at=session.started_at,
            ended=session.ended,
            last_discord_status=session.last_discord_status,
            discord_message_id=session.discord_message_id,
            owner_id=session.owner_id,
        )


class ActivitySessionSnapshot(BaseModel):
    """Detached copy of an activity session row."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: int
    workspace_group_id: int
    active: bool
    start_time: datetime
    end_time: datetime | None = None
    idle_time: int = 0
    messages: int = 0
    universe_id: int | None = None
    session_message: str | None = None
