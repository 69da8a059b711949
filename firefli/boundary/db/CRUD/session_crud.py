"""
Scheduled session CRUD operations.

Every lifecycle write is conditional on the session not having reached
the target state yet, so overlapping reconciliation passes cannot apply
the same transition twice.

Dependencies: sqlalchemy, firefli.boundary.db.models
System role: Session persistence operations for the reconciler
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from firefli.boundary.db.CRUD.base_crud import BaseCRUD
from firefli.boundary.db.models import SessionModel


class SessionCRUD(BaseCRUD[SessionModel]):
    """
    CRUD operations for SessionModel.

    Extends BaseCRUD with the open-session scan and compare-and-set
    lifecycle updates.
    """

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def find_open_sessions(self, session: AsyncSession, now: datetime) -> Sequence[SessionModel]:
        """
        Retrieve sessions due at or before `now` that have not ended.

        Args:
            session: Async database session
            now: Reconciliation instant

        Returns:
            Sequence of SessionModels with their session type loaded, oldest first
        """
        stmt = (
            select(SessionModel)
            .where(SessionModel.ended.is_(None), SessionModel.date <= now)
            .options(selectinload(SessionModel.session_type))
            .order_by(SessionModel.date)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def _conditional_update(self, session: AsyncSession, id: UUID, *criteria, **values) -> bool:
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == id, SessionModel.ended.is_(None), *criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def mark_started(self, session: AsyncSession, id: UUID, started_at: datetime) -> bool:
        """
        Set `started_at` once.

        Returns:
            True if this call performed the transition
        """
        return await self._conditional_update(
            session, id, SessionModel.started_at.is_(None), started_at=started_at
        )

    async def mark_concluded(
        self,
        session: AsyncSession,
        id: UUID,
        ended: datetime,
        label: str,
    ) -> bool:
        """
        Set `ended` and the final status label; terminal.

        Returns:
            True if this call performed the transition
        """
        return await self._conditional_update(
            session, id, ended=ended, last_discord_status=label
        )

    async def set_last_status(self, session: AsyncSession, id: UUID, label: str) -> bool:
        """Persist a new status label for an open session whose label differs."""
        return await self._conditional_update(
            session,
            id,
            (SessionModel.last_discord_status.is_(None)) | (SessionModel.last_discord_status != label),
            last_discord_status=label,
        )

    async def record_start_message(
        self,
        session: AsyncSession,
        id: UUID,
        message_id: str,
        status: str | None,
    ) -> bool:
        """Store the start message id (used for later edits) and the status it shows."""
        return await self._conditional_update(
            session, id, discord_message_id=message_id, last_discord_status=status
        )


session_crud = SessionCRUD()
