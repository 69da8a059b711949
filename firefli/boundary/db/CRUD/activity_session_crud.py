"""
Activity session CRUD operations.

Every method is scoped by `workspace_group_id`; there is no way to read
or write an activity session without naming its tenant.

Dependencies: sqlalchemy, firefli.boundary.db.models
System role: Attendance persistence for bulk event ingestion
"""

from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from firefli.boundary.db.CRUD.base_crud import BaseCRUD
from firefli.boundary.db.models import ActivitySessionModel


class ActivitySessionCRUD(BaseCRUD[ActivitySessionModel]):
    """
    CRUD operations for ActivitySessionModel.

    The create path relies on the partial unique index over active rows
    rather than a read-then-write check.
    """

    def __init__(self) -> None:
        """Initialize ActivitySessionCRUD with ActivitySessionModel."""
        super().__init__(ActivitySessionModel)

    async def find_active(
        self,
        session: AsyncSession,
        user_id: int,
        workspace_group_id: int,
    ) -> ActivitySessionModel | None:
        """
        Retrieve the open activity session for a user.

        Args:
            session: Async database session
            user_id: Roblox user ID
            workspace_group_id: Tenant partition key

        Returns:
            Active ActivitySessionModel, None if the user has none
        """
        stmt = select(ActivitySessionModel).where(
            ActivitySessionModel.user_id == user_id,
            ActivitySessionModel.workspace_group_id == workspace_group_id,
            ActivitySessionModel.active.is_(True),
        ).execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def find_recently_ended(
        self,
        session: AsyncSession,
        user_id: int,
        workspace_group_id: int,
        within_seconds: int,
        now: datetime,
    ) -> ActivitySessionModel | None:
        """
        Retrieve the latest session that ended within `within_seconds` of `now`.

        Args:
            session: Async database session
            user_id: Roblox user ID
            workspace_group_id: Tenant partition key
            within_seconds: Look-back window
            now: Reference instant

        Returns:
            Most recently ended ActivitySessionModel inside the window, or None
        """
        stmt = (
            select(ActivitySessionModel)
            .where(
                ActivitySessionModel.user_id == user_id,
                ActivitySessionModel.workspace_group_id == workspace_group_id,
                ActivitySessionModel.active.is_(False),
                ActivitySessionModel.end_time >= now - timedelta(seconds=within_seconds),
            )
            .order_by(ActivitySessionModel.end_time.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_if_none_active(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        workspace_group_id: int,
        start_time: datetime,
        universe_id: int | None = None,
        session_message: str | None = None,
    ) -> ActivitySessionModel | None:
        """
        Insert an active session unless the user already has one.

        A concurrent insert that loses the race on the partial unique
        index rolls back the current unit of work and returns None.

        Returns:
            Created ActivitySessionModel, None if an active one already existed
        """
        try:
            return await self.create(
                session,
                user_id=user_id,
                workspace_group_id=workspace_group_id,
                active=True,
                start_time=start_time,
                universe_id=universe_id,
                session_message=session_message,
            )
        except IntegrityError:
            await session.rollback()
            return None

    async def end_active(
        self,
        session: AsyncSession,
        id: UUID,
        workspace_group_id: int,
        end_time: datetime,
        idle_time: int | None = None,
        messages: int | None = None,
    ) -> bool:
        """
        Close an active session.

        Args:
            id: Activity session id
            workspace_group_id: Tenant partition key
            end_time: End instant
            idle_time: Seconds idle, left unchanged when None
            messages: Message count, left unchanged when None

        Returns:
            True if this call closed the session, False if it was already closed
        """
        values: dict = {"active": False, "end_time": end_time}
        if idle_time is not None:
            values["idle_time"] = idle_time
        if messages is not None:
            values["messages"] = messages

        stmt = (
            update(ActivitySessionModel)
            .where(
                ActivitySessionModel.id == id,
                ActivitySessionModel.workspace_group_id == workspace_group_id,
                ActivitySessionModel.active.is_(True),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def update_counters(
        self,
        session: AsyncSession,
        id: UUID,
        workspace_group_id: int,
        idle_time: int | None = None,
        messages: int | None = None,
    ) -> bool:
        """Overwrite idle/message counters on an ended session; no-op when both are None."""
        values: dict = {}
        if idle_time is not None:
            values["idle_time"] = idle_time
        if messages is not None:
            values["messages"] = messages
        if not values:
            return False

        stmt = (
            update(ActivitySessionModel)
            .where(
                ActivitySessionModel.id == id,
                ActivitySessionModel.workspace_group_id == workspace_group_id,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


activity_session_crud = ActivitySessionCRUD()
