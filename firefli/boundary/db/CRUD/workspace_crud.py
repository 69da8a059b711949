"""
Workspace CRUD operations.

Dependencies: sqlalchemy, firefli.boundary.db.models
System role: Tenant listing and membership queries
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from firefli.boundary.db.CRUD.base_crud import BaseCRUD
from firefli.boundary.db.models import UserModel, WorkspaceMemberModel, WorkspaceModel


class WorkspaceCRUD(BaseCRUD[WorkspaceModel]):
    """CRUD operations for WorkspaceModel and its members."""

    def __init__(self) -> None:
        """Initialize WorkspaceCRUD with WorkspaceModel."""
        super().__init__(WorkspaceModel)

    async def add_member(
        self,
        session: AsyncSession,
        workspace_group_id: int,
        user_id: int,
        discord_id: str | None = None,
    ) -> WorkspaceMemberModel:
        """Link a user to a workspace."""
        member = WorkspaceMemberModel(
            workspace_group_id=workspace_group_id,
            user_id=user_id,
            discord_id=discord_id,
        )
        session.add(member)
        await session.flush()
        return member

    async def get_birthday_members(
        self,
        session: AsyncSession,
        workspace_group_id: int,
        day: int,
        month: int,
    ) -> Sequence[tuple[UserModel, str | None]]:
        """
        Retrieve members whose birthday falls on the given day.

        Args:
            session: Async database session
            workspace_group_id: Tenant partition key
            day: Day of month
            month: Month (1-12)

        Returns:
            Sequence of (UserModel, linked Discord id) pairs ordered by user id
        """
        stmt = (
            select(UserModel, WorkspaceMemberModel.discord_id)
            .join(WorkspaceMemberModel, WorkspaceMemberModel.user_id == UserModel.user_id)
            .where(
                WorkspaceMemberModel.workspace_group_id == workspace_group_id,
                UserModel.birthday_day == day,
                UserModel.birthday_month == month,
            )
            .order_by(UserModel.user_id)
        )
        result = await session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]


workspace_crud = WorkspaceCRUD()
