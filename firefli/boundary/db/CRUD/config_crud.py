"""
Workspace configuration CRUD operations.

Dependencies: sqlalchemy, firefli.boundary.db.models
System role: Key/value tenant settings lookups
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from firefli.boundary.db.CRUD.base_crud import BaseCRUD
from firefli.boundary.db.models import WorkspaceConfigModel

ACTIVITY_CONFIG_KEY = "activity"


class WorkspaceConfigCRUD(BaseCRUD[WorkspaceConfigModel]):
    """CRUD operations for WorkspaceConfigModel."""

    def __init__(self) -> None:
        """Initialize WorkspaceConfigCRUD with WorkspaceConfigModel."""
        super().__init__(WorkspaceConfigModel)

    async def get_value(
        self,
        session: AsyncSession,
        workspace_group_id: int,
        key: str,
    ) -> dict[str, Any] | None:
        """
        Read one configuration value.

        Returns:
            Stored JSON value, None if the key is unset
        """
        stmt = select(WorkspaceConfigModel.value).where(
            WorkspaceConfigModel.workspace_group_id == workspace_group_id,
            WorkspaceConfigModel.key == key,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_value(
        self,
        session: AsyncSession,
        workspace_group_id: int,
        key: str,
        value: dict[str, Any],
    ) -> WorkspaceConfigModel:
        """Create or replace one configuration value."""
        stmt = select(WorkspaceConfigModel).where(
            WorkspaceConfigModel.workspace_group_id == workspace_group_id,
            WorkspaceConfigModel.key == key,
        )
        existing = (await session.execute(stmt)).scalar_one_or_none()
        if existing is None:
            return await self.create(
                session, workspace_group_id=workspace_group_id, key=key, value=value
            )
        existing.value = value
        await session.flush()
        return existing

    async def find_by_activity_token(
        self,
        session: AsyncSession,
        token: str,
    ) -> WorkspaceConfigModel | None:
        """
        Find the activity config entry holding `token`.

        Args:
            session: Async database session
            token: Opaque activity key presented by the game agent

        Returns:
            Matching WorkspaceConfigModel, None if no workspace owns the token
        """
        stmt = (
            select(WorkspaceConfigModel)
            .where(
                WorkspaceConfigModel.key == ACTIVITY_CONFIG_KEY,
                WorkspaceConfigModel.value["key"].as_string() == token,
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


config_crud = WorkspaceConfigCRUD()
