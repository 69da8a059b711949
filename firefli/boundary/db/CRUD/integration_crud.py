"""
Discord integration CRUD operations.

Dependencies: sqlalchemy, firefli.boundary.db.models
System role: Notification routing lookups
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from firefli.boundary.db.CRUD.base_crud import BaseCRUD
from firefli.boundary.db.models import DiscordIntegrationModel


class DiscordIntegrationCRUD(BaseCRUD[DiscordIntegrationModel]):
    """CRUD operations for DiscordIntegrationModel."""

    def __init__(self) -> None:
        """Initialize DiscordIntegrationCRUD with DiscordIntegrationModel."""
        super().__init__(DiscordIntegrationModel)

    async def get_active_for_workspace(
        self,
        session: AsyncSession,
        workspace_group_id: int,
    ) -> DiscordIntegrationModel | None:
        """
        Retrieve the workspace's integration if it is switched on.

        Returns:
            Active DiscordIntegrationModel, None if missing or disabled
        """
        stmt = select(DiscordIntegrationModel).where(
            DiscordIntegrationModel.workspace_group_id == workspace_group_id,
            DiscordIntegrationModel.is_active.is_(True),
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


discord_integration_crud = DiscordIntegrationCRUD()
