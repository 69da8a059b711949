"""
Birthday announcements.

Daily pass over every workspace: members whose profile birthday matches
today's UTC date are announced on the workspace's birthday destination.
Consecutive sends within a workspace are spaced out to stay clear of
Discord rate limits.

Dependencies: sqlalchemy, firefli.boundary.db, firefli.application
System role: Scheduled birthday notifications
"""

import asyncio
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from firefli.application.services.notification_service import NotificationDispatcher
from firefli.boundary.db.CRUD.workspace_crud import workspace_crud
from firefli.configs.sessions import SessionSettings
from firefli.models.cron import BirthdayResult, BirthdayRunResponse
from firefli.models.notification import DestinationType, NotificationKind
from firefli.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class BirthdayService:
    """Announces today's birthdays for every workspace."""

    def __init__(
        self,
        db: AsyncSession,
        dispatcher: NotificationDispatcher,
        settings: SessionSettings,
    ) -> None:
        self.db = db
        self.dispatcher = dispatcher
        self.settings = settings

    async def announce(self, today: datetime | None = None) -> BirthdayRunResponse:
        """
        Run the birthday pass.

        Args:
            today: Reference instant, defaults to the current UTC time

        Returns:
            BirthdayRunResponse: One result per announced member or failed workspace
        """
        today = today or datetime.now(timezone.utc)
        results: list[BirthdayResult] = []

        workspaces = [(w.group_id, w.group_name) for w in await workspace_crud.get_all(self.db)]
        for group_id, group_name in workspaces:
            try:
                results.extend(await self._announce_workspace(group_id, group_name, today))
            except Exception as e:
                await self.db.rollback()
                results.append(
                    BirthdayResult(workspace_group_id=group_id, status="failed", error=str(e))
                )
                log_exception_with_context(
                    logger,
                    f"{__name__}:announce - Workspace failed",
                    e,
                    workspace_group_id=group_id,
                )

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:announce - Pass complete",
            workspaces=len(workspaces),
            processed=len(results),
        )
        return BirthdayRunResponse(success=True, processed=len(results), results=results)

    async def _announce_workspace(
        self,
        group_id: int,
        group_name: str | None,
        today: datetime,
    ) -> list[BirthdayResult]:
        config = await self.dispatcher.get_notification_config(group_id, NotificationKind.BIRTHDAY)
        if not config.enabled:
            return []

        members = await workspace_crud.get_birthday_members(self.db, group_id, today.day, today.month)
        method = "discord_integration" if config.destination.type == DestinationType.BOT else "webhook"
        results: list[BirthdayResult] = []

        for index, (user, discord_id) in enumerate(members):
            if index > 0:
                await asyncio.sleep(self.settings.send_delay_seconds)

            username = user.username or str(user.user_id)
            variables = {
                "username": username,
                "userId": user.user_id,
                "workspace": group_name or "Workspace",
                "mention": f"<@{discord_id}>" if discord_id else username,
            }
            try:
                await self.dispatcher.send_birthday(
                    config, variables, discord_id=discord_id, thumbnail_url=user.picture
                )
            except Exception as e:
                results.append(
                    BirthdayResult(
                        workspace_group_id=group_id,
                        user_id=user.user_id,
                        username=username,
                        status="failed",
                        method=method,
                        error=str(e),
                    )
                )
                log_with_context(
                    logger,
                    logging.WARNING,
                    f"{__name__}:announce - Birthday delivery failed",
                    workspace_group_id=group_id,
                    user_id=user.user_id,
                    error_msg=str(e),
                )
                continue

            results.append(
                BirthdayResult(
                    workspace_group_id=group_id,
                    user_id=user.user_id,
                    username=username,
                    status="success",
                    method=method,
                )
            )

        return results
