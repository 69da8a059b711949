"""
Notification dispatcher.

Turns lifecycle transitions into Discord messages. Routing is resolved
per workspace and kind: an active Discord integration with the kind
enabled wins, then the matching webhook config, otherwise the call is a
no-op. Configuration lookup and rendering run on the caller's database
session; the network call itself is handed to the BackgroundRunner
except for the initial session message, whose id must be captured.

Dependencies: sqlalchemy, firefli.boundary, firefli.core, firefli.models
System role: Notification policy and formatting
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from firefli.application.background import BackgroundRunner
from firefli.boundary.db.CRUD.config_crud import config_crud
from firefli.boundary.db.CRUD.integration_crud import discord_integration_crud
from firefli.boundary.db.CRUD.user_crud import user_crud
from firefli.boundary.db.CRUD.workspace_crud import workspace_crud
from firefli.boundary.integrations.discord_client import DiscordClient
from firefli.configs.sessions import SessionSettings
from firefli.core.exceptions import NotificationDeliveryError
from firefli.core.templates import render_template
from firefli.models.notification import Destination, DestinationType, NotificationConfig, NotificationKind
from firefli.models.session import ActivitySessionSnapshot, SessionSnapshot
from firefli.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

DEFAULT_COLOR = 0x5865F2

SESSION_DESCRIPTION = (
    "**{sessionType}** hosted by {host}\n"
    "Starts: {start}\n"
    "Duration: {duration} minutes\n"
    "Status: **{status}**"
)

BIRTHDAY_DESCRIPTION_UNLINKED = "It's **{username}**'s birthday today!\n\nWish them a happy birthday!"

DEFAULT_TEMPLATES: dict[NotificationKind, dict[str, Any]] = {
    NotificationKind.START: {
        "title": "{name} has started",
        "description": SESSION_DESCRIPTION,
        "footer": "{workspace} • Firefli",
    },
    NotificationKind.STATUS: {
        "title": "{name}: {status}",
        "description": SESSION_DESCRIPTION,
        "footer": "{workspace} • Firefli",
    },
    NotificationKind.CONCLUDED: {
        "title": "{name} has concluded",
        "description": SESSION_DESCRIPTION,
        "footer": "{workspace} • Firefli",
        "color": 0x99AAB5,
    },
    NotificationKind.REVIEW_SUMMARY: {
        "title": "Activity session ended",
        "description": (
            "**{username}** ({userId}) left the game.\n"
            "{sessionMessage}\n"
            "Duration: {duration} minutes\n"
            "Idle: {idleTime} minutes\n"
            "Messages: {messages}"
        ),
        "footer": "{workspace} • Firefli",
    },
    NotificationKind.BIRTHDAY: {
        "title": "🎉 Birthday Celebration! 🎉",
        "description": "It's **{username}**'s birthday today! {mention}\n\nWish them a happy birthday!",
        "footer": "{workspace} • Firefli",
        "color": 0xFF0099,
    },
}

# Routing per kind: (integration flag, integration channel column, webhook config key)
_ROUTES: dict[NotificationKind, tuple[str, str, str]] = {
    NotificationKind.START: ("session_notifications_enabled", "session_channel_id", "session_webhook"),
    NotificationKind.STATUS: ("session_notifications_enabled", "session_channel_id", "session_webhook"),
    NotificationKind.CONCLUDED: ("session_notifications_enabled", "session_channel_id", "session_webhook"),
    NotificationKind.REVIEW_SUMMARY: ("review_notifications_enabled", "review_channel_id", "review_webhook"),
    NotificationKind.BIRTHDAY: ("birthday_enabled", "birthday_channel_id", "birthday_webhook"),
}


def parse_color(value: Any, fallback: int = DEFAULT_COLOR) -> int:
    """Convert "#RRGGBB", "RRGGBB" or an int to a Discord colour integer."""
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip().lstrip("#"), 16)
        except ValueError:
            return fallback
    return fallback


def discord_timestamp(moment: datetime) -> str:
    """Discord timestamp markup rendered in each reader's locale."""
    return f"<t:{int(moment.timestamp())}:F>"


class NotificationDispatcher:
    """
    Notification policy for session and activity transitions.

    Attributes:
        db: Caller's async database session (read-only use)
        discord_client: Channel collaborator
        runner: Background runner for fire-and-forget deliveries
        settings: Session settings (concluded label)
    """

    def __init__(
        self,
        db: AsyncSession,
        discord_client: DiscordClient,
        runner: BackgroundRunner,
        settings: SessionSettings,
    ) -> None:
        self.db = db
        self.discord_client = discord_client
        self.runner = runner
        self.settings = settings

    async def get_notification_config(
        self,
        workspace_group_id: int,
        kind: NotificationKind,
    ) -> NotificationConfig:
        """
        Resolve where (and whether) a kind of message is delivered for a workspace.

        Args:
            workspace_group_id: Tenant partition key
            kind: Transition kind

        Returns:
            NotificationConfig: enabled=False when nothing is configured
        """
        flag, channel_column, webhook_key = _ROUTES[kind]
        workspace = await workspace_crud.get_by_id(self.db, workspace_group_id)
        workspace_name = workspace.group_name if workspace else None

        integration = await discord_integration_crud.get_active_for_workspace(self.db, workspace_group_id)
        if integration is not None and getattr(integration, flag):
            channel_id = getattr(integration, channel_column) or integration.channel_id
            return NotificationConfig(
                enabled=True,
                destination=Destination(
                    type=DestinationType.BOT,
                    channel_id=channel_id,
                    bot_token=integration.bot_token,
                ),
                templates=(integration.templates or {}).get(kind.value, {}),
                embed_color=integration.embed_color,
                workspace_name=workspace_name,
            )

        webhook = await config_crud.get_value(self.db, workspace_group_id, webhook_key)
        if webhook and webhook.get("enabled") and webhook.get("url"):
            return NotificationConfig(
                enabled=True,
                destination=Destination(type=DestinationType.WEBHOOK, webhook_url=webhook["url"]),
                workspace_name=workspace_name,
            )

        return NotificationConfig(enabled=False, workspace_name=workspace_name)

    def build_payload(
        self,
        kind: NotificationKind,
        config: NotificationConfig,
        variables: Mapping[str, Any],
        content: str | None = None,
        thumbnail_url: str | None = None,
        default_description: str | None = None,
    ) -> dict[str, Any]:
        """
        Render the Discord message body for a transition.

        Tenant overrides (title, description, footer, color) replace the
        defaults field by field. `default_description` swaps the built-in
        description only; a tenant description still wins.

        Returns:
            dict: Discord message body with a single embed
        """
        defaults = DEFAULT_TEMPLATES[kind]
        overrides = config.templates or {}

        def pick(field: str) -> Any:
            return overrides.get(field) or defaults.get(field)

        embed: dict[str, Any] = {
            "title": render_template(pick("title") or "", variables),
            "description": render_template(
                overrides.get("description") or default_description or defaults.get("description") or "",
                variables,
            ),
            "color": parse_color(
                overrides.get("color") or config.embed_color or defaults.get("color")
            ),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        footer = pick("footer")
        if footer:
            embed["footer"] = {"text": render_template(footer, variables)}
        if thumbnail_url:
            embed["thumbnail"] = {"url": thumbnail_url}

        payload: dict[str, Any] = {"embeds": [embed]}
        if content:
            payload["content"] = content
        return payload

    async def _session_variables(self, snapshot: SessionSnapshot, status: str | None, config: NotificationConfig) -> dict[str, Any]:
        host = "Unassigned"
        if snapshot.owner_id is not None:
            owner = await user_crud.get_by_id(self.db, snapshot.owner_id)
            host = owner.username if owner and owner.username else str(snapshot.owner_id)
        return {
            "name": snapshot.name or snapshot.session_type_name or "Session",
            "sessionType": snapshot.session_type_name or snapshot.type or "Session",
            "status": status or "Started",
            "host": host,
            "duration": snapshot.duration or self.settings.default_duration_minutes,
            "workspace": config.workspace_name or "Workspace",
            "start": discord_timestamp(snapshot.date),
        }

    async def session_started(self, snapshot: SessionSnapshot, status: str | None = None) -> str | None:
        """
        Send the initial session message and return its id.

        This is the only synchronous send; the id is needed for later
        edits. Delivery failures are logged and reported as None.

        Args:
            snapshot: Session that just started
            status: Current status label shown in the message

        Returns:
            str | None: Message id, None when disabled or delivery failed
        """
        try:
            config = await self.get_notification_config(snapshot.workspace_group_id, NotificationKind.START)
            if not config.enabled:
                return None
            variables = await self._session_variables(snapshot, status, config)
            payload = self.build_payload(NotificationKind.START, config, variables)
            message_id = await self.discord_client.send_message(config.destination, payload)
        except NotificationDeliveryError as e:
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:session_started - Delivery failed",
                session_id=snapshot.id,
                workspace_group_id=snapshot.workspace_group_id,
                error_msg=e.message,
            )
            return None
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:session_started - Notification failed",
                e,
                session_id=snapshot.id,
            )
            return None

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:session_started - Sent start message",
            session_id=snapshot.id,
            message_id=message_id,
        )
        return message_id

    async def session_status_changed(
        self,
        snapshot: SessionSnapshot,
        status: str,
        kind: NotificationKind = NotificationKind.STATUS,
    ) -> bool:
        """
        Edit the session message to show a new status, in the background.

        No-op when the session has no stored message id; a new message
        is never created here.

        Returns:
            bool: True if an edit was submitted
        """
        if not snapshot.discord_message_id:
            return False

        try:
            config = await self.get_notification_config(snapshot.workspace_group_id, kind)
            if not config.enabled:
                return False
            variables = await self._session_variables(snapshot, status, config)
            payload = self.build_payload(kind, config, variables)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:session_status_changed - Could not prepare edit",
                e,
                session_id=snapshot.id,
            )
            return False

        self.runner.submit(
            self.discord_client.edit_message(config.destination, snapshot.discord_message_id, payload),
            label=f"edit_session_{kind.value}",
            session_id=snapshot.id,
            status=status,
        )
        return True

    async def session_concluded(self, snapshot: SessionSnapshot) -> bool:
        """Edit the session message to its final label; no-op without a message id."""
        return await self.session_status_changed(
            snapshot, self.settings.concluded_label, kind=NotificationKind.CONCLUDED
        )

    async def activity_session_reviewed(self, snapshot: ActivitySessionSnapshot) -> bool:
        """
        Send the review summary for an ended activity session, in the background.

        Returns:
            bool: True if a send was submitted
        """
        try:
            config = await self.get_notification_config(
                snapshot.workspace_group_id, NotificationKind.REVIEW_SUMMARY
            )
            if not config.enabled:
                return False

            user = await user_crud.get_by_id(self.db, snapshot.user_id)
            end_time = snapshot.end_time or datetime.now(timezone.utc)
            duration_minutes = max(0, round((end_time - snapshot.start_time).total_seconds() / 60))
            variables = {
                "username": user.username if user and user.username else str(snapshot.user_id),
                "userId": snapshot.user_id,
                "workspace": config.workspace_name or "Workspace",
                "duration": duration_minutes,
                "idleTime": round(snapshot.idle_time / 60),
                "messages": snapshot.messages,
                "sessionMessage": snapshot.session_message or "",
            }
            payload = self.build_payload(
                NotificationKind.REVIEW_SUMMARY,
                config,
                variables,
                thumbnail_url=user.picture if user else None,
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:activity_session_reviewed - Could not prepare review",
                e,
                activity_session_id=snapshot.id,
            )
            return False

        self.runner.submit(
            self.discord_client.send_message(config.destination, payload),
            label="send_review_summary",
            activity_session_id=snapshot.id,
            user_id=snapshot.user_id,
        )
        return True

    async def send_birthday(
        self,
        config: NotificationConfig,
        variables: Mapping[str, Any],
        discord_id: str | None = None,
        thumbnail_url: str | None = None,
    ) -> str:
        """
        Send one birthday announcement and wait for it.

        Raises:
            NotificationDeliveryError: When delivery fails
        """
        payload = self.build_payload(
            NotificationKind.BIRTHDAY,
            config,
            variables,
            content=f"<@{discord_id}>" if discord_id else None,
            thumbnail_url=thumbnail_url,
            default_description=None if discord_id else BIRTHDAY_DESCRIPTION_UNLINKED,
        )
        return await self.discord_client.send_message(config.destination, payload)
