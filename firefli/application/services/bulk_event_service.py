"""
Bulk activity event ingestor.

Processes a batch of create/end occupancy events reported by a game
agent against a workspace's activity sessions. The batch is authorized
once by its activity token; after that each event is independent: it is
validated, rank-gated, applied and committed on its own, and its outcome
counts towards exactly one of created/ended/failed (or is skipped).

Dependencies: pydantic, sqlalchemy, firefli.boundary, firefli.core, firefli.application
System role: Attendance ingestion
"""

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from firefli.application.services.notification_service import NotificationDispatcher
from firefli.boundary.db.CRUD.activity_session_crud import activity_session_crud
from firefli.boundary.db.CRUD.config_crud import config_crud
from firefli.boundary.db.CRUD.user_crud import user_crud
from firefli.boundary.integrations.roblox_client import RobloxClient
from firefli.core.exceptions import (
    AuthorizationError,
    RobloxAPIError,
    SessionNotFoundError,
    ValidationError,
)
from firefli.core.session_message import generate_session_message
from firefli.models.activity import BulkEvent, BulkEventResults, TenantScope
from firefli.models.session import ActivitySessionSnapshot
from firefli.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

LATE_END_GRACE_SECONDS = 60

EVENT_CREATE = "create"
EVENT_END = "end"


class BulkEventIngestor:
    """Applies batches of activity events for one workspace."""

    def __init__(
        self,
        db: AsyncSession,
        roblox_client: RobloxClient,
        dispatcher: NotificationDispatcher,
    ) -> None:
        """
        Initialize ingestor.

        Args:
            db: Async SQLAlchemy session, committed once per event
            roblox_client: Username, rank and universe lookups
            dispatcher: Review summary notifications
        """
        self.db = db
        self.roblox_client = roblox_client
        self.dispatcher = dispatcher

    async def resolve_token(self, token: str) -> TenantScope:
        """
        Map an activity token to its workspace and rank gate.

        Raises:
            AuthorizationError: When no workspace owns the token
        """
        config = await config_crud.find_by_activity_token(self.db, token)
        if config is None:
            raise AuthorizationError("Unauthorized")

        role = (config.value or {}).get("role")
        try:
            minimum_rank = int(role) if role else None
        except (TypeError, ValueError):
            minimum_rank = None
        return TenantScope(workspace_group_id=config.workspace_group_id, minimum_rank=minimum_rank)

    async def process_bulk_events(self, token: str, events: list[Any]) -> BulkEventResults:
        """
        Authorize and apply a batch of events in order.

        Args:
            token: Activity token from the Authorization header
            events: Raw event objects as received

        Returns:
            BulkEventResults: created/ended/failed counts and failure messages

        Raises:
            AuthorizationError: When the token maps to no workspace (nothing is processed)
        """
        scope = await self.resolve_token(token)
        results = BulkEventResults()

        for raw in events:
            await self._process_event(scope, raw, results)

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:process_bulk_events - Batch processed",
            workspace_group_id=scope.workspace_group_id,
            created_count=results.created,
            ended_count=results.ended,
            failed_count=results.failed,
        )
        return results

    async def _process_event(self, scope: TenantScope, raw: Any, results: BulkEventResults) -> None:
        try:
            event = self._parse_event(raw)
        except ValidationError as e:
            results.failed += 1
            results.errors.append(e.message)
            return

        try:
            if not await self._passes_rank_gate(scope, event.user_id):
                logger.debug(
                    f"{__name__}:process_bulk_events - Skipped user below rank gate",
                    extra={"user_id": event.user_id, "workspace_group_id": scope.workspace_group_id},
                )
                return

            await self._refresh_profile(event.user_id)

            if event.type == EVENT_CREATE:
                if await self._create(scope, event):
                    results.created += 1
            else:
                await self._end(scope, event)
                results.ended += 1
        except SessionNotFoundError as e:
            await self.db.rollback()
            results.failed += 1
            results.errors.append(e.message)
        except Exception as e:
            await self.db.rollback()
            results.failed += 1
            results.errors.append(f"Error processing event for user {event.user_id}: {e}")
            log_exception_with_context(
                logger,
                f"{__name__}:process_bulk_events - Event failed",
                e,
                user_id=event.user_id,
                event_type=event.type,
                workspace_group_id=scope.workspace_group_id,
            )

    @staticmethod
    def _parse_event(raw: Any) -> BulkEvent:
        if not isinstance(raw, dict):
            raise ValidationError(f"Invalid event: {raw!r}")

        user_ref = raw.get("userid", raw.get("userId"))
        try:
            event = BulkEvent.model_validate(raw)
        except PydanticValidationError as e:
            fields = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
            if fields & {"userid", "userId", "user_id"}:
                raise ValidationError(f"Invalid userid: {user_ref}", field="userid") from e
            if "type" in fields:
                raise ValidationError(f"Invalid event type: {raw.get('type')}", field="type") from e
            raise ValidationError(
                f"Error processing event for user {user_ref}: invalid {', '.join(sorted(fields))}",
                field=", ".join(sorted(fields)),
            ) from e

        if event.type not in (EVENT_CREATE, EVENT_END):
            raise ValidationError(f"Invalid event type: {event.type}", field="type")
        return event

    async def _passes_rank_gate(self, scope: TenantScope, user_id: int) -> bool:
        if not scope.minimum_rank:
            return True
        try:
            rank = await self.roblox_client.get_rank_in_group(scope.workspace_group_id, user_id)
        except RobloxAPIError as e:
            logger.warning(
                f"{__name__}:rank_gate - Rank lookup failed: {e.message}",
                extra={"user_id": user_id, "workspace_group_id": scope.workspace_group_id},
            )
            rank = None
        return bool(rank) and rank > scope.minimum_rank

    async def _refresh_profile(self, user_id: int) -> None:
        try:
            username = await self.roblox_client.get_username(user_id)
            picture = self.roblox_client.get_thumbnail_url(user_id)
            await user_crud.upsert_profile(self.db, user_id, username, picture)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:refresh_profile - Profile upsert failed",
                user_id=user_id,
                error_type=type(e).__name__,
                error_msg=str(e),
            )

    async def _resolve_game_name(self, place_id: int | None) -> str | None:
        if not place_id:
            return None
        try:
            return await self.roblox_client.get_universe_name(place_id)
        except RobloxAPIError as e:
            logger.warning(f"{__name__}:create - Universe lookup failed: {e.message}")
            return None

    async def _create(self, scope: TenantScope, event: BulkEvent) -> bool:
        existing = await activity_session_crud.find_active(
            self.db, event.user_id, scope.workspace_group_id
        )
        if existing is not None:
            return False

        start_time = datetime.now(timezone.utc)
        game_name = await self._resolve_game_name(event.place_id)
        session_message = generate_session_message(game_name, start_time)

        created = await activity_session_crud.create_if_none_active(
            self.db,
            user_id=event.user_id,
            workspace_group_id=scope.workspace_group_id,
            start_time=start_time,
            universe_id=event.place_id,
            session_message=session_message,
        )
        if created is None:
            return False
        await self.db.commit()

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:create - Activity session created",
            user_id=event.user_id,
            workspace_group_id=scope.workspace_group_id,
            session_message=session_message,
        )
        return True

    async def _end(self, scope: TenantScope, event: BulkEvent) -> None:
        now = datetime.now(timezone.utc)
        active = await activity_session_crud.find_active(
            self.db, event.user_id, scope.workspace_group_id
        )

        if active is not None:
            snapshot = ActivitySessionSnapshot.model_validate(active)
            closed = await activity_session_crud.end_active(
                self.db,
                snapshot.id,
                scope.workspace_group_id,
                end_time=now,
                idle_time=event.idle_time,
                messages=event.messages,
            )
            if closed:
                await self.db.commit()
                snapshot = snapshot.model_copy(
                    update={
                        "active": False,
                        "end_time": now,
                        "idle_time": event.idle_time if event.idle_time is not None else snapshot.idle_time,
                        "messages": event.messages if event.messages is not None else snapshot.messages,
                    }
                )
                log_with_context(
                    logger,
                    logging.INFO,
                    f"{__name__}:end - Activity session ended",
                    user_id=event.user_id,
                    activity_session_id=snapshot.id,
                )
                await self.dispatcher.activity_session_reviewed(snapshot)
                return
            await self.db.rollback()

        await self._recover_late_end(scope, event, now)

    async def _recover_late_end(self, scope: TenantScope, event: BulkEvent, now: datetime) -> None:
        recent = await activity_session_crud.find_recently_ended(
            self.db,
            event.user_id,
            scope.workspace_group_id,
            within_seconds=LATE_END_GRACE_SECONDS,
            now=now,
        )
        if recent is None:
            raise SessionNotFoundError(event.user_id)

        snapshot = ActivitySessionSnapshot.model_validate(recent)
        if event.idle_time is not None or event.messages is not None:
            await activity_session_crud.update_counters(
                self.db,
                snapshot.id,
                scope.workspace_group_id,
                idle_time=event.idle_time,
                messages=event.messages,
            )
            await self.db.commit()
            snapshot = snapshot.model_copy(
                update={
                    "idle_time": event.idle_time if event.idle_time is not None else snapshot.idle_time,
                    "messages": event.messages if event.messages is not None else snapshot.messages,
                }
            )

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:end - Late end matched recently ended session",
            user_id=event.user_id,
            activity_session_id=snapshot.id,
        )
        await self.dispatcher.activity_session_reviewed(snapshot)
