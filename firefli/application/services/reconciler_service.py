"""
Session reconciler.

Brings every due, not-yet-ended session in line with the wall clock on
each pass. Per session, in precedence order:

1. Concluded (terminal): `date + duration <= now` sets `ended` and the
   concluded label, then edits the session message.
2. Started: the first pass at or after `date` sets `started_at` and
   sends the start message, capturing its id.
3. Status tick: while open, re-resolve the status label and edit the
   message when it differs from the last one pushed.

Every write is conditional, so a second pass over an unchanged session
mutates nothing and notifies nobody. Each session is its own unit of
work; a failure is rolled back, logged and counted without stopping the
pass.

Dependencies: sqlalchemy, firefli.boundary.db, firefli.core, firefli.application
System role: Periodic lifecycle reconciliation
"""

import logging
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from firefli.application.services.notification_service import NotificationDispatcher
from firefli.boundary.db.CRUD.session_crud import session_crud
from firefli.configs.sessions import SessionSettings
from firefli.core.status_resolver import resolve_status
from firefli.models.cron import ReconcileResult
from firefli.models.session import SessionSnapshot
from firefli.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class SessionReconciler:
    """Reconciliation pass over open scheduled sessions."""

    def __init__(
        self,
        db: AsyncSession,
        dispatcher: NotificationDispatcher,
        settings: SessionSettings,
    ) -> None:
        """
        Initialize reconciler.

        Args:
            db: Async SQLAlchemy session, committed once per session processed
            dispatcher: Notification dispatcher sharing the same database session
            settings: Session defaults (duration, concluded label)
        """
        self.db = db
        self.dispatcher = dispatcher
        self.settings = settings

    async def reconcile(self, now: datetime | None = None) -> ReconcileResult:
        """
        Run one reconciliation pass.

        Args:
            now: Pass instant, defaults to the current UTC time

        Returns:
            ReconcileResult: started/ended/status-updated/failed counts
        """
        now = now or datetime.now(timezone.utc)
        result = ReconcileResult()

        sessions = await session_crud.find_open_sessions(self.db, now)
        snapshots: list[SessionSnapshot] = []
        for session in sessions:
            try:
                snapshots.append(SessionSnapshot.from_model(session))
            except PydanticValidationError as e:
                result.failed_count += 1
                log_exception_with_context(
                    logger,
                    f"{__name__}:reconcile - Session row unreadable",
                    e,
                    session_id=session.id,
                )

        for snapshot in snapshots:
            try:
                await self._reconcile_session(snapshot, now, result)
            except Exception as e:
                await self.db.rollback()
                result.failed_count += 1
                log_exception_with_context(
                    logger,
                    f"{__name__}:reconcile - Session failed",
                    e,
                    session_id=snapshot.id,
                    workspace_group_id=snapshot.workspace_group_id,
                )

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:reconcile - Pass complete",
            candidates=len(sessions),
            started_count=result.started_count,
            ended_count=result.ended_count,
            status_updated_count=result.status_updated_count,
            failed_count=result.failed_count,
        )
        return result

    async def _reconcile_session(
        self,
        snapshot: SessionSnapshot,
        now: datetime,
        result: ReconcileResult,
    ) -> None:
        duration = snapshot.duration or self.settings.default_duration_minutes
        end_time = snapshot.date + timedelta(minutes=duration)

        if end_time <= now:
            await self._conclude(snapshot, end_time, result)
            return

        if snapshot.started_at is None:
            snapshot = await self._start(snapshot, duration, now, result)

        if snapshot.discord_message_id:
            await self._tick_status(snapshot, duration, now, result)

    async def _conclude(self, snapshot: SessionSnapshot, end_time: datetime, result: ReconcileResult) -> None:
        label = self.settings.concluded_label
        if not await session_crud.mark_concluded(self.db, snapshot.id, end_time, label):
            await self.db.rollback()
            return
        await self.db.commit()
        result.ended_count += 1

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:reconcile - Session concluded",
            session_id=snapshot.id,
            ended=end_time,
        )
        await self.dispatcher.session_concluded(snapshot)

    async def _start(
        self,
        snapshot: SessionSnapshot,
        duration: int,
        now: datetime,
        result: ReconcileResult,
    ) -> SessionSnapshot:
        status = resolve_status(snapshot.date, duration, snapshot.statuses, now=now)
        if not await session_crud.mark_started(self.db, snapshot.id, snapshot.date):
            await self.db.rollback()
            return snapshot
        await self.db.commit()
        result.started_count += 1
        snapshot = snapshot.model_copy(update={"started_at": snapshot.date})

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:reconcile - Session started",
            session_id=snapshot.id,
            workspace_group_id=snapshot.workspace_group_id,
        )

        message_id = await self.dispatcher.session_started(snapshot, status)
        if message_id is None:
            return snapshot

        # started_at is already committed here
        try:
            await session_crud.record_start_message(self.db, snapshot.id, message_id, status)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:reconcile - Start message id not saved",
                e,
                session_id=snapshot.id,
                message_id=message_id,
            )
            return snapshot
        return snapshot.model_copy(
            update={"discord_message_id": message_id, "last_discord_status": status}
        )

    async def _tick_status(
        self,
        snapshot: SessionSnapshot,
        duration: int,
        now: datetime,
        result: ReconcileResult,
    ) -> None:
        status = resolve_status(snapshot.date, duration, snapshot.statuses, now=now)
        if status is None or status == snapshot.last_discord_status:
            return

        if not await session_crud.set_last_status(self.db, snapshot.id, status):
            await self.db.rollback()
            return
        await self.db.commit()
        result.status_updated_count += 1

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:reconcile - Session status changed",
            session_id=snapshot.id,
            previous_status=snapshot.last_discord_status,
            status=status,
        )
        await self.dispatcher.session_status_changed(snapshot, status)
