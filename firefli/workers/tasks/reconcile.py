"""
Session reconciliation Celery task.

Task: reconcile_sessions()
Flow: open worker context -> run one reconciliation pass -> return counts

Dependencies: firefli.application, firefli.workers
System role: Scheduled reconciliation trigger
"""

import asyncio
import logging

from firefli.application.services import SessionReconciler
from firefli.workers import celery_app
from firefli.workers.runtime import worker_context

logger = logging.getLogger(__name__)


async def run_reconciliation(context_factory=worker_context) -> dict:
    """
    Run one reconciliation pass with task-owned resources.

    Args:
        context_factory: Async context manager yielding a WorkerContext

    Returns:
        dict: ReconcileResult as a plain dict
    """
    async with context_factory() as context:
        async with context.session_factory() as db:
            reconciler = SessionReconciler(db, context.dispatcher(db), context.settings.sessions)
            result = await reconciler.reconcile()
    return result.model_dump()


@celery_app.task(name="firefli.reconcile_sessions")
def reconcile_sessions() -> dict:
    """
    Reconcile open sessions against the current time.

    Returns:
        dict: started/ended/status-updated/failed counts
    """
    result = asyncio.run(run_reconciliation())
    logger.info(f"{__name__}:reconcile_sessions - {result}")
    return result
