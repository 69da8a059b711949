"""
Background task runner.

Owns fire-and-forget coroutines (notification edits, review summaries)
so callers never await their completion. Failures are logged with
context and never propagated. The runner is drained on shutdown so that
in-flight deliveries are not cut off.

Dependencies: asyncio, firefli.observability
System role: Decouples notification delivery from the persistence path
"""

import asyncio
import logging
from typing import Any, Coroutine

from firefli.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """Tracks asyncio tasks submitted for fire-and-forget execution."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    def submit(self, coro: Coroutine[Any, Any, Any], label: str, **context) -> asyncio.Task:
        """
        Schedule a coroutine without waiting for it.

        Args:
            coro: Coroutine to run
            label: Short description used in failure logs
            **context: Extra fields attached to the failure log

        Returns:
            asyncio.Task: The scheduled task
        """
        task = asyncio.create_task(self._run(coro, label, context))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, coro: Coroutine[Any, Any, Any], label: str, context: dict) -> None:
        try:
            await coro
        except asyncio.CancelledError:
            logger.warning(f"{__name__}:{label} - Cancelled before completion")
            raise
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:{label} - Background task failed",
                e,
                task=label,
                **context,
            )

    async def drain(self, timeout: float | None = 10.0) -> None:
        """
        Wait for all pending tasks; cancel whatever is left after `timeout`.

        Args:
            timeout: Seconds to wait, None to wait indefinitely
        """
        if not self._tasks:
            return

        tasks = list(self._tasks)
        logger.info(f"{__name__}:drain - Waiting for {len(tasks)} background task(s)")
        done, pending = await asyncio.wait(tasks, timeout=timeout)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.warning(f"{__name__}:drain - Cancelled {len(pending)} unfinished task(s)")
