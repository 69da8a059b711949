"""
Worker runtime.

Each task runs in its own event loop (asyncio.run), so it gets its own
engine, HTTP client and background runner, all torn down when the task
finishes.

Dependencies: httpx, sqlalchemy, firefli.application, firefli.boundary
System role: Per-task resource lifecycle for Celery tasks
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from firefli.application.background import BackgroundRunner
from firefli.application.services import NotificationDispatcher
from firefli.boundary.integrations import DiscordClient
from firefli.configs import Settings, get_settings


@dataclass
class WorkerContext:
    """Resources shared by one task run."""

    settings: Settings
    session_factory: async_sessionmaker[AsyncSession]
    discord_client: DiscordClient
    runner: BackgroundRunner

    def dispatcher(self, db: AsyncSession) -> NotificationDispatcher:
        """Build a dispatcher bound to `db`."""
        return NotificationDispatcher(db, self.discord_client, self.runner, self.settings.sessions)


@asynccontextmanager
async def worker_context(settings: Settings | None = None) -> AsyncIterator[WorkerContext]:
    """
    Open per-task resources.

    Background deliveries are drained before the HTTP client closes.

    Yields:
        WorkerContext: Session factory, Discord client and runner
    """
    settings = settings or get_settings()
    engine = create_async_engine(settings.database.async_database_url, pool_pre_ping=True)
    http_client = httpx.AsyncClient(timeout=settings.integrations.http_timeout_seconds)
    runner = BackgroundRunner()
    try:
        yield WorkerContext(
            settings=settings,
            session_factory=async_sessionmaker(engine, autoflush=False, expire_on_commit=False),
            discord_client=DiscordClient(http_client, api_base=settings.integrations.discord_api_base),
            runner=runner,
        )
    finally:
        await runner.drain()
        await http_client.aclose()
        await engine.dispose()
