"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(the shared httpx client, Discord/Roblox clients, background runner)
live in the ServiceCache; services are built per request around the
request's database session.

Dependencies: fastapi, httpx, firefli.configs, firefli.application, firefli.boundary
System role: DI container for service injection
"""

import hmac

import httpx
from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from firefli.application.background import BackgroundRunner
from firefli.application.services import (
    BirthdayService,
    BulkEventIngestor,
    NotificationDispatcher,
    SessionReconciler,
)
from firefli.boundary.db import get_async_db
from firefli.boundary.integrations import DiscordClient, RobloxClient
from firefli.configs import Settings, get_settings


class ServiceCache:
    """Container for process-wide collaborator instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._http_client: httpx.AsyncClient | None = None
        self._discord_client: DiscordClient | None = None
        self._roblox_client: RobloxClient | None = None
        self._runner: BackgroundRunner | None = None

    @property
    def settings(self) -> Settings:
        """Application settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Shared httpx client with the bounded outbound timeout."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.settings.integrations.http_timeout_seconds,
                headers={"User-Agent": "Firefli"},
            )
        return self._http_client

    @property
    def discord_client(self) -> DiscordClient:
        """Get cached Discord client."""
        if self._discord_client is None:
            self._discord_client = DiscordClient(
                self.http_client,
                api_base=self.settings.integrations.discord_api_base,
            )
        return self._discord_client

    @property
    def roblox_client(self) -> RobloxClient:
        """Get cached Roblox client."""
        if self._roblox_client is None:
            integrations = self.settings.integrations
            self._roblox_client = RobloxClient(
                self.http_client,
                users_api=integrations.roblox_users_api,
                groups_api=integrations.roblox_groups_api,
                games_api=integrations.roblox_games_api,
                thumbnail_url=integrations.roblox_thumbnail_url,
                max_attempts=integrations.roblox_max_attempts,
            )
        return self._roblox_client

    @property
    def runner(self) -> BackgroundRunner:
        """Get cached background runner."""
        if self._runner is None:
            self._runner = BackgroundRunner()
        return self._runner

    async def aclose(self) -> None:
        """Drain background work, close the HTTP client and reset the cache."""
        if self._runner is not None:
            await self._runner.drain()
        if self._http_client is not None:
            await self._http_client.aclose()
        self._http_client = None
        self._discord_client = None
        self._roblox_client = None
        self._runner = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_notification_dispatcher(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
    settings: Settings = Depends(get_settings_dependency),
) -> NotificationDispatcher:
    """
    Get notification dispatcher bound to the request's database session.

    Args:
        db: Async database session (injected via Depends)
        cache: Service cache with the Discord client and runner

    Returns:
        NotificationDispatcher: Dispatcher instance
    """
    return NotificationDispatcher(db, cache.discord_client, cache.runner, settings.sessions)


def get_reconciler(
    db: AsyncSession = Depends(get_async_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    settings: Settings = Depends(get_settings_dependency),
) -> SessionReconciler:
    """Get session reconciler instance."""
    return SessionReconciler(db, dispatcher, settings.sessions)


def get_bulk_ingestor(
    db: AsyncSession = Depends(get_async_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    cache: ServiceCache = Depends(get_service_cache),
) -> BulkEventIngestor:
    """Get bulk event ingestor instance."""
    return BulkEventIngestor(db, cache.roblox_client, dispatcher)


def get_birthday_service(
    db: AsyncSession = Depends(get_async_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
    settings: Settings = Depends(get_settings_dependency),
) -> BirthdayService:
    """Get birthday service instance."""
    return BirthdayService(db, dispatcher, settings.sessions)


def verify_cron_secret(
    x_cron_secret: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings_dependency),
) -> None:
    """
    Guard for scheduler-triggered routes.

    Accepts the shared secret in `X-Cron-Secret` or `Authorization`
    (raw or as a Bearer token).

    Raises:
        HTTPException(500): CRON_SECRET not configured
        HTTPException(401): Secret missing or wrong
    """
    expected = settings.cron.secret
    if not expected:
        raise HTTPException(status_code=500, detail="CRON_SECRET not configured")

    provided = x_cron_secret or authorization or ""
    if provided.startswith("Bearer "):
        provided = provided[len("Bearer "):]
    if not provided or not hmac.compare_digest(provided.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Unauthorized")
