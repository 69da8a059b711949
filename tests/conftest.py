"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, seeded workspace rows, collaborator mocks
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

GROUP_ID = 1001
OTHER_GROUP_ID = 2002

STATUSES = [
    {"name": "Starting Soon", "timeAfter": 0},
    {"name": "In Progress", "timeAfter": 5},
    {"name": "Wrapping Up", "timeAfter": 25},
]


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from firefli.boundary.db.base import Base
    from firefli.boundary.db import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def now() -> datetime:
    """Fixed reference instant."""
    return datetime(2026, 3, 14, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
async def workspace(test_async_db):
    """Workspace row for GROUP_ID."""
    from firefli.boundary.db.models import WorkspaceModel

    ws = WorkspaceModel(group_id=GROUP_ID, group_name="Cafe Group")
    test_async_db.add(ws)
    await test_async_db.commit()
    return ws


@pytest.fixture
async def session_type(test_async_db, workspace):
    """Session type with three ascending statuses."""
    from firefli.boundary.db.models import SessionTypeModel

    st = SessionTypeModel(workspace_group_id=GROUP_ID, name="Training", statuses=STATUSES)
    test_async_db.add(st)
    await test_async_db.commit()
    return st


@pytest.fixture
async def session_webhook(test_async_db, workspace):
    """Enable the session webhook fallback for GROUP_ID."""
    from firefli.boundary.db.CRUD import config_crud

    await config_crud.set_value(
        test_async_db,
        GROUP_ID,
        "session_webhook",
        {"enabled": True, "url": "https://discord.com/api/webhooks/1/session-token"},
    )
    await test_async_db.commit()


@pytest.fixture
async def review_webhook(test_async_db, workspace):
    """Enable the review webhook fallback for GROUP_ID."""
    from firefli.boundary.db.CRUD import config_crud

    await config_crud.set_value(
        test_async_db,
        GROUP_ID,
        "review_webhook",
        {"enabled": True, "url": "https://discord.com/api/webhooks/2/review-token"},
    )
    await test_async_db.commit()


@pytest.fixture
async def activity_token(test_async_db, workspace) -> str:
    """Activity token mapped to GROUP_ID without a rank gate."""
    from firefli.boundary.db.CRUD import config_crud

    await config_crud.set_value(test_async_db, GROUP_ID, "activity", {"key": "act-token", "role": None})
    await test_async_db.commit()
    return "act-token"


@pytest.fixture
def session_settings():
    """Session settings with no send delay."""
    from firefli.configs.sessions import SessionSettings

    return SessionSettings(default_duration_minutes=30, concluded_label="Concluded", send_delay_seconds=0)


@pytest.fixture
def mock_discord_client():
    """
    Create mock DiscordClient.

    Returns:
        AsyncMock: send_message returns "msg-1"
    """
    from firefli.boundary.integrations.discord_client import DiscordClient

    client = AsyncMock(spec=DiscordClient)
    client.send_message = AsyncMock(return_value="msg-1")
    client.edit_message = AsyncMock(return_value=None)
    return client


@pytest.fixture
def mock_roblox_client():
    """
    Create mock RobloxClient.

    Returns:
        MagicMock: Async lookups plus the synchronous thumbnail URL builder
    """
    client = MagicMock()
    client.get_username = AsyncMock(side_effect=lambda user_id: f"user{user_id}")
    client.get_thumbnail_url = MagicMock(side_effect=lambda user_id: f"https://thumbs.test/{user_id}.png")
    client.get_rank_in_group = AsyncMock(return_value=100)
    client.get_universe_name = AsyncMock(return_value="Cafe Roleplay")
    return client


@pytest.fixture
def runner():
    """Real background runner; tests drain it before asserting deliveries."""
    from firefli.application.background import BackgroundRunner

    return BackgroundRunner()


@pytest.fixture
def dispatcher(test_async_db, mock_discord_client, runner, session_settings):
    """NotificationDispatcher wired to the test database and mock Discord client."""
    from firefli.application.services.notification_service import NotificationDispatcher

    return NotificationDispatcher(test_async_db, mock_discord_client, runner, session_settings)
