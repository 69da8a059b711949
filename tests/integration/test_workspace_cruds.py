"""
Test suite for configuration, integration, user and workspace CRUD.

System role: Verification of tenant lookups used by ingestion and notifications
"""

from sqlalchemy import inspect

from firefli.boundary.db.CRUD import (
    config_crud,
    discord_integration_crud,
    user_crud,
    workspace_crud,
)
from firefli.boundary.db.create_tables import create_all_tables, drop_all_tables
from firefli.boundary.db.models import DiscordIntegrationModel, UserModel, WorkspaceModel

GROUP_ID = 1001


class TestWorkspaceConfigCRUD:
    """Test suite for WorkspaceConfigCRUD."""

    async def test_find_by_activity_token_should_match_json_key(self, test_async_db, workspace) -> None:
        """Test token lookup inside the JSON value."""
        await config_crud.set_value(test_async_db, GROUP_ID, "activity", {"key": "secret-1", "role": 50})
        await config_crud.set_value(test_async_db, 2002, "activity", {"key": "secret-2"})
        await test_async_db.commit()

        found = await config_crud.find_by_activity_token(test_async_db, "secret-1")
        missing = await config_crud.find_by_activity_token(test_async_db, "nope")

        assert found.workspace_group_id == GROUP_ID
        assert found.value["role"] == 50
        assert missing is None

    async def test_find_by_activity_token_should_ignore_other_keys(self, test_async_db, workspace) -> None:
        """Test only the activity entry can authorize."""
        await config_crud.set_value(test_async_db, GROUP_ID, "session_webhook", {"key": "secret-1"})
        await test_async_db.commit()

        assert await config_crud.find_by_activity_token(test_async_db, "secret-1") is None

    async def test_set_value_should_replace_existing(self, test_async_db, workspace) -> None:
        """Test one row per (workspace, key)."""
        await config_crud.set_value(test_async_db, GROUP_ID, "review_webhook", {"enabled": False})
        await config_crud.set_value(test_async_db, GROUP_ID, "review_webhook", {"enabled": True, "url": "https://x"})
        await test_async_db.commit()

        assert await config_crud.get_value(test_async_db, GROUP_ID, "review_webhook") == {"enabled": True, "url": "https://x"}
        assert await config_crud.get_value(test_async_db, GROUP_ID, "birthday_webhook") is None


class TestDiscordIntegrationCRUD:
    """Test suite for DiscordIntegrationCRUD."""

    async def test_get_active_for_workspace_should_skip_inactive(self, test_async_db, workspace) -> None:
        """Test a switched-off integration is invisible."""
        test_async_db.add(
            DiscordIntegrationModel(workspace_group_id=GROUP_ID, is_active=False, bot_token="t", channel_id="1")
        )
        await test_async_db.commit()

        assert await discord_integration_crud.get_active_for_workspace(test_async_db, GROUP_ID) is None

    async def test_get_active_for_workspace_should_apply_defaults(self, test_async_db, workspace) -> None:
        """Test per-kind flags default on for sessions and reviews, off for birthdays."""
        test_async_db.add(DiscordIntegrationModel(workspace_group_id=GROUP_ID, bot_token="t", channel_id="1"))
        await test_async_db.commit()

        integration = await discord_integration_crud.get_active_for_workspace(test_async_db, GROUP_ID)

        assert integration.session_notifications_enabled is True
        assert integration.review_notifications_enabled is True
        assert integration.birthday_enabled is False
        assert integration.templates == {}


class TestUserCRUD:
    """Test suite for UserCRUD.upsert_profile()."""

    async def test_upsert_profile_should_create_then_update(self, test_async_db) -> None:
        """Test insert on first sight, refresh afterwards."""
        await user_crud.upsert_profile(test_async_db, 77, "old_name", "https://pic/1")
        await test_async_db.commit()
        await user_crud.upsert_profile(test_async_db, 77, "new_name", None)
        await test_async_db.commit()

        user = await user_crud.get_by_id(test_async_db, 77)
        assert user.username == "new_name"
        assert user.picture == "https://pic/1"


class TestWorkspaceCRUD:
    """Test suite for WorkspaceCRUD."""

    async def test_get_birthday_members_should_match_day_and_month(self, test_async_db, workspace) -> None:
        """Test only today's birthdays of this workspace's members are returned."""
        test_async_db.add_all(
            [
                UserModel(user_id=1, username="today", birthday_day=14, birthday_month=3),
                UserModel(user_id=2, username="tomorrow", birthday_day=15, birthday_month=3),
                UserModel(user_id=3, username="elsewhere", birthday_day=14, birthday_month=3),
                WorkspaceModel(group_id=2002, group_name="Other"),
            ]
        )
        await test_async_db.flush()
        await workspace_crud.add_member(test_async_db, GROUP_ID, 1, discord_id="999")
        await workspace_crud.add_member(test_async_db, GROUP_ID, 2)
        await workspace_crud.add_member(test_async_db, 2002, 3)
        await test_async_db.commit()

        members = await workspace_crud.get_birthday_members(test_async_db, GROUP_ID, day=14, month=3)

        assert [(user.username, discord_id) for user, discord_id in members] == [("today", "999")]

    async def test_get_all_should_list_workspaces(self, test_async_db, workspace) -> None:
        """Test the base listing works with a non-UUID primary key."""
        workspaces = await workspace_crud.get_all(test_async_db)
        assert [w.group_id for w in workspaces] == [GROUP_ID]


async def test_create_all_tables_should_be_idempotent(test_async_db) -> None:
    """Test re-running table creation keeps existing tables and the active-session index."""
    engine = test_async_db.bind

    await create_all_tables(engine)

    async with engine.connect() as conn:
        index_names = await conn.run_sync(
            lambda sync_conn: {ix["name"] for ix in inspect(sync_conn).get_indexes("activity_sessions")}
        )
    assert "uq_activity_sessions_one_active" in index_names


async def test_drop_all_tables_should_remove_schema() -> None:
    """Test dropping and recreating the schema on a scratch engine."""
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    try:
        await create_all_tables(engine)
        await drop_all_tables(engine)

        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert tables == []
    finally:
        await engine.dispose()
