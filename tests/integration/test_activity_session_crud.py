"""
Test suite for ActivitySessionCRUD against SQLite.

Covers the partial unique index that enforces at most one active
session per user and workspace, and the tenant-scoped updates.

System role: Verification of attendance persistence
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from firefli.boundary.db.CRUD import activity_session_crud
from firefli.boundary.db.models import ActivitySessionModel

GROUP_ID = 1001
OTHER_GROUP_ID = 2002


async def count_active(db, user_id: int, group_id: int = GROUP_ID) -> int:
    stmt = select(func.count()).select_from(ActivitySessionModel).where(
        ActivitySessionModel.user_id == user_id,
        ActivitySessionModel.workspace_group_id == group_id,
        ActivitySessionModel.active.is_(True),
    )
    return (await db.execute(stmt)).scalar_one()


class TestCreateIfNoneActive:
    """Test suite for ActivitySessionCRUD.create_if_none_active()."""

    async def test_should_create_active_session(self, test_async_db, now) -> None:
        """Test the first create succeeds."""
        created = await activity_session_crud.create_if_none_active(
            test_async_db,
            user_id=7,
            workspace_group_id=GROUP_ID,
            start_time=now,
            universe_id=123,
            session_message="Afternoon session in Cafe",
        )
        await test_async_db.commit()

        assert created is not None
        assert created.active is True
        assert created.universe_id == 123

    async def test_should_refuse_second_active_session(self, test_async_db, now) -> None:
        """Test the unique index turns a duplicate insert into a no-op."""
        first = await activity_session_crud.create_if_none_active(
            test_async_db, user_id=7, workspace_group_id=GROUP_ID, start_time=now
        )
        await test_async_db.commit()

        second = await activity_session_crud.create_if_none_active(
            test_async_db, user_id=7, workspace_group_id=GROUP_ID, start_time=now + timedelta(seconds=1)
        )

        assert first is not None
        assert second is None
        assert await count_active(test_async_db, 7) == 1

    async def test_should_allow_active_sessions_in_other_workspaces(self, test_async_db, now) -> None:
        """Test the invariant is per (user, workspace)."""
        await activity_session_crud.create_if_none_active(
            test_async_db, user_id=7, workspace_group_id=GROUP_ID, start_time=now
        )
        await test_async_db.commit()

        other = await activity_session_crud.create_if_none_active(
            test_async_db, user_id=7, workspace_group_id=OTHER_GROUP_ID, start_time=now
        )
        await test_async_db.commit()

        assert other is not None

    async def test_should_allow_new_session_after_previous_ended(self, test_async_db, now) -> None:
        """Test ended rows do not block a new active one."""
        first = await activity_session_crud.create_if_none_active(
            test_async_db, user_id=7, workspace_group_id=GROUP_ID, start_time=now
        )
        await test_async_db.commit()
        await activity_session_crud.end_active(test_async_db, first.id, GROUP_ID, end_time=now)
        await test_async_db.commit()

        second = await activity_session_crud.create_if_none_active(
            test_async_db, user_id=7, workspace_group_id=GROUP_ID, start_time=now
        )

        assert second is not None


class TestEndAndRecover:
    """Test suite for end_active(), find_recently_ended() and update_counters()."""

    async def test_end_active_should_close_once(self, test_async_db, now) -> None:
        """Test a second end on the same row is rejected."""
        session = await activity_session_crud.create_if_none_active(
            test_async_db, user_id=7, workspace_group_id=GROUP_ID, start_time=now
        )
        await test_async_db.commit()

        assert await activity_session_crud.end_active(test_async_db, session.id, GROUP_ID, end_time=now, idle_time=30, messages=4)
        assert not await activity_session_crud.end_active(test_async_db, session.id, GROUP_ID, end_time=now)
        await test_async_db.commit()

        assert await activity_session_crud.find_active(test_async_db, 7, GROUP_ID) is None

    async def test_end_active_should_be_tenant_scoped(self, test_async_db, now) -> None:
        """Test a row cannot be closed through another workspace."""
        session = await activity_session_crud.create_if_none_active(
            test_async_db, user_id=7, workspace_group_id=GROUP_ID, start_time=now
        )
        await test_async_db.commit()

        assert not await activity_session_crud.end_active(test_async_db, session.id, OTHER_GROUP_ID, end_time=now)
        assert await activity_session_crud.find_active(test_async_db, 7, GROUP_ID) is not None

    async def test_find_recently_ended_should_respect_window(self, test_async_db) -> None:
        """Test only sessions ended inside the window are returned."""
        reference = datetime.now(timezone.utc)
        old = ActivitySessionModel(
            user_id=7, workspace_group_id=GROUP_ID, active=False,
            start_time=reference - timedelta(minutes=20), end_time=reference - timedelta(seconds=90),
        )
        recent = ActivitySessionModel(
            user_id=7, workspace_group_id=GROUP_ID, active=False,
            start_time=reference - timedelta(minutes=10), end_time=reference - timedelta(seconds=20),
        )
        test_async_db.add_all([old, recent])
        await test_async_db.commit()

        found = await activity_session_crud.find_recently_ended(
            test_async_db, 7, GROUP_ID, within_seconds=60, now=reference
        )
        missing = await activity_session_crud.find_recently_ended(
            test_async_db, 7, GROUP_ID, within_seconds=10, now=reference
        )

        assert found.id == recent.id
        assert missing is None

    async def test_update_counters_should_skip_when_nothing_supplied(self, test_async_db, now) -> None:
        """Test counters are only written when a value is given."""
        session = await activity_session_crud.create_if_none_active(
            test_async_db, user_id=7, workspace_group_id=GROUP_ID, start_time=now
        )
        await test_async_db.commit()

        assert await activity_session_crud.update_counters(test_async_db, session.id, GROUP_ID) is False
        assert await activity_session_crud.update_counters(test_async_db, session.id, GROUP_ID, idle_time=120) is True
        await test_async_db.commit()
        session_id = session.id

        test_async_db.expire_all()
        stored = await activity_session_crud.get_by_id(test_async_db, session_id)
        assert stored.idle_time == 120
        assert stored.messages == 0
