"""
Test suite for BaseCRUD generic database operations.

Tests create, read (by primary key and all) and partial update with a
mocked session, plus primary key discovery for non-UUID keys.

System role: Verification of generic database layer foundation
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from firefli.boundary.db.CRUD.base_crud import BaseCRUD
from firefli.boundary.db.models import SessionModel, UserModel, WorkspaceModel


@pytest.fixture
def base_crud() -> BaseCRUD:
    """Provide BaseCRUD instance over UserModel."""
    return BaseCRUD(UserModel)


@pytest.fixture
def mock_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


class TestBaseCRUDPrimaryKey:
    """Test suite for primary key discovery."""

    @pytest.mark.parametrize(
        "model, column",
        [(UserModel, "user_id"), (WorkspaceModel, "group_id"), (SessionModel, "id")],
    )
    def test_pk_should_follow_mapper(self, model, column) -> None:
        """Test the primary key column is read from the mapper."""
        assert BaseCRUD(model)._pk.name == column


class TestBaseCRUDCreate:
    """Test suite for BaseCRUD.create() method."""

    async def test_create_should_flush_before_refresh(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        """Test flush is called before refresh so generated values are loaded."""
        # Arrange
        call_order = []

        async def flush_effect() -> None:
            call_order.append("flush")

        async def refresh_effect(obj: Any) -> None:
            call_order.append("refresh")

        mock_session.flush = AsyncMock(side_effect=flush_effect)
        mock_session.refresh = AsyncMock(side_effect=refresh_effect)

        # Act
        instance = await base_crud.create(mock_session, user_id=7, username="ava")

        # Assert
        mock_session.add.assert_called_once_with(instance)
        assert call_order == ["flush", "refresh"]
        assert instance.username == "ava"


class TestBaseCRUDRead:
    """Test suite for BaseCRUD read methods."""

    async def test_get_by_id_should_return_none_when_missing(
        self, base_crud: BaseCRUD, mock_session: AsyncSession
    ) -> None:
        """Test a missing row yields None."""
        # Arrange
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute = AsyncMock(return_value=result)

        # Act
        found = await base_crud.get_by_id(mock_session, 404)

        # Assert
        assert found is None
        mock_session.execute.assert_awaited_once()

    async def test_get_all_should_apply_limit_and_offset(self, test_async_db) -> None:
        """Test pagination is ordered by primary key."""
        # Arrange
        crud = BaseCRUD(UserModel)
        for user_id in (3, 1, 2):
            await crud.create(test_async_db, user_id=user_id, username=f"u{user_id}")
        await test_async_db.commit()

        # Act
        page = await crud.get_all(test_async_db, limit=2, offset=1)

        # Assert
        assert [u.user_id for u in page] == [2, 3]


class TestBaseCRUDUpdate:
    """Test suite for BaseCRUD.update_by_id() method."""

    async def test_update_by_id_should_report_missing_row(self, test_async_db) -> None:
        """Test updating an unknown key reports False."""
        assert await BaseCRUD(UserModel).update_by_id(test_async_db, 999, username="ghost") is False

    async def test_update_by_id_should_patch_only_given_fields(self, test_async_db) -> None:
        """Test other columns are left untouched."""
        # Arrange
        crud = BaseCRUD(UserModel)
        await crud.create(test_async_db, user_id=5, username="old", picture="https://pic")
        await test_async_db.commit()

        # Act
        updated = await crud.update_by_id(test_async_db, 5, username="new")
        await test_async_db.commit()
        test_async_db.expire_all()
        user = await crud.get_by_id(test_async_db, 5)

        # Assert
        assert updated is True
        assert user.username == "new"
        assert user.picture == "https://pic"
