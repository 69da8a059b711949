"""
User profile CRUD operations.

Dependencies: sqlalchemy, firefli.boundary.db.models
System role: Roblox profile cache persistence
"""

from sqlalchemy.ext.asyncio import AsyncSession

from firefli.boundary.db.CRUD.base_crud import BaseCRUD
from firefli.boundary.db.models import UserModel


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def upsert_profile(
        self,
        session: AsyncSession,
        user_id: int,
        username: str | None,
        picture: str | None,
    ) -> UserModel:
        """
        Create or refresh a user's cached profile.

        Fields passed as None keep their stored value.

        Args:
            session: Async database session
            user_id: Roblox user ID
            username: Current username
            picture: Headshot URL

        Returns:
            The stored UserModel
        """
        user = await self.get_by_id(session, user_id)
        if user is None:
            return await self.create(session, user_id=user_id, username=username, picture=picture)

        if username is not None:
            user.username = username
        if picture is not None:
            user.picture = picture
        await session.flush()
        return user


user_crud = UserCRUD()
