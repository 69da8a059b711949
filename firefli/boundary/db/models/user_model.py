"""
User profile ORM model.

Lightweight cache of Roblox profile data refreshed as a side effect of
activity ingestion.

Dependencies: sqlalchemy, firefli.boundary.db.base
System role: User profile persistence
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from firefli.boundary.db.base import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """
    Roblox user profile.

    Attributes:
        user_id: Roblox user ID (primary key, externally assigned)
        username: Last known username
        picture: Headshot URL
        birthday_day: Day of month, when the user shared a birthday
        birthday_month: Month (1-12), when the user shared a birthday
    """

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    username: Mapped[str | None] = mapped_column(String(64), nullable=True)
    picture: Mapped[str | None] = mapped_column(String(512), nullable=True)
    birthday_day: Mapped[int | None] = mapped_column(Integer, nullable=True)
    birthday_month: Mapped[int | None] = mapped_column(Integer, nullable=True)
