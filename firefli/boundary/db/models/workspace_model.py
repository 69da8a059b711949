"""
Workspace ORM models.

A workspace is one tenant, keyed by its Roblox group ID. Members link
users to a workspace and carry their Discord account for mentions.

Dependencies: sqlalchemy, firefli.boundary.db.base
System role: Tenant registry and membership
"""

from sqlalchemy import BigInteger, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from firefli.boundary.db.base import Base, TimestampMixin, UUIDMixin


class WorkspaceModel(Base, TimestampMixin):
    """
    Workspace (tenant) row.

    Attributes:
        group_id: Roblox group ID, the tenant partition key
        group_name: Display name used in notifications
    """

    __tablename__ = "workspaces"

    group_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    group_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    members = relationship("WorkspaceMemberModel", back_populates="workspace")


class WorkspaceMemberModel(Base, UUIDMixin, TimestampMixin):
    """
    Membership of a user in a workspace.

    Attributes:
        workspace_group_id: Owning workspace
        user_id: Roblox user ID
        discord_id: Linked Discord account, used for `<@id>` mentions
    """

    __tablename__ = "workspace_members"
    __table_args__ = (
        UniqueConstraint("workspace_group_id", "user_id", name="uq_workspace_member"),
    )

    workspace_group_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("workspaces.group_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    discord_id: Mapped[str | None] = mapped_column(String(32), nullable=True)

    workspace = relationship("WorkspaceModel", back_populates="members")
    user = relationship("UserModel")
