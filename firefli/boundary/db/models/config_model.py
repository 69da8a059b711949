"""
Workspace configuration ORM model.

Key/value JSON settings per workspace. Keys read by the session core:
`activity` ({"key": token, "role": minimum rank}) and the
`session_webhook`, `review_webhook`, `birthday_webhook` fallbacks
({"enabled": bool, "url": str}).

Dependencies: sqlalchemy, firefli.boundary.db.base
System role: Tenant configuration persistence
"""

from sqlalchemy import JSON, BigInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from firefli.boundary.db.base import Base, TimestampMixin, UUIDMixin


class WorkspaceConfigModel(Base, UUIDMixin, TimestampMixin):
    """
    One configuration entry for a workspace.

    Attributes:
        workspace_group_id: Owning workspace
        key: Configuration key
        value: Arbitrary JSON value
    """

    __tablename__ = "workspace_configs"
    __table_args__ = (
        UniqueConstraint("workspace_group_id", "key", name="uq_workspace_config_key"),
    )

    workspace_group_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    key: Mapped[str] = mapped_column(String(64), nullable=False)
    value: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
