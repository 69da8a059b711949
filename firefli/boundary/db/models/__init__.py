"""
Database models package.

Exports:
  - WorkspaceModel, WorkspaceMemberModel: Tenants and membership
  - UserModel: Roblox profile cache
  - SessionTypeModel, SessionModel: Scheduled sessions
  - ActivitySessionModel: Live attendance windows
  - WorkspaceConfigModel: Key/value workspace settings
  - DiscordIntegrationModel: Notification routing and templates

Dependencies: sqlalchemy, firefli.boundary.db.base
System role: Database model definitions for domain entities
"""

from firefli.boundary.db.models.activity_session_model import ActivitySessionModel
from firefli.boundary.db.models.config_model import WorkspaceConfigModel
from firefli.boundary.db.models.discord_integration_model import DiscordIntegrationModel
from firefli.boundary.db.models.session_model import SessionModel, SessionTypeModel
from firefli.boundary.db.models.user_model import UserModel
from firefli.boundary.db.models.workspace_model import WorkspaceMemberModel, WorkspaceModel

__all__ = [
    "ActivitySessionModel",
    "DiscordIntegrationModel",
    "SessionModel",
    "SessionTypeModel",
    "UserModel",
    "WorkspaceConfigModel",
    "WorkspaceMemberModel",
    "WorkspaceModel",
]
