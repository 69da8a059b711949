"""
CRUD operations package.

Exports one singleton per model.
"""

from firefli.boundary.db.CRUD.activity_session_crud import ActivitySessionCRUD, activity_session_crud
from firefli.boundary.db.CRUD.base_crud import BaseCRUD
from firefli.boundary.db.CRUD.config_crud import WorkspaceConfigCRUD, config_crud
from firefli.boundary.db.CRUD.integration_crud import DiscordIntegrationCRUD, discord_integration_crud
from firefli.boundary.db.CRUD.session_crud import SessionCRUD, session_crud
from firefli.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from firefli.boundary.db.CRUD.workspace_crud import WorkspaceCRUD, workspace_crud

__all__ = [
    "ActivitySessionCRUD",
    "BaseCRUD",
    "DiscordIntegrationCRUD",
    "SessionCRUD",
    "UserCRUD",
    "WorkspaceCRUD",
    "WorkspaceConfigCRUD",
    "activity_session_crud",
    "config_crud",
    "discord_integration_crud",
    "session_crud",
    "user_crud",
    "workspace_crud",
]
