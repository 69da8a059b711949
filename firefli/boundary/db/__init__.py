"""
Database boundary.

Declarative base, ORM models, connection management and CRUD singletons.
"""

from firefli.boundary.db.base import Base
from firefli.boundary.db.connection import get_async_db, get_async_session_factory

__all__ = ["Base", "get_async_db", "get_async_session_factory"]
