"""
Core domain logic.

Pure functions and the exception hierarchy shared by every layer.
"""

from firefli.core.session_message import generate_session_message
from firefli.core.status_resolver import StatusDefinition, resolve_status
from firefli.core.templates import render_template

__all__ = [
    "StatusDefinition",
    "generate_session_message",
    "render_template",
    "resolve_status",
]
