"""
Structured logging helpers.

Context values are flattened to short strings before they reach the
LogRecord, so formatters never see ORM rows, pydantic models or
unbounded lists.

Dependencies: logging (stdlib), pydantic, firefli.core.exceptions
System role: Logging helper functions
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from firefli.core.exceptions import FirefliException

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value for a log record.

    UUIDs and datetimes use their canonical text form, enums their value,
    containers only their size. Long text is truncated.

    Args:
        value: Value to render
        max_length: Maximum length before truncating

    Returns:
        str: Log-safe text
    """
    if value is None:
        return "None"
    if isinstance(value, Enum):
        text = str(value.value)
    elif isinstance(value, datetime):
        text = value.isoformat()
    elif isinstance(value, (str, UUID, int, float)):
        text = str(value)
    elif isinstance(value, (list, tuple, set)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    elif isinstance(value, BaseModel):
        text = f"<{type(value).__name__}>"
    else:
        try:
            text = str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def _flatten(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(val) for key, val in context.items()}


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """Log `message` at `level` with flattened context attached as record attributes."""
    logger.log(level, message, extra=_flatten(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception with its traceback and context.

    Domain exceptions also contribute their details (operation, status
    code, user id); explicit context wins on key clashes.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being reported
        **context: Extra fields (session_id, workspace_group_id, ...)
    """
    fields: dict[str, Any] = dict(exc.details) if isinstance(exc, FirefliException) else {}
    fields.update(context)
    fields["error_type"] = type(exc).__name__
    fields["error_msg"] = exc.message if isinstance(exc, FirefliException) else str(exc)
    logger.error(message, exc_info=exc, extra=_flatten(fields))
