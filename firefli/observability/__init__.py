"""
Observability module.

Provides logging configuration, structured logging helpers,
correlation ID tracking, and request logging middleware.
"""

from firefli.observability.logger import configure_logging

__all__ = ["configure_logging"]
