"""API routers."""

from .activity import router as activity_router
from .cron import router as cron_router
from .health import router as health_router

__all__ = [
    "activity_router",
    "cron_router",
    "health_router",
]
