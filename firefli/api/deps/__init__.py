"""FastAPI dependencies."""

from firefli.api.deps.dependencies import (
    ServiceCache,
    get_birthday_service,
    get_bulk_ingestor,
    get_notification_dispatcher,
    get_reconciler,
    get_service_cache,
    get_settings_dependency,
    verify_cron_secret,
)

__all__ = [
    "ServiceCache",
    "get_birthday_service",
    "get_bulk_ingestor",
    "get_notification_dispatcher",
    "get_reconciler",
    "get_service_cache",
    "get_settings_dependency",
    "verify_cron_secret",
]
