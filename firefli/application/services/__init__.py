"""
Application services.

Exports:
  - NotificationDispatcher: Routing, formatting and delivery of lifecycle messages
  - SessionReconciler: Periodic scheduled-session lifecycle pass
  - BulkEventIngestor: Activity event batches
  - BirthdayService: Daily birthday announcements
"""

from firefli.application.services.birthday_service import BirthdayService
from firefli.application.services.bulk_event_service import LATE_END_GRACE_SECONDS, BulkEventIngestor
from firefli.application.services.notification_service import NotificationDispatcher
from firefli.application.services.reconciler_service import SessionReconciler

__all__ = [
    "LATE_END_GRACE_SECONDS",
    "BirthdayService",
    "BulkEventIngestor",
    "NotificationDispatcher",
    "SessionReconciler",
]
