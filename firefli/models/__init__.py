"""
Pydantic request/response schemas and domain snapshots.
"""

from firefli.models.activity import (
    BulkEvent,
    BulkEventRequest,
    BulkEventResponse,
    BulkEventResults,
    TenantScope,
)
from firefli.models.cron import BirthdayResult, BirthdayRunResponse, ReconcileResponse, ReconcileResult
from firefli.models.notification import (
    Destination,
    DestinationType,
    NotificationConfig,
    NotificationKind,
)
from firefli.models.session import ActivitySessionSnapshot, SessionSnapshot

__all__ = [
    "ActivitySessionSnapshot",
    "BirthdayResult",
    "BirthdayRunResponse",
    "BulkEvent",
    "BulkEventRequest",
    "BulkEventResponse",
    "BulkEventResults",
    "Destination",
    "DestinationType",
    "NotificationConfig",
    "NotificationKind",
    "ReconcileResponse",
    "ReconcileResult",
    "SessionSnapshot",
    "TenantScope",
]
