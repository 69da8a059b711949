"""
Cron endpoint schemas.

Dependencies: pydantic
System role: Reconciliation and birthday pass result contracts
"""

from pydantic import BaseModel, Field


class ReconcileResult(BaseModel):
    """Counts from one reconciliation pass."""

    started_count: int = 0
    ended_count: int = 0
    status_updated_count: int = 0
    failed_count: int = 0


class ReconcileResponse(ReconcileResult):
    """Response body for POST /cron/update-sessions."""

    success: bool = True


class BirthdayResult(BaseModel):
    """Outcome of one announcement, or of a workspace that failed as a whole."""

    workspace_group_id: int
    user_id: int | None = None
    username: str | None = None
    status: str
    method: str | None = None
    error: str | None = None


class BirthdayRunResponse(BaseModel):
    """Response body for POST /cron/birthdays."""

    success: bool = True
    processed: int = 0
    results: list[BirthdayResult] = Field(default_factory=list)
