"""
Session status resolution.

Maps a session's elapsed time onto the time-threshold statuses configured
on its session type ("Starting Soon" -> "In Progress" -> "Wrapping Up").

Dependencies: pydantic
System role: Pure status computation for the reconciler and notifications
"""

from datetime import datetime, timezone
from typing import Any, Iterable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError


class StatusDefinition(BaseModel):
    """One time-boundary status: becomes current `time_after` minutes after start."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    time_after: int = Field(
        default=0,
        validation_alias=AliasChoices("timeAfter", "time_after"),
        serialization_alias="timeAfter",
    )


def parse_statuses(raw: Iterable[Any] | None) -> list[StatusDefinition]:
    """
    Parse stored status JSON, skipping entries without a name or with a
    non-numeric threshold.

    Args:
        raw: List of dicts or StatusDefinition instances (may be None)

    Returns:
        list[StatusDefinition]: Parsed statuses in stored order
    """
    statuses: list[StatusDefinition] = []
    for item in raw or []:
        if isinstance(item, StatusDefinition):
            statuses.append(item)
        elif isinstance(item, dict) and item.get("name"):
            try:
                statuses.append(StatusDefinition.model_validate(item))
            except ValidationError:
                continue
    return statuses


def resolve_status(
    start_time: datetime,
    duration_minutes: int,
    statuses: Iterable[StatusDefinition | dict],
    now: datetime | None = None,
) -> str | None:
    """
    Resolve the status label applicable at `now`.

    Statuses are ascending thresholds: the last one whose `time_after` is
    less than or equal to the elapsed minutes wins.

    Args:
        start_time: Scheduled session start (timezone-aware)
        duration_minutes: Session length in minutes; thresholds are not capped by it
        statuses: Status definitions for the session type
        now: Evaluation instant, defaults to the current UTC time

    Returns:
        str | None: Status name, or None before start or below every threshold

    Example:
        >>> resolve_status(start, 30, [{"name": "In Progress", "timeAfter": 5}], now=start + timedelta(minutes=10))
        'In Progress'
    """
    now = now or datetime.now(timezone.utc)
    elapsed_minutes = (now - start_time).total_seconds() / 60
    if elapsed_minutes < 0:
        return None

    ordered = sorted(parse_statuses(statuses), key=lambda s: s.time_after)
    current: str | None = None
    for status in ordered:
        if status.time_after <= elapsed_minutes:
            current = status.name
    return current
