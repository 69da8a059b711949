"""
Activity session summary text.

Dependencies: datetime (stdlib)
System role: Human-readable label stored on each activity session
"""

from datetime import datetime, timezone


def _period_of_day(hour: int) -> str:
    if 5 <= hour < 12:
        return "Morning"
    if 12 <= hour < 17:
        return "Afternoon"
    if 17 <= hour < 21:
        return "Evening"
    return "Night"


def generate_session_message(game_name: str | None, start_time: datetime) -> str:
    """
    Build the summary shown for an activity session.

    Args:
        game_name: Resolved place name, None when unknown
        start_time: Session start (converted to UTC)

    Returns:
        str: e.g. "Evening session in Cafe Roleplay" or "Morning session"
    """
    if start_time.tzinfo is not None:
        start_time = start_time.astimezone(timezone.utc)
    period = _period_of_day(start_time.hour)
    if game_name:
        return f"{period} session in {game_name}"
    return f"{period} session"
