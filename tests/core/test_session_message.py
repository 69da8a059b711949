"""
Test suite for activity session summary text.

System role: Verification of time-of-day labels
"""

from datetime import datetime, timedelta, timezone

import pytest

from firefli.core.session_message import generate_session_message


@pytest.mark.parametrize(
    "hour,period",
    [
        (5, "Morning"),
        (11, "Morning"),
        (12, "Afternoon"),
        (16, "Afternoon"),
        (17, "Evening"),
        (20, "Evening"),
        (21, "Night"),
        (0, "Night"),
        (4, "Night"),
    ],
)
def test_generate_session_message_should_label_period_of_day(hour: int, period: str) -> None:
    """Test hour boundaries for each period."""
    start = datetime(2026, 5, 1, hour, 30, tzinfo=timezone.utc)
    assert generate_session_message("Cafe Roleplay", start) == f"{period} session in Cafe Roleplay"


def test_generate_session_message_should_omit_missing_game() -> None:
    """Test fallback text without a resolved place name."""
    start = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)
    assert generate_session_message(None, start) == "Morning session"
    assert generate_session_message("", start) == "Morning session"


def test_generate_session_message_should_use_utc_hour() -> None:
    """Test non-UTC start times are converted first."""
    plus_two = timezone(timedelta(hours=2))
    start = datetime(2026, 5, 1, 13, 0, tzinfo=plus_two)  # 11:00 UTC
    assert generate_session_message(None, start) == "Morning session"
