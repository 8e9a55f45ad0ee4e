"""
Relative time helpers.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

# Largest unit first; months and years are approximations.
RANGES = (
    ("year", 3600 * 24 * 365),
    ("month", 3600 * 24 * 30),
    ("week", 3600 * 24 * 7),
    ("day", 3600 * 24),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def _to_datetime(value: Union[datetime, str]) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def time_ago(value: Union[datetime, str], now: Optional[datetime] = None) -> str:
    """
    Describe a point in time relative to now, in English.

    Args:
        value: Datetime or ISO 8601 string; naive values are taken as UTC
        now: Reference time (defaults to the current UTC time)

    Returns:
        Phrase such as "5 minutes ago", "in 2 days" or "Just now"
    """
    date = _to_datetime(value)
    reference = _to_datetime(now) if now is not None else datetime.now(timezone.utc)
    seconds_elapsed = (date - reference).total_seconds()

    for unit, seconds in RANGES:
        if seconds < abs(seconds_elapsed):
            delta = math.floor(seconds_elapsed / seconds + 0.5)
            count = abs(delta)
            label = unit if count == 1 else f"{unit}s"
            if delta < 0:
                return f"{count} {label} ago"
            return f"in {count} {label}"

    return "Just now"


def one_minute_from_now() -> datetime:
    return datetime.now(timezone.utc) + timedelta(minutes=1)


def one_day_from_now() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=1)


def one_week_from_now() -> datetime:
    return datetime.now(timezone.utc) + timedelta(weeks=1)


def date_time_in_unix(milliseconds: float) -> int:
    """Convert a millisecond timestamp to whole Unix seconds."""
    return math.floor(milliseconds / 1000)
