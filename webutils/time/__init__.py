"""
Time module - Relative time formatting and offsets.
"""

from webutils.time.relative import (
    time_ago,
    one_minute_from_now,
    one_day_from_now,
    one_week_from_now,
    date_time_in_unix,
)

__all__ = [
    "time_ago",
    "one_minute_from_now",
    "one_day_from_now",
    "one_week_from_now",
    "date_time_in_unix",
]
