# bikeflow/traffic/minutes.py
from __future__ import annotations

from datetime import datetime

MINUTES_PER_DAY = 1440
WINDOW_MINUTES = 60

# time filter value meaning "use every trip"
NO_FILTER = -1


def minute_of_day(ts: datetime) -> int:
    """
    Wall-clock minute slot of a timestamp (0..1439). The date is ignored.
    """
    return ts.hour * 60 + ts.minute


def check_time_filter(time_filter) -> int:
    """
    Validate a time filter: NO_FILTER or a minute of day.

    Out-of-domain values are rejected, never wrapped.
    """
    if isinstance(time_filter, bool) or not isinstance(time_filter, int):
        raise ValueError(f"time filter must be an int, got {time_filter!r}")
    if time_filter < NO_FILTER or time_filter >= MINUTES_PER_DAY:
        raise ValueError(
            f"time filter must be in [{NO_FILTER}, {MINUTES_PER_DAY - 1}], got {time_filter}"
        )
    return time_filter


def clamp_time_filter(requested) -> int:
    """
    Coerce a user-supplied value (e.g. a query arg) into [-1, 1439].
    Anything unparsable falls back to NO_FILTER.
    """
    if requested is None:
        return NO_FILTER
    try:
        req = int(float(requested))
    except (TypeError, ValueError, OverflowError):
        return NO_FILTER
    return max(NO_FILTER, min(MINUTES_PER_DAY - 1, req))


def format_time(minutes: int) -> str:
    # 485 -> "8:05 AM", 0 -> "12:00 AM"
    hh = (int(minutes) // 60) % 24
    mm = int(minutes) % 60
    suffix = "AM" if hh < 12 else "PM"
    return f"{hh % 12 or 12}:{mm:02d} {suffix}"
