"""Clock helpers: "HH:mm" parsing, window rules, greeting, current time."""

import re
from datetime import datetime
from zoneinfo import ZoneInfo

from src.signage.models import TimePoint, TimeWindow

_HHMM = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_hhmm(value: str | None) -> int | None:
    """Convert "HH:mm" to minutes since midnight.

    Returns None for empty, malformed or out-of-range values so callers can
    skip the record instead of failing.
    """
    if not value:
        return None
    match = _HHMM.match(value)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour * 60 + minute


def is_time_active(active_until: str | None, current_minutes: int) -> bool:
    """Activity check used for the urgent message and the slideshow.

    An empty or unparseable ``active_until`` means "no end", i.e. always
    active. ``active_from`` is deliberately not part of this check.
    """
    until = parse_hhmm(active_until)
    if until is None:
        return True
    return current_minutes <= until


def is_time_in_range(window: TimeWindow, current_minutes: int) -> bool:
    """Both bounds inclusive, no midnight wraparound."""
    return window.start.minutes <= current_minutes <= window.end.minutes


def greeting_for(hour: int) -> str:
    """Time-of-day greeting shown in the display header."""
    if 5 <= hour < 11:
        return "Guten Morgen"
    if 11 <= hour < 14:
        return "Es ist Mittagszeit"
    if 14 <= hour < 18:
        return "Es ist Nachmittag"
    if 18 <= hour < 22:
        return "Guten Abend"
    return "Gute Nacht"


def current_timepoint(timezone: str = "Europe/Berlin") -> TimePoint:
    """Read the wall clock in the facility's timezone."""
    return TimePoint.from_datetime(datetime.now(ZoneInfo(timezone)))
