"""
Prayer time helpers.

Sandi Metz Principles:
- Pure functions: No side effects, no I/O
- Small functions: Each does one thing
- Clear naming: Self-documenting code
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import List, Optional

from pray.models.prayer import Timings

PRAYER_NAMES: List[str] = [
    "Fajr",
    "Sunrise",
    "Dhuhr",
    "Asr",
    "Maghrib",
    "Isha",
    "Midnight",
]

COMPASS_POINTS: List[str] = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

_TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})")


@dataclass(frozen=True)
class NextPrayer:
    """The next prayer that has not passed yet."""

    name: str
    time: datetime
    minutes_until: int


def parse_time(value: str, day: date, tz: Optional[tzinfo] = None) -> datetime:
    """
    Parse an API time ("HH:MM", optionally followed by a zone suffix).

    Args:
        value: Time string, e.g. "04:32" or "04:32 (EET)"
        day: Day the time belongs to
        tz: Timezone to attach (naive if None)

    Returns:
        Datetime on the given day

    Raises:
        ValueError: If the string does not start with HH:MM
    """
    match = _TIME_PATTERN.match(value)
    if not match:
        raise ValueError(f"invalid time format: {value}")

    hour, minute = int(match.group(1)), int(match.group(2))
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz)


def clean_time(value: str) -> str:
    """Strip any zone suffix, leaving "HH:MM"."""
    match = _TIME_PATTERN.match(value)
    return f"{int(match.group(1)):02d}:{match.group(2)}" if match else value.strip()


def time_to_minutes(value: str) -> int:
    """Minutes since midnight for "HH:MM"; unparseable values count as 0."""
    match = _TIME_PATTERN.match(value)
    if not match:
        return 0
    return int(match.group(1)) * 60 + int(match.group(2))


def next_prayer(timings: Timings, now: datetime) -> Optional[NextPrayer]:
    """
    Find the first prayer of the day that is still ahead.

    Args:
        timings: The day's timings
        now: Current time; its date and tzinfo anchor the timings

    Returns:
        Next prayer, or None once Midnight has passed
    """
    values = timings.as_dict()
    for name in PRAYER_NAMES:
        value = values.get(name)
        if not value:
            continue
        try:
            at = parse_time(value, now.date(), now.tzinfo)
        except ValueError:
            continue
        if at > now:
            minutes = int((at - now).total_seconds() // 60)
            return NextPrayer(name=name, time=at, minutes_until=minutes)
    return None


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (negative when end is earlier)."""
    return int((end - start).total_seconds() / 60)


def format_duration(minutes: int) -> str:
    """
    Format a countdown.

    Args:
        minutes: Minutes remaining

    Returns:
        "passed", "X min", "Xh" or "Xh Ym"
    """
    if minutes < 0:
        return "passed"
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def compass_direction(degrees: float) -> str:
    """
    Map a bearing onto a 16-point compass.

    Args:
        degrees: Bearing in degrees (any range)

    Returns:
        Compass point, e.g. "NE"
    """
    normalized = degrees % 360
    index = int((normalized + 11.25) / 22.5) % 16
    return COMPASS_POINTS[index]
