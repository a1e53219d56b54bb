"""Time calculation utilities for extracted timesheet entries.

This module provides low-level utilities for time calculations including:
- Parsing "HH:MM" strings as read from a timesheet image
- Calculating durations between times (with overnight support)
- Converting "H:MM" duration strings to fractional hours

Everything here is total: malformed input degrades to ``None`` or a zero
duration instead of raising, because times come from model output.
"""

import re
from typing import NamedTuple, Optional

MINUTES_PER_DAY = 24 * 60

_NON_TIME_CHARACTERS = re.compile(r"[^\d:]", re.ASCII)
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)
_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)", re.ASCII)


class ParsedTime(NamedTuple):
    """Hours and minutes of a valid 24-hour clock time."""

    hours: int
    minutes: int


def parse_time(value: str) -> Optional[ParsedTime]:
    """Parse a clock time in "HH:MM" format.

    All characters except digits and colons are stripped before matching,
    so "09:30 Uhr" or " 9:30" are accepted.

    Args:
        value: The time string to parse

    Returns:
        ParsedTime, or None if the string is not a valid 24-hour time

    Example:
        >>> parse_time("09:30")
        ParsedTime(hours=9, minutes=30)
        >>> parse_time("24:00") is None
        True
        >>> parse_time("12:60") is None
        True
    """
    if not isinstance(value, str):
        return None

    cleaned = _NON_TIME_CHARACTERS.sub("", value)
    match = _TIME_PATTERN.match(cleaned)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))

    if not 0 <= hours <= 23 or not 0 <= minutes <= 59:
        return None

    return ParsedTime(hours, minutes)


def convert_time_to_minutes(time: ParsedTime) -> int:
    """Convert a parsed time to minutes since midnight.

    Args:
        time: The time to convert

    Returns:
        Number of minutes since midnight (0-1439)

    Example:
        >>> convert_time_to_minutes(ParsedTime(9, 30))
        570
    """
    return time.hours * 60 + time.minutes


def format_duration(minutes: int) -> str:
    """Format a duration in minutes as "H:MM".

    Hours are not padded, minutes always have two digits.

    Example:
        >>> format_duration(510)
        '8:30'
        >>> format_duration(5)
        '0:05'
    """
    hours, remainder = divmod(minutes, 60)
    return f"{hours}:{remainder:02d}"


def calculate_duration(start_time: str, end_time: str) -> str:
    """Calculate the duration between two "HH:MM" times.

    An end time earlier than the start time is treated as an overnight
    shift that crosses midnight.

    Args:
        start_time: Shift start ("HH:MM")
        end_time: Shift end ("HH:MM")

    Returns:
        Duration as "H:MM", or "0:00" if either time cannot be parsed

    Example:
        >>> calculate_duration("09:00", "17:30")
        '8:30'
        >>> calculate_duration("22:00", "06:00")
        '8:00'
        >>> calculate_duration("garbage", "06:00")
        '0:00'
    """
    start = parse_time(start_time)
    end = parse_time(end_time)

    if start is None or end is None:
        return "0:00"

    start_minutes = convert_time_to_minutes(start)
    end_minutes = convert_time_to_minutes(end)

    if end_minutes < start_minutes:
        end_minutes += MINUTES_PER_DAY

    return format_duration(end_minutes - start_minutes)


def _parse_int(value: str) -> int:
    # Leading digits only: "30min" is 30, "x30" is 0
    match = _LEADING_INTEGER.match(value)
    return int(match.group(1)) if match else 0


def parse_duration_to_hours(duration: str) -> float:
    """Convert a "H:MM" duration string to fractional hours.

    Each half is parsed on its own from its leading digits; trailing text
    is ignored and a half without leading digits counts as 0 without
    invalidating the other half. Durations of 24 hours or
    more are returned as-is.

    Args:
        duration: Duration string, e.g. "7:45"

    Returns:
        Hours as float

    Example:
        >>> parse_duration_to_hours("1:30")
        1.5
        >>> parse_duration_to_hours("24:00")
        24.0
        >>> parse_duration_to_hours("x:30")
        0.5
        >>> parse_duration_to_hours("1:30min")
        1.5
    """
    hours_part, _, minutes_part = duration.partition(":")
    return _parse_int(hours_part) + _parse_int(minutes_part) / 60
