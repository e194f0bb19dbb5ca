"""Wall-clock helpers for time-block strings.

Block times are stored as free-form "HH:MM" strings. Parsing never raises:
anything that is not a valid clock time yields None so callers can fall
back to a zero contribution.
"""

import re

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")


def parse_clock(value: str | None) -> float | None:
    """Parse "HH:MM" into decimal hours.

    Args:
        value: Clock string such as "08:30" or "23:00". "24:00" is accepted
            as end of day.

    Returns:
        Hours as a float (8.5 for "08:30"), or None if unparseable
    """
    if not value:
        return None
    match = _CLOCK_RE.match(value)
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if minute > 59 or hour > 24 or (hour == 24 and minute != 0):
        return None
    return hour + minute / 60


def parse_hour(value: str | None) -> int | None:
    """Whole hour component of a clock string, or None if unparseable."""
    hours = parse_clock(value)
    if hours is None:
        return None
    return int(hours)


def format_hour(hour: int) -> str:
    """Format a whole hour as a zero-padded "HH:00" clock string."""
    return f"{hour:02d}:00"


def span_hours(start: float, end: float) -> float:
    """Hours from start to end, wrapping past midnight when end < start."""
    if end >= start:
        return end - start
    return (24 - start) + end
