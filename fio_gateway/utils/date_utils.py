"""Date formatting and parsing for the Fio wire format"""

import re
from datetime import date, datetime, timedelta, timezone

# "2017-01-01+01:00": calendar date immediately followed by a signed UTC offset
_OFFSET_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})([+-])(\d{2}):(\d{2})$")


def format_date(value: date) -> str:
    """Format a date as the YYYY-MM-DD path segment used by the API"""
    return value.strftime("%Y-%m-%d")


def parse_offset_date(value: str) -> datetime:
    """
    Parse a Fio date with an explicit UTC offset, e.g. "2017-04-11+02:00".

    Returns midnight of that calendar day in a fixed-offset timezone, so the
    wall-clock date is preserved and comparisons work on instants.

    Raises:
        ValueError: If the value does not match the grammar or is out of range
    """
    match = _OFFSET_DATE_RE.match(value.strip())
    if not match:
        raise ValueError(f"invalid offset date: {value!r}")

    day_part, sign, hours, minutes = match.groups()
    hours_i, minutes_i = int(hours), int(minutes)
    if hours_i > 23 or minutes_i > 59:
        raise ValueError(f"invalid UTC offset in {value!r}")

    offset = timedelta(hours=hours_i, minutes=minutes_i)
    if sign == "-":
        offset = -offset

    day = date.fromisoformat(day_part)
    return datetime(day.year, day.month, day.day, tzinfo=timezone(offset))
