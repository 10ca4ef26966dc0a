"""Shared date and time helpers used across the booking core."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

_TIME_24H = re.compile(r"^(\d{1,2}):(\d{2})$")


def to_display_time(raw_time: str) -> str:
    """Convert a 24-hour ``HH:MM`` string into the ``hh:mm AM/PM`` display form.

    Hour 0 and hour 12 both render as 12; minutes are carried through as given.

    Examples:
        >>> to_display_time("14:30")
        '02:30 PM'
        >>> to_display_time("00:15")
        '12:15 AM'
        >>> to_display_time("12:00")
        '12:00 PM'
    """
    match = _TIME_24H.match(raw_time.strip())
    if not match:
        raise ValueError(f"Expected HH:MM, got {raw_time!r}")
    hour, minutes = int(match.group(1)), match.group(2)
    if hour > 23 or int(minutes) > 59:
        raise ValueError(f"Time out of range: {raw_time!r}")
    suffix = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12:02d}:{minutes} {suffix}"


def display_time_minutes(display_time: str) -> int:
    """Minutes since midnight for an ``hh:mm AM/PM`` string; used as a sort key."""
    parsed = datetime.strptime(display_time.strip(), "%I:%M %p")
    return parsed.hour * 60 + parsed.minute


def parse_iso_date(value: str) -> Optional[date]:
    """Parse ``YYYY-MM-DD``; returns None for anything else."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (ValueError, AttributeError):
        return None


def iso_week_number(day: date) -> int:
    """ISO-8601 week number: shift to the Thursday of the week, count weeks from Jan 1.

    Examples:
        >>> iso_week_number(date(2025, 1, 1))
        1
        >>> iso_week_number(date(2021, 1, 3))
        53
    """
    thursday = day + timedelta(days=3 - day.weekday())
    year_start = date(thursday.year, 1, 1)
    return (thursday - year_start).days // 7 + 1
