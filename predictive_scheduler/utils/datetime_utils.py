"""Date and time utilities."""

from datetime import datetime, timedelta
from typing import Tuple

from ..models.task import TimeRange


def parse_clock(value: str) -> Tuple[int, int]:
    """Parse an "HH:MM" string into (hour, minute)."""
    try:
        hour_text, minute_text = value.split(':')
        hour, minute = int(hour_text), int(minute_text)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid time of day {value!r}, expected HH:MM")

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Time of day out of range: {value!r}")

    return hour, minute


def at_clock(date: datetime, value: str) -> datetime:
    """Return the given calendar date at the "HH:MM" wall-clock time."""
    hour, minute = parse_clock(value)
    return date.replace(hour=hour, minute=minute, second=0, microsecond=0)


def get_work_day_bounds(date: datetime, work_hours: TimeRange) -> Tuple[datetime, datetime]:
    """Get (start, end) of the work day on the given date."""
    return at_clock(date, work_hours.start), at_clock(date, work_hours.end)


def is_same_day(a: datetime, b: datetime) -> bool:
    """Check if two datetimes fall on the same calendar date."""
    return a.date() == b.date()


def is_within_time_range(hour: int, time_range: TimeRange) -> bool:
    """Check if an hour falls in [start hour, end hour) of a range."""
    start_hour, _ = parse_clock(time_range.start)
    end_hour, _ = parse_clock(time_range.end)
    return start_hour <= hour < end_hour


def add_minutes(moment: datetime, minutes: float) -> datetime:
    """Shift a datetime by a number of minutes."""
    return moment + timedelta(minutes=minutes)


def minutes_between(start: datetime, end: datetime) -> float:
    """Minutes from start to end."""
    return (end - start).total_seconds() / 60


def format_hour(hour: int) -> str:
    """Format an hour as "HH:00"."""
    return f"{hour:02d}:00"
