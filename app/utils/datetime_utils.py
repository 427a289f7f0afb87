"""
Local-calendar datetime helpers.

Attendance timestamps are stored as naive wall-clock times in the configured
ATTENDANCE_TIMEZONE. Aware datetimes coming from clients are converted into
that zone and stripped of tzinfo before they reach the engine.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional
from zoneinfo import ZoneInfo

from app.core.exceptions import ParseError, ValidationError

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def now_local(tz: ZoneInfo) -> datetime:
    """Current wall-clock time in tz, naive"""
    return datetime.now(tz).replace(tzinfo=None, microsecond=0)


def to_local(dt: Optional[datetime], tz: ZoneInfo) -> Optional[datetime]:
    """Convert an aware datetime to naive local time in tz. Naive input is assumed local already."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz).replace(tzinfo=None)


def parse_hhmm(value: str) -> time:
    """
    Parse a 24-hour HH:MM string.

    Raises:
        ParseError: If the value is not a valid HH:MM time
    """
    if not isinstance(value, str):
        raise ParseError(f"Invalid time value: {value!r} (expected HH:MM)")
    parts = value.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts) or len(parts[1]) != 2:
        raise ParseError(f"Invalid time value: {value!r} (expected HH:MM)")
    hour, minute = int(parts[0]), int(parts[1])
    if hour > 23 or minute > 59:
        raise ParseError(f"Invalid time value: {value!r} (expected HH:MM)")
    return time(hour, minute)


def format_hhmm(dt: datetime) -> str:
    return dt.strftime("%H:%M")


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD calendar date.

    Raises:
        ParseError: If the value is not a valid date
    """
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ParseError(f"Invalid date value: {value!r} (expected YYYY-MM-DD)")


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every calendar date from start to end inclusive"""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_weekday(day: date) -> bool:
    """Monday through Friday"""
    return day.weekday() < 5


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def validate_range(start: date, end: date) -> None:
    """
    Raises:
        ValidationError: If either bound is missing or start is after end
    """
    if start is None or end is None:
        raise ValidationError("start_date and end_date are required")
    if start > end:
        raise ValidationError("start_date must be on or before end_date")
