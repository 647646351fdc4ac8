"""Shared parsing and validation utilities for dates, wall-clock times and enums"""

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional, Union

from .errors import ValidationError

TIME_PATTERN = re.compile(r"^\d{1,2}:\d{2}$")


def parse_datetime(value: Optional[Union[str, datetime, date]]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime into a naive local datetime.

    Accepts plain dates (midnight), datetimes and the trailing "Z" UTC marker.
    Timezone-aware values are converted to server-local time.

    Returns:
        The parsed datetime, or None if the value is empty or unparseable
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min)
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_range_end(value: Optional[str]) -> Optional[datetime]:
    """Parse the upper bound of a report range, moved to the end of that day (23:59:59.999)"""
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    return parsed.replace(hour=23, minute=59, second=59, microsecond=999000)


def require_date_range(date_from: Optional[str], date_to: Optional[str]) -> tuple[datetime, datetime]:
    """
    Parse a mandatory [from, to] query range.

    Raises:
        ValidationError: If either bound is missing or unparseable
    """
    start = parse_datetime(date_from)
    end = parse_range_end(date_to)
    if start is None or end is None:
        raise ValidationError("from and to are required")
    return start, end


def each_day(start: Union[date, datetime], end: Union[date, datetime]) -> list[date]:
    """All calendar dates in [start, end], inclusive"""
    current = start.date() if isinstance(start, datetime) else start
    last = end.date() if isinstance(end, datetime) else end
    days = []
    while current <= last:
        days.append(current)
        current += timedelta(days=1)
    return days


def time_to_minutes(value: Optional[str]) -> int:
    """Convert "HH:MM" into minutes since midnight; malformed or missing values count as 0"""
    if not value:
        return 0
    parts = str(value).split(":")
    if len(parts) != 2:
        return 0
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return 0
    return hours * 60 + minutes


def validate_time_string(value: Optional[str]) -> Optional[str]:
    """
    Validate an "HH:MM" wall-clock time.

    Raises:
        ValueError: If the value is not a valid 24h time
    """
    if value is None or value == "":
        return value
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM format")
    hours, minutes = (int(part) for part in value.split(":"))
    if hours > 23 or minutes > 59:
        raise ValueError("Time must be in HH:MM format")
    return value


def diff_in_days(later: datetime, earlier: datetime) -> int:
    """Whole days between two datetimes, rounded down"""
    return math.floor((later - earlier).total_seconds() / 86400)


def add_months(value: datetime, months: int) -> datetime:
    """
    Shift by calendar months keeping the day of month.

    A day past the end of the target month rolls over into the next one,
    so Aug 31, 2023 + 6 months is Mar 2, 2024.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    return value.replace(year=year, month=month, day=1) + timedelta(days=value.day - 1)


def sunday_based_weekday(value: Union[date, datetime]) -> int:
    """Weekday index used by the weekly schedule: 0 = Sunday ... 6 = Saturday"""
    return (value.weekday() + 1) % 7


def format_date_iso(value: Union[date, datetime]) -> str:
    return value.strftime("%Y-%m-%d")


def validate_choice(value: Optional[str], allowed: Iterable[str], field: str, code: Optional[str] = None) -> Optional[str]:
    """
    Check that an enum-like string is one of the allowed values.

    Raises:
        ValidationError: If the value is set and not allowed
    """
    if value is None:
        return value
    allowed = tuple(allowed)
    if value not in allowed:
        raise ValidationError(f"Invalid {field}: {value}. Allowed: {', '.join(allowed)}", code)
    return value
