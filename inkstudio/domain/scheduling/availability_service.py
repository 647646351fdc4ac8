"""
Availability resolution

Answers "which hours does this master work on this date". A per-date override
always wins over the weekly template; with neither configured the date is a
day off.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Union

from sqlalchemy.orm import Session

from ...models import MasterDayAvailability, MasterWorkingDay
from ...shared.validators import sunday_based_weekday, time_to_minutes
from .repository import SchedulingRepository

logger = logging.getLogger(__name__)

SOURCE_OVERRIDE = "override"
SOURCE_WEEKLY = "weekly"
SOURCE_NONE = "none"


def index_overrides(rows: Iterable[MasterDayAvailability]) -> dict[date, MasterDayAvailability]:
    """Key overrides by calendar date, ignoring any time-of-day component"""
    indexed = {}
    for row in rows:
        day = row.date.date() if isinstance(row.date, datetime) else row.date
        indexed[day] = row
    return indexed


def index_working_days(rows: Iterable[MasterWorkingDay]) -> dict[int, MasterWorkingDay]:
    return {row.weekday: row for row in rows}


def resolve_day_availability(
    day: Union[date, datetime],
    overrides: dict[date, MasterDayAvailability],
    working_days: dict[int, MasterWorkingDay],
) -> dict:
    """
    Resolve working hours for one calendar date.

    Args:
        day: The date to resolve (a datetime is truncated to its date)
        overrides: Per-date overrides keyed by date
        working_days: Weekly template keyed by weekday (0 = Sunday)

    Returns:
        {"date", "startTime", "endTime", "isDayOff", "source"}
    """
    if isinstance(day, datetime):
        day = day.date()

    row = overrides.get(day)
    source = SOURCE_OVERRIDE
    if row is None:
        row = working_days.get(sunday_based_weekday(day))
        source = SOURCE_WEEKLY

    if row is None:
        return {
            "date": day,
            "startTime": None,
            "endTime": None,
            "isDayOff": True,
            "source": SOURCE_NONE,
        }

    return {
        "date": day,
        "startTime": row.start_time or None,
        "endTime": row.end_time or None,
        "isDayOff": bool(row.is_day_off),
        "source": source,
    }


def available_minutes(resolved: dict) -> int:
    """Open minutes for a resolved day; day off or inverted hours count as 0"""
    if resolved["isDayOff"]:
        return 0
    return max(0, time_to_minutes(resolved["endTime"]) - time_to_minutes(resolved["startTime"]))


class AvailabilityService:
    """Service layer for per-date availability lookups"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SchedulingRepository()

    def resolve(self, master_id: int, day: Union[date, datetime]) -> dict:
        """Resolve a single date for a master straight from the database"""
        if isinstance(day, datetime):
            day = day.date()

        override = self.repo.get_override(self.db, master_id, day)
        overrides = {day: override} if override else {}

        working_day: Optional[MasterWorkingDay] = None
        if override is None:
            working_day = self.repo.get_working_day(self.db, master_id, sunday_based_weekday(day))
        working_days = {working_day.weekday: working_day} if working_day else {}

        resolved = resolve_day_availability(day, overrides, working_days)
        logger.debug(f"📅 Availability master={master_id} {day}: {resolved['source']}")
        return resolved
