"""Master service - Business logic for masters, weekly schedules and day overrides"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Master, MasterDayAvailability, MasterWorkingDay
from ...shared.errors import NotFoundError, ValidationError
from ...shared.validators import parse_datetime, parse_range_end, time_to_minutes
from ..scheduling.availability_service import AvailabilityService, available_minutes
from .repository import MasterRepository
from .schemas import DayAvailabilityUpdate, MasterCreate, MasterUpdate, ScheduleUpdate

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "fullName": "full_name",
    "specialization": "specialization",
    "phone": "phone",
    "isActive": "is_active",
    "bio": "bio",
}


def validate_working_hours(start_time: Optional[str], end_time: Optional[str], is_day_off: bool) -> None:
    """
    Working days need both times and end strictly after start.

    Raises:
        ValidationError: If the hours are missing or not ordered
    """
    if is_day_off:
        return
    if not start_time or not end_time:
        raise ValidationError("startTime and endTime are required for working days")
    if time_to_minutes(end_time) <= time_to_minutes(start_time):
        raise ValidationError("endTime must be after startTime")


class MasterService:
    """Service layer for master business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MasterRepository()

    def get_masters(self) -> list[Master]:
        return self.repo.get_masters(self.db)

    def get_master(self, master_id: int) -> Master:
        master = self.repo.get_master_by_id(self.db, master_id)
        if not master:
            raise NotFoundError("Master not found")
        return master

    def create_master(self, data: MasterCreate) -> Master:
        master = self.repo.create_master(
            self.db,
            full_name=data.fullName,
            specialization=data.specialization,
            phone=data.phone,
            is_active=True if data.isActive is None else data.isActive,
            bio=data.bio,
        )
        logger.info(f"🧑‍🎨 Master created: id={master.id}")
        return master

    def update_master(self, master_id: int, data: MasterUpdate) -> Master:
        master = self.get_master(master_id)

        updates = {}
        for field, value in data.model_dump(exclude_unset=True).items():
            if field in ("fullName", "isActive") and value is None:
                raise ValidationError(f"{field} cannot be null")
            updates[FIELD_MAP[field]] = value

        return self.repo.update_master(self.db, master, **updates)

    def delete_master(self, master_id: int) -> bool:
        """Hard delete; refused while appointments still reference the master"""
        master = self.get_master(master_id)
        if self.repo.count_appointments(self.db, master_id) > 0:
            raise ValidationError(
                "Master has appointments; deactivate instead of deleting", "HAS_APPOINTMENTS"
            )
        self.repo.delete_master(self.db, master)
        logger.info(f"🗑️ Master deleted: id={master_id}")
        return True

    # ------------------------------------------------------------------
    # Weekly template
    # ------------------------------------------------------------------

    def get_schedule(self, master_id: int) -> dict:
        master = self.get_master(master_id)
        days = self.repo.get_working_days(self.db, master_id)
        return {
            "masterId": master.id,
            "masterName": master.full_name,
            "days": [
                {
                    "id": d.id,
                    "weekday": d.weekday,
                    "startTime": d.start_time,
                    "endTime": d.end_time,
                    "isDayOff": d.is_day_off,
                }
                for d in days
            ],
        }

    def replace_schedule(self, master_id: int, data: ScheduleUpdate) -> dict:
        """Validate every day, then swap the whole weekly template at once"""
        self.get_master(master_id)

        if data.days is None:
            raise ValidationError("days array is required in request body")

        seen = set()
        for d in data.days:
            if d.weekday < 0 or d.weekday > 6:
                raise ValidationError("weekday must be between 0 and 6")
            if d.weekday in seen:
                raise ValidationError(f"weekday {d.weekday} is listed more than once")
            seen.add(d.weekday)
            validate_working_hours(d.startTime, d.endTime, bool(d.isDayOff))

        rows = [
            MasterWorkingDay(
                master_id=master_id,
                weekday=d.weekday,
                start_time=d.startTime or "",
                end_time=d.endTime or "",
                is_day_off=bool(d.isDayOff),
            )
            for d in data.days
        ]
        count = self.repo.replace_working_days(self.db, master_id, rows)
        logger.info(f"📅 Weekly schedule replaced for master {master_id}: {count} days")
        return {"masterId": master_id, "updatedDaysCount": count}

    # ------------------------------------------------------------------
    # Per-date overrides
    # ------------------------------------------------------------------

    def get_day_availability(self, master_id: int, date_from: Optional[str], date_to: Optional[str]) -> dict:
        start = parse_datetime(date_from)
        end = parse_range_end(date_to)
        if start is None or end is None:
            raise ValidationError("from and to query params are required")

        master = self.get_master(master_id)
        rows = self.repo.get_day_availability(self.db, master_id, start.date(), end.date())
        return {
            "masterId": master.id,
            "masterName": master.full_name,
            "from": start.date().isoformat(),
            "to": end.date().isoformat(),
            "days": [
                {
                    "id": d.id,
                    "date": d.date.isoformat(),
                    "startTime": d.start_time,
                    "endTime": d.end_time,
                    "isDayOff": d.is_day_off,
                }
                for d in rows
            ],
        }

    def replace_day_availability(self, master_id: int, data: DayAvailabilityUpdate) -> dict:
        """Validate every day against [from, to], then swap the overrides in that range"""
        start = parse_datetime(data.date_from)
        end = parse_datetime(data.date_to)
        if start is None or end is None:
            raise ValidationError("from and to are required in body")
        if data.days is None:
            raise ValidationError("days array is required in body")

        self.get_master(master_id)

        range_start, range_end = start.date(), end.date()
        rows = []
        seen: set[date] = set()
        for d in data.days:
            if not d.date:
                raise ValidationError("date is required for each day")
            parsed = parse_datetime(d.date)
            if parsed is None:
                raise ValidationError(f"Invalid date: {d.date}", "INVALID_DATE")
            day = parsed.date()
            if day < range_start or day > range_end:
                raise ValidationError(
                    f"date {d.date} is outside of range [from, to]", "DATE_OUT_OF_RANGE"
                )
            if day in seen:
                raise ValidationError(f"date {d.date} is listed more than once")
            seen.add(day)
            validate_working_hours(d.startTime, d.endTime, bool(d.isDayOff))

            rows.append(
                MasterDayAvailability(
                    master_id=master_id,
                    date=day,
                    start_time=d.startTime or "",
                    end_time=d.endTime or "",
                    is_day_off=bool(d.isDayOff),
                )
            )

        count = self.repo.replace_day_availability(self.db, master_id, range_start, range_end, rows)
        logger.info(
            f"📅 Day availability replaced for master {master_id} [{range_start}..{range_end}]: {count} days"
        )
        return {
            "masterId": master_id,
            "from": range_start.isoformat(),
            "to": range_end.isoformat(),
            "updatedDaysCount": count,
        }

    def resolve_availability(self, master_id: int, day_raw: Optional[str]) -> dict:
        """Effective working hours for one date, with the open minutes"""
        day = parse_datetime(day_raw)
        if day is None:
            raise ValidationError("date query param is required", "INVALID_DATE")
        self.get_master(master_id)

        resolved = AvailabilityService(self.db).resolve(master_id, day)
        return {
            "masterId": master_id,
            "date": resolved["date"].isoformat(),
            "startTime": resolved["startTime"],
            "endTime": resolved["endTime"],
            "isDayOff": resolved["isDayOff"],
            "source": resolved["source"],
            "availableMinutes": available_minutes(resolved),
        }
