"""Master utilization - booked minutes over available minutes for a date range"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ...models import Appointment, Master, MasterDayAvailability
from ...shared.validators import each_day
from .availability_service import (
    available_minutes,
    index_overrides,
    index_working_days,
    resolve_day_availability,
)
from .repository import BOOKED_STATUSES, SchedulingRepository

logger = logging.getLogger(__name__)


def _empty_row(master_id: int, master_name: str) -> dict:
    return {
        "masterId": master_id,
        "masterName": master_name,
        "appointmentsCount": 0,
        "bookedMinutes": 0,
        "availableMinutes": 0,
        "utilization": 0,
    }


def appointment_minutes(appointment: Appointment) -> int:
    """Duration rounded to the nearest minute, never negative"""
    seconds = (appointment.ends_at - appointment.starts_at).total_seconds()
    return max(0, int(round(seconds / 60)))


def compute_master_utilization(
    masters: Iterable[Master],
    overrides_by_master: dict[int, list[MasterDayAvailability]],
    appointments: Iterable[Appointment],
    start: datetime,
    end: datetime,
) -> list[dict]:
    """
    Build one utilization row per master.

    Args:
        masters: Masters with their weekly template loaded
        overrides_by_master: Per-date overrides in the range, keyed by master id
        appointments: Candidate appointments; only APPROVED/COMPLETED ones
            starting inside [start, end] are counted
        start: Range start
        end: Range end (already moved to end of day)

    Returns:
        Rows sorted by master id. utilization is 0 when no hours are available.
    """
    days = each_day(start, end)
    rows: dict[int, dict] = {}

    for master in masters:
        row = _empty_row(master.id, master.full_name)
        overrides = index_overrides(overrides_by_master.get(master.id, []))
        working_days = index_working_days(master.working_days)
        for day in days:
            row["availableMinutes"] += available_minutes(
                resolve_day_availability(day, overrides, working_days)
            )
        rows[master.id] = row

    for appointment in appointments:
        if appointment.status not in BOOKED_STATUSES:
            continue
        if not (start <= appointment.starts_at <= end):
            continue

        master_id = appointment.master_id
        if master_id not in rows:
            master_name: Optional[str] = appointment.master.full_name if appointment.master else None
            rows[master_id] = _empty_row(master_id, master_name or f"Master #{master_id}")

        rows[master_id]["appointmentsCount"] += 1
        rows[master_id]["bookedMinutes"] += appointment_minutes(appointment)

    for row in rows.values():
        row["utilization"] = (
            row["bookedMinutes"] / row["availableMinutes"] if row["availableMinutes"] > 0 else 0
        )

    return [rows[key] for key in sorted(rows)]


class UtilizationService:
    """Service layer for master utilization"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SchedulingRepository()

    def master_utilization(self, start: datetime, end: datetime) -> list[dict]:
        masters = self.repo.get_masters_with_templates(self.db)
        overrides = self.repo.get_overrides_by_master(self.db, start.date(), end.date())
        appointments = self.repo.get_booked_appointments(self.db, start, end)

        items = compute_master_utilization(masters, overrides, appointments, start, end)
        logger.info(
            f"📊 Utilization computed for {len(items)} masters, {len(appointments)} booked appointments"
        )
        return items
