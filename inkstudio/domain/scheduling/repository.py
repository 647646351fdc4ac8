"""Scheduling repository - reads used by availability and utilization"""

from collections import defaultdict
from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Appointment, Master, MasterDayAvailability, MasterWorkingDay

BOOKED_STATUSES = ("APPROVED", "COMPLETED")


class SchedulingRepository:
    """Repository for schedule and capacity queries"""

    @staticmethod
    def get_working_days(db: Session, master_id: int) -> list[MasterWorkingDay]:
        return (
            db.query(MasterWorkingDay)
            .filter(MasterWorkingDay.master_id == master_id)
            .order_by(MasterWorkingDay.weekday)
            .all()
        )

    @staticmethod
    def get_override(db: Session, master_id: int, day: date) -> Optional[MasterDayAvailability]:
        return (
            db.query(MasterDayAvailability)
            .filter(
                MasterDayAvailability.master_id == master_id,
                MasterDayAvailability.date == day,
            )
            .first()
        )

    @staticmethod
    def get_working_day(db: Session, master_id: int, weekday: int) -> Optional[MasterWorkingDay]:
        return (
            db.query(MasterWorkingDay)
            .filter(MasterWorkingDay.master_id == master_id, MasterWorkingDay.weekday == weekday)
            .first()
        )

    @staticmethod
    def get_masters_with_templates(db: Session) -> list[Master]:
        return db.query(Master).options(selectinload(Master.working_days)).order_by(Master.id).all()

    @staticmethod
    def get_overrides_by_master(
        db: Session, start: date, end: date
    ) -> dict[int, list[MasterDayAvailability]]:
        """Per-date overrides in [start, end], grouped by master id"""
        rows = (
            db.query(MasterDayAvailability)
            .filter(MasterDayAvailability.date >= start, MasterDayAvailability.date <= end)
            .all()
        )
        grouped = defaultdict(list)
        for row in rows:
            grouped[row.master_id].append(row)
        return grouped

    @staticmethod
    def get_booked_appointments(db: Session, start: datetime, end: datetime) -> list[Appointment]:
        """APPROVED and COMPLETED appointments starting in [start, end]"""
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.master))
            .filter(
                Appointment.starts_at >= start,
                Appointment.starts_at <= end,
                Appointment.status.in_(BOOKED_STATUSES),
            )
            .all()
        )
