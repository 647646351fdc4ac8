"""Master repository - Database operations for masters and their schedules"""

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Appointment, Master, MasterDayAvailability, MasterWorkingDay


class MasterRepository:
    """Repository for master database operations"""

    @staticmethod
    def get_masters(db: Session) -> list[Master]:
        return db.query(Master).order_by(Master.full_name.asc(), Master.id).all()

    @staticmethod
    def get_master_by_id(db: Session, master_id: int) -> Optional[Master]:
        return db.query(Master).filter(Master.id == master_id).first()

    @staticmethod
    def create_master(db: Session, **master_data) -> Master:
        master = Master(**master_data)
        db.add(master)
        db.commit()
        db.refresh(master)
        return master

    @staticmethod
    def update_master(db: Session, master: Master, **updates) -> Master:
        for key, value in updates.items():
            if hasattr(master, key):
                setattr(master, key, value)

        db.commit()
        db.refresh(master)
        return master

    @staticmethod
    def delete_master(db: Session, master: Master) -> None:
        """Delete a master; weekly template and overrides go with it"""
        db.delete(master)
        db.commit()

    @staticmethod
    def count_appointments(db: Session, master_id: int) -> int:
        return (
            db.query(func.count(Appointment.id))
            .filter(Appointment.master_id == master_id)
            .scalar()
        )

    @staticmethod
    def get_working_days(db: Session, master_id: int) -> list[MasterWorkingDay]:
        return (
            db.query(MasterWorkingDay)
            .filter(MasterWorkingDay.master_id == master_id)
            .order_by(MasterWorkingDay.weekday)
            .all()
        )

    @staticmethod
    def replace_working_days(db: Session, master_id: int, rows: list[MasterWorkingDay]) -> int:
        """Delete the whole weekly template and insert `rows` in one transaction"""
        try:
            db.query(MasterWorkingDay).filter(MasterWorkingDay.master_id == master_id).delete(
                synchronize_session=False
            )
            db.add_all(rows)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return len(rows)

    @staticmethod
    def get_day_availability(
        db: Session, master_id: int, start: date, end: date
    ) -> list[MasterDayAvailability]:
        return (
            db.query(MasterDayAvailability)
            .filter(
                MasterDayAvailability.master_id == master_id,
                MasterDayAvailability.date >= start,
                MasterDayAvailability.date <= end,
            )
            .order_by(MasterDayAvailability.date)
            .all()
        )

    @staticmethod
    def replace_day_availability(
        db: Session, master_id: int, start: date, end: date, rows: list[MasterDayAvailability]
    ) -> int:
        """Delete the overrides in [start, end] and insert `rows` in one transaction"""
        try:
            db.query(MasterDayAvailability).filter(
                MasterDayAvailability.master_id == master_id,
                MasterDayAvailability.date >= start,
                MasterDayAvailability.date <= end,
            ).delete(synchronize_session=False)
            db.add_all(rows)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return len(rows)
