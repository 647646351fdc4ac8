"""Appointment repository - Database operations for appointments"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Appointment


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def _filtered(
        db: Session,
        status: Optional[str] = None,
        master_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ):
        query = db.query(Appointment)
        if status:
            query = query.filter(Appointment.status == status)
        if master_id:
            query = query.filter(Appointment.master_id == master_id)
        if start:
            query = query.filter(Appointment.starts_at >= start)
        if end:
            query = query.filter(Appointment.starts_at <= end)
        return query

    @staticmethod
    def list_appointments(
        db: Session,
        status: Optional[str] = None,
        master_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Appointment], int]:
        """Page of appointments ordered by start time, plus the unpaged total"""
        query = AppointmentRepository._filtered(db, status, master_id, start, end)
        total = query.count()
        items = (
            query.options(
                joinedload(Appointment.client),
                joinedload(Appointment.master),
                joinedload(Appointment.service),
            )
            .order_by(Appointment.starts_at.asc(), Appointment.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def find_overlapping(
        db: Session,
        master_id: int,
        starts_at: datetime,
        ends_at: datetime,
        exclude_id: Optional[int] = None,
    ) -> Optional[Appointment]:
        """
        First appointment of the master intersecting [starts_at, ends_at).

        Half-open test: existing.start < new.end AND existing.end > new.start,
        so back-to-back bookings do not collide. Every status counts.
        """
        query = db.query(Appointment).filter(
            Appointment.master_id == master_id,
            Appointment.starts_at < ends_at,
            Appointment.ends_at > starts_at,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return query.first()

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment(db: Session, appointment: Appointment, **updates) -> Appointment:
        for key, value in updates.items():
            if hasattr(appointment, key):
                setattr(appointment, key, value)

        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()
