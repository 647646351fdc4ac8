"""Appointment service - Booking rules: date parsing, ordering and the overlap guard"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import APPOINTMENT_STATUSES, Appointment, Client, Master
from ...shared.errors import NotFoundError, ValidationError
from ...shared.validators import parse_datetime, parse_range_end, validate_choice
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "masterId": "master_id",
    "serviceId": "service_id",
    "serviceName": "service_name",
    "price": "price",
    "startsAt": "starts_at",
    "endsAt": "ends_at",
    "status": "status",
    "notes": "notes",
}

NON_NULLABLE_FIELDS = ("masterId", "serviceName", "price", "startsAt", "endsAt", "status")


def _parse_required_datetime(value: str, field: str) -> datetime:
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValidationError(f"Invalid {field}: {value}", "INVALID_DATE")
    return parsed


def _ensure_ordered(starts_at: datetime, ends_at: datetime) -> None:
    if ends_at <= starts_at:
        raise ValidationError("Appointment ends before it starts", "ENDS_BEFORE_START")


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()

    def list_appointments(
        self,
        status: Optional[str] = None,
        master_id: Optional[int] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> dict:
        """
        Paged appointment list.

        Args:
            status: Exact status, or "ALL"/None for every status
            master_id: Only this master's appointments
            date_from: Lower bound on startsAt
            date_to: Upper bound on startsAt, extended to the end of that day

        Returns:
            {"items", "total", "limit", "offset"}
        """
        if status == "ALL":
            status = None
        validate_choice(status, APPOINTMENT_STATUSES, "status", "INVALID_STATUS")

        items, total = self.repo.list_appointments(
            self.db,
            status=status,
            master_id=master_id,
            start=parse_datetime(date_from),
            end=parse_range_end(date_to),
            limit=limit,
            offset=offset,
        )
        return {"items": items, "total": total, "limit": limit, "offset": offset}

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    def _ensure_master(self, master_id: int) -> None:
        if self.db.get(Master, master_id) is None:
            raise NotFoundError("Master not found")

    def _ensure_no_overlap(
        self, master_id: int, starts_at: datetime, ends_at: datetime, exclude_id: Optional[int] = None
    ) -> None:
        clash = self.repo.find_overlapping(self.db, master_id, starts_at, ends_at, exclude_id)
        if clash:
            logger.info(
                f"⛔ Overlap for master {master_id}: [{starts_at}, {ends_at}) clashes with appointment {clash.id}"
            )
            raise ValidationError("This master already has an appointment at this time", "OVERLAP")

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """Book a new PENDING appointment after the date and overlap checks"""
        if not data.clientId or not data.masterId or not data.serviceName or not data.startsAt or not data.endsAt:
            raise ValidationError("clientId, masterId, serviceName, startsAt, endsAt are required")

        starts_at = _parse_required_datetime(data.startsAt, "startsAt")
        ends_at = _parse_required_datetime(data.endsAt, "endsAt")
        _ensure_ordered(starts_at, ends_at)

        if self.db.get(Client, data.clientId) is None:
            raise NotFoundError("Client not found")
        self._ensure_master(data.masterId)
        self._ensure_no_overlap(data.masterId, starts_at, ends_at)

        appointment = self.repo.create_appointment(
            self.db,
            client_id=data.clientId,
            master_id=data.masterId,
            service_id=data.serviceId,
            service_name=data.serviceName,
            price=data.price or 0,
            starts_at=starts_at,
            ends_at=ends_at,
            notes=data.notes,
            status="PENDING",
        )
        logger.info(f"📅 Appointment created: id={appointment.id} master={appointment.master_id}")
        return appointment

    def update_appointment(self, appointment_id: int, data: AppointmentUpdate) -> Appointment:
        """
        Apply the fields present in the body.

        Status changes are unconstrained. When the time window or the master
        changes, the effective window is re-validated and re-checked for
        overlaps against every other appointment of the effective master.
        """
        appointment = self.get_appointment(appointment_id)

        updates = {}
        for field, value in data.model_dump(exclude_unset=True).items():
            if field in NON_NULLABLE_FIELDS and value is None:
                raise ValidationError(f"{field} cannot be null")
            if field in ("startsAt", "endsAt"):
                value = _parse_required_datetime(value, field)
            if field == "status":
                validate_choice(value, APPOINTMENT_STATUSES, "status", "INVALID_STATUS")
            updates[FIELD_MAP[field]] = value

        if {"starts_at", "ends_at", "master_id"} & updates.keys():
            starts_at = updates.get("starts_at", appointment.starts_at)
            ends_at = updates.get("ends_at", appointment.ends_at)
            master_id = updates.get("master_id", appointment.master_id)
            _ensure_ordered(starts_at, ends_at)
            if "master_id" in updates:
                self._ensure_master(master_id)
            self._ensure_no_overlap(master_id, starts_at, ends_at, exclude_id=appointment.id)

        appointment = self.repo.update_appointment(self.db, appointment, **updates)
        if "status" in updates:
            logger.info(f"🔄 Appointment {appointment.id} status -> {appointment.status}")
        return appointment

    def delete_appointment(self, appointment_id: int) -> bool:
        appointment = self.get_appointment(appointment_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Appointment deleted: id={appointment_id}")
        return True
