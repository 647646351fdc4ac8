"""Appointment router - FastAPI endpoints for appointment operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.responses import ok
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


def _dump(appointment) -> dict:
    return AppointmentResponse.from_model(appointment).model_dump(mode="json")


@router.get("")
async def list_appointments(
    status: Optional[str] = Query(None),
    masterId: Optional[int] = Query(None),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    limit: int = Query(20, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: AppointmentService = Depends(get_appointment_service),
):
    """List appointments with optional status, master and date filters"""
    page = service.list_appointments(status, masterId, date_from, date_to, limit, offset)
    page["items"] = [_dump(a) for a in page["items"]]
    return ok(page)


@router.post("", status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book a new appointment (starts as PENDING)"""
    return ok(_dump(service.create_appointment(data)))


@router.put("/{appointment_id}")
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    return ok(_dump(service.update_appointment(appointment_id, data)))


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: int,
    service: AppointmentService = Depends(get_appointment_service),
):
    return ok(service.delete_appointment(appointment_id))


__all__ = [
    "router",
    "list_appointments",
    "create_appointment",
    "update_appointment",
    "delete_appointment",
]
