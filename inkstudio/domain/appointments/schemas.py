"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...models import Appointment
from ..catalog.schemas import ServiceResponse
from ..clients.schemas import ClientResponse
from ..masters.schemas import MasterResponse


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment. Required fields are checked in the service"""

    clientId: Optional[int] = None
    masterId: Optional[int] = None
    serviceId: Optional[int] = None
    serviceName: Optional[str] = None
    price: Optional[float] = None
    startsAt: Optional[str] = None
    endsAt: Optional[str] = None
    notes: Optional[str] = None


class AppointmentUpdate(BaseModel):
    """Schema for updating an appointment; only fields present in the body are applied"""

    masterId: Optional[int] = None
    serviceId: Optional[int] = None
    serviceName: Optional[str] = None
    price: Optional[float] = None
    startsAt: Optional[str] = None
    endsAt: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class AppointmentResponse(BaseModel):
    """Appointment with its client, master and service embedded"""

    id: int
    clientId: int
    masterId: int
    serviceId: Optional[int]
    serviceName: str
    price: float
    startsAt: datetime
    endsAt: datetime
    status: str
    notes: Optional[str]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    client: Optional[ClientResponse] = None
    master: Optional[MasterResponse] = None
    service: Optional[ServiceResponse] = None

    @classmethod
    def from_model(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            clientId=appointment.client_id,
            masterId=appointment.master_id,
            serviceId=appointment.service_id,
            serviceName=appointment.service_name,
            price=appointment.price or 0,
            startsAt=appointment.starts_at,
            endsAt=appointment.ends_at,
            status=appointment.status,
            notes=appointment.notes,
            createdAt=appointment.created_at,
            updatedAt=appointment.updated_at,
            client=ClientResponse.from_model(appointment.client) if appointment.client else None,
            master=MasterResponse.from_model(appointment.master) if appointment.master else None,
            service=ServiceResponse.from_model(appointment.service) if appointment.service else None,
        )
