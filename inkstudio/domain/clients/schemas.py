"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import Client


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    fullName: str
    phone: str
    email: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    birthDate: Optional[str] = None

    @field_validator("fullName", "phone")
    @classmethod
    def validate_required(cls, v):
        if not v or not v.strip():
            raise ValueError("fullName and phone are required")
        return v.strip()


class ClientUpdate(BaseModel):
    """Schema for updating an existing client; only fields present in the body are applied"""

    fullName: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    isBlocked: Optional[bool] = None
    status: Optional[str] = None
    birthDate: Optional[str] = None


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    fullName: str
    phone: str
    email: Optional[str]
    birthDate: Optional[datetime]
    notes: Optional[str]
    isBlocked: bool
    noShowCount: int
    status: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, client: Client) -> "ClientResponse":
        return cls(
            id=client.id,
            fullName=client.full_name,
            phone=client.phone,
            email=client.email,
            birthDate=client.birth_date,
            notes=client.notes,
            isBlocked=bool(client.is_blocked),
            noShowCount=client.no_show_count or 0,
            status=client.status,
            createdAt=client.created_at,
            updatedAt=client.updated_at,
        )
