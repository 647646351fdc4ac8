"""Service catalog schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import Service


class ServiceCreate(BaseModel):
    """Schema for adding a service to the catalog"""

    name: str
    category: Optional[str] = None
    basePrice: Optional[float] = None
    defaultDurationMinutes: Optional[int] = None
    isActive: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()


class ServiceUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    basePrice: Optional[float] = None
    defaultDurationMinutes: Optional[int] = None
    isActive: Optional[bool] = None
    notes: Optional[str] = None


class ServiceResponse(BaseModel):
    id: int
    name: str
    category: str
    basePrice: Optional[float]
    defaultDurationMinutes: Optional[int]
    isActive: bool
    notes: Optional[str]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, service: Service) -> "ServiceResponse":
        return cls(
            id=service.id,
            name=service.name,
            category=service.category,
            basePrice=service.base_price,
            defaultDurationMinutes=service.default_duration_minutes,
            isActive=bool(service.is_active),
            notes=service.notes,
            createdAt=service.created_at,
            updatedAt=service.updated_at,
        )
