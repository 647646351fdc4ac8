"""Master domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models import Master
from ...shared.validators import validate_time_string


class MasterCreate(BaseModel):
    """Schema for creating a new master"""

    fullName: str
    specialization: Optional[str] = None
    phone: Optional[str] = None
    isActive: Optional[bool] = None
    bio: Optional[str] = None

    @field_validator("fullName")
    @classmethod
    def validate_full_name(cls, v):
        if not v or not v.strip():
            raise ValueError("fullName is required")
        return v.strip()


class MasterUpdate(BaseModel):
    """Schema for updating a master; only fields present in the body are applied"""

    fullName: Optional[str] = None
    specialization: Optional[str] = None
    phone: Optional[str] = None
    isActive: Optional[bool] = None
    bio: Optional[str] = None


class MasterResponse(BaseModel):
    id: int
    fullName: str
    specialization: Optional[str]
    phone: Optional[str]
    isActive: bool
    bio: Optional[str]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, master: Master) -> "MasterResponse":
        return cls(
            id=master.id,
            fullName=master.full_name,
            specialization=master.specialization,
            phone=master.phone,
            isActive=bool(master.is_active),
            bio=master.bio,
            createdAt=master.created_at,
            updatedAt=master.updated_at,
        )


class WorkingDayInput(BaseModel):
    """One weekday of the weekly template (0 = Sunday ... 6 = Saturday)"""

    weekday: int
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    isDayOff: Optional[bool] = False

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time(cls, v):
        return validate_time_string(v)


class ScheduleUpdate(BaseModel):
    days: Optional[list[WorkingDayInput]] = None


class DayAvailabilityInput(BaseModel):
    """Override for one concrete date"""

    date: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    isDayOff: Optional[bool] = False

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time(cls, v):
        return validate_time_string(v)


class DayAvailabilityUpdate(BaseModel):
    """Replace every override of a master inside [from, to]"""

    model_config = ConfigDict(populate_by_name=True)

    date_from: Optional[str] = Field(None, alias="from")
    date_to: Optional[str] = Field(None, alias="to")
    days: Optional[list[DayAvailabilityInput]] = None
