"""Master router - FastAPI endpoints for masters and their availability"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.responses import ok
from .schemas import DayAvailabilityUpdate, MasterCreate, MasterResponse, MasterUpdate, ScheduleUpdate
from .service import MasterService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/masters", tags=["Masters"])


def get_master_service(db: Session = Depends(get_db)) -> MasterService:
    """Dependency injection for MasterService"""
    return MasterService(db)


def _dump(master) -> dict:
    return MasterResponse.from_model(master).model_dump(mode="json")


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("")
async def get_masters(service: MasterService = Depends(get_master_service)):
    """Get all masters ordered by name"""
    return ok([_dump(m) for m in service.get_masters()])


@router.post("", status_code=201)
async def create_master(data: MasterCreate, service: MasterService = Depends(get_master_service)):
    return ok(_dump(service.create_master(data)))


@router.put("/{master_id}")
async def update_master(
    master_id: int,
    data: MasterUpdate,
    service: MasterService = Depends(get_master_service),
):
    return ok(_dump(service.update_master(master_id, data)))


@router.delete("/{master_id}")
async def delete_master(master_id: int, service: MasterService = Depends(get_master_service)):
    return ok(service.delete_master(master_id))


# ============================================================================
# WEEKLY SCHEDULE
# ============================================================================


@router.get("/{master_id}/schedule")
async def get_schedule(master_id: int, service: MasterService = Depends(get_master_service)):
    """Weekly working template of a master"""
    return ok(service.get_schedule(master_id))


@router.put("/{master_id}/schedule")
async def replace_schedule(
    master_id: int,
    data: ScheduleUpdate,
    service: MasterService = Depends(get_master_service),
):
    """Replace the whole weekly template"""
    return ok(service.replace_schedule(master_id, data))


# ============================================================================
# DAY AVAILABILITY (MONTH CALENDAR)
# ============================================================================


@router.get("/{master_id}/day-availability")
async def get_day_availability(
    master_id: int,
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    service: MasterService = Depends(get_master_service),
):
    """Per-date overrides in [from, to]"""
    return ok(service.get_day_availability(master_id, date_from, date_to))


@router.put("/{master_id}/day-availability")
async def replace_day_availability(
    master_id: int,
    data: DayAvailabilityUpdate,
    service: MasterService = Depends(get_master_service),
):
    """Replace all per-date overrides inside [from, to]"""
    return ok(service.replace_day_availability(master_id, data))


@router.get("/{master_id}/availability")
async def resolve_availability(
    master_id: int,
    date: Optional[str] = Query(None),
    service: MasterService = Depends(get_master_service),
):
    """Effective working hours for one date (override, weekly template or day off)"""
    return ok(service.resolve_availability(master_id, date))


__all__ = [
    "router",
    "get_masters",
    "create_master",
    "update_master",
    "delete_master",
    "get_schedule",
    "replace_schedule",
    "get_day_availability",
    "replace_day_availability",
    "resolve_availability",
]
