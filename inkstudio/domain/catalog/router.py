"""Service catalog router - FastAPI endpoints for services"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.responses import ok
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


def _dump(service) -> dict:
    return ServiceResponse.from_model(service).model_dump(mode="json")


@router.get("")
async def get_services(
    includeInactive: bool = Query(False),
    category: Optional[str] = Query(None),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Active services ordered by name; includeInactive=true lists deactivated ones too"""
    return ok([_dump(s) for s in catalog.get_services(includeInactive, category)])


@router.post("", status_code=201)
async def create_service(data: ServiceCreate, catalog: CatalogService = Depends(get_catalog_service)):
    return ok(_dump(catalog.create_service(data)))


@router.put("/{service_id}")
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return ok(_dump(catalog.update_service(service_id, data)))


@router.delete("/{service_id}")
async def delete_service(service_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    """Deactivate a service"""
    return ok(catalog.deactivate_service(service_id))


__all__ = ["router", "get_services", "create_service", "update_service", "delete_service"]
