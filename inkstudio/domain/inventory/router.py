"""Inventory router - FastAPI endpoints for stock items and movements"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.responses import ok
from .schemas import (
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    LowStockItem,
    MovementCreate,
    MovementResponse,
)
from .service import InventoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/inventory", tags=["Inventory"])
movements_router = APIRouter(prefix="/api/inventory-movements", tags=["Inventory"])


def get_inventory_service(db: Session = Depends(get_db)) -> InventoryService:
    """Dependency injection for InventoryService"""
    return InventoryService(db)


def _dump(item) -> dict:
    return InventoryItemResponse.from_model(item).model_dump(mode="json")


# ============================================================================
# ITEMS
# ============================================================================


@router.get("")
async def get_items(service: InventoryService = Depends(get_inventory_service)):
    """All stock items, newest first (inactive ones included)"""
    return ok([_dump(i) for i in service.get_items()])


@router.get("/low-stock")
async def get_low_stock(
    limit: int = Query(5, ge=1, le=100),
    service: InventoryService = Depends(get_inventory_service),
):
    """Dashboard widget: active items at or below their reorder threshold"""
    items = service.get_low_stock(limit)
    return ok({"items": [LowStockItem.from_model(i).model_dump() for i in items]})


@router.post("", status_code=201)
async def create_item(data: InventoryItemCreate, service: InventoryService = Depends(get_inventory_service)):
    return ok(_dump(service.create_item(data)))


@router.put("/{item_id}")
async def update_item(
    item_id: int,
    data: InventoryItemUpdate,
    service: InventoryService = Depends(get_inventory_service),
):
    return ok(_dump(service.update_item(item_id, data)))


@router.delete("/{item_id}")
async def delete_item(item_id: int, service: InventoryService = Depends(get_inventory_service)):
    """Soft delete (isActive = false)"""
    return ok(service.deactivate_item(item_id))


# ============================================================================
# MOVEMENTS
# ============================================================================


@movements_router.get("")
async def list_movements(
    itemId: Optional[int] = Query(None),
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: InventoryService = Depends(get_inventory_service),
):
    page = service.list_movements(itemId, date_from, date_to, limit, offset)
    page["items"] = [
        MovementResponse.from_model(m, with_item=True).model_dump(mode="json") for m in page["items"]
    ]
    return ok(page)


@movements_router.post("", status_code=201)
async def create_movement(data: MovementCreate, service: InventoryService = Depends(get_inventory_service)):
    """Record a stock movement and update the item balance atomically"""
    item, movement = service.create_movement(data)
    return ok(
        {
            "item": _dump(item),
            "movement": MovementResponse.from_model(movement).model_dump(mode="json"),
        }
    )


__all__ = [
    "router",
    "movements_router",
    "get_items",
    "get_low_stock",
    "create_item",
    "update_item",
    "delete_item",
    "list_movements",
    "create_movement",
]
