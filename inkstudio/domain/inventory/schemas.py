"""Inventory domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...models import InventoryItem, InventoryMovement


class InventoryItemCreate(BaseModel):
    """Schema for a new stock item. name, unit and category are checked in the service"""

    name: Optional[str] = None
    unit: Optional[str] = None
    sku: Optional[str] = None
    quantity: Optional[int] = None
    minQuantity: Optional[int] = None
    pricePerUnit: Optional[float] = None
    isActive: Optional[bool] = None
    notes: Optional[str] = None
    category: Optional[str] = None


class InventoryItemUpdate(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    sku: Optional[str] = None
    quantity: Optional[int] = None
    minQuantity: Optional[int] = None
    pricePerUnit: Optional[float] = None
    isActive: Optional[bool] = None
    notes: Optional[str] = None
    category: Optional[str] = None


class InventoryItemResponse(BaseModel):
    id: int
    name: str
    unit: str
    sku: Optional[str]
    quantity: int
    minQuantity: int
    pricePerUnit: Optional[float]
    isActive: bool
    notes: Optional[str]
    category: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, item: InventoryItem) -> "InventoryItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            unit=item.unit,
            sku=item.sku,
            quantity=item.quantity,
            minQuantity=item.min_quantity,
            pricePerUnit=item.price_per_unit,
            isActive=bool(item.is_active),
            notes=item.notes,
            category=item.category,
            createdAt=item.created_at,
            updatedAt=item.updated_at,
        )


class LowStockItem(BaseModel):
    id: int
    name: str
    sku: Optional[str]
    quantity: int
    minQuantity: int
    unit: str
    category: str

    @classmethod
    def from_model(cls, item: InventoryItem) -> "LowStockItem":
        return cls(
            id=item.id,
            name=item.name,
            sku=item.sku,
            quantity=item.quantity,
            minQuantity=item.min_quantity,
            unit=item.unit,
            category=item.category,
        )


class MovementCreate(BaseModel):
    """Stock movement: IN adds, OUT subtracts, ADJUST sets the absolute quantity"""

    itemId: Optional[int] = None
    type: Optional[str] = None
    quantity: Optional[int] = None
    reason: Optional[str] = None


class MovementResponse(BaseModel):
    id: int
    itemId: int
    type: str
    quantity: int
    reason: Optional[str]
    createdAt: datetime
    item: Optional[InventoryItemResponse] = None

    @classmethod
    def from_model(cls, movement: InventoryMovement, with_item: bool = False) -> "MovementResponse":
        return cls(
            id=movement.id,
            itemId=movement.item_id,
            type=movement.type,
            quantity=movement.quantity,
            reason=movement.reason,
            createdAt=movement.created_at,
            item=InventoryItemResponse.from_model(movement.item) if with_item and movement.item else None,
        )
