"""Inventory service - Stock items and the quantity-changing movement ledger"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import INVENTORY_CATEGORIES, MOVEMENT_TYPES, InventoryItem, InventoryMovement
from ...shared.errors import NotFoundError, ValidationError
from ...shared.validators import parse_datetime, parse_range_end, validate_choice
from .repository import InventoryRepository
from .schemas import InventoryItemCreate, InventoryItemUpdate, MovementCreate

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "name": "name",
    "unit": "unit",
    "sku": "sku",
    "quantity": "quantity",
    "minQuantity": "min_quantity",
    "pricePerUnit": "price_per_unit",
    "isActive": "is_active",
    "notes": "notes",
    "category": "category",
}

NON_NULLABLE_FIELDS = ("name", "unit", "quantity", "minQuantity", "isActive", "category")


def apply_movement(current: int, movement_type: str, quantity: int) -> int:
    """
    Quantity after a movement.

    IN adds, OUT subtracts and ADJUST replaces the balance with `quantity`.
    """
    if movement_type == "IN":
        return current + quantity
    if movement_type == "OUT":
        return current - quantity
    return quantity


class InventoryService:
    """Service layer for inventory business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InventoryRepository()

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def get_items(self) -> list[InventoryItem]:
        return self.repo.get_items(self.db)

    def get_item(self, item_id: int) -> InventoryItem:
        item = self.repo.get_item_by_id(self.db, item_id)
        if not item:
            raise NotFoundError("Inventory item not found")
        return item

    def create_item(self, data: InventoryItemCreate) -> InventoryItem:
        if not data.name or not data.unit or not data.category:
            raise ValidationError("name, unit and category are required")
        validate_choice(data.category, INVENTORY_CATEGORIES, "category")
        if data.quantity is not None and data.quantity < 0:
            raise ValidationError("quantity cannot be negative")

        item = self.repo.create_item(
            self.db,
            name=data.name,
            unit=data.unit,
            sku=data.sku,
            quantity=data.quantity or 0,
            min_quantity=data.minQuantity or 0,
            price_per_unit=data.pricePerUnit,
            is_active=True if data.isActive is None else data.isActive,
            notes=data.notes,
            category=data.category,
        )
        logger.info(f"📦 Inventory item created: id={item.id} ({item.category})")
        return item

    def update_item(self, item_id: int, data: InventoryItemUpdate) -> InventoryItem:
        item = self.get_item(item_id)

        updates = {}
        for field, value in data.model_dump(exclude_unset=True).items():
            if field in NON_NULLABLE_FIELDS and value is None:
                raise ValidationError(f"{field} cannot be null")
            if field == "category":
                validate_choice(value, INVENTORY_CATEGORIES, "category")
            if field == "quantity" and value < 0:
                raise ValidationError("quantity cannot be negative")
            updates[FIELD_MAP[field]] = value

        return self.repo.update_item(self.db, item, **updates)

    def deactivate_item(self, item_id: int) -> bool:
        item = self.get_item(item_id)
        self.repo.update_item(self.db, item, is_active=False)
        logger.info(f"🗑️ Inventory item deactivated: id={item_id}")
        return True

    def get_low_stock(self, limit: int = 5) -> list[InventoryItem]:
        return self.repo.get_low_stock(self.db, limit)

    # ------------------------------------------------------------------
    # Movements
    # ------------------------------------------------------------------

    def list_movements(
        self,
        item_id: Optional[int] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict:
        items, total = self.repo.list_movements(
            self.db,
            item_id=item_id,
            start=parse_datetime(date_from),
            end=parse_range_end(date_to),
            limit=limit,
            offset=offset,
        )
        return {"items": items, "total": total, "limit": limit, "offset": offset}

    def create_movement(self, data: MovementCreate) -> tuple[InventoryItem, InventoryMovement]:
        """
        Record a movement and update the item balance in one transaction.

        The item row is locked before the new balance is computed. Nothing is
        written if the item is missing or the balance would go negative.

        Raises:
            ValidationError: Missing fields, non-positive quantity or
                INSUFFICIENT_STOCK
            NotFoundError: Unknown item
        """
        if not data.itemId or not data.type or not data.quantity:
            raise ValidationError("itemId, type and non-zero quantity are required")
        validate_choice(data.type, MOVEMENT_TYPES, "type")
        if data.quantity <= 0:
            raise ValidationError("quantity must be positive")

        try:
            item = self.repo.lock_item(self.db, data.itemId)
            if item is None:
                raise NotFoundError("Inventory item not found")

            new_quantity = apply_movement(item.quantity, data.type, data.quantity)
            if new_quantity < 0:
                raise ValidationError("Resulting quantity cannot be negative", "INSUFFICIENT_STOCK")

            item.quantity = new_quantity
            movement = InventoryMovement(
                item_id=item.id,
                type=data.type,
                quantity=data.quantity,
                reason=data.reason,
            )
            self.db.add(movement)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(item)
        self.db.refresh(movement)
        logger.info(
            f"📦 Movement {data.type} x{data.quantity} on item {item.id}: balance now {item.quantity}"
        )
        return item, movement
