"""Inventory repository - Database operations for stock items and the movement ledger"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import InventoryItem, InventoryMovement


class InventoryRepository:
    """Repository for inventory database operations"""

    @staticmethod
    def get_items(db: Session) -> list[InventoryItem]:
        return db.query(InventoryItem).order_by(InventoryItem.created_at.desc(), InventoryItem.id.desc()).all()

    @staticmethod
    def get_item_by_id(db: Session, item_id: int) -> Optional[InventoryItem]:
        return db.query(InventoryItem).filter(InventoryItem.id == item_id).first()

    @staticmethod
    def lock_item(db: Session, item_id: int) -> Optional[InventoryItem]:
        """Load the item with SELECT ... FOR UPDATE so concurrent movements serialize"""
        return (
            db.query(InventoryItem)
            .filter(InventoryItem.id == item_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    @staticmethod
    def get_low_stock(db: Session, limit: int = 5) -> list[InventoryItem]:
        """Active items that are running out but not empty: 0 < quantity <= minQuantity"""
        return (
            db.query(InventoryItem)
            .filter(
                InventoryItem.is_active.is_(True),
                InventoryItem.quantity > 0,
                InventoryItem.quantity <= InventoryItem.min_quantity,
            )
            .order_by(InventoryItem.quantity.asc(), InventoryItem.id)
            .limit(limit)
            .all()
        )

    @staticmethod
    def create_item(db: Session, **item_data) -> InventoryItem:
        item = InventoryItem(**item_data)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def update_item(db: Session, item: InventoryItem, **updates) -> InventoryItem:
        for key, value in updates.items():
            if hasattr(item, key):
                setattr(item, key, value)

        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def list_movements(
        db: Session,
        item_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[InventoryMovement], int]:
        """Newest movements first, plus the unpaged total"""
        query = db.query(InventoryMovement)
        if item_id:
            query = query.filter(InventoryMovement.item_id == item_id)
        if start:
            query = query.filter(InventoryMovement.created_at >= start)
        if end:
            query = query.filter(InventoryMovement.created_at <= end)

        total = query.count()
        items = (
            query.options(joinedload(InventoryMovement.item))
            .order_by(InventoryMovement.created_at.desc(), InventoryMovement.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total
