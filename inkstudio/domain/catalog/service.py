"""Service catalog - Business logic for the studio's price list"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import SERVICE_CATEGORIES, Service
from ...shared.errors import NotFoundError, ValidationError
from ...shared.validators import validate_choice
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "name": "name",
    "category": "category",
    "basePrice": "base_price",
    "defaultDurationMinutes": "default_duration_minutes",
    "isActive": "is_active",
    "notes": "notes",
}


class CatalogService:
    """Service layer for the service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(self, include_inactive: bool = False, category: Optional[str] = None) -> list[Service]:
        validate_choice(category, SERVICE_CATEGORIES, "category")
        return self.repo.get_services(self.db, include_inactive, category)

    def get_service(self, service_id: int) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        validate_choice(data.category, SERVICE_CATEGORIES, "category")
        service = self.repo.create_service(
            self.db,
            name=data.name,
            category=data.category or "OTHER",
            base_price=data.basePrice,
            default_duration_minutes=data.defaultDurationMinutes,
            is_active=True if data.isActive is None else data.isActive,
            notes=data.notes,
        )
        logger.info(f"🧾 Service created: id={service.id} ({service.category})")
        return service

    def update_service(self, service_id: int, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)

        updates = {}
        for field, value in data.model_dump(exclude_unset=True).items():
            if field in ("name", "category", "isActive") and value is None:
                raise ValidationError(f"{field} cannot be null")
            if field == "category":
                validate_choice(value, SERVICE_CATEGORIES, "category")
            updates[FIELD_MAP[field]] = value

        return self.repo.update_service(self.db, service, **updates)

    def deactivate_service(self, service_id: int) -> bool:
        """Soft delete: past appointments keep pointing at the service"""
        service = self.get_service(service_id)
        self.repo.update_service(self.db, service, is_active=False)
        logger.info(f"🗑️ Service deactivated: id={service_id}")
        return True
