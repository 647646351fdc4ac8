"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import CLIENT_STATUSES, Client
from ...shared.errors import NotFoundError, ValidationError
from ...shared.validators import parse_datetime, validate_choice
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "fullName": "full_name",
    "phone": "phone",
    "email": "email",
    "notes": "notes",
    "isBlocked": "is_blocked",
    "status": "status",
    "birthDate": "birth_date",
}


def _parse_birth_date(value: Optional[str]):
    if not value:
        return None
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValidationError(f"Invalid birthDate: {value}", "INVALID_DATE")
    return parsed


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(self) -> list[Client]:
        return self.repo.get_clients(self.db)

    def get_client(self, client_id: int) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    def create_client(self, data: ClientCreate) -> Client:
        """Create a new client with validation"""
        validate_choice(data.status, CLIENT_STATUSES, "status")

        client_data = {
            "full_name": data.fullName,
            "phone": data.phone,
            "email": data.email,
            "notes": data.notes,
            "status": data.status or "REGULAR",
            "birth_date": _parse_birth_date(data.birthDate),
        }

        client = self.repo.create_client(self.db, **client_data)
        logger.info(f"👤 Client created: id={client.id}")
        return client

    def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        """Apply only the fields present in the request body"""
        client = self.get_client(client_id)

        updates = {}
        for field, value in data.model_dump(exclude_unset=True).items():
            if field in ("fullName", "phone", "isBlocked", "status") and value is None:
                raise ValidationError(f"{field} cannot be null")
            if field == "status":
                validate_choice(value, CLIENT_STATUSES, "status")
            if field == "birthDate":
                value = _parse_birth_date(value)
            updates[FIELD_MAP[field]] = value

        return self.repo.update_client(self.db, client, **updates)

    def delete_client(self, client_id: int) -> bool:
        """Hard delete; clients with booking history are kept"""
        client = self.get_client(client_id)
        if self.repo.count_appointments(self.db, client_id) > 0:
            raise ValidationError(
                "Client has appointments and cannot be deleted", "HAS_APPOINTMENTS"
            )
        self.repo.delete_client(self.db, client)
        logger.info(f"🗑️ Client deleted: id={client_id}")
        return True

    def get_problem_clients(self, min_no_show: int = 1, limit: int = 50) -> list[Client]:
        return self.repo.get_problem_clients(self.db, min_no_show, limit)
