"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Appointment, Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(db: Session) -> list[Client]:
        """Get all clients, newest first"""
        return db.query(Client).order_by(Client.created_at.desc(), Client.id.desc()).all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client; None is a valid value for nullable fields"""
        for key, value in updates.items():
            if hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        db.delete(client)
        db.commit()

    @staticmethod
    def count_appointments(db: Session, client_id: int) -> int:
        return (
            db.query(func.count(Appointment.id))
            .filter(Appointment.client_id == client_id)
            .scalar()
        )

    @staticmethod
    def get_problem_clients(db: Session, min_no_show: int, limit: int) -> list[Client]:
        """Clients with at least `min_no_show` missed appointments, worst first"""
        return (
            db.query(Client)
            .filter(Client.no_show_count >= min_no_show)
            .order_by(Client.no_show_count.desc(), Client.id)
            .limit(limit)
            .all()
        )
