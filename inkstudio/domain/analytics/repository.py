"""Analytics repository - Read-only queries behind stats, reports and exports"""

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Appointment, Client, InventoryMovement, Service


class AnalyticsRepository:
    """Repository for reporting queries over a [start, end] period"""

    @staticmethod
    def get_appointments(
        db: Session,
        start: datetime,
        end: datetime,
        statuses: Optional[Iterable[str]] = None,
        master_id: Optional[int] = None,
        positive_price: bool = False,
        service_category: Optional[str] = None,
    ) -> list[Appointment]:
        """Appointments starting in the period with client, master and service loaded"""
        query = db.query(Appointment).filter(
            Appointment.starts_at >= start,
            Appointment.starts_at <= end,
        )
        if statuses:
            query = query.filter(Appointment.status.in_(tuple(statuses)))
        if master_id:
            query = query.filter(Appointment.master_id == master_id)
        if positive_price:
            query = query.filter(Appointment.price > 0)
        if service_category:
            query = query.join(Appointment.service).filter(Service.category == service_category)

        return (
            query.options(
                joinedload(Appointment.client),
                joinedload(Appointment.master),
                joinedload(Appointment.service),
            )
            .order_by(Appointment.starts_at.asc(), Appointment.id)
            .all()
        )

    @staticmethod
    def count_by_status(
        db: Session, start: datetime, end: datetime, master_id: Optional[int] = None
    ) -> dict[str, int]:
        query = db.query(Appointment.status, func.count(Appointment.id)).filter(
            Appointment.starts_at >= start,
            Appointment.starts_at <= end,
        )
        if master_id:
            query = query.filter(Appointment.master_id == master_id)
        return {status: count for status, count in query.group_by(Appointment.status).all()}

    @staticmethod
    def get_out_movements(db: Session, start: datetime, end: datetime) -> list[InventoryMovement]:
        return (
            db.query(InventoryMovement)
            .options(joinedload(InventoryMovement.item))
            .filter(
                InventoryMovement.type == "OUT",
                InventoryMovement.created_at >= start,
                InventoryMovement.created_at <= end,
            )
            .order_by(InventoryMovement.created_at.asc(), InventoryMovement.id)
            .all()
        )

    @staticmethod
    def get_clients_with_history(db: Session, start: datetime, end: datetime) -> list[Client]:
        """Clients with at least one appointment in the period, each with its full history"""
        in_range = and_(Appointment.starts_at >= start, Appointment.starts_at <= end)
        return (
            db.query(Client)
            .filter(Client.appointments.any(in_range))
            .options(selectinload(Client.appointments))
            .order_by(Client.id)
            .all()
        )

    @staticmethod
    def get_service_categories(db: Session, service_ids: Iterable[Optional[int]]) -> dict[int, str]:
        ids = {i for i in service_ids if i is not None}
        if not ids:
            return {}
        rows = db.query(Service.id, Service.category).filter(Service.id.in_(ids)).all()
        return {row.id: row.category for row in rows}
