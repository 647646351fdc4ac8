"""Analytics service - Stats and reports composed from the pure aggregation engines"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import APPOINTMENT_STATUSES, SERVICE_CATEGORIES
from ...shared.validators import require_date_range, validate_choice
from ..scheduling.utilization_service import UtilizationService
from . import finance, segmentation
from .repository import AnalyticsRepository

logger = logging.getLogger(__name__)


def period(start: datetime, end: datetime) -> dict:
    return {"from": start.isoformat(), "to": end.isoformat()}


class AnalyticsService:
    """Service layer for dashboards and reports. Every method needs a [from, to] period"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AnalyticsRepository()

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    def _service_breakdown(
        self,
        start: datetime,
        end: datetime,
        master_id: Optional[int] = None,
        service_category: Optional[str] = None,
    ) -> tuple[list[dict], list[dict]]:
        # Booked-or-realized money, see finance module docstring
        appointments = self.repo.get_appointments(
            self.db,
            start,
            end,
            statuses=finance.BOOKED_STATUSES,
            master_id=master_id,
            positive_price=True,
            service_category=service_category,
        )
        categories = self.repo.get_service_categories(self.db, (a.service_id for a in appointments))
        return finance.service_breakdown(appointments, categories)

    def _finance_summary(self, start: datetime, end: datetime) -> dict:
        # Realized money only
        completed = self.repo.get_appointments(self.db, start, end, statuses=finance.REALIZED_STATUSES)
        movements = self.repo.get_out_movements(self.db, start, end)
        return finance.revenue_summary(completed, movements)

    def _segmentation(self, start: datetime, end: datetime) -> dict:
        clients = self.repo.get_clients_with_history(self.db, start, end)
        return segmentation.summarize(clients, start, end)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def appointment_stats(self, date_from: Optional[str], date_to: Optional[str], master_id: Optional[int] = None) -> dict:
        """Appointment counts and shares per status"""
        start, end = require_date_range(date_from, date_to)
        counts = self.repo.count_by_status(self.db, start, end, master_id)
        return {
            **period(start, end),
            "total": sum(counts.values()),
            "byStatus": finance.status_breakdown(counts, APPOINTMENT_STATUSES),
        }

    def master_utilization(self, date_from: Optional[str], date_to: Optional[str]) -> dict:
        start, end = require_date_range(date_from, date_to)
        items = UtilizationService(self.db).master_utilization(start, end)
        return {"range": period(start, end), "items": items}

    def clients_dashboard(self, date_from: Optional[str], date_to: Optional[str]) -> dict:
        start, end = require_date_range(date_from, date_to)
        return {"range": period(start, end), "summary": self._segmentation(start, end)["summary"]}

    def owner_dashboard(self, date_from: Optional[str], date_to: Optional[str]) -> dict:
        """
        Everything the owner sees on one screen.

        Returns:
            {"finance", "appointments", "masters", "clients", "services"}
        """
        start, end = require_date_range(date_from, date_to)

        counts = self.repo.count_by_status(self.db, start, end)
        total_appointments = sum(counts.values())
        by_service, by_category = self._service_breakdown(start, end)

        result = {
            "finance": self._finance_summary(start, end),
            "appointments": {
                "totalAppointments": total_appointments,
                "noShowRate": counts.get("NO_SHOW", 0) / total_appointments if total_appointments else 0,
                "cancelRate": counts.get("CANCELLED", 0) / total_appointments if total_appointments else 0,
            },
            "masters": {"items": UtilizationService(self.db).master_utilization(start, end)},
            "clients": {"summary": self._segmentation(start, end)["summary"]},
            "services": finance.service_mix(by_service, by_category),
        }
        logger.info(f"📊 Owner dashboard built for {start.date()}..{end.date()}")
        return result

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def clients_report(self, date_from: Optional[str], date_to: Optional[str]) -> dict:
        """Segmentation summary plus one row per client seen in the period"""
        start, end = require_date_range(date_from, date_to)
        segmented = self._segmentation(start, end)
        return {"range": period(start, end), **segmented}

    def revenue_report(self, date_from: Optional[str], date_to: Optional[str], master_id: Optional[int] = None) -> dict:
        start, end = require_date_range(date_from, date_to)
        completed = self.repo.get_appointments(
            self.db, start, end, statuses=finance.REALIZED_STATUSES, master_id=master_id
        )
        return {
            "range": period(start, end),
            "totalRevenue": sum(a.price or 0 for a in completed),
            "items": finance.revenue_by_master(completed),
        }

    def services_report(
        self,
        date_from: Optional[str],
        date_to: Optional[str],
        master_id: Optional[int] = None,
        service_category: Optional[str] = None,
    ) -> dict:
        start, end = require_date_range(date_from, date_to)
        service_category = (service_category or "").strip() or None
        validate_choice(service_category, SERVICE_CATEGORIES, "serviceCategory")

        by_service, by_category = self._service_breakdown(start, end, master_id, service_category)
        return {
            "range": period(start, end),
            "filters": {"masterId": master_id, "serviceCategory": service_category},
            "summary": {
                "totalRevenue": sum(r["totalRevenue"] for r in by_service),
                "totalAppointments": sum(r["appointmentsCount"] for r in by_service),
            },
            "byService": by_service,
            "byCategory": by_category,
        }

    def inventory_out_report(self, date_from: Optional[str], date_to: Optional[str]) -> dict:
        start, end = require_date_range(date_from, date_to)
        movements = self.repo.get_out_movements(self.db, start, end)
        return {"range": period(start, end), "items": finance.out_by_category(movements)}

    def inventory_out_raw_report(self, date_from: Optional[str], date_to: Optional[str]) -> dict:
        """One row per OUT movement in the period"""
        start, end = require_date_range(date_from, date_to)
        movements = self.repo.get_out_movements(self.db, start, end)
        rows = [
            {
                "movementId": m.id,
                "date": m.created_at.isoformat(),
                "itemId": m.item_id,
                "itemName": m.item.name if m.item else None,
                "quantity": m.quantity or 0,
                "reason": m.reason,
            }
            for m in movements
        ]
        return {
            "range": period(start, end),
            "summary": {"totalQuantity": sum(r["quantity"] for r in rows)},
            "items": rows,
        }
