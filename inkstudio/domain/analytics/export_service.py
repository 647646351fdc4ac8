"""CSV exports of the client report, the appointment log and the finance log"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import APPOINTMENT_STATUSES
from ...shared.csv_export import to_csv
from ...shared.validators import format_date_iso, require_date_range, validate_choice
from . import finance
from .repository import AnalyticsRepository
from .segmentation import summarize

logger = logging.getLogger(__name__)

CLIENT_COLUMNS = [
    "clientId",
    "fullName",
    "phone",
    "email",
    "status",
    "noShowCount",
    "firstVisit",
    "lastVisit",
    "totalVisits",
    "visitsInRange",
    "revenueInRange",
    "isNewInRange",
    "daysSinceLastVisit",
    "activitySegment",
    "hasSecondVisitWithin90Days",
]

APPOINTMENT_COLUMNS = [
    "date",
    "startsAt",
    "endsAt",
    "durationMinutes",
    "status",
    "appointmentId",
    "masterId",
    "masterName",
    "clientId",
    "clientName",
    "clientPhone",
    "clientStatus",
    "clientNoShowCount",
    "serviceId",
    "serviceName",
    "serviceCategory",
    "price",
    "notes",
]

FINANCE_COLUMNS = [
    "date",
    "appointmentId",
    "masterName",
    "serviceName",
    "serviceCategory",
    "appointmentPrice",
    "clientId",
    "cogsApproxDayConsumables",
]


def export_filename(kind: str, start, end) -> str:
    return f"{kind}-{format_date_iso(start)}_{format_date_iso(end)}.csv"


class ExportService:
    """Builds (csv_text, filename) pairs; the router turns them into downloads"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AnalyticsRepository()

    def clients_csv(self, date_from: Optional[str], date_to: Optional[str]) -> tuple[str, str]:
        """Same rows as the clients report"""
        start, end = require_date_range(date_from, date_to)
        clients = self.repo.get_clients_with_history(self.db, start, end)
        items = summarize(clients, start, end)["items"]

        content = to_csv(CLIENT_COLUMNS, ([row[col] for col in CLIENT_COLUMNS] for row in items))
        logger.info(f"📤 Clients export: {len(items)} rows")
        return content, export_filename("clients", start, end)

    def appointments_csv(
        self,
        date_from: Optional[str],
        date_to: Optional[str],
        master_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> tuple[str, str]:
        """Full appointment log for spreadsheet analysis"""
        start, end = require_date_range(date_from, date_to)
        validate_choice(status, APPOINTMENT_STATUSES, "status", "INVALID_STATUS")
        appointments = self.repo.get_appointments(
            self.db, start, end, statuses=[status] if status else None, master_id=master_id
        )

        rows = []
        for a in appointments:
            duration = round((a.ends_at - a.starts_at).total_seconds() / 60)
            rows.append(
                [
                    format_date_iso(a.starts_at),
                    a.starts_at.isoformat(),
                    a.ends_at.isoformat(),
                    duration,
                    a.status,
                    a.id,
                    a.master.id if a.master else None,
                    a.master.full_name if a.master else "Unknown",
                    a.client.id if a.client else None,
                    a.client.full_name if a.client else "Unknown",
                    a.client.phone if a.client else None,
                    a.client.status if a.client else None,
                    (a.client.no_show_count or 0) if a.client else 0,
                    a.service.id if a.service else a.service_id,
                    (a.service.name if a.service else None) or a.service_name or "Untitled",
                    a.service.category if a.service else "OTHER",
                    a.price,
                    a.notes,
                ]
            )

        logger.info(f"📤 Appointments export: {len(rows)} rows")
        return to_csv(APPOINTMENT_COLUMNS, rows), export_filename("appointments", start, end)

    def finance_csv(self, date_from: Optional[str], date_to: Optional[str]) -> tuple[str, str]:
        """
        Completed appointments with the consumables cost of their day.

        Dates are dd.mm.yyyy for spreadsheet locales; the day cost is rounded
        and left empty when nothing was written off that day.
        """
        start, end = require_date_range(date_from, date_to)
        appointments = self.repo.get_appointments(self.db, start, end, statuses=finance.REALIZED_STATUSES)
        cogs = finance.cogs_by_day(self.repo.get_out_movements(self.db, start, end))

        rows = []
        for a in appointments:
            day_cost = cogs.get(a.starts_at.date(), 0)
            rows.append(
                [
                    a.starts_at.strftime("%d.%m.%Y"),
                    a.id,
                    a.master.full_name if a.master else "",
                    a.service_name or "",
                    a.service.category if a.service else "OTHER",
                    a.price or 0,
                    a.client_id if a.client_id is not None else "",
                    round(day_cost) if day_cost > 0 else "",
                ]
            )

        logger.info(f"📤 Finance export: {len(rows)} rows")
        return to_csv(FINANCE_COLUMNS, rows), export_filename("finance", start, end)
