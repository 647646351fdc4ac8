"""Analytics routers - dashboards (/api/stats), reports (/api/reports) and CSV downloads (/api/export)"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.csv_export import csv_response
from ...shared.responses import ok
from .export_service import ExportService
from .service import AnalyticsService

logger = logging.getLogger(__name__)

stats_router = APIRouter(prefix="/api/stats", tags=["Stats"])
reports_router = APIRouter(prefix="/api/reports", tags=["Reports"])
export_router = APIRouter(prefix="/api/export", tags=["Export"])


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    """Dependency injection for AnalyticsService"""
    return AnalyticsService(db)


def get_export_service(db: Session = Depends(get_db)) -> ExportService:
    return ExportService(db)


# ============================================================================
# STATS
# ============================================================================


@stats_router.get("/appointments")
async def appointment_stats(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    masterId: Optional[int] = Query(None),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Appointments per status in the period"""
    return ok(service.appointment_stats(date_from, date_to, masterId))


@stats_router.get("/owner-dashboard")
async def owner_dashboard(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.owner_dashboard(date_from, date_to))


@stats_router.get("/clients-dashboard")
async def clients_dashboard(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.clients_dashboard(date_from, date_to))


@stats_router.get("/master-utilization")
async def master_utilization(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Booked vs available minutes per master"""
    return ok(service.master_utilization(date_from, date_to))


# ============================================================================
# REPORTS
# ============================================================================


@reports_router.get("/clients")
async def clients_report(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.clients_report(date_from, date_to))


@reports_router.get("/revenue")
async def revenue_report(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    masterId: Optional[int] = Query(None),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Completed revenue per master"""
    return ok(service.revenue_report(date_from, date_to, masterId))


@reports_router.get("/services")
async def services_report(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    masterId: Optional[int] = Query(None),
    serviceCategory: Optional[str] = Query(None),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.services_report(date_from, date_to, masterId, serviceCategory))


@reports_router.get("/inventory-out")
async def inventory_out_report(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Written-off quantity and cost per inventory category"""
    return ok(service.inventory_out_report(date_from, date_to))


@reports_router.get("/inventory-out-raw")
async def inventory_out_raw_report(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return ok(service.inventory_out_raw_report(date_from, date_to))


# ============================================================================
# CSV EXPORTS
# ============================================================================


@export_router.get("/clients")
async def export_clients(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    exports: ExportService = Depends(get_export_service),
):
    content, filename = exports.clients_csv(date_from, date_to)
    return csv_response(content, filename)


@export_router.get("/appointments")
async def export_appointments(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    masterId: Optional[int] = Query(None),
    status: Optional[str] = Query(None),
    exports: ExportService = Depends(get_export_service),
):
    content, filename = exports.appointments_csv(date_from, date_to, masterId, status)
    return csv_response(content, filename)


@export_router.get("/finance")
async def export_finance(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    exports: ExportService = Depends(get_export_service),
):
    """Finance log with a UTF-8 BOM so Excel picks the right encoding"""
    content, filename = exports.finance_csv(date_from, date_to)
    return csv_response(content, filename, with_bom=True)


__all__ = ["stats_router", "reports_router", "export_router"]
