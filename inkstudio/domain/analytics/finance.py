"""
Revenue and cost aggregation

Headline revenue counts realized money only (COMPLETED). The service mix
counts booked-or-realized money (APPROVED + COMPLETED, price > 0) so that it
reflects demand for the period, not just what has been paid so far. Keep the
two filters apart.
"""

from typing import Iterable, Optional

REALIZED_STATUSES = ("COMPLETED",)
BOOKED_STATUSES = ("APPROVED", "COMPLETED")

TOP_N = 5


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0


def movement_cost(movement) -> float:
    """quantity x pricePerUnit; an item without a price costs nothing"""
    price = movement.item.price_per_unit if movement.item is not None else None
    if price is None:
        return 0
    return movement.quantity * price


def revenue_summary(completed_appointments: Iterable, out_movements: Iterable) -> dict:
    """
    Headline finance figures.

    Args:
        completed_appointments: COMPLETED appointments starting in the period
        out_movements: OUT movements created in the period, with `item` loaded
    """
    prices = [a.price or 0 for a in completed_appointments]
    total_revenue = sum(prices)
    total_completed = len(prices)
    cogs_total = sum(movement_cost(m) for m in out_movements)
    gross_profit = total_revenue - cogs_total

    return {
        "totalRevenue": total_revenue,
        "totalCompleted": total_completed,
        "avgCheck": _ratio(total_revenue, total_completed),
        "cogsTotal": cogs_total,
        "grossProfit": gross_profit,
        "grossMargin": _ratio(gross_profit, total_revenue),
    }


def service_breakdown(appointments: Iterable, categories: dict[int, str]) -> tuple[list[dict], list[dict]]:
    """
    Group booked appointments by service and by service category.

    Appointments are grouped on (serviceId, serviceName) so renamed or
    unlinked services stay separate. The category comes from the catalog and
    falls back to OTHER.

    Returns:
        (by_service, by_category), both in first-seen order
    """
    by_service: dict[tuple, dict] = {}
    for a in appointments:
        key = (a.service_id, a.service_name)
        row = by_service.get(key)
        if row is None:
            category = categories.get(a.service_id, "OTHER") if a.service_id is not None else "OTHER"
            row = by_service[key] = {
                "serviceId": a.service_id,
                "serviceName": a.service_name,
                "serviceCategory": category,
                "totalRevenue": 0,
                "appointmentsCount": 0,
            }
        row["totalRevenue"] += a.price or 0
        row["appointmentsCount"] += 1

    by_category: dict[str, dict] = {}
    for row in by_service.values():
        cat = by_category.setdefault(
            row["serviceCategory"],
            {"category": row["serviceCategory"], "totalRevenue": 0, "appointmentsCount": 0},
        )
        cat["totalRevenue"] += row["totalRevenue"]
        cat["appointmentsCount"] += row["appointmentsCount"]

    return list(by_service.values()), list(by_category.values())


def _top(rows: list[dict], total_revenue: float) -> list[dict]:
    ranked = sorted(rows, key=lambda r: r["totalRevenue"], reverse=True)[:TOP_N]
    return [{**r, "revenueShare": _ratio(r["totalRevenue"], total_revenue)} for r in ranked]


def service_mix(by_service: list[dict], by_category: list[dict]) -> dict:
    """Totals, top-5 services and categories, and top-3/top-5 revenue concentration"""
    total_revenue = sum(r["totalRevenue"] for r in by_service)
    top_services = _top(by_service, total_revenue)

    return {
        "totalRevenue": total_revenue,
        "totalAppointments": sum(r["appointmentsCount"] for r in by_service),
        "topServicesByRevenue": top_services,
        "topCategoriesByRevenue": _top(by_category, total_revenue),
        "revenueConcentrationTop3": _ratio(sum(r["totalRevenue"] for r in top_services[:3]), total_revenue),
        "revenueConcentrationTop5": _ratio(sum(r["totalRevenue"] for r in top_services[:5]), total_revenue),
    }


def revenue_by_master(completed_appointments: Iterable) -> list[dict]:
    """Revenue, visit count and distinct client ids per master"""
    rows: dict[int, dict] = {}
    for a in completed_appointments:
        row = rows.get(a.master_id)
        if row is None:
            row = rows[a.master_id] = {
                "masterId": a.master_id,
                "masterName": a.master.full_name if a.master else f"Master #{a.master_id}",
                "revenue": 0,
                "count": 0,
                "clientIds": [],
            }
        row["revenue"] += a.price or 0
        row["count"] += 1
        if a.client_id is not None and a.client_id not in row["clientIds"]:
            row["clientIds"].append(a.client_id)
    return list(rows.values())


def out_by_category(out_movements: Iterable) -> list[dict]:
    """OUT quantity and approximate cost per inventory category; cost is None when nothing was priced"""
    rows: dict[str, dict] = {}
    for m in out_movements:
        if m.item is None:
            continue
        row = rows.setdefault(
            m.item.category, {"category": m.item.category, "totalQuantity": 0, "approxCost": 0}
        )
        row["totalQuantity"] += m.quantity
        row["approxCost"] += movement_cost(m)

    for row in rows.values():
        if row["approxCost"] == 0:
            row["approxCost"] = None
    return list(rows.values())


def cogs_by_day(out_movements: Iterable) -> dict:
    """Consumables cost per calendar day of the movement"""
    totals: dict = {}
    for m in out_movements:
        cost = movement_cost(m)
        if not cost:
            continue
        day = m.created_at.date()
        totals[day] = totals.get(day, 0) + cost
    return totals


def status_breakdown(counts: dict[str, int], order: Optional[Iterable[str]] = None) -> list[dict]:
    """Count and share per status; `order` fixes the row order for known statuses"""
    total = sum(counts.values())
    keys = [s for s in (order or ()) if s in counts]
    keys += [s for s in counts if s not in keys]
    return [
        {"status": s, "label": s, "count": counts[s], "share": _ratio(counts[s], total)}
        for s in keys
    ]
