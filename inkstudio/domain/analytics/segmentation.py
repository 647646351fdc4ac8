"""
Client segmentation

Classifies the clients seen in a reporting period from their full visit
history: new vs repeat, activity bucket by recency, 90-day second visit and
6/12-month retention cohorts. Everything here is pure; callers pass clients
with their appointments already ordered by start time.
"""

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ...shared.validators import add_months, diff_in_days

ACTIVE = "ACTIVE"
WARM = "WARM"
COLD = "COLD"
UNKNOWN = "UNKNOWN"

ACTIVE_MAX_DAYS = 30
WARM_MAX_DAYS = 90
SECOND_VISIT_WINDOW_DAYS = 90

RETENTION_6M_MIN_AGE_DAYS = 180
RETENTION_12M_MIN_AGE_DAYS = 365


def activity_segment(days_since_last_visit: Optional[int]) -> str:
    """ACTIVE up to 30 days, WARM up to 90, COLD beyond; UNKNOWN without visits"""
    if days_since_last_visit is None:
        return UNKNOWN
    if days_since_last_visit <= ACTIVE_MAX_DAYS:
        return ACTIVE
    if days_since_last_visit <= WARM_MAX_DAYS:
        return WARM
    return COLD


def has_second_visit_within_90_days(visits: Sequence[datetime]) -> bool:
    """True when the second-ever visit came at most 90 whole days after the first"""
    if len(visits) < 2:
        return False
    return diff_in_days(visits[1], visits[0]) <= SECOND_VISIT_WINDOW_DAYS


def returned_within_months(visits: Sequence[datetime], months: int) -> bool:
    """Any visit strictly after the first one and no later than first + `months`"""
    first = visits[0]
    horizon = add_months(first, months)
    return any(first < visit <= horizon for visit in visits)


def segment_client(client, appointments: Sequence, start: datetime, end: datetime) -> Optional[dict]:
    """
    Build the report row for one client.

    Args:
        client: Client model (id, full_name, phone, email, status, no_show_count)
        appointments: The client's whole history ordered by starts_at
        start: Period start
        end: Period end (end of day); also the reference point for recency

    Returns:
        The row, or None when the client has no visit starting inside the period
    """
    if not appointments:
        return None

    in_range = [a for a in appointments if start <= a.starts_at <= end]
    if not in_range:
        return None

    visits = [a.starts_at for a in appointments]
    first_visit, last_visit = visits[0], visits[-1]
    days_since_last_visit = diff_in_days(end, last_visit)

    return {
        "clientId": client.id,
        "fullName": client.full_name,
        "phone": client.phone,
        "email": client.email,
        "status": client.status,
        "noShowCount": client.no_show_count or 0,
        "firstVisit": first_visit.isoformat(),
        "lastVisit": last_visit.isoformat(),
        "totalVisits": len(visits),
        "visitsInRange": len(in_range),
        # Only realized visits bring money
        "revenueInRange": sum(a.price or 0 for a in in_range if a.status == "COMPLETED"),
        "isNewInRange": start <= first_visit <= end,
        "daysSinceLastVisit": days_since_last_visit,
        "activitySegment": activity_segment(days_since_last_visit),
        "hasSecondVisitWithin90Days": has_second_visit_within_90_days(visits),
    }


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0


def summarize(clients: Iterable, start: datetime, end: datetime) -> dict:
    """
    Segment every client and aggregate the period summary.

    Args:
        clients: Client models with `appointments` loaded in start-time order
        start: Period start
        end: Period end (end of day)

    Returns:
        {"summary": {...}, "items": [per-client rows]}
    """
    summary = {
        "newCount": 0,
        "newRevenue": 0,
        "repeatCount": 0,
        "repeatRevenue": 0,
        "riskCount": 0,
        "totalClientsInRange": 0,
        "repeatClientsInRange": 0,
        "repeatRate": 0,
        "newRetainedWithin90Days": 0,
        "newRetentionRate": 0,
        "activeCount": 0,
        "warmCount": 0,
        "coldCount": 0,
        "retention6m": 0,
        "retention12m": 0,
        "oneShotShare": 0,
        "fansShare": 0,
    }
    items = []
    retention = {6: [0, 0], 12: [0, 0]}  # months -> [numerator, denominator]
    one_shot = fans = 0

    for client in clients:
        appointments = list(client.appointments)
        row = segment_client(client, appointments, start, end)
        if row is None:
            continue
        items.append(row)
        summary["totalClientsInRange"] += 1

        if row["isNewInRange"]:
            summary["newCount"] += 1
            summary["newRevenue"] += row["revenueInRange"]
            if row["hasSecondVisitWithin90Days"]:
                summary["newRetainedWithin90Days"] += 1
        else:
            summary["repeatCount"] += 1
            summary["repeatRevenue"] += row["revenueInRange"]
            summary["repeatClientsInRange"] += 1

        if client.status == "RISK":
            summary["riskCount"] += 1

        segment = row["activitySegment"]
        if segment == ACTIVE:
            summary["activeCount"] += 1
        elif segment == WARM:
            summary["warmCount"] += 1
        elif segment == COLD:
            summary["coldCount"] += 1

        if row["totalVisits"] == 1:
            one_shot += 1
        elif row["totalVisits"] >= 3:
            fans += 1

        visits = [a.starts_at for a in appointments]
        client_age_days = diff_in_days(end, visits[0])
        for months, min_age in ((6, RETENTION_6M_MIN_AGE_DAYS), (12, RETENTION_12M_MIN_AGE_DAYS)):
            if client_age_days >= min_age:
                retention[months][1] += 1
                if returned_within_months(visits, months):
                    retention[months][0] += 1

    total = summary["totalClientsInRange"]
    summary["repeatRate"] = _ratio(summary["repeatClientsInRange"], total)
    summary["newRetentionRate"] = _ratio(summary["newRetainedWithin90Days"], summary["newCount"])
    summary["retention6m"] = _ratio(*retention[6])
    summary["retention12m"] = _ratio(*retention[12])
    summary["oneShotShare"] = _ratio(one_shot, total)
    summary["fansShare"] = _ratio(fans, total)

    return {"summary": summary, "items": items}
