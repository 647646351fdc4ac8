from datetime import datetime

import pytest

MARCH = {"from": "2024-03-01", "to": "2024-03-31"}


@pytest.fixture
def studio_month(make_client, make_master, make_service, make_appointment, make_item, make_movement):
    """One client, one master and a March with every kind of appointment"""
    alice = make_client()
    max_ = make_master(weekly={1: ("09:00", "17:00")})
    tattoo = make_service("Small tattoo", "TATTOO")

    make_appointment(
        alice, max_, datetime(2024, 3, 5, 10), datetime(2024, 3, 5, 12), status="COMPLETED", price=100, service=tattoo
    )
    make_appointment(
        alice, max_, datetime(2024, 3, 6, 10), datetime(2024, 3, 6, 11), status="APPROVED", price=50, service=tattoo
    )
    make_appointment(alice, max_, datetime(2024, 3, 7, 10), datetime(2024, 3, 7, 11), status="NO_SHOW")
    make_appointment(alice, max_, datetime(2024, 3, 8, 10), datetime(2024, 3, 8, 11), status="CANCELLED")

    soap = make_item("Green soap", price_per_unit=20)
    make_movement(soap, 2, datetime(2024, 3, 5, 12), reason="session")
    make_movement(soap, 10, datetime(2024, 3, 6, 9), type="IN")
    return {"client": alice, "master": max_, "service": tattoo, "item": soap}


def test_master_utilization_for_one_monday(api, make_master, make_client, make_appointment):
    anna = make_master("Anna", weekly={1: ("09:00", "17:00")})
    make_appointment(make_client(), anna, datetime(2024, 3, 4, 10), datetime(2024, 3, 4, 11), status="APPROVED")

    response = api.get("/api/stats/master-utilization", params={"from": "2024-03-04", "to": "2024-03-04"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["range"] == {"from": "2024-03-04T00:00:00", "to": "2024-03-04T23:59:59.999000"}
    assert data["items"] == [
        {
            "masterId": anna.id,
            "masterName": "Anna",
            "appointmentsCount": 1,
            "bookedMinutes": 60,
            "availableMinutes": 480,
            "utilization": 0.125,
        }
    ]


@pytest.mark.parametrize(
    "path",
    [
        "/api/stats/appointments",
        "/api/stats/owner-dashboard",
        "/api/stats/clients-dashboard",
        "/api/stats/master-utilization",
        "/api/reports/clients",
        "/api/reports/revenue",
        "/api/reports/services",
        "/api/reports/inventory-out",
        "/api/reports/inventory-out-raw",
    ],
)
def test_every_report_needs_a_range(api, path):
    response = api.get(path, params={"to": "2024-03-31"})

    assert response.status_code == 400
    assert response.json()["error"] == "from and to are required"


def test_owner_dashboard(api, studio_month):
    data = api.get("/api/stats/owner-dashboard", params=MARCH).json()["data"]

    assert data["finance"] == {
        "totalRevenue": 100,
        "totalCompleted": 1,
        "avgCheck": 100,
        "cogsTotal": 40,
        "grossProfit": 60,
        "grossMargin": 0.6,
    }
    assert data["appointments"] == {"totalAppointments": 4, "noShowRate": 0.25, "cancelRate": 0.25}
    assert [m["masterName"] for m in data["masters"]["items"]] == ["Max Needle"]
    assert data["clients"]["summary"]["totalClientsInRange"] == 1
    # Service mix counts booked money too, headline revenue only realized money
    assert data["services"]["totalRevenue"] == 150
    assert data["services"]["totalAppointments"] == 2
    assert data["services"]["topCategoriesByRevenue"][0]["category"] == "TATTOO"


def test_appointment_stats(api, studio_month):
    data = api.get("/api/stats/appointments", params=MARCH).json()["data"]

    assert data["from"] == "2024-03-01T00:00:00"
    assert data["total"] == 4
    assert [row["status"] for row in data["byStatus"]] == ["APPROVED", "COMPLETED", "CANCELLED", "NO_SHOW"]
    assert all(row["share"] == 0.25 for row in data["byStatus"])


def test_appointment_stats_by_master(api, studio_month, make_master):
    other = make_master("Other Master")

    data = api.get("/api/stats/appointments", params={**MARCH, "masterId": other.id}).json()["data"]

    assert data["total"] == 0
    assert data["byStatus"] == []


def test_clients_dashboard(api, studio_month):
    summary = api.get("/api/stats/clients-dashboard", params=MARCH).json()["data"]["summary"]

    assert summary["totalClientsInRange"] == 1
    assert summary["newCount"] == 1
    assert summary["newRevenue"] == 100


def test_clients_report_rows(api, studio_month):
    data = api.get("/api/reports/clients", params=MARCH).json()["data"]

    assert data["summary"]["totalClientsInRange"] == 1
    row = data["items"][0]
    assert row["clientId"] == studio_month["client"].id
    assert row["visitsInRange"] == 4
    assert row["revenueInRange"] == 100
    assert row["isNewInRange"] is True


def test_revenue_report(api, studio_month):
    data = api.get("/api/reports/revenue", params=MARCH).json()["data"]

    assert data["totalRevenue"] == 100
    assert data["items"] == [
        {
            "masterId": studio_month["master"].id,
            "masterName": "Max Needle",
            "revenue": 100,
            "count": 1,
            "clientIds": [studio_month["client"].id],
        }
    ]


def test_services_report(api, studio_month):
    data = api.get("/api/reports/services", params=MARCH).json()["data"]

    assert data["filters"] == {"masterId": None, "serviceCategory": None}
    assert data["summary"] == {"totalRevenue": 150, "totalAppointments": 2}
    assert data["byService"][0]["serviceName"] == "Small tattoo"
    assert data["byCategory"] == [{"category": "TATTOO", "totalRevenue": 150, "appointmentsCount": 2}]


def test_services_report_category_filter(api, studio_month):
    piercing = api.get("/api/reports/services", params={**MARCH, "serviceCategory": "PIERCING"}).json()["data"]
    bogus = api.get("/api/reports/services", params={**MARCH, "serviceCategory": "HENNA"})

    assert piercing["summary"] == {"totalRevenue": 0, "totalAppointments": 0}
    assert bogus.status_code == 400


def test_inventory_out_reports(api, studio_month):
    by_category = api.get("/api/reports/inventory-out", params=MARCH).json()["data"]
    raw = api.get("/api/reports/inventory-out-raw", params=MARCH).json()["data"]

    assert by_category["items"] == [{"category": "CONSUMABLE", "totalQuantity": 2, "approxCost": 40}]
    assert raw["summary"] == {"totalQuantity": 2}
    assert len(raw["items"]) == 1
    row = raw["items"][0]
    assert row["itemName"] == "Green soap"
    assert row["date"] == "2024-03-05T12:00:00"
    assert row["reason"] == "session"


def test_reports_outside_the_period_are_empty(api, studio_month):
    april = {"from": "2024-04-01", "to": "2024-04-30"}

    finance = api.get("/api/stats/owner-dashboard", params=april).json()["data"]["finance"]
    clients = api.get("/api/reports/clients", params=april).json()["data"]

    assert finance["totalRevenue"] == 0
    assert finance["grossMargin"] == 0
    assert clients["items"] == []
