from datetime import datetime


def test_create_client(api):
    response = api.post("/api/clients", json={"fullName": "  Alice Ink ", "phone": "+100000001"})

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["error"] is None
    assert body["data"]["fullName"] == "Alice Ink"
    assert body["data"]["status"] == "REGULAR"
    assert body["data"]["noShowCount"] == 0
    assert body["data"]["isBlocked"] is False


def test_create_client_requires_phone(api):
    response = api.post("/api/clients", json={"fullName": "Alice Ink"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"


def test_create_client_rejects_blank_name(api):
    response = api.post("/api/clients", json={"fullName": "   ", "phone": "+1"})

    assert response.status_code == 400


def test_create_client_rejects_unknown_status(api):
    response = api.post("/api/clients", json={"fullName": "Alice", "phone": "+1", "status": "GOLD"})

    assert response.status_code == 400
    assert "Invalid status" in response.json()["error"]


def test_create_client_rejects_bad_birth_date(api):
    response = api.post("/api/clients", json={"fullName": "Alice", "phone": "+1", "birthDate": "someday"})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_DATE"


def test_partial_update_keeps_other_fields(api, make_client):
    alice = make_client(email="alice@example.com")

    response = api.put(f"/api/clients/{alice.id}", json={"status": "VIP", "notes": None})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "VIP"
    assert data["notes"] is None
    assert data["email"] == "alice@example.com"
    assert data["phone"] == "+100000001"


def test_update_rejects_null_required_field(api, make_client):
    alice = make_client()

    response = api.put(f"/api/clients/{alice.id}", json={"phone": None})

    assert response.status_code == 400
    assert response.json()["error"] == "phone cannot be null"


def test_get_unknown_client(api):
    response = api.get("/api/clients/999")

    assert response.status_code == 404
    assert response.json() == {"success": False, "data": None, "error": "Client not found", "code": "NOT_FOUND"}


def test_list_clients(api, make_client):
    make_client("Alice Ink")
    make_client("Bob Ink", phone="+100000002")

    response = api.get("/api/clients")

    assert response.status_code == 200
    assert {c["fullName"] for c in response.json()["data"]} == {"Alice Ink", "Bob Ink"}


def test_delete_client_without_history(api, make_client):
    alice = make_client()

    response = api.delete(f"/api/clients/{alice.id}")

    assert response.status_code == 200
    assert response.json()["data"] is True
    assert api.get(f"/api/clients/{alice.id}").status_code == 404


def test_delete_client_with_appointments_is_refused(api, make_client, make_master, make_appointment):
    alice = make_client()
    make_appointment(alice, make_master(), datetime(2024, 3, 4, 10), datetime(2024, 3, 4, 11))

    response = api.delete(f"/api/clients/{alice.id}")

    assert response.status_code == 400
    assert response.json()["code"] == "HAS_APPOINTMENTS"


def test_problem_clients_are_sorted_by_no_shows(api, make_client):
    make_client("Reliable", phone="+1", no_show_count=0)
    make_client("Sometimes", phone="+2", no_show_count=1)
    make_client("Never shows", phone="+3", no_show_count=4)

    response = api.get("/api/clients/problem", params={"minNoShow": 1})

    assert [c["fullName"] for c in response.json()["data"]] == ["Never shows", "Sometimes"]
