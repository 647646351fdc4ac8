from datetime import datetime

from inkstudio.domain.inventory.service import apply_movement
from inkstudio.models import InventoryMovement


def test_apply_movement():
    assert apply_movement(5, "IN", 3) == 8
    assert apply_movement(5, "OUT", 3) == 2
    assert apply_movement(5, "ADJUST", 3) == 3


def test_create_item(api):
    response = api.post(
        "/api/inventory",
        json={"name": "Needles 3RL", "unit": "box", "category": "CONSUMABLE", "minQuantity": 2, "pricePerUnit": 12.5},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["quantity"] == 0
    assert data["minQuantity"] == 2
    assert data["isActive"] is True


def test_create_item_requires_unit(api):
    response = api.post("/api/inventory", json={"name": "Needles", "category": "CONSUMABLE"})

    assert response.status_code == 400
    assert response.json()["error"] == "name, unit and category are required"


def test_create_item_rejects_negative_quantity(api):
    response = api.post(
        "/api/inventory", json={"name": "Ink", "unit": "ml", "category": "CONSUMABLE", "quantity": -1}
    )

    assert response.status_code == 400


def test_out_movement_reduces_the_balance(api, make_item):
    item = make_item(quantity=10)

    response = api.post(
        "/api/inventory-movements", json={"itemId": item.id, "type": "OUT", "quantity": 4, "reason": "session"}
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["item"]["quantity"] == 6
    assert data["movement"]["type"] == "OUT"
    assert data["movement"]["quantity"] == 4
    assert data["movement"]["reason"] == "session"


def test_in_and_adjust(api, make_item):
    item = make_item(quantity=5)

    received = api.post("/api/inventory-movements", json={"itemId": item.id, "type": "IN", "quantity": 10})
    counted = api.post("/api/inventory-movements", json={"itemId": item.id, "type": "ADJUST", "quantity": 12})

    assert received.json()["data"]["item"]["quantity"] == 15
    assert counted.json()["data"]["item"]["quantity"] == 12


def test_insufficient_stock_changes_nothing(api, db_session, make_item):
    item = make_item(quantity=5)

    response = api.post("/api/inventory-movements", json={"itemId": item.id, "type": "OUT", "quantity": 10})

    assert response.status_code == 400
    assert response.json()["code"] == "INSUFFICIENT_STOCK"
    stored = next(i for i in api.get("/api/inventory").json()["data"] if i["id"] == item.id)
    assert stored["quantity"] == 5
    assert db_session.query(InventoryMovement).count() == 0


def test_zero_quantity_is_rejected(api, make_item):
    item = make_item(quantity=5)

    response = api.post("/api/inventory-movements", json={"itemId": item.id, "type": "IN", "quantity": 0})

    assert response.status_code == 400
    assert response.json()["error"] == "itemId, type and non-zero quantity are required"


def test_negative_quantity_is_rejected(api, make_item):
    item = make_item(quantity=5)

    response = api.post("/api/inventory-movements", json={"itemId": item.id, "type": "OUT", "quantity": -2})

    assert response.status_code == 400
    assert response.json()["error"] == "quantity must be positive"


def test_unknown_movement_type(api, make_item):
    item = make_item(quantity=5)

    response = api.post("/api/inventory-movements", json={"itemId": item.id, "type": "LOST", "quantity": 1})

    assert response.status_code == 400


def test_movement_for_unknown_item(api, db_session):
    response = api.post("/api/inventory-movements", json={"itemId": 404, "type": "IN", "quantity": 1})

    assert response.status_code == 404
    assert response.json()["error"] == "Inventory item not found"
    assert db_session.query(InventoryMovement).count() == 0


def test_low_stock_widget(api, make_item):
    make_item("Gloves", unit="pair", quantity=3, min_quantity=10)
    make_item("Film", unit="roll", quantity=1, min_quantity=2)
    make_item("Out of stock", unit="pc", quantity=0, min_quantity=5)
    make_item("Plenty", unit="pc", quantity=50, min_quantity=5)
    make_item("Retired", unit="pc", quantity=1, min_quantity=5, is_active=False)

    response = api.get("/api/inventory/low-stock")

    assert response.status_code == 200
    assert [i["name"] for i in response.json()["data"]["items"]] == ["Film", "Gloves"]


def test_deactivate_item(api, make_item):
    item = make_item()

    assert api.delete(f"/api/inventory/{item.id}").json()["data"] is True
    stored = api.get("/api/inventory").json()["data"]
    assert [(i["id"], i["isActive"]) for i in stored] == [(item.id, False)]


def test_update_item_rejects_null_unit(api, make_item):
    item = make_item()

    response = api.put(f"/api/inventory/{item.id}", json={"unit": None})

    assert response.status_code == 400


def test_list_movements_newest_first(api, make_item, make_movement):
    soap = make_item("Green soap")
    ink = make_item("Black ink")
    make_movement(soap, 2, datetime(2024, 3, 1, 10), type="IN")
    make_movement(soap, 1, datetime(2024, 3, 3, 10))
    make_movement(ink, 5, datetime(2024, 3, 2, 10), type="IN")

    page = api.get("/api/inventory-movements").json()["data"]
    soap_only = api.get("/api/inventory-movements", params={"itemId": soap.id}).json()["data"]
    early = api.get("/api/inventory-movements", params={"from": "2024-03-01", "to": "2024-03-02"}).json()["data"]

    assert page["total"] == 3
    assert [m["createdAt"] for m in page["items"]] == [
        "2024-03-03T10:00:00",
        "2024-03-02T10:00:00",
        "2024-03-01T10:00:00",
    ]
    assert page["items"][0]["item"]["name"] == "Green soap"
    assert soap_only["total"] == 2
    assert early["total"] == 2
