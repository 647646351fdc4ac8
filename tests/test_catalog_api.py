def test_create_service_defaults_to_other(api):
    response = api.post("/api/services", json={"name": "Touch-up", "basePrice": 40})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["category"] == "OTHER"
    assert data["isActive"] is True
    assert data["basePrice"] == 40


def test_create_service_requires_name(api):
    response = api.post("/api/services", json={"category": "TATTOO"})

    assert response.status_code == 400


def test_create_service_rejects_unknown_category(api):
    response = api.post("/api/services", json={"name": "Henna", "category": "HENNA"})

    assert response.status_code == 400
    assert "Invalid category" in response.json()["error"]


def test_list_is_sorted_and_filterable(api, make_service):
    make_service("Small tattoo", "TATTOO")
    make_service("Ear piercing", "PIERCING")
    make_service("Large tattoo", "TATTOO")

    names = [s["name"] for s in api.get("/api/services").json()["data"]]
    tattoos = [s["name"] for s in api.get("/api/services", params={"category": "TATTOO"}).json()["data"]]

    assert names == ["Ear piercing", "Large tattoo", "Small tattoo"]
    assert tattoos == ["Large tattoo", "Small tattoo"]


def test_delete_is_a_soft_delete(api, make_service):
    service = make_service()

    response = api.delete(f"/api/services/{service.id}")

    assert response.json()["data"] is True
    assert api.get("/api/services").json()["data"] == []
    hidden = api.get("/api/services", params={"includeInactive": "true"}).json()["data"]
    assert [(s["id"], s["isActive"]) for s in hidden] == [(service.id, False)]


def test_update_service(api, make_service):
    service = make_service()

    response = api.put(f"/api/services/{service.id}", json={"basePrice": 150, "defaultDurationMinutes": 90})

    data = response.json()["data"]
    assert data["basePrice"] == 150
    assert data["defaultDurationMinutes"] == 90
    assert data["category"] == "TATTOO"


def test_update_unknown_service(api):
    response = api.put("/api/services/42", json={"name": "Ghost"})

    assert response.status_code == 404
