# tests/test_reference_data.py


def test_meal_types(client):
    r = client.get("/api/cafeteria-meal-types")
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 3
    assert [m["name"] for m in body["data"]] == ["Breakfast", "Lunch", "Dinner"]


def test_facilities_only_available_and_active_type(client):
    r = client.get("/api/sports-facilities")
    assert r.status_code == 200
    body = r.json()

    # maintenance court and inactive archery type are hidden; type name then facility name
    assert [f["facility_name"] for f in body["data"]] == ["Basketball Court 1", "Tennis Court A"]
    assert body["count"] == 2

    tennis = body["data"][1]
    assert tennis["type_name"] == "Tennis"
    assert tennis["opening_time"] == "09:00:00"
    assert tennis["closing_time"] == "11:00:00"
    assert tennis["slot_duration_minutes"] == 60
    assert tennis["facility_status"] == "available"


def test_cafeteria_balance(client):
    r = client.get("/api/cafeteria-balance")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["balance"] == 125.5


def test_missing_balance_row_is_not_an_error(client, other_client):
    r = client.get("/api/sports-balance")
    assert r.status_code == 200
    body = r.json()
    assert body["data"] is None
    assert body["message"] == "No sport balance record found for this student."

    assert other_client.get("/api/cafeteria-balance").json()["data"] is None


def test_reference_data_requires_login(anon_client):
    for url in ("/api/cafeteria-meal-types", "/api/sports-facilities", "/api/cafeteria-balance"):
        assert anon_client.get(url).status_code == 401


def test_health(anon_client):
    r = anon_client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
