import json

from fastapi.testclient import TestClient

from holiday_api.routes import holidays as holiday_routes
from tests.conftest import utc

BASE = "/api/holidays"


def create(client: TestClient, **body):
    response = client.post(BASE, json=body)
    assert response.status_code == 201, response.text
    return response.json()


# --- create / read ---


def test_create_returns_full_record(client: TestClient):
    data = create(client, name="Tet", startDate="2024-02-10T00:00:00.000Z", isRecurring=True)

    assert data["id"]
    assert data["name"] == "Tet"
    assert data["description"] == ""
    assert data["startDate"] == "2024-02-10T00:00:00.000Z"
    assert data["endDate"] is None
    assert data["isRecurring"] is True
    assert data["type"] == "dynamic"
    assert data["isActive"] is True
    assert data["createdAt"].endswith("Z")
    assert data["updatedAt"].endswith("Z")


def test_create_then_get_by_id(client: TestClient):
    created = create(
        client, name="Labour day", startDate="2025-05-01T00:00:00.000Z", type="static", isActive=False
    )

    response = client.get(f"{BASE}/{created['id']}")

    assert response.status_code == 200
    data = response.json()
    for key in ("name", "startDate", "type", "isActive"):
        assert data[key] == created[key]


def test_create_missing_fields(client: TestClient):
    response = client.post(BASE, json={"name": "No date"})

    assert response.status_code == 400
    assert response.json() == {"error": "Start date and name are required fields"}


def test_create_bad_date_format(client: TestClient):
    response = client.post(BASE, json={"name": "Tet", "startDate": "2025-01-29"})

    assert response.status_code == 400
    assert "YYYY-MM-DDT00:00:00.000Z" in response.json()["error"]


def test_create_rejects_non_ascii_digits(client: TestClient):
    response = client.post(BASE, json={"name": "Tet", "startDate": "٢٠٢٥-01-29T00:00:00.000Z"})

    assert response.status_code == 400
    assert "YYYY-MM-DDT00:00:00.000Z" in response.json()["error"]
    assert client.get(BASE).json() == []


def test_create_with_malformed_body(client: TestClient):
    response = client.post(BASE, content="not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_get_unknown_id(client: TestClient):
    response = client.get(f"{BASE}/6650f1b2c3d4e5f6a7b8c9d0")

    assert response.status_code == 404
    assert response.json() == {"error": "Holiday not found"}


# --- list ---


def test_list_all_sorted_by_start(client: TestClient):
    create(client, name="B", startDate="2025-03-01T00:00:00.000Z")
    create(client, name="A", startDate="2020-01-01T00:00:00.000Z", isRecurring=True)
    create(client, name="C", startDate="2025-12-01T00:00:00.000Z", isActive=False)

    response = client.get(BASE)

    assert response.status_code == 200
    assert [h["name"] for h in response.json()] == ["A", "B", "C"]


def test_list_for_year(client: TestClient):
    create(client, name="Tet", startDate="2024-02-10T00:00:00.000Z", isRecurring=True)
    create(client, name="One-off 2025", startDate="2025-06-01T00:00:00.000Z")
    create(client, name="One-off 2026", startDate="2026-01-05T00:00:00.000Z")

    response = client.get(BASE, params={"year": 2026})

    assert response.status_code == 200
    data = response.json()
    assert [h["name"] for h in data] == ["One-off 2026", "Tet"]
    assert data[1]["startDate"] == "2026-02-10T00:00:00.000Z"


def test_list_for_invalid_year(client: TestClient):
    for year in ("1899", "2101", "twenty"):
        response = client.get(BASE, params={"year": year})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid year format or out of range (1900-2100)"}


def test_upcoming(client: TestClient, monkeypatch):
    monkeypatch.setattr(holiday_routes, "utc_now", lambda: utc(2025, 12, 1))
    create(client, name="New year", startDate="2020-01-01T00:00:00.000Z", isRecurring=True)
    create(client, name="Party", startDate="2025-12-20T00:00:00.000Z")
    create(client, name="Inactive", startDate="2025-12-10T00:00:00.000Z", isActive=False)
    create(client, name="Too far", startDate="2026-06-01T00:00:00.000Z")

    response = client.get(f"{BASE}/upcoming")

    assert response.status_code == 200
    assert [h["name"] for h in response.json()] == ["Party", "New year"]


def test_in_range(client: TestClient):
    create(client, name="Inside", startDate="2025-02-15T00:00:00.000Z")
    create(client, name="Outside", startDate="2025-03-01T00:00:00.000Z")

    response = client.get(f"{BASE}/in-range", params={"start": "2025-02-01", "end": "2025-02-28"})

    assert response.status_code == 200
    assert [h["name"] for h in response.json()] == ["Inside"]


def test_in_range_parameter_errors(client: TestClient):
    missing = client.get(f"{BASE}/in-range", params={"start": "2025-02-01"})
    bad_format = client.get(f"{BASE}/in-range", params={"start": "02/01/2025", "end": "2025-02-28"})
    bad_value = client.get(f"{BASE}/in-range", params={"start": "2025-02-01", "end": "2025-13-01"})

    assert missing.status_code == 400
    assert missing.json() == {"error": "Both start and end parameters are required"}
    assert bad_format.status_code == 400
    assert bad_format.json() == {"error": "Invalid date format. Use YYYY-MM-DD format"}
    assert bad_value.status_code == 400
    assert bad_value.json() == {"error": "Invalid date values"}


# --- update / delete ---


def test_partial_update_keeps_omitted_fields(client: TestClient):
    created = create(
        client,
        name="Tet",
        description="Lunar new year",
        startDate="2024-02-10T00:00:00.000Z",
        endDate="2024-02-14T00:00:00.000Z",
        isRecurring=True,
    )

    response = client.put(
        f"{BASE}/{created['id']}", json={"name": "Tet holiday", "startDate": "2024-02-10T00:00:00.000Z"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["name"] == "Tet holiday"
    assert data["description"] == "Lunar new year"
    assert data["endDate"] == "2024-02-14T00:00:00.000Z"
    assert data["isRecurring"] is True
    assert data["createdAt"] == created["createdAt"]


def test_update_unknown_and_invalid(client: TestClient):
    created = create(client, name="Tet", startDate="2024-02-10T00:00:00.000Z")

    unknown = client.put(
        f"{BASE}/6650f1b2c3d4e5f6a7b8c9d0", json={"name": "x", "startDate": "2024-02-10T00:00:00.000Z"}
    )
    missing = client.put(f"{BASE}/{created['id']}", json={"description": "no name"})

    assert unknown.status_code == 404
    assert unknown.json() == {"error": "Holiday not found"}
    assert missing.status_code == 400
    assert missing.json() == {"error": "Start date and name are required fields"}


def test_delete(client: TestClient):
    created = create(client, name="Temp", startDate="2025-06-01T00:00:00.000Z")

    response = client.delete(f"{BASE}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Holiday deleted successfully", "id": created["id"]}
    assert client.get(f"{BASE}/{created['id']}").status_code == 404


def test_delete_unknown_id(client: TestClient):
    response = client.delete(f"{BASE}/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Holiday not found"}


# --- import ---


def test_import_static_is_idempotent(client: TestClient):
    first = client.post(f"{BASE}/import-static")
    second = client.post(f"{BASE}/import-static")

    assert first.status_code == 200
    body = first.json()
    assert body["message"] == "Static holidays import completed"
    assert body["totalAdded"] == 4
    assert body["totalSkipped"] == 0
    assert {r["status"] for r in body["results"]} == {"added"}

    again = second.json()
    assert again["totalAdded"] == 0
    assert again["totalSkipped"] == 4
    assert [r["id"] for r in again["results"]] == [r["id"] for r in body["results"]]

    listed = client.get(BASE).json()
    assert len(listed) == 4
    assert all(h["isRecurring"] and h["type"] == "static" for h in listed)


def test_import_static_with_invalid_seed_file(client: TestClient, tmp_path, monkeypatch):
    seed_file = tmp_path / "seeds.json"
    seed_file.write_text(json.dumps([{"name": "Bad day", "month": 2, "day": 30}]), encoding="utf-8")
    monkeypatch.setattr(holiday_routes, "STATIC_HOLIDAYS_FILE", seed_file)

    response = client.post(f"{BASE}/import-static")

    assert response.status_code == 500
    assert response.json() == {"error": "Static holiday seed file is invalid"}
    assert client.get(BASE).json() == []


# --- store failures ---


def test_store_failure_on_list(failing_client: TestClient):
    response = failing_client.get(BASE)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch holidays"}


def test_store_failure_on_upcoming_and_create(failing_client: TestClient):
    upcoming = failing_client.get(f"{BASE}/upcoming")
    created = failing_client.post(BASE, json={"name": "x", "startDate": "2025-01-01T00:00:00.000Z"})

    assert upcoming.status_code == 500
    assert upcoming.json() == {"error": "Failed to fetch upcoming holidays"}
    assert created.status_code == 500
    assert created.json() == {"error": "Failed to create holiday"}
