from pathlib import Path
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from weatherrec.export import Exporter
from weatherrec.records import MemoryRecordStore, RecordService
from weatherrec.settings import UserSettings
from weatherrec.web import create_app
from weatherrec.weather import WeatherAPI
from weatherrec.weather.errors import NotFoundError, ParseError

PARIS = {
    "location": "Paris",
    "startDate": "2024-01-01",
    "endDate": "2024-01-05",
    "temperature": 14,
}


@pytest.fixture
def client(demo_settings: UserSettings, service: RecordService) -> TestClient:
    app = create_app(demo_settings, service=service, exporter=Exporter(service.store))
    return TestClient(app)


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["apiMode"] == "demo"
    assert body["timestamp"].endswith("Z")


def test_record_crud_flow(client: TestClient) -> None:
    resp = client.post("/api/weather/records", json=PARIS)
    assert resp.status_code == 201
    created = resp.json()
    record_id = created["id"]
    assert created["location"] == "Paris"
    assert created["createdAt"] == created["updatedAt"]

    assert client.get(f"/api/weather/records/{record_id}").json() == created
    assert [r["id"] for r in client.get("/api/weather/records").json()] == [record_id]

    resp = client.put(f"/api/weather/records/{record_id}", json={"temperature": 9.5})
    assert resp.status_code == 200
    assert resp.json()["temperature"] == 9.5
    assert resp.json()["location"] == "Paris"

    resp = client.delete(f"/api/weather/records/{record_id}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Record deleted successfully"}

    resp = client.get(f"/api/weather/records/{record_id}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Record not found"}


@pytest.mark.parametrize(
    "payload",
    [
        {"startDate": "2024-01-01", "endDate": "2024-01-05"},
        {"location": "Paris", "startDate": "2024-01-10", "endDate": "2024-01-05"},
        {"location": "Paris", "startDate": "not-a-date", "endDate": "2024-01-05"},
        None,
    ],
)
def test_create_invalid_record(client: TestClient, payload: dict | None) -> None:
    resp = client.post("/api/weather/records", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert client.get("/api/weather/records").json() == []


@pytest.mark.parametrize("payload", [[], 0, False, ""])
def test_update_rejects_non_object_body(client: TestClient, payload: object) -> None:
    created = client.post("/api/weather/records", json=PARIS).json()
    url = f"/api/weather/records/{created['id']}"

    resp = client.put(url, json=payload)

    assert resp.status_code == 400
    assert "error" in resp.json()
    assert client.get(url).json() == created


def test_create_rejects_non_object_body(client: TestClient) -> None:
    resp = client.post("/api/weather/records", json=[])
    assert resp.status_code == 400
    assert client.get("/api/weather/records").json() == []


def test_update_inverted_range_is_rejected(client: TestClient) -> None:
    record_id = client.post("/api/weather/records", json=PARIS).json()["id"]
    resp = client.put(f"/api/weather/records/{record_id}", json={"endDate": "2023-12-01"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Start date must be before end date"}


def test_update_and_delete_unknown_record(client: TestClient) -> None:
    assert client.put("/api/weather/records/missing", json={"temperature": 1}).status_code == 404
    assert client.delete("/api/weather/records/missing").status_code == 404


def test_export_json_empty(client: TestClient) -> None:
    resp = client.get("/api/export/json")
    assert resp.status_code == 200
    assert resp.json() == []


def test_export_csv_empty_is_refused(client: TestClient) -> None:
    resp = client.get("/api/export/csv")
    assert resp.status_code == 404
    assert resp.json() == {"error": "No records to export"}


def test_export_headers(client: TestClient) -> None:
    client.post("/api/weather/records", json=PARIS)
    resp = client.get("/api/export/csv")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.headers["content-disposition"] == "attachment; filename=weather-data.csv"
    assert resp.text.splitlines()[0].startswith("id,location")


def test_export_markdown_filename(client: TestClient) -> None:
    resp = client.get("/api/export/markdown")
    assert resp.status_code == 200
    assert resp.headers["content-disposition"] == "attachment; filename=weather-data.md"


def test_export_unknown_format(client: TestClient) -> None:
    resp = client.get("/api/export/pdf")
    assert resp.status_code == 400
    assert "Unsupported export format" in resp.json()["error"]


def test_current_weather_requires_location(client: TestClient) -> None:
    resp = client.get("/api/weather/current")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Location or coordinates required"}


def test_current_weather_demo(client: TestClient) -> None:
    resp = client.get("/api/weather/current", params={"location": "Paris"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Paris"


def test_forecast_demo(client: TestClient) -> None:
    resp = client.get("/api/weather/forecast", params={"lat": 48.85, "lon": 2.35})
    assert resp.status_code == 200
    assert len(resp.json()["list"]) == 40


def test_weather_api_error_status_is_forwarded(demo_settings: UserSettings) -> None:
    weather_api = Mock(spec=WeatherAPI)
    weather_api.current.side_effect = NotFoundError(404, "city not found")
    app = create_app(
        demo_settings,
        service=RecordService(MemoryRecordStore()),
        weather_api=weather_api,
    )

    resp = TestClient(app).get("/api/weather/current", params={"location": "Atlantis"})

    assert resp.status_code == 404
    assert resp.json() == {"error": "city not found"}


def test_unparseable_weather_response_is_bad_gateway(demo_settings: UserSettings) -> None:
    weather_api = Mock(spec=WeatherAPI)
    weather_api.forecast.side_effect = ParseError("Unexpected Forecast payload")
    app = create_app(
        demo_settings,
        service=RecordService(MemoryRecordStore()),
        weather_api=weather_api,
    )

    resp = TestClient(app).get("/api/weather/forecast", params={"location": "Paris"})

    assert resp.status_code == 502
    assert resp.json() == {"error": "Unexpected Forecast payload"}

@pytest.mark.parametrize("content", [b"{not json", b'{"weatherRecords": [\xff\xfe]}'])
def test_corrupt_store_is_server_error(tmp_path: Path, content: bytes) -> None:
    db = tmp_path / "database.json"
    db.write_bytes(content)
    app = create_app(UserSettings(api_key=None, database_path=db))

    resp = TestClient(app).get("/api/weather/records")

    assert resp.status_code == 500
    assert "error" in resp.json()
