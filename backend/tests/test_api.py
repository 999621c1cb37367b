import pytest
from fastapi.testclient import TestClient

from farmwatch.crud import alert_crud
from farmwatch.main import app
from farmwatch.services.alert_engine import record_critical_alerts
from fakes import make_reading


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_root_and_health(client):
    assert client.get("/").status_code == 200
    assert client.get("/api/health").json() == {"status": "ok"}


def test_current_snapshot(client):
    body = client.get("/api/sensor/current").json()

    assert set(body["reading"]) == {"temperature", "humidity", "soil_moisture", "timestamp"}
    assert set(body["status"]) == {"temperature", "humidity", "soil_moisture"}
    assert body["connection"] == {"connected": False, "last_error": ""}
    assert body["online"] is True


def test_refresh_uses_mock_data(client):
    response = client.post("/api/sensor/refresh")

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "mock"
    assert body["refreshing"] is False
    assert client.get("/api/sensor/recent").json()["count"] >= 1


def test_history_ranges(client):
    day = client.get("/api/sensor/history", params={"range": "24h"}).json()
    week = client.get("/api/sensor/history", params={"range": "7d"}).json()

    assert day["count"] == 25
    assert week["count"] == 8
    assert week["range"] == "7d"
    assert client.get("/api/sensor/history", params={"range": "1y"}).status_code == 422


def test_status_policies(client):
    assert client.get("/api/sensor/status").status_code == 200
    assert client.get("/api/sensor/status", params={"policy": "thresholds"}).status_code == 200
    assert client.get("/api/sensor/status", params={"policy": "other"}).status_code == 422


def test_sensor_settings(client):
    assert client.get("/api/settings/sensor").json()["use_mock_data"] is True

    response = client.put("/api/settings/sensor", json={"sensor_ip": "10.0.0.9", "sensor_port": "8081"})
    assert response.status_code == 200
    assert response.json()["sensor_port"] == 8081

    current = client.get("/api/settings/sensor").json()
    assert current["sensor_ip"] == "10.0.0.9"
    assert current["use_mock_data"] is True


def test_sensor_settings_rejects_bad_port(client):
    response = client.put("/api/settings/sensor", json={"sensor_port": "abc"})

    assert response.status_code == 400
    assert "sensor_port" in response.json()["detail"]


def test_threshold_settings(client):
    assert client.get("/api/settings/thresholds").json()["temp_max"] == 35.0

    response = client.put("/api/settings/thresholds", json={"temp_min": 10, "temp_max": 30})
    assert response.status_code == 200
    assert client.get("/api/settings/thresholds").json()["temp_max"] == 30.0

    assert client.put("/api/settings/thresholds", json={"humidity_min": 95}).status_code == 400


def test_network_signal(client):
    assert client.put("/api/network", json={"online": False}).json() == {"online": False}
    assert client.get("/api/network").json() == {"online": False}
    assert client.get("/api/sensor/current").json()["online"] is False
    assert client.put("/api/network", json={"online": True}).json() == {"online": True}


def test_connection_state(client):
    assert client.get("/api/sensor/connection").json() == {"connected": False, "last_error": ""}


def test_alert_lifecycle(client, db):
    record_critical_alerts(db, make_reading(temperature=40, humidity=60, soil_moisture=10))

    alerts = client.get("/api/alerts").json()
    assert alerts["count"] == 2

    alert_id = alerts["items"][0]["id"]
    acknowledged = client.post(f"/api/alerts/{alert_id}/acknowledge").json()
    assert acknowledged["acknowledged"] is True
    assert client.get("/api/alerts").json()["count"] == 1
    assert client.get("/api/alerts", params={"unacknowledged_only": False}).json()["count"] == 2

    assert client.post("/api/alerts/9999/acknowledge").status_code == 404
    assert client.delete("/api/alerts/9999").status_code == 404
    assert client.delete(f"/api/alerts/{alert_id}").json() == {"deleted": 1}
    assert client.delete("/api/alerts").json() == {"deleted": 1}
    assert alert_crud.get_unacknowledged_alerts(db) == []
