import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from tripcast.application.planner import TripPlanner
from tripcast.estimation.modes import DEFAULT_MODES
from tripcast.estimation.routing import RouteEstimate
from tripcast.presentation.api import app
from tripcast.presentation.api.routes import region, traffic, trips

CITY_YAML = """
cities:
  - name: Reloadville
    lat: 10.0
    lon: 76.0
    peak_hours:
      morning: {start: 8, end: 10, severity: 6}
      evening: {start: 17, end: 19, severity: 6}
    average_speed: {peak: 15, off_peak: 30, night: 45}
"""

@pytest.fixture
def client():
    return TestClient(app)

@pytest.fixture(autouse=True)
def setup_components(shared_store, monkeypatch):
    monkeypatch.setattr(trips, "_planner", TripPlanner())
    monkeypatch.setattr(traffic, "_modes", dict(DEFAULT_MODES))
    monkeypatch.setattr(region, "_source", dict(region._source))
    yield

# --- Modes and cities ---
def test_list_modes(client):
    response = client.get("/modes")
    assert response.status_code == 200
    names = [m["name"] for m in response.json()["modes"]]
    assert names == ["driving", "two_wheeler", "bus", "cycling", "walking"]

def test_list_cities(client):
    response = client.get("/cities")
    assert response.status_code == 200
    cities = response.json()["cities"]
    assert cities[0]["name"] == "Testville"
    assert cities[0]["peak_hours"]["morning"] == {"start": 8, "end": 10, "severity": 9}

def test_get_city_by_alias(client):
    response = client.get("/cities/test city")
    assert response.status_code == 200
    assert response.json()["profile"]["name"] == "Testville"

def test_get_unknown_city(client):
    assert client.get("/cities/atlantis").status_code == 404

# --- Traffic ---
def test_traffic_multiplier(client):
    response = client.get("/traffic/multiplier",
                          params={"city": "Testville", "hour": 9, "day_of_week": 6, "month": 3})
    assert response.status_code == 200
    body = response.json()
    assert body["multiplier"] == pytest.approx(1.33)
    assert body["factors"] == ["Morning peak hour", "Weekend - reduced traffic"]
    assert body["traffic_level"] == "moderate"

def test_traffic_multiplier_unknown_city(client):
    response = client.get("/traffic/multiplier",
                          params={"city": "Atlantis", "hour": 9, "day_of_week": 2, "month": 3})
    assert response.json()["multiplier"] == 1.2
    assert response.json()["factors"] == ["no city data"]

def test_traffic_multiplier_out_of_range(client):
    response = client.get("/traffic/multiplier",
                          params={"city": "Testville", "hour": 24, "day_of_week": 2, "month": 3})
    assert response.status_code == 422

def test_duration(client):
    payload = {"base_distance_km": 20, "base_duration_minutes": 25, "mode": "driving", "traffic_multiplier": 1.9}
    response = client.post("/duration", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["adjusted_duration_minutes"] == 58
    assert body["intersection_count"] == 16

def test_duration_unknown_mode(client):
    response = client.post("/duration", json={"base_distance_km": 5, "mode": "hovercraft"})
    assert response.status_code == 404

def test_duration_invalid_mode_profile(client, monkeypatch):
    from tripcast.estimation.domain import TransportModeProfile
    monkeypatch.setattr(traffic, "_modes", {"stuck": TransportModeProfile("stuck", 0, 1.0, True, 1.0)})
    response = client.post("/duration", json={"base_distance_km": 5, "mode": "stuck"})
    assert response.status_code == 422

def test_duration_negative_distance(client):
    response = client.post("/duration", json={"base_distance_km": -5})
    assert response.status_code == 422

# --- Departures and plans ---
def test_departures(client):
    payload = {
        "base_distance_km": 5, "base_duration_minutes": 10, "mode": "driving",
        "origin_city": "Testville", "dest_city": "Testville",
        "now": "2024-03-12T13:20:00",
    }
    response = client.post("/departures", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert len(body["slots"]) == 24
    assert body["slots"][0]["timestamp"] == "2024-03-12T13:30:00"
    assert body["recommendation"]["good_to_leave_now"] is True
    assert body["recommendation"]["leave_now"]["timestamp"] == "2024-03-12T13:30:00"

def test_departures_custom_horizon(client):
    payload = {
        "base_distance_km": 5, "origin_city": "Testville", "dest_city": "Testville",
        "now": "2024-03-12T18:20:00", "horizon_slots": 4, "slot_minutes": 60,
    }
    body = client.post("/departures", json=payload).json()
    assert [s["timestamp"][11:16] for s in body["slots"]] == ["19:00", "20:00", "21:00", "22:00"]

def test_plan_trip(client):
    payload = {
        "origin_city": "Koramangala, Test City", "dest_city": "Testville",
        "mode": "bike", "base_distance_km": 12, "now": "2024-03-12T18:20:00",
    }
    response = client.post("/trips/plan", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["origin_city"] == "Testville"
    assert body["mode"] == "two_wheeler"
    assert body["traffic"]["factors"] == ["Evening peak hour"]
    assert body["recommendation"]["good_to_leave_now"] is False
    assert body["intelligence"]["peak_hour_status"] == "in_peak"

def test_plan_trip_without_coordinates(client):
    payload = {"origin_city": "Atlantis", "dest_city": "Testville", "now": "2024-03-12T18:20:00"}
    assert client.post("/trips/plan", json=payload).status_code == 422

def test_plans_run_concurrently(store, monkeypatch):
    def slow_route(*args):
        time.sleep(0.5)
        return RouteEstimate(distance_km=10.0, duration_minutes=20.0, source="osrm")

    router = MagicMock()
    router.route.side_effect = slow_route
    monkeypatch.setattr(trips, "_planner", TripPlanner(store, routing_provider=router))
    payload = {"origin_city": "Testville", "dest_city": "Testville", "now": "2024-03-12T13:20:00"}

    with TestClient(app) as shared_client:
        start = time.perf_counter()
        with ThreadPoolExecutor(max_workers=4) as pool:
            responses = list(pool.map(lambda _: shared_client.post("/trips/plan", json=payload), range(4)))
        elapsed = time.perf_counter() - start

    assert [r.status_code for r in responses] == [200] * 4
    assert router.route.call_count == 4
    # One slow route lookup must not hold up the others
    assert elapsed < 1.5

# --- Reload ---
def test_reload_region(client, tmp_path):
    (tmp_path / "region").mkdir()
    (tmp_path / "region" / "fresh.yaml").write_text(CITY_YAML)
    region.init_region_source("fresh", tmp_path)

    response = client.post("/region/reload")
    assert response.status_code == 200
    assert response.json()["tables"]["cities"] == 1
    assert client.get("/cities/reloadville").status_code == 200
    assert client.get("/cities/testville").status_code == 404

def test_reload_failure_keeps_data(client, tmp_path):
    region.init_region_source("missing", tmp_path)
    response = client.post("/region/reload")
    assert response.status_code == 500
    assert client.get("/cities/testville").status_code == 200
