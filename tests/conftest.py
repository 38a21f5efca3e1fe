import pytest
from tripcast.common.schemas.region import RegionData
from tripcast.estimation.modes import DEFAULT_MODES
from tripcast.region import provider
from tripcast.region.store import RegionProfileStore


def make_city(name, morning=(8, 10, 9), evening=(17, 20, 10), **overrides):
    city = {
        "name": name,
        "state": "Test State",
        "lat": 12.97,
        "lon": 77.59,
        "peak_hours": {
            "morning": {"start": morning[0], "end": morning[1], "severity": morning[2]},
            "evening": {"start": evening[0], "end": evening[1], "severity": evening[2]},
        },
        "average_speed": {"peak": 12, "off_peak": 28, "night": 45},
        "hotspots": ["Central Junction", "Ring Road", "Old Market", "Station Road", "Tech Park", "Lake Bridge"],
    }
    city.update(overrides)
    return city


@pytest.fixture
def city_factory():
    return make_city


@pytest.fixture
def simple_data():
    """One city, no festivals, no construction."""
    return RegionData.model_validate({
        "region": "test",
        "cities": [make_city("Testville", aliases=["Test City"])],
    })


@pytest.fixture
def store(simple_data):
    return RegionProfileStore(simple_data)


@pytest.fixture
def rich_data():
    return RegionData.model_validate({
        "region": "test",
        "cities": [
            make_city("Testville", aliases=["Test City"]),
            make_city("Buildtown", lat=13.0, lon=80.0),
            make_city("Quietown", morning=(9, 11, 5), evening=(18, 20, 5), lat=23.0, lon=72.5),
        ],
        "festivals": [
            {"name": "Diwali", "months": [10, 11], "traffic_multiplier": 2.5,
             "peak_days": "2-3 days around Diwali",
             "recommendations": ["Avoid market areas", "Use public transport", "Travel early"]},
            {"name": "Pongal", "months": [1], "traffic_multiplier": 2.0},
            {"name": "Christmas", "months": [12, 1], "traffic_multiplier": 2.0},
        ],
        "construction_zones": [
            {"id": "B1", "city": "Buildtown", "location": "Metro Line Site", "status": "active",
             "delay_minutes": 15, "alternate_routes": ["North Road", "Lake Road"]},
            {"id": "B2", "city": "Buildtown", "location": "Ring Road Widening", "status": "delayed",
             "delay_minutes": 20, "alternate_routes": ["Lake Road", "East Avenue"]},
            {"id": "B3", "city": "Buildtown", "location": "Old Flyover", "status": "completed",
             "delay_minutes": 0},
            {"id": "Q1", "city": "Quietown", "location": "Pipeline Works", "status": "active",
             "delay_minutes": 5},
        ],
        "infrastructure_updates": [
            {"id": "I1", "city": "Buildtown", "kind": "metro_line", "name": "Buildtown Metro",
             "completion_date": "2023-08-29", "traffic_impact": "major_improvement"},
            {"id": "I2", "city": "Buildtown", "kind": "signal_system", "name": "Adaptive Signals",
             "completion_date": "2021-01-10", "traffic_impact": "moderate_improvement"},
            {"id": "I3", "city": "Testville", "kind": "flyover", "name": "Test Flyover",
             "completion_date": "2024-02-01", "traffic_impact": "minor_improvement"},
        ],
        "bus_routes": [
            {"id": "R1", "city": "Buildtown", "route_number": "500C", "route_name": "Centre to Tech Park",
             "start_point": "Centre", "end_point": "Tech Park", "peak_frequency_minutes": 8,
             "off_peak_frequency_minutes": 15, "route_type": "city"},
            {"id": "R2", "city": "Buildtown", "route_number": "V-1", "route_name": "Airport Volvo",
             "start_point": "Centre", "end_point": "Airport", "peak_frequency_minutes": 20,
             "off_peak_frequency_minutes": 30, "route_type": "volvo"},
        ],
        "development_zones": [
            {"id": "D1", "city": "Buildtown", "name": "Tech Park", "kind": "it_park",
             "estimated_daily_commuters": 35000, "peak_traffic_times": ["08:30-10:30", "17:30-20:30"]},
            {"id": "D2", "city": "Buildtown", "name": "Finance Hub", "kind": "commercial",
             "estimated_daily_commuters": 15000},
        ],
        "historical_records": [
            {"year": 2024, "month": 6, "city": "Buildtown", "average_speed_kmh": 18, "congestion_index": 75},
            {"year": 2022, "month": 12, "city": "Buildtown", "average_speed_kmh": 16, "congestion_index": 80},
            {"year": 2023, "month": 6, "city": "Buildtown", "average_speed_kmh": 15, "congestion_index": 82},
            {"year": 2024, "month": 3, "city": "Testville", "average_speed_kmh": 22, "congestion_index": 70},
        ],
        "weather_impacts": [
            {"condition": "Heavy Monsoon Rain", "region": "Coastal", "speed_reduction_pct": 40,
             "accident_risk_multiplier": 2.5},
            {"condition": "Dense Fog", "region": "North", "speed_reduction_pct": 60,
             "accident_risk_multiplier": 4.0},
        ],
    })


@pytest.fixture
def rich_store(rich_data):
    return RegionProfileStore(rich_data)


@pytest.fixture
def driving():
    return DEFAULT_MODES["driving"]


@pytest.fixture
def walking():
    return DEFAULT_MODES["walking"]


@pytest.fixture
def shared_store(monkeypatch, store):
    """Installs `store` as the process-wide store for the test."""
    monkeypatch.setattr(provider, "_store", store)
    return store
