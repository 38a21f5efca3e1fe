import pytest
from tripcast.estimation.intelligence import build_route_intelligence, historical_context, weather_advisory

TUESDAY = 2


@pytest.fixture
def buildtown_evening(rich_store):
    return build_route_intelligence("Buildtown", "Testville", 18, TUESDAY, 3, rich_store)


def test_rating_and_status(buildtown_evening):
    assert buildtown_evening.traffic.multiplier == pytest.approx(2.3)
    assert buildtown_evening.overall_rating == "avoid"
    assert buildtown_evening.peak_hour_status == "in_peak"
    assert buildtown_evening.current_average_speed_kmh == 12

def test_recommendations(buildtown_evening):
    assert buildtown_evening.recommendations == [
        "Consider delaying travel by 1-2 hours",
        "Use public transport if available",
        "Avoid: Metro Line Site, Ring Road Widening",
        "Alternate routes: North Road, Lake Road, East Avenue",
        "Consider new routes: Buildtown Metro",
    ]

def test_no_delay_advice_off_peak(rich_store):
    intel = build_route_intelligence("Buildtown", "Testville", 13, TUESDAY, 3, rich_store)
    assert "Consider delaying travel by 1-2 hours" not in intel.recommendations
    assert intel.overall_rating == "good"
    assert intel.peak_hour_status == "off_peak"

def test_infrastructure(buildtown_evening):
    assert [i.name for i in buildtown_evening.recent_improvements] == ["Buildtown Metro", "Adaptive Signals"]
    assert buildtown_evening.infrastructure_summary.startswith("2 recent infrastructure improvements")
    assert buildtown_evening.infrastructure_summary.endswith(
        "Active construction at Metro Line Site, Ring Road Widening - expect delays."
    )

def test_infrastructure_since_year(rich_store):
    intel = build_route_intelligence("Buildtown", "Testville", 13, TUESDAY, 3, rich_store,
                                     infrastructure_since=2022)
    assert [i.name for i in intel.infrastructure] == ["Buildtown Metro"]

def test_transit_and_development(buildtown_evening):
    assert buildtown_evening.transit_advice.startswith("Consider 500C (CITY) running every 8 min")
    assert buildtown_evening.development_impact == (
        "2 major development zones nearby with ~50,000 daily commuters. "
        "Peak impact during 08:30-10:30, 17:30-20:30."
    )

def test_hotspots_capped(buildtown_evening):
    assert len(buildtown_evening.hotspots) == 5

def test_festival_advisories(rich_store):
    intel = build_route_intelligence("Testville", "Buildtown", 13, TUESDAY, 10, rich_store)
    assert intel.festival_advisories == [
        "Diwali: Traffic may be 2.5x normal. 2-3 days around Diwali",
        "Avoid market areas",
        "Use public transport",
    ]

def test_unknown_origin(rich_store):
    intel = build_route_intelligence("Atlantis", "Testville", 9, TUESDAY, 3, rich_store)
    assert intel.traffic.factors == ["no city data"]
    assert intel.peak_hour_status == "off_peak"
    assert intel.current_average_speed_kmh == 25
    assert intel.hotspots == []
    assert intel.historical_context == "No historical data available"
    assert intel.transit_advice == "No public transit data available for this route."

# --- Historical context ---
def test_year_over_year_change(rich_store):
    assert historical_context(rich_store, "Buildtown") == "Traffic improved by 20% compared to last year"

def test_latest_snapshot_without_previous_year(rich_store):
    assert historical_context(rich_store, "Testville") == (
        "Average speed in Testville: 22 km/h, Congestion index: 70/100"
    )

# --- Weather ---
@pytest.mark.parametrize("month", [6, 7, 8, 9])
def test_monsoon(month):
    assert weather_advisory(month, "Mumbai", "Pune").impact.startswith("Monsoon season")

def test_fog_in_northern_cities():
    advisory = weather_advisory(12, "Mumbai", "Delhi")
    assert advisory.impact.startswith("Winter fog season")
    assert "Use fog lights" in advisory.recommendations

def test_no_fog_elsewhere():
    advisory = weather_advisory(1, "Chennai", "Bengaluru")
    assert advisory.impact == "Normal weather conditions expected."
    assert advisory.recommendations == []
