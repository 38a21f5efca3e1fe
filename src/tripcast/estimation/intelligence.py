"""
Route intelligence: explains the multiplier of a trip and gathers the
reference data around it (roadworks, new infrastructure, transit, history,
seasonal weather).
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .domain import TrafficMultiplierResult
from .traffic import compute_multiplier, current_average_speed, overall_rating, peak_hour_status
from ..common.schemas.region import (
    BusRoute,
    ConstructionZone,
    DevelopmentZone,
    FestivalPattern,
    InfrastructureUpdate,
)
from ..common.utils import round_half_up
from ..region.store import RegionProfileStore

logger = logging.getLogger(__name__)

DELAY_ADVICE_THRESHOLD = 1.5
MONSOON_MONTHS = (6, 7, 8, 9)
FOG_MONTHS = (11, 12, 1, 2)
FOG_PRONE_CITIES = ("delhi", "noida", "gurgaon", "lucknow")


@dataclass
class WeatherAdvisory:
    impact: str
    recommendations: List[str] = field(default_factory=list)


@dataclass
class RouteIntelligence:
    """
    Everything known about travelling from origin to destination at one moment.
    """
    origin_city: str
    dest_city: str
    traffic: TrafficMultiplierResult
    peak_hour_status: str
    overall_rating: str
    current_average_speed_kmh: float
    hotspots: List[str]
    recommendations: List[str]
    festivals: List[FestivalPattern]
    festival_advisories: List[str]
    constructions: List[ConstructionZone]
    infrastructure: List[InfrastructureUpdate]
    recent_improvements: List[InfrastructureUpdate]
    infrastructure_summary: str
    bus_routes: List[BusRoute]
    transit_advice: str
    development_zones: List[DevelopmentZone]
    development_impact: str
    historical_context: str
    weather: WeatherAdvisory


def _fmt(value: float) -> str:
    return f"{value:g}"


def historical_context(store: RegionProfileStore, city: str) -> str:
    """
    Year-over-year speed change of the latest snapshot, or the snapshot itself
    when the same month of the previous year is missing.
    """
    records = store.get_historical_records(city)
    if not records:
        return "No historical data available"

    latest = records[-1]
    previous = next(
        (r for r in records if r.year == latest.year - 1 and r.month == latest.month), None
    )
    if previous is not None:
        change = (latest.average_speed_kmh - previous.average_speed_kmh) / previous.average_speed_kmh * 100
        trend = "improved" if change > 0 else "worsened"
        return f"Traffic {trend} by {_fmt(round_half_up(abs(change), 1))}% compared to last year"
    return (
        f"Average speed in {city}: {_fmt(latest.average_speed_kmh)} km/h, "
        f"Congestion index: {latest.congestion_index}/100"
    )


def weather_advisory(month: int, origin_city: str, dest_city: str) -> WeatherAdvisory:
    if month in MONSOON_MONTHS:
        return WeatherAdvisory(
            impact="Monsoon season - expect waterlogging in low-lying areas and reduced visibility during rain.",
            recommendations=[
                "Check weather forecast before travel",
                "Avoid known waterlogging spots",
                "Allow extra travel time",
            ],
        )
    if month in FOG_MONTHS:
        cities = f"{origin_city} {dest_city}".lower()
        if any(c in cities for c in FOG_PRONE_CITIES):
            return WeatherAdvisory(
                impact="Winter fog season - morning visibility may be severely reduced. Check for fog warnings.",
                recommendations=[
                    "Avoid early morning travel (6-9 AM) during fog",
                    "Use fog lights",
                    "Check flight/train status",
                ],
            )
    return WeatherAdvisory(impact="Normal weather conditions expected.")


def _recommendations(traffic: TrafficMultiplierResult, constructions: List[ConstructionZone],
                     infrastructure: List[InfrastructureUpdate]) -> List[str]:
    recs = []
    if traffic.multiplier > DELAY_ADVICE_THRESHOLD:
        recs.append("Consider delaying travel by 1-2 hours")
        recs.append("Use public transport if available")

    if constructions:
        recs.append(f"Avoid: {', '.join(c.location for c in constructions)}")
        alternates = list(dict.fromkeys(r for c in constructions for r in c.alternate_routes))
        if alternates:
            recs.append(f"Alternate routes: {', '.join(alternates)}")

    new_routes = [i for i in infrastructure if i.traffic_impact == "major_improvement"]
    if new_routes:
        recs.append(f"Consider new routes: {', '.join(r.name for r in new_routes)}")
    return recs


def _transit_advice(bus_routes: List[BusRoute]) -> str:
    if not bus_routes:
        return "No public transit data available for this route."
    bus = bus_routes[0]
    return (
        f"Consider {bus.route_number} ({bus.route_type.upper()}) running every "
        f"{bus.peak_frequency_minutes} min during peak hours. "
        f"Route: {bus.start_point} → {bus.end_point}."
    )


def _development_impact(zones: List[DevelopmentZone]) -> str:
    if not zones:
        return "No major development zones affecting this route."
    commuters = sum(z.estimated_daily_commuters for z in zones)
    peak_times = ", ".join(zones[0].peak_traffic_times) or "office hours"
    return (
        f"{len(zones)} major development zones nearby with ~{commuters:,} daily commuters. "
        f"Peak impact during {peak_times}."
    )


def _infrastructure_summary(improvements: List[InfrastructureUpdate],
                            constructions: List[ConstructionZone]) -> str:
    summary = "No significant infrastructure changes affecting this route."
    if improvements:
        names = ", ".join(i.name for i in improvements[:2])
        summary = (
            f"{len(improvements)} recent infrastructure improvements: {names}. "
            f"These may provide faster route options."
        )
    if constructions:
        summary += f" Active construction at {', '.join(c.location for c in constructions)} - expect delays."
    return summary


def build_route_intelligence(origin_city: str, dest_city: str, hour: int, day_of_week: int,
                             month: int, store: Optional[RegionProfileStore] = None,
                             infrastructure_since: Optional[int] = None) -> RouteIntelligence:
    """
    Collects route intelligence for a trip starting at the given time.

    Congestion data comes from the origin city; the destination only
    contributes to the weather advisory.
    """
    if store is None:
        from ..region.provider import get_store
        store = get_store()

    traffic = compute_multiplier(origin_city, hour, day_of_week, month, store)
    profile = store.get_city_profile(origin_city)
    city_name = profile.name if profile else origin_city
    dest_profile = store.get_city_profile(dest_city)
    dest_name = dest_profile.name if dest_profile else dest_city

    status = peak_hour_status(profile, hour) if profile else "off_peak"
    constructions = store.get_active_construction_zones(city_name)
    infrastructure = store.get_infrastructure_updates(city_name, infrastructure_since)
    improvements = [
        i for i in infrastructure
        if i.traffic_impact in ("major_improvement", "moderate_improvement")
    ]
    festivals = store.get_upcoming_festivals(month)
    festival_advisories = []
    for f in festivals:
        festival_advisories.append(f"{f.name}: Traffic may be {_fmt(f.traffic_multiplier)}x normal. {f.peak_days}")
        festival_advisories.extend(f.recommendations[:2])
    bus_routes = store.get_bus_routes(city_name)
    development_zones = store.get_development_zones(city_name)

    intelligence = RouteIntelligence(
        origin_city=city_name,
        dest_city=dest_name,
        traffic=traffic,
        peak_hour_status=status,
        overall_rating=overall_rating(traffic.multiplier),
        current_average_speed_kmh=current_average_speed(profile, status),
        hotspots=list(profile.hotspots[:5]) if profile else [],
        recommendations=_recommendations(traffic, constructions, infrastructure),
        festivals=festivals,
        festival_advisories=festival_advisories,
        constructions=constructions,
        infrastructure=infrastructure,
        recent_improvements=improvements[:5],
        infrastructure_summary=_infrastructure_summary(improvements, constructions),
        bus_routes=bus_routes[:3],
        transit_advice=_transit_advice(bus_routes),
        development_zones=development_zones,
        development_impact=_development_impact(development_zones),
        historical_context=historical_context(store, city_name),
        weather=weather_advisory(month, city_name, dest_name),
    )
    logger.debug(f"Route intelligence {city_name} -> {dest_name}: {intelligence.overall_rating}")
    return intelligence
