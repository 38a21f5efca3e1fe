"""
Routing collaborator contract and the great-circle fallback estimate.
"""
import math
from dataclasses import dataclass
from typing import Optional, Protocol

from .domain import TransportModeProfile
from ..common.utils import round_half_up

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float
    name: Optional[str] = None


@dataclass
class RouteEstimate:
    distance_km: float
    duration_minutes: float
    source: str  # provider name, or "great_circle" for the fallback


class RoutingProvider(Protocol):
    """
    Protocol for route lookups.
    Implementations raise RoutingError when no route can be obtained.
    """
    def route(self, origin: Location, destination: Location, mode: str,
              timeout_seconds: float) -> RouteEstimate:
        ...


def haversine_km(origin: Location, destination: Location) -> float:
    dlat = math.radians(destination.lat - origin.lat)
    dlon = math.radians(destination.lon - origin.lon)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(origin.lat))
        * math.cos(math.radians(destination.lat))
        * math.sin(dlon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def great_circle_estimate(origin: Location, destination: Location,
                          mode_profile: TransportModeProfile) -> RouteEstimate:
    """Straight-line distance, timed at the mode's average speed."""
    mode_profile.validate()
    distance = haversine_km(origin, destination)
    return RouteEstimate(
        distance_km=round_half_up(distance, 1),
        duration_minutes=round_half_up(distance / mode_profile.average_speed_kmh * 60),
        source="great_circle",
    )
