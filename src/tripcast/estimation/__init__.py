"""
Trip estimation: traffic multipliers, mode-adjusted durations and departure search.
"""
from .domain import (
    AdjustedDuration,
    DepartureRecommendation,
    DepartureSlot,
    TrafficLevel,
    TrafficMultiplierResult,
    TransportModeProfile,
)
from .modes import DEFAULT_MODES, get_mode_profile, load_mode_profiles
from .traffic import classify_traffic_level, compute_multiplier
from .duration import compute_adjusted_duration
from .departure import find_best_departures, recommend_departure
from .intelligence import RouteIntelligence, build_route_intelligence
from .routing import Location, RouteEstimate, RoutingProvider, great_circle_estimate, haversine_km
from .reasoning import ReasoningAnnotation, RuleBasedReasoningProvider, annotate_safely

__all__ = [
    "AdjustedDuration",
    "DepartureRecommendation",
    "DepartureSlot",
    "TrafficLevel",
    "TrafficMultiplierResult",
    "TransportModeProfile",
    "DEFAULT_MODES",
    "get_mode_profile",
    "load_mode_profiles",
    "classify_traffic_level",
    "compute_multiplier",
    "compute_adjusted_duration",
    "find_best_departures",
    "recommend_departure",
    "RouteIntelligence",
    "build_route_intelligence",
    "Location",
    "RouteEstimate",
    "RoutingProvider",
    "great_circle_estimate",
    "haversine_km",
    "ReasoningAnnotation",
    "RuleBasedReasoningProvider",
    "annotate_safely",
]
