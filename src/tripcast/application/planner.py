"""
Trip planning service: wires routing, traffic scoring, departure search and
optional reasoning into one call.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from ..common.exceptions import RoutingError
from ..common.logging import log_execution_time
from ..common.utils import day_of_week
from ..estimation.departure import find_best_departures, recommend_departure
from ..estimation.domain import (
    AdjustedDuration,
    DepartureRecommendation,
    DepartureSlot,
    TrafficMultiplierResult,
    TransportModeProfile,
)
from ..estimation.duration import compute_adjusted_duration
from ..estimation.intelligence import RouteIntelligence, build_route_intelligence
from ..estimation.modes import DEFAULT_MODES, get_mode_profile
from ..estimation.reasoning import ReasoningAnnotation, ReasoningProvider, annotate_safely
from ..estimation.routing import Location, RouteEstimate, RoutingProvider, great_circle_estimate
from ..estimation.traffic import compute_multiplier
from ..region.provider import get_store
from ..region.store import RegionProfileStore

logger = logging.getLogger(__name__)


@dataclass
class TripPlan:
    """
    Estimate for leaving now plus the ranked departure horizon.
    """
    origin_city: str
    dest_city: str
    mode: str
    now: datetime
    route: RouteEstimate
    traffic: TrafficMultiplierResult
    duration: AdjustedDuration
    departures: List[DepartureSlot]
    recommendation: DepartureRecommendation
    intelligence: RouteIntelligence
    annotation: Optional[ReasoningAnnotation] = None


class TripPlanner:
    """
    Plans trips against a region store.

    When no store is given the process-wide store is used; each plan call
    reads it once so a concurrent reload cannot change data mid-request.
    """

    def __init__(self, store: Optional[RegionProfileStore] = None,
                 modes: Optional[Dict[str, TransportModeProfile]] = None,
                 routing_provider: Optional[RoutingProvider] = None,
                 reasoning_provider: Optional[ReasoningProvider] = None,
                 horizon_slots: int = 24, slot_minutes: int = 30,
                 routing_timeout_seconds: float = 10.0):
        self._store = store
        self.modes = modes if modes is not None else dict(DEFAULT_MODES)
        self.routing_provider = routing_provider
        self.reasoning_provider = reasoning_provider
        self.horizon_slots = horizon_slots
        self.slot_minutes = slot_minutes
        self.routing_timeout_seconds = routing_timeout_seconds

    @property
    def store(self) -> RegionProfileStore:
        return self._store if self._store is not None else get_store()

    def resolve_route(self, origin: Location, destination: Location, mode: str) -> RouteEstimate:
        """
        Asks the routing provider once. Any failure, or a missing provider,
        falls back to a great-circle estimate.
        """
        profile = get_mode_profile(mode, self.modes)
        if self.routing_provider is not None:
            try:
                return self.routing_provider.route(
                    origin, destination, profile.name, self.routing_timeout_seconds
                )
            except (RoutingError, TimeoutError) as e:
                logger.warning(f"Routing failed, using great-circle estimate: {e}")
        return great_circle_estimate(origin, destination, profile)

    def _city_location(self, store: RegionProfileStore, city: str) -> Location:
        profile = store.get_city_profile(city)
        if profile is None:
            raise ValueError(f"No coordinates for '{city}'; pass a location or a base distance")
        return Location(lat=profile.lat, lon=profile.lon, name=profile.name)

    @log_execution_time(logger)
    def plan(self, origin_city: str, dest_city: str, mode_name: str, now: datetime,
             base_distance_km: Optional[float] = None,
             base_duration_minutes: Optional[float] = None,
             origin: Optional[Location] = None,
             destination: Optional[Location] = None) -> TripPlan:
        """
        Plans a trip leaving around `now`.

        City names may be free text ("Koramangala, Bangalore"). Without a base
        distance the route is resolved between `origin` and `destination`,
        defaulting to the city centres.
        """
        store = self.store
        profile = get_mode_profile(mode_name, self.modes).validate()
        origin_city = store.resolve_city(origin_city) or origin_city
        dest_city = store.resolve_city(dest_city) or dest_city

        if base_distance_km is None:
            route = self.resolve_route(
                origin or self._city_location(store, origin_city),
                destination or self._city_location(store, dest_city),
                profile.name,
            )
        else:
            if base_duration_minutes is None:
                base_duration_minutes = base_distance_km / profile.average_speed_kmh * 60
            route = RouteEstimate(base_distance_km, base_duration_minutes, source="caller")

        weekday = day_of_week(now)
        traffic = compute_multiplier(origin_city, now.hour, weekday, now.month, store)
        duration = compute_adjusted_duration(
            route.distance_km, route.duration_minutes, profile, traffic.multiplier
        )
        departures = find_best_departures(
            route.distance_km, route.duration_minutes, profile, origin_city, dest_city, now,
            horizon_slots=self.horizon_slots, slot_minutes=self.slot_minutes, store=store,
        )
        intelligence = build_route_intelligence(
            origin_city, dest_city, now.hour, weekday, now.month, store
        )

        plan = TripPlan(
            origin_city=origin_city,
            dest_city=dest_city,
            mode=profile.name,
            now=now,
            route=route,
            traffic=traffic,
            duration=duration,
            departures=departures,
            recommendation=recommend_departure(departures, now),
            intelligence=intelligence,
            annotation=annotate_safely(self.reasoning_provider, intelligence),
        )
        logger.info(
            f"Planned {origin_city} -> {dest_city} by {profile.name}: "
            f"{duration.adjusted_duration_minutes:.0f} min now (x{traffic.multiplier})"
        )
        return plan
