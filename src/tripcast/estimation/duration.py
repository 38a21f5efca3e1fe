"""
Mode- and traffic-adjusted trip duration.
"""
import math

from .domain import AdjustedDuration, TransportModeProfile
from ..common.utils import round_half_up

INTERSECTIONS_PER_KM = 0.8
SIGNAL_WAIT_MINUTES = 1.0  # full wait at one signalled intersection
SPEED_BREAKER_SPACING_KM = 2
SPEED_BREAKER_MINUTES = 5 / 60


def compute_adjusted_duration(base_distance_km: float, base_duration_minutes: float,
                              mode_profile: TransportModeProfile,
                              traffic_multiplier: float) -> AdjustedDuration:
    """
    Converts a routed distance into a duration for the given mode.

    The duration is derived from the adjusted distance and the mode's average
    speed, so base_duration_minutes does not enter the result. Traffic only
    scales modes that share the road with motor vehicles. Signal waits and
    speed breakers are added on top of the travel time.
    """
    mode_profile.validate()
    if base_distance_km < 0:
        raise ValueError(f"base_distance_km must not be negative, got {base_distance_km}")
    if traffic_multiplier < 0:
        raise ValueError(f"traffic_multiplier must not be negative, got {traffic_multiplier}")

    distance = base_distance_km * mode_profile.distance_multiplier
    duration = distance / mode_profile.average_speed_kmh * 60

    if mode_profile.traffic_affected:
        duration *= traffic_multiplier

    intersections = math.ceil(distance * INTERSECTIONS_PER_KM)
    signal_minutes = intersections * SIGNAL_WAIT_MINUTES * mode_profile.signal_wait_multiplier
    duration += signal_minutes

    speed_breaker_minutes = (distance / SPEED_BREAKER_SPACING_KM) * SPEED_BREAKER_MINUTES
    duration += speed_breaker_minutes

    effective_speed = distance / (duration / 60) if duration > 0 else 0.0

    return AdjustedDuration(
        adjusted_distance_km=round_half_up(distance, 1),
        adjusted_duration_minutes=round_half_up(duration),
        effective_speed_kmh=round_half_up(effective_speed, 1),
        traffic_light_minutes=round_half_up(signal_minutes),
        intersection_count=intersections,
        speed_breaker_minutes=round_half_up(speed_breaker_minutes, 1),
    )
