"""
Traffic multiplier calculation for a city at a given time.
"""
import logging
from typing import Optional

from .domain import TrafficLevel, TrafficMultiplierResult
from ..common.schemas.region import CityTrafficProfile
from ..common.utils import is_weekend, round_half_up
from ..region.store import RegionProfileStore

logger = logging.getLogger(__name__)

UNKNOWN_CITY_MULTIPLIER = 1.2
NIGHT_FACTOR = 0.6
WEEKEND_FACTOR = 0.7
FESTIVAL_WEIGHT = 0.3
CONSTRUCTION_FACTOR = 1.15
CONSTRUCTION_DELAY_THRESHOLD = 10  # minutes
DEFAULT_CITY_SPEED_KMH = 25

HIGH_TRAFFIC_THRESHOLD = 1.6
MODERATE_TRAFFIC_THRESHOLD = 1.2


def _check_time(hour: int, day_of_week: int, month: int):
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be within 0-23, got {hour}")
    if not 0 <= day_of_week <= 6:
        raise ValueError(f"day_of_week must be within 0-6, got {day_of_week}")
    if not 1 <= month <= 12:
        raise ValueError(f"month must be within 1-12, got {month}")


def is_night(hour: int) -> bool:
    return hour >= 22 or hour <= 5


def classify_traffic_level(multiplier: float) -> TrafficLevel:
    if multiplier >= HIGH_TRAFFIC_THRESHOLD:
        return TrafficLevel.HIGH
    if multiplier >= MODERATE_TRAFFIC_THRESHOLD:
        return TrafficLevel.MODERATE
    return TrafficLevel.LOW


def compute_multiplier(city: str, hour: int, day_of_week: int, month: int,
                       store: Optional[RegionProfileStore] = None) -> TrafficMultiplierResult:
    """
    Congestion multiplier for travelling in `city` at the given time.

    Factors are applied in a fixed order (peak or night, weekend, festivals,
    construction) and each one that applies is named in `factors`.
    day_of_week uses 0 = Sunday. Cities without a profile get a neutral
    1.2 with the single factor "no city data".
    """
    _check_time(hour, day_of_week, month)
    if store is None:
        from ..region.provider import get_store
        store = get_store()

    profile = store.get_city_profile(city)
    if profile is None:
        logger.info(f"No traffic profile for '{city}', using neutral multiplier")
        return TrafficMultiplierResult(
            multiplier=UNKNOWN_CITY_MULTIPLIER,
            factors=["no city data"],
            traffic_level=classify_traffic_level(UNKNOWN_CITY_MULTIPLIER),
        )

    factor = 1.0
    factors = []

    morning = profile.peak_hours.morning
    evening = profile.peak_hours.evening
    if morning.contains(hour):
        factor *= 1 + morning.severity / 10
        factors.append("Morning peak hour")
    elif evening.contains(hour):
        factor *= 1 + evening.severity / 10
        factors.append("Evening peak hour")
    elif is_night(hour):
        factor *= NIGHT_FACTOR
        factors.append("Night - light traffic")

    if is_weekend(day_of_week):
        factor *= WEEKEND_FACTOR
        factors.append("Weekend - reduced traffic")

    festivals = store.get_upcoming_festivals(month)
    if festivals:
        avg = sum(f.traffic_multiplier for f in festivals) / len(festivals)
        factor *= 1 + (avg - 1) * FESTIVAL_WEIGHT
        factors.append(f"Festival season: {', '.join(f.name for f in festivals)}")

    zones = store.get_active_construction_zones(profile.name)
    if zones:
        avg_delay = sum(z.delay_minutes for z in zones) / len(zones)
        if avg_delay > CONSTRUCTION_DELAY_THRESHOLD:
            factor *= CONSTRUCTION_FACTOR
            factors.append(f"Active construction: {', '.join(z.location for z in zones)}")

    multiplier = round_half_up(factor, 2)
    return TrafficMultiplierResult(
        multiplier=multiplier,
        factors=factors,
        traffic_level=classify_traffic_level(multiplier),
    )


def peak_hour_status(profile: CityTrafficProfile, hour: int) -> str:
    """
    One of in_peak, approaching_peak (the hour before a window), night or off_peak.
    """
    morning = profile.peak_hours.morning
    evening = profile.peak_hours.evening
    if morning.contains(hour) or evening.contains(hour):
        return "in_peak"
    if hour == morning.start - 1 or hour == evening.start - 1:
        return "approaching_peak"
    if is_night(hour):
        return "night"
    return "off_peak"


def overall_rating(multiplier: float) -> str:
    if multiplier >= 2.0:
        return "avoid"
    if multiplier >= 1.6:
        return "poor"
    if multiplier >= 1.3:
        return "moderate"
    if multiplier <= 0.9:
        return "excellent"
    return "good"


def current_average_speed(profile: Optional[CityTrafficProfile], status: str) -> float:
    """City speed that matches the peak status, 25 km/h for unknown cities."""
    if profile is None:
        return DEFAULT_CITY_SPEED_KMH
    if status == "in_peak":
        return profile.average_speed.peak
    if status == "night":
        return profile.average_speed.night
    return profile.average_speed.off_peak
