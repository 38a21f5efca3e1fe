"""
Domain entities for trip duration estimation.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from ..common.exceptions import InvalidModeProfile


class TrafficLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass(frozen=True)
class TransportModeProfile:
    """
    How a transport mode converts distance into time.
    """
    name: str
    average_speed_kmh: float
    distance_multiplier: float  # route detour relative to the driving route
    traffic_affected: bool
    signal_wait_multiplier: float  # share of a full signal cycle actually waited
    label: str = ""
    description: str = ""

    def validate(self) -> "TransportModeProfile":
        if self.average_speed_kmh <= 0:
            raise InvalidModeProfile(
                f"Mode '{self.name}' has non-positive average speed {self.average_speed_kmh}"
            )
        if self.distance_multiplier <= 0 or self.signal_wait_multiplier <= 0:
            raise InvalidModeProfile(f"Mode '{self.name}' has a non-positive multiplier")
        return self


@dataclass
class TrafficMultiplierResult:
    multiplier: float
    factors: List[str] = field(default_factory=list)  # in order of application
    traffic_level: TrafficLevel = TrafficLevel.LOW


@dataclass
class AdjustedDuration:
    """
    Mode- and traffic-adjusted estimate of a single trip.
    """
    adjusted_distance_km: float
    adjusted_duration_minutes: float
    effective_speed_kmh: float
    traffic_light_minutes: float
    intersection_count: int
    speed_breaker_minutes: float


@dataclass
class DepartureSlot:
    timestamp: datetime
    estimated_duration_minutes: float
    delay_minutes: float  # relative to the best slot of the horizon
    traffic_level: TrafficLevel
    multiplier: float
    factors: List[str] = field(default_factory=list)


@dataclass
class DepartureRecommendation:
    """
    Views derived from a departure horizon.
    """
    leave_now: Optional[DepartureSlot]
    good_to_leave_now: bool
    next_optimal: Optional[DepartureSlot]
    absolute_best: Optional[DepartureSlot]
    any_time_is_fine: bool
