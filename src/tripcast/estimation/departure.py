"""
Departure-time search over a fixed horizon of evenly spaced slots.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from .domain import DepartureRecommendation, DepartureSlot, TransportModeProfile
from .duration import compute_adjusted_duration
from .traffic import classify_traffic_level, compute_multiplier
from ..common.logging import log_execution_time
from ..common.utils import day_of_week, round_half_up
from ..region.store import RegionProfileStore

logger = logging.getLogger(__name__)

LEAVE_NOW_WINDOW = timedelta(minutes=15)
NEXT_OPTIMAL_WINDOW = timedelta(hours=6)
GOOD_TO_LEAVE_MAX_DELAY = 5  # minutes


def first_slot(now: datetime, slot_minutes: int = 30) -> datetime:
    """
    The next slot boundary strictly after the start of the current slot.
    With 30-minute slots 10:00-10:29 map to 10:30 and 10:30-10:59 to 11:00.
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    minute_of_day = now.hour * 60 + now.minute
    return midnight + timedelta(minutes=(minute_of_day // slot_minutes + 1) * slot_minutes)


@log_execution_time(logger)
def find_best_departures(base_distance_km: float, base_duration_minutes: float,
                         mode_profile: TransportModeProfile,
                         origin_city: str, dest_city: str, now: datetime,
                         horizon_slots: int = 24, slot_minutes: int = 30,
                         store: Optional[RegionProfileStore] = None) -> List[DepartureSlot]:
    """
    Scores every departure slot of the horizon, in chronological order.

    Congestion is looked up for the origin city at each slot's hour, weekday
    and month. delay_minutes is measured against the fastest slot, so at
    least one slot always has zero delay.
    """
    if horizon_slots < 1:
        raise ValueError(f"horizon_slots must be at least 1, got {horizon_slots}")
    if slot_minutes < 1:
        raise ValueError(f"slot_minutes must be at least 1, got {slot_minutes}")
    if store is None:
        from ..region.provider import get_store
        store = get_store()

    start = first_slot(now, slot_minutes)
    slots = []
    for i in range(horizon_slots):
        ts = start + timedelta(minutes=i * slot_minutes)
        traffic = compute_multiplier(origin_city, ts.hour, day_of_week(ts), ts.month, store)
        adjusted = compute_adjusted_duration(
            base_distance_km, base_duration_minutes, mode_profile, traffic.multiplier
        )
        slots.append(DepartureSlot(
            timestamp=ts,
            estimated_duration_minutes=adjusted.adjusted_duration_minutes,
            delay_minutes=0,
            traffic_level=classify_traffic_level(traffic.multiplier),
            multiplier=traffic.multiplier,
            factors=traffic.factors,
        ))

    fastest = min(s.estimated_duration_minutes for s in slots)
    for slot in slots:
        slot.delay_minutes = round_half_up(slot.estimated_duration_minutes - fastest)

    logger.debug(
        f"Scored {len(slots)} departures from {origin_city} to {dest_city} "
        f"({mode_profile.name}), fastest {fastest} min"
    )
    return slots


def _least_delayed(slots: List[DepartureSlot]) -> Optional[DepartureSlot]:
    # min() keeps the first of equal keys, slots are chronological
    if not slots:
        return None
    return min(slots, key=lambda s: s.delay_minutes)


def recommend_departure(slots: List[DepartureSlot], now: datetime) -> DepartureRecommendation:
    """
    Derives the leave-now, next-optimal and absolute-best views of a horizon.
    Ties always resolve to the earliest slot.
    """
    near_now = [s for s in slots if abs(s.timestamp - now) <= LEAVE_NOW_WINDOW]
    leave_now = _least_delayed(near_now)

    soon = [s for s in slots if s.timestamp - now <= NEXT_OPTIMAL_WINDOW]
    next_optimal = _least_delayed(soon)

    absolute_best = min(slots, key=lambda s: s.estimated_duration_minutes) if slots else None

    return DepartureRecommendation(
        leave_now=leave_now,
        good_to_leave_now=leave_now is not None and leave_now.delay_minutes < GOOD_TO_LEAVE_MAX_DELAY,
        next_optimal=next_optimal,
        absolute_best=absolute_best,
        any_time_is_fine=bool(slots) and all(s.delay_minutes == 0 for s in slots),
    )
