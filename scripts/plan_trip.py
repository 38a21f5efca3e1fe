import os
import sys
from datetime import datetime

import hydra
from omegaconf import DictConfig

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from tripcast.application.builder import TripPlannerBuilder
from tripcast.common.config import to_app_config
from tripcast.common.logging import setup_logger

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    cfg = to_app_config(cfg)
    setup_logger("tripcast", cfg.logging.level)

    trip = cfg.trip
    now = datetime.fromisoformat(trip.departure) if trip.departure else datetime.now()
    planner = TripPlannerBuilder(cfg).build_all()
    plan = planner.plan(trip.origin, trip.destination, trip.mode, now, base_distance_km=trip.distance_km)

    print(f"{plan.origin_city} -> {plan.dest_city} by {plan.mode} ({plan.route.distance_km} km, {plan.route.source})")
    print(f"Leaving now: {plan.duration.adjusted_duration_minutes:.0f} min, traffic x{plan.traffic.multiplier} ({plan.traffic.traffic_level.value})")
    for factor in plan.traffic.factors:
        print(f"  - {factor}")

    rec = plan.recommendation
    if rec.any_time_is_fine:
        print("Any departure time is fine for this trip.")
    else:
        if rec.leave_now is not None:
            verdict = "good time to leave" if rec.good_to_leave_now else f"+{rec.leave_now.delay_minutes:.0f} min delay"
            print(f"Next slot {rec.leave_now.timestamp:%H:%M}: {verdict}")
        if rec.next_optimal is not None:
            print(f"Best within 6h: {rec.next_optimal.timestamp:%a %H:%M} ({rec.next_optimal.estimated_duration_minutes:.0f} min)")
        if rec.absolute_best is not None:
            print(f"Best overall:   {rec.absolute_best.timestamp:%a %H:%M} ({rec.absolute_best.estimated_duration_minutes:.0f} min)")

    print("\nDepartures:")
    for slot in plan.departures:
        print(f"  {slot.timestamp:%a %H:%M}  {slot.estimated_duration_minutes:>4.0f} min  "
              f"+{slot.delay_minutes:<3.0f} {slot.traffic_level.value}")

    if plan.annotation is not None:
        print(f"\n{plan.annotation.summary}")
        for rec_text in plan.annotation.recommendations:
            print(f"  * {rec_text}")
        print(f"Departure window: {plan.annotation.optimal_departure_window}")
        print(f"History: {plan.annotation.historical_context}")

if __name__ == "__main__":
    main()
