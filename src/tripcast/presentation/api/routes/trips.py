"""
Endpoints for departure search and full trip plans.
"""
from datetime import datetime
from typing import Optional

from fastapi import FastAPI
from pydantic import BaseModel, Field

from ....application.planner import TripPlanner
from ....estimation.departure import find_best_departures, recommend_departure
from ....estimation.modes import get_mode_profile
from ....estimation.routing import Location

app = FastAPI()

# Singleton
_planner: Optional[TripPlanner] = None


def init_planner(planner: TripPlanner):
    global _planner
    _planner = planner


def get_planner() -> TripPlanner:
    global _planner
    if _planner is None:
        _planner = TripPlanner()
    return _planner


class LocationModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    name: Optional[str] = None

    def to_location(self) -> Location:
        return Location(lat=self.lat, lon=self.lon, name=self.name)


class DeparturesRequest(BaseModel):
    base_distance_km: float = Field(..., ge=0)
    base_duration_minutes: float = Field(0, ge=0)
    mode: str = "driving"
    origin_city: str
    dest_city: str
    now: Optional[datetime] = None
    horizon_slots: Optional[int] = Field(None, ge=1)
    slot_minutes: Optional[int] = Field(None, ge=1)


class TripPlanRequest(BaseModel):
    """
    Body example:
    {
        "origin_city": "Koramangala, Bangalore",
        "dest_city": "Whitefield, Bengaluru",
        "mode": "two_wheeler",
        "base_distance_km": 18.5
    }
    """
    origin_city: str
    dest_city: str
    mode: str = "driving"
    now: Optional[datetime] = None
    base_distance_km: Optional[float] = Field(None, ge=0)
    base_duration_minutes: Optional[float] = Field(None, ge=0)
    origin: Optional[LocationModel] = None
    destination: Optional[LocationModel] = None


@app.post("/departures")
def best_departures(request: DeparturesRequest):
    """Ranked departure slots for the next hours plus the derived views."""
    planner = get_planner()
    now = request.now or datetime.now()
    profile = get_mode_profile(request.mode, planner.modes)
    store = planner.store
    slots = find_best_departures(
        request.base_distance_km,
        request.base_duration_minutes,
        profile,
        request.origin_city,
        request.dest_city,
        now,
        horizon_slots=request.horizon_slots or planner.horizon_slots,
        slot_minutes=request.slot_minutes or planner.slot_minutes,
        store=store,
    )
    return {
        "mode": profile.name,
        "now": now,
        "slots": slots,
        "recommendation": recommend_departure(slots, now),
    }


@app.post("/trips/plan")
def plan_trip(request: TripPlanRequest):
    """Full trip plan: estimate for now, departure horizon and route intelligence."""
    planner = get_planner()
    return planner.plan(
        request.origin_city,
        request.dest_city,
        request.mode,
        request.now or datetime.now(),
        base_distance_km=request.base_distance_km,
        base_duration_minutes=request.base_duration_minutes,
        origin=request.origin.to_location() if request.origin else None,
        destination=request.destination.to_location() if request.destination else None,
    )
