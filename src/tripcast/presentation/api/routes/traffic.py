"""
Endpoints for transport modes, traffic multipliers and single-trip durations.
"""
from typing import Dict, Optional

from fastapi import FastAPI, Query
from pydantic import BaseModel, Field

from ....estimation.domain import TransportModeProfile
from ....estimation.duration import compute_adjusted_duration
from ....estimation.modes import DEFAULT_MODES, get_mode_profile
from ....estimation.traffic import compute_multiplier
from ....region.provider import get_store

app = FastAPI()

# Singleton
_modes: Optional[Dict[str, TransportModeProfile]] = None


def init_modes(modes: Dict[str, TransportModeProfile]):
    global _modes
    _modes = modes


def get_modes() -> Dict[str, TransportModeProfile]:
    return _modes if _modes is not None else DEFAULT_MODES


class DurationRequest(BaseModel):
    base_distance_km: float = Field(..., ge=0)
    base_duration_minutes: float = Field(0, ge=0)
    mode: str = "driving"
    traffic_multiplier: float = Field(1.0, ge=0)


@app.get("/modes")
async def list_modes():
    """Configured transport modes."""
    return {"modes": list(get_modes().values())}


@app.get("/traffic/multiplier")
async def traffic_multiplier(
    city: str,
    hour: int = Query(..., ge=0, le=23),
    day_of_week: int = Query(..., ge=0, le=6, description="0 = Sunday"),
    month: int = Query(..., ge=1, le=12),
):
    """Congestion multiplier for a city at the given time."""
    return compute_multiplier(city, hour, day_of_week, month, get_store())


@app.post("/duration")
async def adjusted_duration(request: DurationRequest):
    """Mode- and traffic-adjusted duration of a single trip."""
    profile = get_mode_profile(request.mode, get_modes())
    return compute_adjusted_duration(
        request.base_distance_km,
        request.base_duration_minutes,
        profile,
        request.traffic_multiplier,
    )
