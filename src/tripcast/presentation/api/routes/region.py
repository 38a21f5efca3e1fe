"""
Endpoints for the region reference data.
"""
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI, HTTPException

from ....common.exceptions import ConfigurationError, RegionDataError
from ....region.provider import get_store, reload_store

app = FastAPI()

# Where reloads read from; set by init_region_source
_source = {"profile": "india", "config_dir": None, "data_dir": None}


def init_region_source(profile: str = "india",
                       config_dir: Optional[Union[str, Path]] = None,
                       data_dir: Optional[str] = None):
    _source.update(profile=profile, config_dir=config_dir, data_dir=data_dir)


@app.get("/cities")
async def list_cities():
    """Covered cities with their peak windows."""
    store = get_store()
    return {
        "region": store.region,
        "cities": [
            {"name": c.name, "state": c.state, "peak_hours": c.peak_hours}
            for c in store.data.cities
        ],
    }


@app.get("/cities/{name}")
async def get_city(name: str):
    """Full profile of a city, by name or alias."""
    store = get_store()
    profile = store.get_city_profile(name)
    if profile is None:
        raise HTTPException(404, f"City not found: {name}")
    return {
        "profile": profile,
        "active_construction_zones": store.get_active_construction_zones(profile.name),
        "infrastructure_updates": store.get_infrastructure_updates(profile.name),
        "bus_routes": store.get_bus_routes(profile.name),
    }


@app.post("/region/reload")
def reload_region():
    """Re-reads the region data file and swaps it in."""
    try:
        store = reload_store(**_source)
    except (ConfigurationError, RegionDataError) as e:
        raise HTTPException(500, f"Reload failed: {e}")
    return {"status": "reloaded", "region": store.region, "tables": store.summary()}
