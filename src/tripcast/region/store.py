"""
Read-only access to the reference traffic tables of a region.
"""
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..common.config import ConfigManager
from ..common.schemas.region import (
    BusRoute,
    CityTrafficProfile,
    ConstructionZone,
    DevelopmentZone,
    FestivalPattern,
    HistoricalTrafficRecord,
    InfrastructureUpdate,
    RegionData,
    WeatherImpact,
)

logger = logging.getLogger(__name__)


def _same_city(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


class RegionProfileStore:
    """
    Immutable view over one region's reference data.

    City lookups are case-insensitive and accept aliases. Every lookup is a
    pure read: "not found" is None or an empty list, never an exception.
    """

    def __init__(self, data: RegionData):
        self._data = data
        self._by_key: Dict[str, CityTrafficProfile] = {}
        for city in data.cities:
            self._by_key[city.name.lower()] = city
            for alias in city.aliases:
                self._by_key.setdefault(alias.lower(), city)

    @classmethod
    def from_config(cls, profile: str = "india",
                    config_dir: Optional[Union[str, Path]] = None,
                    data_dir: Optional[str] = None) -> "RegionProfileStore":
        """Loads the region data file through the ConfigManager."""
        data = ConfigManager(config_dir).load_region_data(profile, data_dir)
        return cls(data)

    @property
    def region(self) -> str:
        return self._data.region

    @property
    def data(self) -> RegionData:
        return self._data

    def _canonical(self, city: Optional[str]) -> Optional[str]:
        if city is None:
            return None
        profile = self.get_city_profile(city)
        return profile.name if profile else city.strip()

    # --- Cities ---

    def get_city_profile(self, name: str) -> Optional[CityTrafficProfile]:
        if not name:
            return None
        return self._by_key.get(name.strip().lower())

    def list_cities(self) -> List[str]:
        return [c.name for c in self._data.cities]

    def resolve_city(self, location_text: str) -> Optional[str]:
        """
        Finds the covered city mentioned in a free-form location string
        such as "Koramangala, Bangalore, Karnataka".
        Names match whole words only and longer names win, so "navi mumbai"
        is preferred over "mumbai" and "Thanesar" does not match "thane".
        """
        if not location_text:
            return None
        text = location_text.lower()
        for key in sorted(self._by_key, key=len, reverse=True):
            if re.search(rf"\b{re.escape(key)}\b", text):
                return self._by_key[key].name
        return None

    # --- Congestion sources ---

    def get_active_construction_zones(self, city: Optional[str] = None) -> List[ConstructionZone]:
        city = self._canonical(city)
        return [
            z for z in self._data.construction_zones
            if z.is_active and (city is None or _same_city(z.city, city))
        ]

    def get_upcoming_festivals(self, month: int) -> List[FestivalPattern]:
        """
        Festivals falling in `month` or in the month after it.
        December looks ahead to January.
        """
        next_month = (month % 12) + 1
        return [
            f for f in self._data.festivals
            if month in f.months or next_month in f.months
        ]

    def get_infrastructure_updates(self, city: str, after_year: Optional[int] = None) -> List[InfrastructureUpdate]:
        city = self._canonical(city)
        return [
            u for u in self._data.infrastructure_updates
            if _same_city(u.city, city) and (after_year is None or u.completion_year >= after_year)
        ]

    # --- Supplementary tables ---

    def get_bus_routes(self, city: str, route_type: Optional[str] = None) -> List[BusRoute]:
        city = self._canonical(city)
        return [
            r for r in self._data.bus_routes
            if _same_city(r.city, city) and (route_type is None or r.route_type == route_type)
        ]

    def get_development_zones(self, city: str) -> List[DevelopmentZone]:
        city = self._canonical(city)
        return [z for z in self._data.development_zones if _same_city(z.city, city)]

    def get_historical_records(self, city: str, start_year: Optional[int] = None,
                               end_year: Optional[int] = None) -> List[HistoricalTrafficRecord]:
        city = self._canonical(city)
        records = [
            r for r in self._data.historical_records
            if _same_city(r.city, city)
            and (start_year is None or r.year >= start_year)
            and (end_year is None or r.year <= end_year)
        ]
        return sorted(records, key=lambda r: (r.year, r.month))

    def get_weather_impact(self, condition: str) -> Optional[WeatherImpact]:
        key = condition.strip().lower()
        if not key:
            return None
        for impact in self._data.weather_impacts:
            if key in impact.condition.lower():
                return impact
        return None

    def summary(self) -> Dict[str, int]:
        """Row counts per table."""
        return {
            "cities": len(self._data.cities),
            "festivals": len(self._data.festivals),
            "construction_zones": len(self._data.construction_zones),
            "active_construction_zones": len(self.get_active_construction_zones()),
            "infrastructure_updates": len(self._data.infrastructure_updates),
            "bus_routes": len(self._data.bus_routes),
            "development_zones": len(self._data.development_zones),
            "historical_records": len(self._data.historical_records),
            "weather_impacts": len(self._data.weather_impacts),
        }
