"""
Reference data records held by the region profile store.
"""
from typing import List, Literal, Optional, Set
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PeakWindow(BaseModel):
    """
    A closed hour interval [start, end] with its congestion severity.
    """
    start: int = Field(..., ge=0, le=23, description="First peak hour (inclusive)")
    end: int = Field(..., ge=0, le=23, description="Last peak hour (inclusive)")
    severity: int = Field(..., ge=1, le=10, description="Congestion severity (1-10)")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def start_before_end(self):
        if self.start > self.end:
            raise ValueError('peak window start must not be after its end')
        return self

    def contains(self, hour: int) -> bool:
        return self.start <= hour <= self.end


class PeakHours(BaseModel):
    morning: PeakWindow
    evening: PeakWindow

    model_config = ConfigDict(frozen=True)


class AverageSpeeds(BaseModel):
    """
    Typical city speeds in km/h.
    """
    peak: float = Field(..., gt=0, description="Average speed during peak hours")
    off_peak: float = Field(..., gt=0, description="Average speed off-peak")
    night: float = Field(..., gt=0, description="Average speed at night")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def congestion_slows_peak(self):
        if not (self.peak < self.off_peak < self.night):
            raise ValueError('average speeds must satisfy peak < off_peak < night')
        return self


class CityTrafficProfile(BaseModel):
    """
    Static congestion profile of a covered city.
    """
    name: str = Field(..., min_length=1, description="Canonical city name")
    state: str = Field("", description="State or territory")
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lon: float = Field(..., ge=-180, le=180, description="Longitude")
    population: Optional[int] = Field(None, ge=0, description="Population estimate")
    aliases: List[str] = Field(default_factory=list, description="Alternate names used in addresses")
    peak_hours: PeakHours
    average_speed: AverageSpeeds
    hotspots: List[str] = Field(default_factory=list, description="Known congestion hotspots")
    major_roads: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def matches(self, name: str) -> bool:
        key = name.strip().lower()
        return key == self.name.lower() or key in (a.lower() for a in self.aliases)


class FestivalPattern(BaseModel):
    """
    A recurring festival and the months it loads the road network.
    """
    name: str
    months: Set[int] = Field(..., min_length=1, description="Months (1-12) the festival falls in")
    traffic_multiplier: float = Field(..., ge=1.0, description="Raw traffic multiplier during the festival")
    regions: List[str] = Field(default_factory=list)
    peak_days: str = ""
    affected_routes: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @field_validator('months')
    def months_in_range(cls, v):
        if any(m < 1 or m > 12 for m in v):
            raise ValueError('festival months must be within 1-12')
        return v


class ConstructionZone(BaseModel):
    """
    A roadwork site. Only active and delayed zones affect scoring.
    """
    id: str
    city: str
    location: str
    kind: str = Field("", description="Kind of works (metro, road widening, ...)")
    start_date: Optional[str] = None
    expected_end_date: Optional[str] = None
    status: Literal['active', 'delayed', 'completed']
    delay_minutes: float = Field(..., ge=0, description="Typical delay added by the works")
    alternate_routes: List[str] = Field(default_factory=list)
    affected_directions: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_active(self) -> bool:
        return self.status in ('active', 'delayed')


class InfrastructureUpdate(BaseModel):
    """
    A completed or scheduled change to the road/transit network.
    """
    id: str
    city: str
    kind: Literal[
        'metro_line', 'flyover', 'ring_road', 'expressway', 'bus_corridor',
        'road_widening', 'underpass', 'bridge', 'signal_system'
    ]
    name: str
    description: str = ""
    completion_date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    impact_areas: List[str] = Field(default_factory=list)
    traffic_impact: Literal[
        'major_improvement', 'moderate_improvement', 'minor_improvement', 'temporary_disruption'
    ]
    length_km: Optional[float] = Field(None, ge=0)
    cost_crores: Optional[float] = Field(None, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def completion_year(self) -> int:
        return int(self.completion_date[:4])


class BusRoute(BaseModel):
    id: str
    city: str
    route_number: str
    route_name: str
    operator: str = ""
    start_point: str
    end_point: str
    major_stops: List[str] = Field(default_factory=list)
    peak_frequency_minutes: int = Field(..., gt=0)
    off_peak_frequency_minutes: int = Field(..., gt=0)
    operating_hours: str = ""
    average_trip_minutes: Optional[int] = Field(None, gt=0)
    distance_km: Optional[float] = Field(None, gt=0)
    route_type: Literal['city', 'express', 'ac', 'volvo', 'metro_feeder'] = 'city'

    model_config = ConfigDict(frozen=True)


class DevelopmentZone(BaseModel):
    id: str
    city: str
    name: str
    kind: str
    description: str = ""
    estimated_daily_commuters: int = Field(0, ge=0)
    peak_traffic_times: List[str] = Field(default_factory=list)
    nearby_landmarks: List[str] = Field(default_factory=list)
    traffic_challenges: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class HistoricalTrafficRecord(BaseModel):
    """
    Monthly traffic snapshot for a city.
    """
    year: int = Field(..., ge=1900)
    month: int = Field(..., ge=1, le=12)
    city: str
    average_speed_kmh: float = Field(..., gt=0)
    congestion_index: int = Field(..., ge=0, le=100)
    average_daily_vehicles: Optional[int] = Field(None, ge=0)
    accident_count: Optional[int] = Field(None, ge=0)
    major_events: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class WeatherImpact(BaseModel):
    condition: str
    region: str
    speed_reduction_pct: float = Field(..., ge=0, le=100)
    accident_risk_multiplier: float = Field(..., ge=1.0)
    visibility: str = ""
    recommendations: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class RegionData(BaseModel):
    """
    The complete set of reference tables for one region.
    """
    region: str = "default"
    cities: List[CityTrafficProfile] = Field(default_factory=list)
    festivals: List[FestivalPattern] = Field(default_factory=list)
    construction_zones: List[ConstructionZone] = Field(default_factory=list)
    infrastructure_updates: List[InfrastructureUpdate] = Field(default_factory=list)
    bus_routes: List[BusRoute] = Field(default_factory=list)
    development_zones: List[DevelopmentZone] = Field(default_factory=list)
    historical_records: List[HistoricalTrafficRecord] = Field(default_factory=list)
    weather_impacts: List[WeatherImpact] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def unique_city_names(self):
        names = [c.name.lower() for c in self.cities]
        if len(names) != len(set(names)):
            raise ValueError('city names must be unique')
        return self
