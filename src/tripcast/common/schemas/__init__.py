from .region import (
    PeakWindow, PeakHours, AverageSpeeds, CityTrafficProfile,
    FestivalPattern, ConstructionZone, InfrastructureUpdate,
    BusRoute, DevelopmentZone, HistoricalTrafficRecord, WeatherImpact,
    RegionData,
)

__all__ = [
    "PeakWindow",
    "PeakHours",
    "AverageSpeeds",
    "CityTrafficProfile",
    "FestivalPattern",
    "ConstructionZone",
    "InfrastructureUpdate",
    "BusRoute",
    "DevelopmentZone",
    "HistoricalTrafficRecord",
    "WeatherImpact",
    "RegionData",
]
