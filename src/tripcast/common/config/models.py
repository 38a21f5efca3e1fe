from dataclasses import dataclass, field
from typing import Optional, Dict, Any

@dataclass
class EngineConfig:
    horizon_slots: int = 24
    slot_minutes: int = 30
    routing_timeout_seconds: float = 10.0

@dataclass
class RegionConfig:
    profile: str = "india"
    data_dir: Optional[str] = None  # defaults to <config_dir>/region, then the packaged tables

@dataclass
class RoutingConfig:
    provider: Optional[str] = None  # "osrm" or null for great-circle estimates
    base_url: str = "https://router.project-osrm.org"

@dataclass
class TripConfig:
    origin: str = "Bengaluru"
    destination: str = "Bengaluru"
    mode: str = "driving"
    distance_km: Optional[float] = None
    departure: Optional[str] = None  # ISO timestamp, defaults to now

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000

@dataclass
class LoggingConfig:
    level: str = "INFO"

@dataclass
class AppConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    region: RegionConfig = field(default_factory=RegionConfig)
    routing: RoutingConfig = field(default_factory=RoutingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    trip: TripConfig = field(default_factory=TripConfig)
    modes: Dict[str, Any] = field(default_factory=dict) # mode name -> profile fields
