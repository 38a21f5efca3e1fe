from .manager import ConfigManager, DEFAULT_CONFIG_DIR, to_app_config
from .models import AppConfig, EngineConfig, RegionConfig, RoutingConfig, ServerConfig, TripConfig, LoggingConfig

__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_DIR",
    "to_app_config",
    "AppConfig",
    "EngineConfig",
    "RegionConfig",
    "RoutingConfig",
    "ServerConfig",
    "LoggingConfig",
    "TripConfig",
]
