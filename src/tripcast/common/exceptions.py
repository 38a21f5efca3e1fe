class TripcastError(Exception):
    """Base exception for all tripcast errors."""
    pass

class ConfigurationError(TripcastError):
    """Raised when configuration is invalid or missing."""
    pass

class InvalidModeProfile(ConfigurationError):
    """Raised when a transport mode profile has a non-positive speed or multiplier."""
    pass

class UnknownTransportMode(ConfigurationError):
    """Raised when a transport mode name is not configured."""
    pass

class RegionDataError(TripcastError):
    """Raised when region reference data fails validation at load time."""
    pass

class RoutingError(TripcastError):
    """Raised by routing providers when a route cannot be obtained."""
    pass
