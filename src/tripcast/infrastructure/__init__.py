"""
Adapters for external services.
"""
from .osrm import OSRMRoutingProvider

__all__ = ["OSRMRoutingProvider"]
