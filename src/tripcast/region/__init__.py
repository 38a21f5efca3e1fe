"""
Region profile store: cities, festivals, roadworks and related reference tables.
"""
from .store import RegionProfileStore
from .provider import init_store, get_store, reload_store

__all__ = ["RegionProfileStore", "init_store", "get_store", "reload_store"]
