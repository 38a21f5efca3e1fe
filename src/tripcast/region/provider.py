"""
Process-wide region store.

Requests call get_store() once and keep that reference, so a reload never
changes the data a running request sees.
"""
import logging
import threading
from pathlib import Path
from typing import Optional, Union

from .store import RegionProfileStore

logger = logging.getLogger(__name__)

# Singleton
_store: Optional[RegionProfileStore] = None
_lock = threading.Lock()


def init_store(store: RegionProfileStore) -> RegionProfileStore:
    global _store
    with _lock:
        _store = store
    return store


def get_store() -> RegionProfileStore:
    """Returns the current store, loading the default region on first use."""
    global _store
    if _store is None:
        with _lock:
            if _store is None:
                _store = RegionProfileStore.from_config()
    return _store


def reload_store(profile: str = "india",
                 config_dir: Optional[Union[str, Path]] = None,
                 data_dir: Optional[str] = None) -> RegionProfileStore:
    """
    Builds a fresh store from disk and swaps it in.
    A failed load leaves the current store in place.
    """
    global _store
    new_store = RegionProfileStore.from_config(profile, config_dir, data_dir)
    with _lock:
        _store = new_store
    logger.info(f"Region store reloaded: {new_store.summary()}")
    return new_store
