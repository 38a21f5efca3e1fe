"""
Transport mode profiles and their configuration.
"""
import logging
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional

from omegaconf import DictConfig, OmegaConf

from .domain import TransportModeProfile
from ..common.exceptions import ConfigurationError, UnknownTransportMode

logger = logging.getLogger(__name__)

DEFAULT_MODES: Dict[str, TransportModeProfile] = {
    "driving": TransportModeProfile(
        name="driving", average_speed_kmh=55, distance_multiplier=1.0,
        traffic_affected=True, signal_wait_multiplier=1.0,
        label="Car", description="Private car or taxi",
    ),
    "two_wheeler": TransportModeProfile(
        name="two_wheeler", average_speed_kmh=55, distance_multiplier=0.95,
        traffic_affected=True, signal_wait_multiplier=0.7,
        label="Bike", description="Motorcycle or scooter, filters through traffic",
    ),
    "bus": TransportModeProfile(
        name="bus", average_speed_kmh=35, distance_multiplier=1.15,
        traffic_affected=True, signal_wait_multiplier=0.9,
        label="Bus", description="City bus including stops",
    ),
    "cycling": TransportModeProfile(
        name="cycling", average_speed_kmh=12, distance_multiplier=0.9,
        traffic_affected=False, signal_wait_multiplier=0.6,
        label="Cycle", description="Bicycle",
    ),
    "walking": TransportModeProfile(
        name="walking", average_speed_kmh=5, distance_multiplier=0.85,
        traffic_affected=False, signal_wait_multiplier=0.3,
        label="Walk", description="On foot",
    ),
}

# Names used by clients for the built-in modes
_MODE_ALIASES = {"car": "driving", "bike": "two_wheeler", "bicycle": "cycling", "walk": "walking"}

# Config keys accepted for each mode
_FIELD_ALIASES = {
    "speed_kmh": "average_speed_kmh",
    "average_speed_kmh": "average_speed_kmh",
    "distance_multiplier": "distance_multiplier",
    "traffic_affected": "traffic_affected",
    "signal_wait_multiplier": "signal_wait_multiplier",
    "label": "label",
    "description": "description",
}


def load_mode_profiles(cfg: Optional[Any] = None) -> Dict[str, TransportModeProfile]:
    """
    Builds the mode table from the `modes` config section.

    Configured modes override the defaults field by field; new names add
    modes. Profiles are validated here so a bad config fails at startup.
    """
    modes = dict(DEFAULT_MODES)
    if cfg is None:
        return modes
    if isinstance(cfg, DictConfig):
        cfg = OmegaConf.to_container(cfg, resolve=True)

    for name, fields in cfg.items():
        fields = dict(fields or {})
        unknown = set(fields) - set(_FIELD_ALIASES)
        if unknown:
            raise ConfigurationError(f"Unknown fields for mode '{name}': {sorted(unknown)}")
        overrides = {_FIELD_ALIASES[k]: v for k, v in fields.items()}

        if name in modes:
            profile = replace(modes[name], **overrides)
        else:
            missing = {"average_speed_kmh", "distance_multiplier", "traffic_affected",
                       "signal_wait_multiplier"} - set(overrides)
            if missing:
                raise ConfigurationError(f"New mode '{name}' is missing {sorted(missing)}")
            profile = TransportModeProfile(name=name, **overrides)

        modes[name] = profile.validate()

    logger.debug(f"Loaded transport modes: {list(modes)}")
    return modes


def get_mode_profile(name: str, modes: Optional[Mapping[str, TransportModeProfile]] = None) -> TransportModeProfile:
    modes = DEFAULT_MODES if modes is None else modes
    key = name.strip().lower()
    key = _MODE_ALIASES.get(key, key)
    if key not in modes:
        raise UnknownTransportMode(f"Unknown transport mode: {name}")
    return modes[key]
