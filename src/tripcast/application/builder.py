from omegaconf import DictConfig
from typing import Dict, Optional

from .planner import TripPlanner
from ..common.config import ConfigManager
from ..common.exceptions import ConfigurationError
from ..estimation.domain import TransportModeProfile
from ..estimation.modes import load_mode_profiles
from ..estimation.reasoning import ReasoningProvider, RuleBasedReasoningProvider
from ..estimation.routing import RoutingProvider
from ..infrastructure.osrm import OSRMRoutingProvider
from ..region.provider import init_store
from ..region.store import RegionProfileStore


class TripPlannerBuilder:
    """
    Builds a TripPlanner from the application config.
    Centralizes component instantiation and wiring.
    """

    def __init__(self, config: DictConfig, config_manager: Optional[ConfigManager] = None):
        self.config = config
        self.config_manager = config_manager or ConfigManager()

        # Components
        self.store: Optional[RegionProfileStore] = None
        self.modes: Optional[Dict[str, TransportModeProfile]] = None
        self.routing_provider: Optional[RoutingProvider] = None
        self.reasoning_provider: Optional[ReasoningProvider] = None

    def build_store(self) -> 'TripPlannerBuilder':
        region_cfg = self.config.region
        data = self.config_manager.load_region_data(region_cfg.profile, region_cfg.data_dir)
        self.store = init_store(RegionProfileStore(data))
        return self

    def build_modes(self) -> 'TripPlannerBuilder':
        self.modes = load_mode_profiles(self.config.get('modes'))
        return self

    def build_routing(self) -> 'TripPlannerBuilder':
        routing_cfg = self.config.routing
        if routing_cfg.provider is None:
            self.routing_provider = None
        elif routing_cfg.provider == "osrm":
            self.routing_provider = OSRMRoutingProvider(base_url=routing_cfg.base_url)
        else:
            raise ConfigurationError(f"Unknown routing provider: {routing_cfg.provider}")
        return self

    def build_reasoning(self) -> 'TripPlannerBuilder':
        self.reasoning_provider = RuleBasedReasoningProvider()
        return self

    def build_planner(self) -> TripPlanner:
        engine = self.config.engine
        # The store is not pinned: the planner follows reloads of the shared store
        return TripPlanner(
            modes=self.modes,
            routing_provider=self.routing_provider,
            reasoning_provider=self.reasoning_provider,
            horizon_slots=engine.horizon_slots,
            slot_minutes=engine.slot_minutes,
            routing_timeout_seconds=engine.routing_timeout_seconds,
        )

    def build_all(self) -> TripPlanner:
        return (
            self.build_store()
            .build_modes()
            .build_routing()
            .build_reasoning()
            .build_planner()
        )
