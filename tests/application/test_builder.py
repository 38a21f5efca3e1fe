import pytest
from omegaconf import OmegaConf
from tripcast.application.builder import TripPlannerBuilder
from tripcast.common.config import ConfigManager, to_app_config
from tripcast.common.exceptions import ConfigurationError
from tripcast.estimation.reasoning import RuleBasedReasoningProvider
from tripcast.infrastructure.osrm import OSRMRoutingProvider
from tripcast.region import provider

@pytest.fixture(autouse=True)
def restore_shared_store(monkeypatch):
    monkeypatch.setattr(provider, "_store", None)

def test_builder_constructs_complete_planner():
    """The builder wires a planner from the shipped config."""
    cfg = ConfigManager().load_app_config()
    builder = TripPlannerBuilder(cfg)
    planner = builder.build_all()

    assert builder.store is provider.get_store()
    assert "Bengaluru" in builder.store.list_cities()
    assert set(planner.modes) == {"driving", "two_wheeler", "bus", "cycling", "walking"}
    assert planner.routing_provider is None
    assert isinstance(planner.reasoning_provider, RuleBasedReasoningProvider)
    assert planner.horizon_slots == 24
    assert planner.store is builder.store

def test_builder_osrm_routing():
    cfg = to_app_config(OmegaConf.create({"routing": {"provider": "osrm", "base_url": "http://osrm.local"}}))
    builder = TripPlannerBuilder(cfg).build_routing()
    assert isinstance(builder.routing_provider, OSRMRoutingProvider)
    assert builder.routing_provider.base_url == "http://osrm.local"

def test_builder_unknown_routing_provider():
    cfg = to_app_config(OmegaConf.create({"routing": {"provider": "carrier-pigeon"}}))
    with pytest.raises(ConfigurationError):
        TripPlannerBuilder(cfg).build_routing()

def test_builder_engine_settings():
    cfg = to_app_config(OmegaConf.create({"engine": {"horizon_slots": 8, "slot_minutes": 15}}))
    planner = TripPlannerBuilder(cfg).build_modes().build_planner()
    assert planner.horizon_slots == 8
    assert planner.slot_minutes == 15
