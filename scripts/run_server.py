import os
import sys
import hydra
import uvicorn
from omegaconf import DictConfig

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from tripcast.application.builder import TripPlannerBuilder
from tripcast.common.config import to_app_config
from tripcast.common.logging import setup_logger
from tripcast.presentation.api import app
from tripcast.presentation.api.routes import region, traffic, trips

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    cfg = to_app_config(cfg)
    logger = setup_logger("tripcast", cfg.logging.level)
    logger.info("Configuration loaded.")

    builder = TripPlannerBuilder(cfg)
    planner = builder.build_all()

    # Share components with the routes
    region.init_region_source(cfg.region.profile, builder.config_manager.config_dir, cfg.region.data_dir)
    traffic.init_modes(planner.modes)
    trips.init_planner(planner)

    logger.info(f"Starting server at http://{cfg.server.host}:{cfg.server.port}")
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port)

if __name__ == "__main__":
    main()
