import logging
from importlib import resources
from pathlib import Path
from typing import Optional

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pydantic import ValidationError

from .models import AppConfig
from ..exceptions import ConfigurationError, RegionDataError
from ..schemas.region import RegionData

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[4] / "conf"
PACKAGED_DATA = "tripcast.data"


def to_app_config(cfg: DictConfig) -> DictConfig:
    """
    Merges a raw (e.g. hydra-composed) config onto the structured schema so that
    missing sections get their defaults and wrong types fail early.
    """
    try:
        return OmegaConf.merge(OmegaConf.structured(AppConfig), cfg)
    except OmegaConfBaseException as e:
        raise ConfigurationError(f"Invalid application config: {e}") from e


class ConfigManager:
    """Centralizes loading and validation of configuration and region data"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir is not None else DEFAULT_CONFIG_DIR

    def load_app_config(self, name: str = "config") -> DictConfig:
        """Loads the application config with validation"""
        config_path = self.config_dir / f"{name}.yaml"

        if not config_path.exists():
            raise ConfigurationError(f"Config not found: {config_path}")

        cfg = OmegaConf.load(config_path)
        required_keys = ['engine', 'region']
        for key in required_keys:
            if key not in cfg:
                raise ConfigurationError(f"Missing required config key: {key}")

        return to_app_config(cfg)

    def region_data_path(self, profile: str = "india",
                         data_dir: Optional[str] = None):
        """
        Where a region profile is read from: `data_dir` when given, else
        `<config_dir>/region` when the file exists there, else the tables
        shipped inside the package.
        """
        filename = f"{profile}.yaml"
        if data_dir:
            return Path(data_dir) / filename
        local = self.config_dir / "region" / filename
        if local.is_file():
            return local
        return resources.files(PACKAGED_DATA) / "region" / filename

    def load_region_data(self, profile: str = "india", data_dir: Optional[str] = None) -> RegionData:
        """
        Loads and validates the reference tables of a region profile.

        Raises ConfigurationError when the file is missing and RegionDataError
        when its contents do not validate.
        """
        data_path = self.region_data_path(profile, data_dir)
        if not data_path.is_file():
            raise ConfigurationError(f"Region data not found: {data_path}")

        with resources.as_file(data_path) as path:
            cfg = OmegaConf.load(path)
        if 'cities' not in cfg:
            raise RegionDataError(f"Region data {data_path} has no 'cities' table")

        raw = OmegaConf.to_container(cfg, resolve=True)
        raw.setdefault('region', profile)
        try:
            data = RegionData.model_validate(raw)
        except ValidationError as e:
            raise RegionDataError(f"Invalid region data in {data_path}: {e}") from e

        logger.info(
            f"Loaded region '{data.region}': {len(data.cities)} cities, "
            f"{len(data.festivals)} festivals, {len(data.construction_zones)} construction zones"
        )
        return data
