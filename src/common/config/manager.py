from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pathlib import Path
from typing import Any, List, Optional

from .models import MonitoringConfig
from ..exceptions import ConfigurationError

class ConfigManager:
    """Centraliza la carga y validación de configuración"""

    def __init__(self, config_dir: Path = Path("conf")):
        self.config_dir = config_dir

    def load_monitoring_config(
        self,
        profile: str = "default",
        overrides: Optional[List[str]] = None
    ) -> DictConfig:
        """Carga configuración de monitoreo con validación"""
        config_path = self.config_dir / "monitoring" / f"{profile}.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        return self.from_container(
            OmegaConf.load(config_path),
            overrides=overrides
        )

    @staticmethod
    def from_container(data: Any = None, overrides: Optional[List[str]] = None) -> DictConfig:
        """
        Merges raw values (dict or DictConfig) over the typed schema and validates them.
        """
        schema = OmegaConf.structured(MonitoringConfig)
        try:
            cfg = OmegaConf.merge(
                schema,
                data if data is not None else {},
                OmegaConf.from_dotlist(overrides or [])
            )
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid monitoring configuration: {e}") from e

        validate_monitoring_config(cfg)
        return cfg


def validate_monitoring_config(cfg: DictConfig) -> None:
    """
    Checks cross-field constraints the structured schema cannot express.
    """
    if cfg.sampling.interval_seconds <= 0:
        raise ConfigurationError("sampling.interval_seconds must be positive")
    if cfg.sampling.analysis_timeout_seconds <= 0:
        raise ConfigurationError("sampling.analysis_timeout_seconds must be positive")

    for key in ('history_capacity', 'alert_capacity'):
        if cfg.storage[key] < 1:
            raise ConfigurationError(f"storage.{key} must be at least 1")

    rules = cfg.rules
    if not 0 <= rules.warning_risk <= rules.critical_risk <= 100:
        raise ConfigurationError(
            "rules must satisfy 0 <= warning_risk <= critical_risk <= 100"
        )
    if rules.overcrowding_people < 0:
        raise ConfigurationError("rules.overcrowding_people must be non-negative")

    if not cfg.zones:
        raise ConfigurationError("At least one zone must be configured")
    zone_ids = [zone.id for zone in cfg.zones]
    if len(set(zone_ids)) != len(zone_ids):
        raise ConfigurationError(f"Duplicate zone ids: {zone_ids}")
    if cfg.current_zone is not None and cfg.current_zone not in zone_ids:
        raise ConfigurationError(f"current_zone '{cfg.current_zone}' is not a configured zone")
