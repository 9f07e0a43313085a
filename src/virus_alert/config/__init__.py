from pathlib import Path
from typing import List, Optional

from hydra import compose, initialize_config_dir
from omegaconf import DictConfig, OmegaConf

from ..configuration import Configuration
from ..utils.logging import log_call
from ..utils.validation import validate_config
from .schemas import AppConfig

CONFIG_DIR = Path(__file__).resolve().parents[3] / "configs"


@log_call
def load_config(overrides: Optional[List[str]] = None) -> DictConfig:
    """Load, type-check and validate a configuration using Hydra."""

    overrides = overrides or []
    with initialize_config_dir(
        CONFIG_DIR.resolve().as_posix(), version_base=None
    ):
        cfg = compose(config_name="config", overrides=overrides)
    cfg = OmegaConf.merge(OmegaConf.structured(AppConfig), cfg)
    validate_config(cfg)
    return cfg


@log_call
def build_configuration(cfg: DictConfig) -> Configuration:
    """Turn a composed config into a validated ``Configuration``."""

    return Configuration.from_location_names(
        cfg.scenario.initial_immune,
        list(cfg.scenario.locations),
        population_size=cfg.population.population_size,
        rounds_total=cfg.simulation.rounds_total,
        initial_infected=cfg.population.initial_infected,
        transmission_probability=float(cfg.transmission.probability),
        transmission_rule=cfg.transmission.rule,
        capacity_limited=bool(cfg.simulation.capacity_limited),
    )


__all__ = ["CONFIG_DIR", "load_config", "build_configuration"]
