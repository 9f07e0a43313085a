from omegaconf import DictConfig

from ..configuration import TRANSMISSION_RULES
from ..core.data_structures import LocationKind
from ..errors import ConfigurationError
from .logging import log_call


@log_call
def validate_config(cfg: DictConfig) -> None:
    """Simple validation for simulation configs."""

    if cfg.population.population_size <= 0:
        raise ConfigurationError("population_size must be positive")
    if cfg.population.initial_infected < 0:
        raise ConfigurationError("initial_infected must be non-negative")
    if cfg.simulation.rounds_total <= 0:
        raise ConfigurationError("rounds_total must be positive")
    if not 0 <= cfg.transmission.probability <= 1:
        raise ConfigurationError("probability must be between 0 and 1")
    if cfg.transmission.rule not in TRANSMISSION_RULES:
        raise ConfigurationError(
            f"rule must be one of {', '.join(TRANSMISSION_RULES)}")
    if not 0 <= cfg.scenario.initial_immune <= cfg.population.population_size:
        raise ConfigurationError(
            "initial_immune must be between 0 and population_size")
    for name in cfg.scenario.locations:
        LocationKind.from_name(name)
    if cfg.experiment.replays <= 0:
        raise ConfigurationError("replays must be positive")
    if cfg.experiment.workers <= 0:
        raise ConfigurationError("workers must be positive")
    if cfg.experiment.immune_step <= 0:
        raise ConfigurationError("immune_step must be positive")
