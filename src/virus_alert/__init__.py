"""Monte Carlo simulation of the Virus Alert educational board game."""

from typing import List

from .errors import (
    VirusAlertError,
    ConfigurationError,
    AggregationError,
    PopulationError
)
from .core.data_structures import (
    LocationKind,
    PlayerStatus,
    PopulationState,
    RoundCounts,
    RunOutcome
)
from .configuration import (
    Configuration,
    POPULATION_SIZE,
    ROUNDS_TOTAL,
    INITIAL_INFECTED,
    TRANSMISSION_PROBABILITY
)
from .infection_model import InfectionModel
from .core.temporal_engine import TemporalEngine, simulate_run
from .monte_carlo import (
    AggregateStatistics,
    StatisticsAccumulator,
    run_many
)
from .reporting import DISPLAY_PRECISION, format_single, format_aggregate
from .engine import DEFAULT_REPLAYS, new, message, message_many
from .config import load_config, build_configuration

__all__: List[str] = [
    # Errors
    "VirusAlertError",
    "ConfigurationError",
    "AggregationError",
    "PopulationError",
    # Data structures
    "LocationKind",
    "PlayerStatus",
    "PopulationState",
    "RoundCounts",
    "RunOutcome",
    # Configuration and model constants
    "Configuration",
    "POPULATION_SIZE",
    "ROUNDS_TOTAL",
    "INITIAL_INFECTED",
    "TRANSMISSION_PROBABILITY",
    # Simulation
    "InfectionModel",
    "TemporalEngine",
    "simulate_run",
    "AggregateStatistics",
    "StatisticsAccumulator",
    "run_many",
    # Reports
    "DISPLAY_PRECISION",
    "format_single",
    "format_aggregate",
    # Host entry points
    "DEFAULT_REPLAYS",
    "new",
    "message",
    "message_many",
    # Hydra configuration
    "load_config",
    "build_configuration",
]
__version__ = "0.1.0"
