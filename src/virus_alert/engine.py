"""
Host-facing entry points of the engine.

The engine keeps no state between calls: a host stores the
``Configuration`` returned by ``new`` and passes it back to ``message`` or
``message_many``.
"""

from typing import Optional

import numpy as np

from .configuration import Configuration
from .core.temporal_engine import simulate_run
from .monte_carlo import run_many
from .reporting import format_aggregate, format_single
from .utils.logging import log_call

# Replay count hosts use when their user gives none
DEFAULT_REPLAYS = 100


@log_call
def new(
    initial_immune: int,
    concert_hall: bool,
    bakery: bool,
    school: bool,
    pharmacy: bool,
    restaurant: bool,
    gym: bool,
    supermarket: bool,
    shopping_center: bool
) -> Configuration:
    """Validate the nine form values; raises ``ConfigurationError``."""
    return Configuration.new(initial_immune, concert_hall, bakery, school,
                             pharmacy, restaurant, gym, supermarket,
                             shopping_center)


@log_call
def message(config: Configuration, seed: Optional[int] = None) -> str:
    """Play one game and return its report, round table included."""
    outcome = simulate_run(config, rng=np.random.default_rng(seed),
                           record_history=True)
    return format_single(outcome)


@log_call
def message_many(
    config: Configuration,
    n: int,
    seed: Optional[int] = None,
    workers: int = 1
) -> str:
    """Play ``n`` games and return the summary; raises ``AggregationError``."""
    return format_aggregate(run_many(config, n, seed=seed, workers=workers))
