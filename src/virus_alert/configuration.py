"""
Scenario configuration for the Virus Alert simulation.

A ``Configuration`` holds everything a run needs: how many players start
immune, which places are open, and the model constants of the board game.
It is validated once at construction and never changes afterwards, so a
single instance can be shared by any number of runs and worker processes.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

import numpy as np

from .core.data_structures import LocationKind
from .errors import ConfigurationError
from .utils.logging import log_call

# Model constants, taken from the published game where it states them.
POPULATION_SIZE = 100
ROUNDS_TOTAL = 10
INITIAL_INFECTED = 2
TRANSMISSION_PROBABILITY = 0.3
TRANSMISSION_RULES = ("any_contact", "per_infected")
DEFAULT_TRANSMISSION_RULE = "any_contact"


def _is_integer(value: object) -> bool:
    return (isinstance(value, (int, np.integer))
            and not isinstance(value, (bool, np.bool_)))


@dataclass(frozen=True)
class Configuration:
    """
    Validated, immutable description of one scenario.

    Parameters
    ----------
    initial_immune : int
        Number of players immune before round 1 (0 to ``population_size``)
    enabled_locations : frozenset of LocationKind
        Places in play. An empty set is legal: nobody ever meets.
    population_size : int, default=100
        Number of players on the board
    rounds_total : int, default=10
        Number of rounds (days) in one game
    initial_infected : int, default=2
        Patients zero seeded among the non-immune players at round 0.
        Use 0 to disable seeding.
    transmission_probability : float, default=0.3
        Per-contact chance that a susceptible player gets infected
    transmission_rule : str, default="any_contact"
        ``"any_contact"`` or ``"per_infected"``, see ``InfectionModel``
    capacity_limited : bool, default=False
        Fill places up to their board capacity instead of letting every
        player pick a place uniformly at random

    Raises
    ------
    ConfigurationError
        If any value is out of range.
    """

    initial_immune: int
    enabled_locations: FrozenSet[LocationKind] = field(
        default_factory=frozenset)
    population_size: int = POPULATION_SIZE
    rounds_total: int = ROUNDS_TOTAL
    initial_infected: int = INITIAL_INFECTED
    transmission_probability: float = TRANSMISSION_PROBABILITY
    transmission_rule: str = DEFAULT_TRANSMISSION_RULE
    capacity_limited: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "enabled_locations",
                           frozenset(self.enabled_locations))
        self._validate()

    def _validate(self) -> None:
        if not _is_integer(self.population_size) or self.population_size <= 0:
            raise ConfigurationError("population_size must be a positive integer")
        if not _is_integer(self.initial_immune):
            raise ConfigurationError("initial_immune must be an integer")
        if self.initial_immune < 0:
            raise ConfigurationError("initial_immune must be non-negative")
        if self.initial_immune > self.population_size:
            raise ConfigurationError(
                f"initial_immune ({self.initial_immune}) exceeds the "
                f"population size ({self.population_size})"
            )
        if not _is_integer(self.rounds_total) or self.rounds_total <= 0:
            raise ConfigurationError("rounds_total must be a positive integer")
        if not _is_integer(self.initial_infected) or self.initial_infected < 0:
            raise ConfigurationError(
                "initial_infected must be a non-negative integer")
        probability = self.transmission_probability
        if (isinstance(probability, (bool, np.bool_))
                or not isinstance(probability, (int, float, np.number))
                or not 0.0 <= probability <= 1.0):
            raise ConfigurationError(
                "transmission_probability must be between 0 and 1")
        if self.transmission_rule not in TRANSMISSION_RULES:
            raise ConfigurationError(
                f"transmission_rule must be one of {TRANSMISSION_RULES}")
        for location in self.enabled_locations:
            if not isinstance(location, LocationKind):
                raise ConfigurationError(
                    f"{location!r} is not a LocationKind")

    @classmethod
    @log_call
    def new(
        cls,
        initial_immune: int,
        concert_hall: bool,
        bakery: bool,
        school: bool,
        pharmacy: bool,
        restaurant: bool,
        gym: bool,
        supermarket: bool,
        shopping_center: bool,
        **constants
    ) -> "Configuration":
        """
        Build a configuration from the nine values of the game form.

        The flags follow board order; callers pass them positionally.
        Extra keyword arguments override the model constants.
        """
        flags = (concert_hall, bakery, school, pharmacy, restaurant, gym,
                 supermarket, shopping_center)
        enabled = frozenset(
            kind for kind, flag in zip(LocationKind, flags) if flag
        )
        return cls(initial_immune=initial_immune, enabled_locations=enabled,
                   **constants)

    @classmethod
    @log_call
    def from_location_names(
        cls,
        initial_immune: int,
        locations: Iterable[str],
        **constants
    ) -> "Configuration":
        """Build a configuration from snake_case place names."""
        enabled = frozenset(LocationKind.from_name(name) for name in locations)
        return cls(initial_immune=initial_immune, enabled_locations=enabled,
                   **constants)

    @property
    @log_call
    def ordered_locations(self) -> tuple:
        """Enabled places in board order."""
        return tuple(kind for kind in LocationKind
                     if kind in self.enabled_locations)

    @property
    @log_call
    def initial_susceptible(self) -> int:
        """Players who are neither immune nor seeded at round 0."""
        seeded = min(self.initial_infected,
                     self.population_size - self.initial_immune)
        return self.population_size - self.initial_immune - seeded
