from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Tuple

import numpy as np

from ..errors import ConfigurationError, PopulationError
from ..utils.logging import log_call

if TYPE_CHECKING:
    from ..configuration import Configuration


class PlayerStatus(IntEnum):
    """Health status of one player, stored as int8 codes in arrays."""

    SUSCEPTIBLE = 0
    INFECTED = 1
    IMMUNE = 2


class LocationKind(Enum):
    """The eight public places of the board, in board order.

    Each value is ``(display name, board capacity)``; capacities are the
    number of seats printed on the board for that place.
    """

    CONCERT_HALL = ("Concert Hall", 20)
    BAKERY = ("Bakery", 4)
    SCHOOL = ("School", 16)
    PHARMACY = ("Pharmacy", 4)
    RESTAURANT = ("Restaurant", 12)
    GYM = ("Gym", 8)
    SUPERMARKET = ("Supermarket", 4)
    SHOPPING_CENTER = ("Shopping Center", 8)

    @property
    @log_call
    def display_name(self) -> str:
        return self.value[0]

    @property
    @log_call
    def capacity(self) -> int:
        return self.value[1]

    @classmethod
    @log_call
    def from_name(cls, name: str) -> "LocationKind":
        """Look up a location by its snake_case name, e.g. ``"gym"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            known = ", ".join(kind.name.lower() for kind in cls)
            raise ConfigurationError(
                f"unknown location {name!r}; expected one of: {known}"
            ) from None


@dataclass(frozen=True)
class RoundCounts:
    """Number of players in each status at the end of one round."""

    susceptible: int
    infected: int
    immune: int


@dataclass
class PopulationState:
    """Statuses of every player during one run.

    The array length never changes. The only allowed transition is
    ``SUSCEPTIBLE -> INFECTED``.
    """

    players: np.ndarray
    seeded: np.ndarray = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        self.players = np.asarray(self.players, dtype=np.int8)
        if self.seeded is None:
            self.seeded = np.zeros(len(self.players), dtype=bool)
        else:
            self.seeded = np.asarray(self.seeded, dtype=bool)
        if self.seeded.shape != self.players.shape:
            raise PopulationError("seeded mask must match the population size")

    @classmethod
    @log_call
    def from_configuration(
        cls,
        config: "Configuration",
        rng: np.random.Generator
    ) -> "PopulationState":
        """
        Build the round-zero population of a run.

        Immune players are placed first, then up to
        ``config.initial_infected`` patients zero taken from the non-immune
        remainder; everybody else starts susceptible. Positions are
        shuffled so seat order carries no meaning.
        """
        n_immune = config.initial_immune
        n_seeded = min(config.initial_infected,
                       config.population_size - n_immune)

        players = np.full(config.population_size, PlayerStatus.SUSCEPTIBLE,
                          dtype=np.int8)
        players[:n_immune] = PlayerStatus.IMMUNE
        players[n_immune:n_immune + n_seeded] = PlayerStatus.INFECTED
        seeded = np.zeros(config.population_size, dtype=bool)
        seeded[n_immune:n_immune + n_seeded] = True

        order = rng.permutation(config.population_size)
        return cls(players=players[order], seeded=seeded[order])

    def __len__(self) -> int:
        return len(self.players)

    @log_call
    def count(self, status: PlayerStatus) -> int:
        """Number of players currently in ``status``."""
        return int(np.count_nonzero(self.players == status))

    @log_call
    def counts(self) -> RoundCounts:
        return RoundCounts(
            susceptible=self.count(PlayerStatus.SUSCEPTIBLE),
            infected=self.count(PlayerStatus.INFECTED),
            immune=self.count(PlayerStatus.IMMUNE),
        )

    @log_call
    def acquired_infections(self) -> int:
        """Players infected during the run, excluding seeded index cases."""
        infected = self.players == PlayerStatus.INFECTED
        return int(np.count_nonzero(infected & ~self.seeded))

    @log_call
    def apply(self, indices: np.ndarray, new_statuses: np.ndarray) -> None:
        """
        Write ``new_statuses`` back for the players at ``indices``.

        Raises
        ------
        PopulationError
            If any update is not ``SUSCEPTIBLE -> INFECTED`` or a no-op.
        """
        new_statuses = np.asarray(new_statuses, dtype=np.int8)
        old_statuses = self.players[indices]
        if new_statuses.shape != old_statuses.shape:
            raise PopulationError(
                f"expected {old_statuses.shape[0]} statuses, "
                f"got {new_statuses.shape[0]}"
            )
        changed = new_statuses != old_statuses
        allowed = ((old_statuses == PlayerStatus.SUSCEPTIBLE)
                   & (new_statuses == PlayerStatus.INFECTED))
        if np.any(changed & ~allowed):
            raise PopulationError(
                "only susceptible players may change status, "
                "and only to infected"
            )
        self.players[indices] = new_statuses


@dataclass(frozen=True)
class RunOutcome:
    """Result of one complete game.

    ``final_infected_count`` counts players infected by transmission during
    the game. Seeded patients zero are reported in ``seeded_infected`` and
    immune players are never counted as infected.
    """

    final_infected_count: int
    rounds_played: int
    seeded_infected: int = 0
    final_susceptible: int = 0
    immune_count: int = 0
    history: Tuple[RoundCounts, ...] = ()

    @property
    @log_call
    def total_infected(self) -> int:
        return self.final_infected_count + self.seeded_infected

    @property
    @log_call
    def initial_susceptible(self) -> int:
        return self.final_susceptible + self.final_infected_count

    @property
    @log_call
    def contained(self) -> bool:
        """True unless the virus reached every initially susceptible player."""
        return self.final_susceptible > 0 or self.final_infected_count == 0
