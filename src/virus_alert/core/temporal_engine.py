"""
Round-by-round simulation of one game.

Every round has three steps: players spread over the open places, the
infection model runs at each occupied place, and the round counter moves
on. A run ends after ``rounds_total`` rounds and yields a ``RunOutcome``.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..configuration import Configuration
from ..infection_model import InfectionModel
from ..utils.logging import log_call
from .data_structures import PopulationState, RoundCounts, RunOutcome

# Marks a player who stays home for the round
HOME = -1


@dataclass
class TemporalEngine:
    """
    Single-run simulator for one scenario.

    Parameters
    ----------
    config : Configuration
        Scenario to play; read-only and shareable between engines
    infection_model : InfectionModel, optional
        Transmission rule. Built from ``config`` when omitted.
    """

    config: Configuration
    infection_model: Optional[InfectionModel] = field(default=None)

    def __post_init__(self) -> None:
        if self.infection_model is None:
            self.infection_model = InfectionModel.from_configuration(
                self.config)
        self._locations = self.config.ordered_locations
        self._capacities = np.array(
            [kind.capacity for kind in self._locations], dtype=int)

    @log_call
    def assign_locations(
        self,
        n_players: int,
        rng: np.random.Generator
    ) -> np.ndarray:
        """
        Pick a place for every player for one round.

        Returns
        -------
        assignment : np.ndarray
            Index into the enabled places for each player, ``HOME`` (-1)
            for players who stay home
        """
        if not self._locations:
            return np.full(n_players, HOME, dtype=int)

        if not self.config.capacity_limited:
            return rng.integers(0, len(self._locations), size=n_players)

        # Board rule: shuffled players fill places in board order
        assignment = np.full(n_players, HOME, dtype=int)
        order = rng.permutation(n_players)
        seats = np.repeat(np.arange(len(self._locations)), self._capacities)
        n_seated = min(n_players, len(seats))
        assignment[order[:n_seated]] = seats[:n_seated]
        return assignment

    @log_call
    def step(self, state: PopulationState, rng: np.random.Generator) -> None:
        """Advance ``state`` by one round."""
        assignment = self.assign_locations(len(state), rng)
        for location_index in range(len(self._locations)):
            present = np.flatnonzero(assignment == location_index)
            if present.size == 0:
                continue
            new_statuses = self.infection_model.transmit(
                state.players[present], rng)
            state.apply(present, new_statuses)

    @log_call
    def run(
        self,
        rng: np.random.Generator,
        record_history: bool = False
    ) -> RunOutcome:
        """
        Play one full game.

        Parameters
        ----------
        rng : np.random.Generator
            Random stream owned by this run
        record_history : bool, default=False
            Keep per-round status counts (rounds 0 to ``rounds_total``)

        Returns
        -------
        outcome : RunOutcome
        """
        state = PopulationState.from_configuration(self.config, rng)
        history: List[RoundCounts] = []
        if record_history:
            history.append(state.counts())

        for _ in range(self.config.rounds_total):
            self.step(state, rng)
            if record_history:
                history.append(state.counts())

        final = state.counts()
        return RunOutcome(
            final_infected_count=state.acquired_infections(),
            rounds_played=self.config.rounds_total,
            seeded_infected=int(np.count_nonzero(state.seeded)),
            final_susceptible=final.susceptible,
            immune_count=final.immune,
            history=tuple(history),
        )


@log_call
def simulate_run(
    config: Configuration,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    record_history: bool = False
) -> RunOutcome:
    """
    Play one game for ``config``.

    Parameters
    ----------
    config : Configuration
        Validated scenario
    rng : np.random.Generator, optional
        Random stream to draw from. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a fresh generator when ``rng`` is not given
    record_history : bool, default=False
        Keep per-round status counts in the outcome

    Returns
    -------
    outcome : RunOutcome

    Examples
    --------
    >>> config = Configuration.new(0, True, True, True, True,
    ...                            True, True, True, True)
    >>> outcome = simulate_run(config, seed=7)
    >>> outcome.rounds_played
    10
    """
    if rng is None:
        rng = np.random.default_rng(seed)
    return TemporalEngine(config).run(rng, record_history=record_history)
