"""
Infection model for the Virus Alert simulation.

This module holds the transmission rule applied to the players who share one
place during one round. It is the only code that evaluates infection
probabilities; the round logic only decides who meets whom.
"""

from typing import TYPE_CHECKING

import numpy as np

from .configuration import (
    DEFAULT_TRANSMISSION_RULE,
    TRANSMISSION_PROBABILITY,
    TRANSMISSION_RULES,
)
from .core.data_structures import PlayerStatus
from .errors import ConfigurationError
from .utils.logging import log_call

if TYPE_CHECKING:
    from .configuration import Configuration


class InfectionModel:
    """
    Decides which susceptible players get infected at one place.

    Two rules are available:

    - ``"any_contact"``: if at least one infected player is present, every
      susceptible player present is infected independently with
      probability ``p``, no matter how many infected players are there.
    - ``"per_infected"``: every susceptible player is exposed once per
      infected player present, giving probability ``1 - (1 - p) ** k``.

    Immune players are never changed.

    Parameters
    ----------
    transmission_probability : float, default=0.3
        Per-contact transmission probability ``p``
    rule : str, default="any_contact"
        Transmission rule, one of ``TRANSMISSION_RULES``

    Examples
    --------
    >>> model = InfectionModel(1.0)
    >>> model.transmit(np.array([0, 1, 2]), np.random.default_rng(0))
    array([1, 1, 2], dtype=int8)
    """

    def __init__(
        self,
        transmission_probability: float = TRANSMISSION_PROBABILITY,
        rule: str = DEFAULT_TRANSMISSION_RULE
    ):
        """Initialize the infection model."""
        if not 0.0 <= transmission_probability <= 1.0:
            raise ConfigurationError(
                "transmission_probability must be between 0 and 1")
        if rule not in TRANSMISSION_RULES:
            raise ConfigurationError(
                f"rule must be one of {TRANSMISSION_RULES}")
        self.transmission_probability = float(transmission_probability)
        self.rule = rule

    @classmethod
    @log_call
    def from_configuration(cls, config: "Configuration") -> "InfectionModel":
        return cls(config.transmission_probability, config.transmission_rule)

    @log_call
    def infection_probability(self, n_infected: int) -> float:
        """
        Probability that one susceptible player is infected.

        Parameters
        ----------
        n_infected : int
            Number of infected players at the same place

        Returns
        -------
        probability : float
            Zero when nobody infected is present
        """
        if n_infected <= 0:
            return 0.0
        if self.rule == "per_infected":
            return 1.0 - (1.0 - self.transmission_probability) ** n_infected
        return self.transmission_probability

    @log_call
    def transmit(
        self,
        statuses: np.ndarray,
        rng: np.random.Generator
    ) -> np.ndarray:
        """
        Apply one round of transmission to the players at one place.

        Parameters
        ----------
        statuses : np.ndarray
            ``PlayerStatus`` codes of the players present (order irrelevant)
        rng : np.random.Generator
            Source of the Bernoulli draws

        Returns
        -------
        new_statuses : np.ndarray
            Updated codes, same length and order as ``statuses``
        """
        statuses = np.asarray(statuses, dtype=np.int8)
        new_statuses = statuses.copy()

        n_infected = int(np.count_nonzero(statuses == PlayerStatus.INFECTED))
        probability = self.infection_probability(n_infected)
        if probability == 0.0:
            return new_statuses

        susceptible = statuses == PlayerStatus.SUSCEPTIBLE
        draws = rng.random(len(statuses))
        new_statuses[susceptible & (draws < probability)] = PlayerStatus.INFECTED
        return new_statuses

    def __repr__(self) -> str:
        return (f"InfectionModel(transmission_probability="
                f"{self.transmission_probability}, rule={self.rule!r})")
