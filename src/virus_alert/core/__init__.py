"""Core simulation data structures."""

from .data_structures import (
    LocationKind,
    PlayerStatus,
    PopulationState,
    RoundCounts,
    RunOutcome,
)

__all__ = [
    "LocationKind",
    "PlayerStatus",
    "PopulationState",
    "RoundCounts",
    "RunOutcome",
]
