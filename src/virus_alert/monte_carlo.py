"""
Monte Carlo aggregation of many independent games.

Runs are folded one at a time into a ``StatisticsAccumulator`` (Welford's
online mean and variance), so memory does not grow with the number of
replays. Accumulators built in separate worker processes are combined with
``StatisticsAccumulator.merge``, which is commutative and associative.
"""

import logging
import math
import multiprocessing
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy import stats  # type: ignore

from .configuration import Configuration
from .core.data_structures import RunOutcome
from .core.temporal_engine import TemporalEngine
from .errors import AggregationError
from .utils.logging import log_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateStatistics:
    """Summary of ``sample_count`` independent runs of one scenario.

    ``stddev_infected`` is the sample standard deviation (``ddof=1``) and is
    0.0 for a single run. ``histogram[k]`` is the number of runs that ended
    with ``k`` acquired infections; it is empty unless requested. Runs with
    nobody left to infect count as fully escaped in ``mean_escaped_fraction``.
    """

    sample_count: int
    mean_infected: float
    stddev_infected: float
    min_infected: int
    max_infected: int
    contained_fraction: float = 0.0
    mean_escaped_fraction: float = 0.0
    histogram: Tuple[int, ...] = ()

    @property
    @log_call
    def standard_error(self) -> float:
        """Standard error of ``mean_infected``."""
        return self.stddev_infected / math.sqrt(self.sample_count)

    @log_call
    def confidence_interval(self, level: float = 0.95) -> Tuple[float, float]:
        """
        Student's t interval for the mean number of infections.

        Parameters
        ----------
        level : float, default=0.95
            Coverage of the interval, strictly between 0 and 1

        Returns
        -------
        (low, high) : tuple of float
            Collapses to the mean when only one run was made or all runs
            agree.
        """
        if not 0.0 < level < 1.0:
            raise ValueError("level must be between 0 and 1")
        if self.sample_count < 2 or self.stddev_infected == 0.0:
            return (self.mean_infected, self.mean_infected)
        t_value = stats.t.ppf(0.5 + level / 2.0, df=self.sample_count - 1)
        half_width = float(t_value) * self.standard_error
        return (self.mean_infected - half_width,
                self.mean_infected + half_width)


class StatisticsAccumulator:
    """
    Incremental accumulator of run outcomes.

    Parameters
    ----------
    histogram_size : int, default=0
        Number of histogram bins (``population_size + 1``); 0 disables the
        histogram
    """

    def __init__(self, histogram_size: int = 0):
        """Initialize an empty accumulator."""
        self.count = 0
        self.mean = 0.0
        self.m2 = 0.0
        self.minimum: Optional[int] = None
        self.maximum: Optional[int] = None
        self.contained = 0
        self.escaped_sum = 0.0
        self.histogram = np.zeros(histogram_size, dtype=np.int64)

    @log_call
    def add(self, outcome: RunOutcome) -> None:
        """Fold one run into the running statistics."""
        value = outcome.final_infected_count
        self.count += 1
        delta = value - self.mean
        self.mean += delta / self.count
        self.m2 += delta * (value - self.mean)

        self.minimum = value if self.minimum is None else min(self.minimum, value)
        self.maximum = value if self.maximum is None else max(self.maximum, value)
        self.contained += int(outcome.contained)
        if outcome.initial_susceptible > 0:
            self.escaped_sum += (outcome.final_susceptible
                                 / outcome.initial_susceptible)
        else:
            self.escaped_sum += 1.0
        if self.histogram.size:
            self.histogram[value] += 1

    @log_call
    def merge(self, other: "StatisticsAccumulator") -> "StatisticsAccumulator":
        """
        Combine two accumulators into a new one.

        Uses the pairwise update of Chan et al. for the second moment.
        """
        if self.histogram.size != other.histogram.size:
            raise AggregationError("cannot merge accumulators with "
                                   "different histogram sizes")
        merged = StatisticsAccumulator(self.histogram.size)
        merged.count = self.count + other.count
        if merged.count == 0:
            return merged

        delta = other.mean - self.mean
        merged.mean = self.mean + delta * other.count / merged.count
        merged.m2 = (self.m2 + other.m2
                     + delta ** 2 * self.count * other.count / merged.count)
        extremes = [v for v in (self.minimum, other.minimum) if v is not None]
        merged.minimum = min(extremes)
        extremes = [v for v in (self.maximum, other.maximum) if v is not None]
        merged.maximum = max(extremes)
        merged.contained = self.contained + other.contained
        merged.escaped_sum = self.escaped_sum + other.escaped_sum
        merged.histogram = self.histogram + other.histogram
        return merged

    @log_call
    def finalize(self) -> AggregateStatistics:
        """
        Freeze the accumulated runs into ``AggregateStatistics``.

        Raises
        ------
        AggregationError
            If no run was added.
        """
        if self.count == 0:
            raise AggregationError("cannot summarize zero runs")
        if self.count == 1:
            stddev = 0.0
        else:
            stddev = math.sqrt(max(self.m2, 0.0) / (self.count - 1))
        # Rounding in the running mean must not push it past the extremes
        mean = min(max(self.mean, float(self.minimum)), float(self.maximum))
        return AggregateStatistics(
            sample_count=self.count,
            mean_infected=mean,
            stddev_infected=stddev,
            min_infected=int(self.minimum),
            max_infected=int(self.maximum),
            contained_fraction=self.contained / self.count,
            mean_escaped_fraction=self.escaped_sum / self.count,
            histogram=tuple(int(c) for c in self.histogram),
        )


def _run_chunk(
    config: Configuration,
    seeds: Sequence[np.random.SeedSequence],
    histogram_size: int
) -> StatisticsAccumulator:
    """
    Module-level worker: play one game per seed, return the partial
    accumulator. Must stay picklable for spawn-based pools.
    """
    engine = TemporalEngine(config)
    accumulator = StatisticsAccumulator(histogram_size)
    for seed_sequence in seeds:
        accumulator.add(engine.run(np.random.default_rng(seed_sequence)))
    return accumulator


def _validate_count(name: str, value: object) -> int:
    if (not isinstance(value, (int, np.integer))
            or isinstance(value, (bool, np.bool_))):
        raise AggregationError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise AggregationError(f"{name} must be positive, got {value}")
    return int(value)


@log_call
def run_many(
    config: Configuration,
    n: int,
    seed: Optional[int] = None,
    workers: int = 1,
    histogram: bool = False
) -> AggregateStatistics:
    """
    Replay a scenario ``n`` times and summarize the outcomes.

    Every run gets its own generator spawned from one
    ``np.random.SeedSequence``, so runs are independent whether they are
    played in this process or spread across ``workers`` processes. A
    given ``(seed, workers)`` pair always gives the same result.

    Parameters
    ----------
    config : Configuration
        Validated scenario
    n : int
        Number of replays, must be positive
    seed : int, optional
        Root seed; fresh OS entropy when omitted
    workers : int, default=1
        Number of worker processes. 1 runs everything in this process.
    histogram : bool, default=False
        Also count how many runs ended with each number of infections

    Returns
    -------
    statistics : AggregateStatistics

    Raises
    ------
    AggregationError
        If ``n`` or ``workers`` is not a positive integer.

    Examples
    --------
    >>> config = Configuration.new(20, True, False, True, False,
    ...                            False, True, False, False)
    >>> summary = run_many(config, 200, seed=1)
    >>> summary.sample_count
    200
    """
    n = _validate_count("n", n)
    workers = _validate_count("workers", workers)
    histogram_size = config.population_size + 1 if histogram else 0

    child_seeds = np.random.SeedSequence(seed).spawn(n)
    n_chunks = min(workers, n)
    chunks: List[List[np.random.SeedSequence]] = [
        child_seeds[start::n_chunks] for start in range(n_chunks)
    ]
    logger.debug("Running %d replays in %d chunk(s)", n, n_chunks)

    if n_chunks == 1:
        accumulator = _run_chunk(config, chunks[0], histogram_size)
    else:
        with multiprocessing.Pool(n_chunks) as pool:
            partials = pool.starmap(
                _run_chunk,
                [(config, chunk, histogram_size) for chunk in chunks],
            )
        accumulator = StatisticsAccumulator(histogram_size)
        for partial in partials:
            accumulator = accumulator.merge(partial)

    statistics = accumulator.finalize()
    logger.debug("Mean infected %.3f over %d runs",
                 statistics.mean_infected, statistics.sample_count)
    return statistics
