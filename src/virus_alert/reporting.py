"""
Plain-text reports for single games and Monte Carlo summaries.

Counts are printed exactly. Real-valued statistics are printed with
``DISPLAY_PRECISION`` decimals and percentages with none.
"""

from typing import List

from .core.data_structures import RunOutcome
from .monte_carlo import AggregateStatistics
from .utils.logging import log_call

DISPLAY_PRECISION = 2

_LABEL_WIDTH = 22
_CELL_WIDTH = 4


def _line(value: object, label: str) -> str:
    return f"{str(value):<8}{label}"


def _history_table(outcome: RunOutcome) -> List[str]:
    rounds = range(len(outcome.history))
    header = f"{'Round':<{_LABEL_WIDTH}}" + "".join(
        f"{r:<{_CELL_WIDTH}}" for r in rounds)
    rows = [header.rstrip(), "-" * len(header.rstrip())]
    for label, attribute in (("susceptible", "susceptible"),
                             ("infected", "infected"),
                             ("immune", "immune")):
        cells = "".join(f"{getattr(counts, attribute):<{_CELL_WIDTH}}"
                        for counts in outcome.history)
        rows.append((f"{label:<{_LABEL_WIDTH}}" + cells).rstrip())
    return rows


@log_call
def format_single(outcome: RunOutcome) -> str:
    """
    Render one game.

    Parameters
    ----------
    outcome : RunOutcome
        Result of a single run, with or without history

    Returns
    -------
    report : str
    """
    title = f"Outcome after {outcome.rounds_played} rounds"
    lines = [
        title,
        "-" * len(title),
        _line(outcome.final_infected_count, "infected during the game"),
        _line(outcome.seeded_infected, "patients zero"),
        _line(outcome.final_susceptible, "still susceptible"),
        _line(outcome.immune_count, "immune"),
        _line("yes" if outcome.contained else "no", "outbreak contained"),
    ]
    if outcome.history:
        lines.append("")
        lines.extend(_history_table(outcome))
    return "\n".join(lines)


@log_call
def format_aggregate(statistics: AggregateStatistics) -> str:
    """
    Render a Monte Carlo summary.

    Parameters
    ----------
    statistics : AggregateStatistics
        Summary returned by ``run_many``

    Returns
    -------
    report : str
    """
    p = DISPLAY_PRECISION
    title = f"Summary of {statistics.sample_count} games"
    lines = [
        title,
        "-" * len(title),
        _line(f"{statistics.mean_infected:.{p}f}",
              "mean infected during the game"),
        _line(f"{statistics.stddev_infected:.{p}f}", "standard deviation"),
        _line(statistics.min_infected, "fewest infected"),
        _line(statistics.max_infected, "most infected"),
        _line(f"{100.0 * statistics.mean_escaped_fraction:.0f}%",
              "susceptible players still healthy"),
        _line(f"{100.0 * statistics.contained_fraction:.0f}%",
              "contained outbreaks"),
        "",
        "An outbreak is contained if the virus stops spreading before "
        "infecting everyone.",
    ]
    return "\n".join(lines)
