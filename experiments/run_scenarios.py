#!/usr/bin/env python3
"""
Immunity Sweep Experiment Runner

This script replays one Virus Alert scenario for increasing numbers of
immune players, using Hydra configuration management, and saves the
summary table and a plot of the mean number of infections.

Usage:
    python experiments/run_scenarios.py population=classroom \
        experiment.replays=500 experiment.workers=4
"""

import os
import sys
import logging
import time
from pathlib import Path
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import hydra  # noqa: E402
from omegaconf import DictConfig, OmegaConf  # noqa: E402
from virus_alert import (  # noqa: E402
    build_configuration,
    format_aggregate,
    run_many,
)
from virus_alert.utils.validation import validate_config  # noqa: E402


def immune_levels(cfg: DictConfig) -> List[int]:
    """Immune counts to sweep, always including the full population."""
    size = cfg.population.population_size
    levels = list(range(0, size + 1, cfg.experiment.immune_step))
    if levels[-1] != size:
        levels.append(size)
    return levels


def run_sweep(cfg: DictConfig) -> pd.DataFrame:
    """Run the aggregator once per immune level."""
    rows = []
    for initial_immune in immune_levels(cfg):
        level_cfg = OmegaConf.merge(
            cfg, {"scenario": {"initial_immune": initial_immune}})
        config = build_configuration(level_cfg)
        summary = run_many(
            config,
            cfg.experiment.replays,
            seed=cfg.experiment.seed,
            workers=cfg.experiment.workers,
            histogram=True,
        )
        logging.info("Immune players: %d\n%s", initial_immune,
                     format_aggregate(summary))
        low, high = summary.confidence_interval(0.95)
        rows.append({
            "initial_immune": initial_immune,
            "sample_count": summary.sample_count,
            "mean_infected": summary.mean_infected,
            "stddev_infected": summary.stddev_infected,
            "ci_low": low,
            "ci_high": high,
            "min_infected": summary.min_infected,
            "max_infected": summary.max_infected,
            "contained_fraction": summary.contained_fraction,
            "mean_escaped_fraction": summary.mean_escaped_fraction,
        })
    return pd.DataFrame(rows)


def plot_sweep(results: pd.DataFrame, output_dir: Path) -> Path:
    """Plot mean infections with their 95% interval against immunity."""
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(results["initial_immune"], results["mean_infected"],
            marker="o", label="mean infected")
    ax.fill_between(results["initial_immune"], results["ci_low"],
                    results["ci_high"], alpha=0.3, label="95% interval")
    ax.set_xlabel("Immune players at start")
    ax.set_ylabel("Players infected during the game")
    ax.set_title("Effect of immunity on infections")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plot_path = output_dir / "immunity_sweep.png"
    fig.savefig(plot_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return plot_path


@hydra.main(version_base=None, config_path="../configs", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main experiment execution function."""
    validate_config(cfg)
    logging.info("Configuration:\n%s", OmegaConf.to_yaml(cfg))

    output_dir = Path(cfg.experiment.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    start_time = time.time()
    results = run_sweep(cfg)
    logging.info("Sweep completed in %.2f seconds", time.time() - start_time)

    csv_path = output_dir / "immunity_sweep.csv"
    results.to_csv(csv_path, index=False)
    plot_path = plot_sweep(results, output_dir)
    logging.info("Results saved to %s and %s", csv_path, plot_path)


if __name__ == "__main__":
    main()
