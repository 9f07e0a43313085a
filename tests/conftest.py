"""
Shared test fixtures.

This module provides shared scenarios and random generators so that test
modules do not rebuild the same configurations.
"""

import os
import sys

import numpy as np
import pytest

# Add src and the repository root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from virus_alert import Configuration, LocationKind  # noqa: E402

ALL_ON = (True,) * 8


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: slow statistical tests over many replays"
    )


@pytest.fixture
def rng():
    """Fresh seeded generator for each test."""
    return np.random.default_rng(42)


@pytest.fixture(scope="session")
def all_locations_config():
    """Default board with every place open and nobody immune."""
    return Configuration.new(0, *ALL_ON)


@pytest.fixture(scope="session")
def closed_board_config():
    """Default board with every place closed."""
    return Configuration(initial_immune=0, enabled_locations=frozenset())


@pytest.fixture(scope="session")
def small_board_config():
    """Ten players, two places, one patient zero."""
    return Configuration(
        initial_immune=2,
        enabled_locations=frozenset({LocationKind.BAKERY, LocationKind.GYM}),
        population_size=10,
        rounds_total=5,
        initial_infected=1,
    )


@pytest.fixture(scope="session")
def capacity_config():
    """Board rule: places fill up to their printed capacity."""
    return Configuration.new(0, *ALL_ON, capacity_limited=True)
