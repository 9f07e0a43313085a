"""
Tests for the infection model.
"""

import unittest

import numpy as np
from scipy import stats

from virus_alert import (
    Configuration,
    ConfigurationError,
    InfectionModel,
    PlayerStatus,
)

S, I, M = PlayerStatus.SUSCEPTIBLE, PlayerStatus.INFECTED, PlayerStatus.IMMUNE


class TestInfectionModel(unittest.TestCase):
    """Test cases for the transmission rule at one place."""

    def setUp(self):
        """Set up test fixtures."""
        self.rng = np.random.default_rng(42)

    def test_no_infected_means_no_transmission(self):
        """Nobody changes status when no infected player is present."""
        model = InfectionModel(1.0)
        statuses = np.array([S, S, M, S])
        result = model.transmit(statuses, self.rng)
        np.testing.assert_array_equal(result, statuses)

    def test_certain_transmission(self):
        """With p = 1 every susceptible player present is infected."""
        model = InfectionModel(1.0)
        result = model.transmit(np.array([S, I, S, M, S]), self.rng)
        np.testing.assert_array_equal(result, [I, I, I, M, I])

    def test_zero_probability(self):
        """With p = 0 nothing ever happens."""
        model = InfectionModel(0.0)
        statuses = np.array([S, I, S, I])
        result = model.transmit(statuses, self.rng)
        np.testing.assert_array_equal(result, statuses)

    def test_immune_players_unchanged(self):
        """Immunity is absolute under any draw."""
        model = InfectionModel(1.0, rule="per_infected")
        statuses = np.array([M] * 20 + [I] * 5)
        for _ in range(20):
            result = model.transmit(statuses, self.rng)
            np.testing.assert_array_equal(result[:20], [M] * 20)

    def test_input_not_modified(self):
        """transmit returns a new array."""
        model = InfectionModel(1.0)
        statuses = np.array([S, I], dtype=np.int8)
        model.transmit(statuses, self.rng)
        np.testing.assert_array_equal(statuses, [S, I])

    def test_infection_probability_rules(self):
        """Per-infected exposure compounds, any-contact does not."""
        any_contact = InfectionModel(0.1)
        per_infected = InfectionModel(0.1, rule="per_infected")
        self.assertEqual(any_contact.infection_probability(0), 0.0)
        self.assertEqual(per_infected.infection_probability(0), 0.0)
        self.assertAlmostEqual(any_contact.infection_probability(3), 0.1)
        self.assertAlmostEqual(per_infected.infection_probability(3),
                               1 - 0.9 ** 3)

    def test_transmission_rate_matches_probability(self):
        """Observed infection share is consistent with p."""
        model = InfectionModel(0.3)
        statuses = np.array([I] + [S] * 10000)
        result = model.transmit(statuses, self.rng)
        newly_infected = int(np.count_nonzero(result[1:] == I))
        self.assertAlmostEqual(newly_infected / 10000, 0.3, delta=0.02)
        test = stats.binomtest(newly_infected, 10000, 0.3)
        self.assertGreater(test.pvalue, 1e-4)

    def test_invalid_parameters(self):
        """Out-of-range probability and unknown rules are rejected."""
        with self.assertRaises(ConfigurationError):
            InfectionModel(1.5)
        with self.assertRaises(ConfigurationError):
            InfectionModel(0.5, rule="airborne")

    def test_from_configuration(self):
        """The model takes its constants from the scenario."""
        config = Configuration(initial_immune=0,
                               transmission_probability=0.7,
                               transmission_rule="per_infected")
        model = InfectionModel.from_configuration(config)
        self.assertEqual(model.transmission_probability, 0.7)
        self.assertEqual(model.rule, "per_infected")


if __name__ == '__main__':
    unittest.main()
