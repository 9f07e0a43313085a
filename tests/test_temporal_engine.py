import numpy as np
import pytest

from virus_alert import (
    Configuration,
    InfectionModel,
    LocationKind,
    PlayerStatus,
    PopulationState,
    TemporalEngine,
    simulate_run,
)
from virus_alert.core.temporal_engine import HOME

ALL_ON = (True,) * 8


class TestTemporalEngine:

    def setup_method(self):
        self.rng = np.random.default_rng(7)

    def test_uniform_assignment_uses_enabled_places(self, small_board_config):
        engine = TemporalEngine(small_board_config)
        assignment = engine.assign_locations(1000, self.rng)
        assert set(np.unique(assignment)) == {0, 1}

    def test_uniform_assignment_is_balanced(self, all_locations_config):
        engine = TemporalEngine(all_locations_config)
        assignment = engine.assign_locations(80000, self.rng)
        shares = np.bincount(assignment, minlength=8) / 80000
        np.testing.assert_allclose(shares, 1 / 8, atol=0.01)

    def test_closed_board_keeps_everybody_home(self, closed_board_config):
        engine = TemporalEngine(closed_board_config)
        assignment = engine.assign_locations(100, self.rng)
        assert np.all(assignment == HOME)

    def test_capacity_assignment_fills_board(self, capacity_config):
        engine = TemporalEngine(capacity_config)
        assignment = engine.assign_locations(100, self.rng)
        seated = np.bincount(assignment[assignment != HOME], minlength=8)
        np.testing.assert_array_equal(
            seated, [kind.capacity for kind in LocationKind])
        assert np.count_nonzero(assignment == HOME) == 24

    def test_capacity_assignment_with_few_players(self):
        config = Configuration.new(0, *ALL_ON, population_size=10,
                                   capacity_limited=True)
        engine = TemporalEngine(config)
        assignment = engine.assign_locations(10, self.rng)
        # The concert hall seats all ten
        assert np.all(assignment == 0)

    def test_step_only_infects_susceptible(self, all_locations_config):
        engine = TemporalEngine(all_locations_config,
                                infection_model=InfectionModel(1.0))
        state = PopulationState(np.array(
            [PlayerStatus.INFECTED] * 10 + [PlayerStatus.IMMUNE] * 10
            + [PlayerStatus.SUSCEPTIBLE] * 80))
        immune_before = state.players == PlayerStatus.IMMUNE
        for _ in range(5):
            engine.step(state, self.rng)
            assert np.array_equal(
                state.players == PlayerStatus.IMMUNE, immune_before)
        assert state.count(PlayerStatus.INFECTED) > 10

    def test_run_outcome_fields(self, small_board_config):
        outcome = TemporalEngine(small_board_config).run(self.rng)
        assert outcome.rounds_played == 5
        assert outcome.seeded_infected == 1
        assert outcome.immune_count == 2
        assert (outcome.final_infected_count + outcome.final_susceptible
                == 10 - 2 - 1)
        assert outcome.history == ()

    def test_run_history(self, small_board_config):
        outcome = TemporalEngine(small_board_config).run(
            self.rng, record_history=True)
        assert len(outcome.history) == small_board_config.rounds_total + 1
        first, last = outcome.history[0], outcome.history[-1]
        assert (first.susceptible, first.infected, first.immune) == (7, 1, 2)
        assert last.infected == outcome.total_infected
        for counts in outcome.history:
            assert counts.susceptible + counts.infected + counts.immune == 10
            assert counts.immune == 2
        infected = [counts.infected for counts in outcome.history]
        assert infected == sorted(infected)

    def test_certain_spread_with_one_place(self):
        config = Configuration(
            initial_immune=0,
            enabled_locations=frozenset({LocationKind.SCHOOL}),
            population_size=20,
            rounds_total=1,
            initial_infected=1,
            transmission_probability=1.0,
        )
        outcome = simulate_run(config, seed=3)
        assert outcome.final_infected_count == 19
        assert outcome.final_susceptible == 0
        assert not outcome.contained

    def test_seed_reproducibility(self, all_locations_config):
        first = simulate_run(all_locations_config, seed=11,
                             record_history=True)
        second = simulate_run(all_locations_config, seed=11,
                              record_history=True)
        assert first == second


@pytest.mark.parametrize("seed", range(20))
def test_bounds_hold_for_any_seed(seed):
    config = Configuration.new(seed * 5, *ALL_ON)
    outcome = simulate_run(config, seed=seed)
    assert 0 <= outcome.final_infected_count <= config.population_size
    assert (outcome.final_infected_count
            <= config.population_size - config.initial_immune)
    assert outcome.immune_count == config.initial_immune


@pytest.mark.parametrize("seed", range(10))
def test_no_contact_means_no_infection(seed):
    config = Configuration.new(0, *([False] * 8))
    outcome = simulate_run(config, seed=seed)
    assert outcome.final_infected_count == 0
    assert outcome.seeded_infected == 2


def test_fully_immune_population():
    config = Configuration.new(10, *ALL_ON, population_size=10)
    for seed in range(10):
        outcome = simulate_run(config, seed=seed)
        assert outcome.final_infected_count == 0
        assert outcome.seeded_infected == 0


def test_unseeded_closed_board():
    config = Configuration.new(0, *([False] * 8), population_size=10,
                               initial_infected=0)
    for seed in range(10):
        assert simulate_run(config, seed=seed).final_infected_count == 0


def test_unseeded_open_board_stays_healthy():
    config = Configuration.new(0, *ALL_ON, initial_infected=0,
                               transmission_probability=1.0)
    assert simulate_run(config, seed=5).final_infected_count == 0
