import pytest

from virus_alert import (
    AggregationError,
    ConfigurationError,
    DEFAULT_REPLAYS,
    LocationKind,
    message,
    message_many,
    new,
)


def test_new_keeps_argument_order():
    config = new(7, True, False, False, False, False, False, False, True)
    assert config.initial_immune == 7
    assert config.enabled_locations == frozenset(
        {LocationKind.CONCERT_HALL, LocationKind.SHOPPING_CENTER})


@pytest.mark.parametrize("initial_immune", [-1, 101])
def test_new_rejects_out_of_range_immunity(initial_immune):
    with pytest.raises(ConfigurationError):
        new(initial_immune, *([True] * 8))


def test_message_reports_one_game():
    config = new(20, *([True] * 8))
    report = message(config, seed=1)
    assert report.startswith("Outcome after 10 rounds")
    assert "20      immune" in report
    assert report.splitlines()[-3].split()[0] == "susceptible"


def test_message_is_reproducible_with_seed():
    config = new(0, *([True] * 8))
    assert message(config, seed=5) == message(config, seed=5)


def test_message_many_reports_summary():
    config = new(50, True, True, False, False, False, False, False, False)
    report = message_many(config, 20, seed=3)
    assert report.startswith("Summary of 20 games")


def test_message_many_default_count():
    assert DEFAULT_REPLAYS == 100
    config = new(98, *([True] * 8))
    report = message_many(config, DEFAULT_REPLAYS, seed=0)
    assert "Summary of 100 games" in report
    assert "0.00    mean infected during the game" in report


@pytest.mark.parametrize("n", [0, -5])
def test_message_many_rejects_non_positive_count(n):
    config = new(0, *([True] * 8))
    with pytest.raises(AggregationError):
        message_many(config, n)


def test_closed_board_reports_no_infections():
    config = new(0, *([False] * 8))
    report = message_many(config, 10, seed=8)
    assert "0.00    mean infected during the game" in report
    assert "0       most infected" in report
