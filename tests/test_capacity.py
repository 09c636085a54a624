import pytest

from kleffpairing.exceptions import (
    InsufficientCapacityError,
    InvalidGameConfigurationException,
    NoGamesConfiguredError,
)
from kleffpairing.models import GameConfig
from kleffpairing.pairing import CapacityStatus, distribute_tables, plan_capacity


def _game(game_id, tables, seats, minimum=2, order=0):
    return GameConfig(game_id, game_id.title(), tables, seats, minimum, order)


@pytest.mark.parametrize(
    "count, expected",
    [
        (0, []),
        (4, [4]),
        (5, [4, 1]),
        (6, [3, 3]),
        (7, [4, 3]),
        (8, [4, 4]),
        (9, [3, 3, 3]),
    ],
)
def test_distribute_tables(count, expected):
    assert distribute_tables(count, 4, 3) == expected


def test_distribute_tables_rejects_non_positive_size():
    with pytest.raises(ValueError):
        distribute_tables(5, 0, 0)


def test_insufficient_capacity_is_rejected():
    with pytest.raises(InsufficientCapacityError) as excinfo:
        plan_capacity(10, [_game("catan", 2, 4)])

    assert excinfo.value.required == 10
    assert excinfo.value.available == 8
    assert excinfo.value.missing == 2


def test_no_games_is_rejected():
    with pytest.raises(NoGamesConfiguredError):
        plan_capacity(4, [])


def test_excess_capacity_is_advisory():
    plan = plan_capacity(4, [_game("catan", 2, 4)])

    assert plan.status == CapacityStatus.EXCESS
    assert plan.is_excess
    assert plan.excess_seats == 4
    assert plan.allocation_for("catan").table_sizes == [4]
    assert plan.unseated == 0


def test_no_participants():
    plan = plan_capacity(0, [_game("catan", 2, 4)])

    assert plan.status == CapacityStatus.NO_PARTICIPANTS
    assert plan.allocations == []


def test_allocation_follows_game_order():
    games = [_game("second", 2, 4, order=1), _game("first", 2, 4, 3, order=0)]
    plan = plan_capacity(11, games)

    assert plan.status == CapacityStatus.OK
    assert [a.game_id for a in plan.allocations] == ["first", "second"]
    assert plan.allocation_for("first").table_sizes == [4, 4]
    assert plan.allocation_for("second").table_sizes == [3]
    assert plan.seated == 11


def test_leftover_opens_table_by_moving_seats():
    games = [_game("a", 1, 4, 3, order=0), _game("b", 1, 4, 3, order=1)]
    plan = plan_capacity(6, games)

    assert plan.allocation_for("a").table_sizes == [3]
    assert plan.allocation_for("b").table_sizes == [3]
    assert plan.unseated == 0


def test_leftover_gets_second_table_of_same_game():
    plan = plan_capacity(5, [_game("a", 2, 4)])

    assert plan.allocation_for("a").table_sizes == [3, 2]
    assert plan.seated == 5


def test_game_config_rejects_minimum_above_table_size():
    with pytest.raises(InvalidGameConfigurationException):
        GameConfig("a", "A", 1, 3, 4)


def test_greedy_shortfall_falls_back_to_fewer_tables():
    games = [_game("trio", 3, 3, 3, order=0), _game("big", 1, 5, 3, order=1)]
    plan = plan_capacity(11, games)

    assert plan.unseated == 0
    assert plan.allocation_for("trio").table_sizes == [3, 3]
    assert plan.allocation_for("big").table_sizes == [5]


def test_fallback_layout_respects_table_limits():
    games = [
        _game("duel", 1, 2, 2, order=0),
        _game("trio", 3, 3, 3, order=1),
        _game("small", 2, 3, 2, order=2),
    ]
    plan = plan_capacity(12, games)

    assert plan.unseated == 0
    assert plan.seated == 12
    for game in games:
        sizes = plan.allocation_for(game.id).table_sizes
        assert len(sizes) <= game.available_tables
        assert all(game.min_players <= size <= game.players_per_table for size in sizes)


def test_unseatable_roster_is_reported():
    plan = plan_capacity(5, [_game("catan", 2, 4, 3)])

    assert plan.unseated == 1
