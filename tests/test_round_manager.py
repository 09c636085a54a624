import random

import pytest

from kleffpairing.constants import (
    FORMAT_CARCASSONNE,
    FORMAT_CATAN,
    FORMAT_ELIMINATORY,
    FORMAT_MULTIGAME,
    FORMAT_ROUND_ROBIN,
    FORMAT_SWISS,
    MODE_MANUAL,
)
from kleffpairing.exceptions import (
    InsufficientParticipantsError,
    InvalidConfigurationException,
    NoGamesConfiguredError,
    TournamentStateException,
    UnknownFormatException,
)
from kleffpairing.models import GameConfig, Match, Participant
from kleffpairing.tournament import ResultRecorder, RoundManager, TournamentConfig


def _roster(*ids):
    return [Participant(pid, pid.upper()) for pid in ids]


def _played(first, second, first_score, second_score, round_number=1):
    match = Match(round_number=round_number, participant_ids=[first, second])
    ResultRecorder().record_scores(match, {first: first_score, second: second_score})
    return match


def test_config_fills_format_defaults():
    catan = TournamentConfig("Club night", format=FORMAT_CATAN)
    swiss = TournamentConfig("Open")

    assert (catan.players_per_match, catan.number_of_rounds) == (4, 3)
    assert (swiss.players_per_match, swiss.number_of_rounds) == (2, None)


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"format": "chess960"}, UnknownFormatException),
        ({"generation_mode": "semi"}, InvalidConfigurationException),
        ({"players_per_match": 5}, InvalidConfigurationException),
        ({"number_of_rounds": 0}, InvalidConfigurationException),
    ],
)
def test_config_rejects_invalid_settings(kwargs, error):
    with pytest.raises(error):
        TournamentConfig("Broken", **kwargs)


def test_config_dict_round_trip():
    config = TournamentConfig(
        "Festival",
        format=FORMAT_MULTIGAME,
        games=[GameConfig("catan", "Catan", 2, 4, 3)],
    )

    assert TournamentConfig.from_dict(config.to_dict()) == config


def test_next_round_number():
    matches = [_played("a", "b", 1, 0, 1), _played("a", "b", 1, 0, 3)]

    assert RoundManager.next_round_number([]) == 1
    assert RoundManager.next_round_number(matches) == 4


def test_swiss_round_from_existing_results():
    manager = RoundManager(TournamentConfig("Open"))
    existing = [_played("a", "b", 10, 0), _played("c", "d", 5, 0)]

    result = manager.generate_round(
        _roster("a", "b", "c", "d"), existing, rng=random.Random(1)
    )

    assert result.ok
    plan = result.plans[0]
    assert plan.round_number == 2
    assert [g.filled_ids for g in plan.matches] == [["a", "c"], ["d", "b"]]


def test_round_limit_is_enforced():
    manager = RoundManager(TournamentConfig("Short", number_of_rounds=2))
    existing = [_played("a", "b", 1, 0, 2)]

    with pytest.raises(TournamentStateException):
        manager.generate_round(_roster("a", "b"), existing)
    with pytest.raises(TournamentStateException):
        manager.generate_round(_roster("a", "b"), rounds_to_generate=3)


@pytest.mark.parametrize(
    "tournament_format", [FORMAT_ROUND_ROBIN, FORMAT_CARCASSONNE, FORMAT_ELIMINATORY]
)
def test_one_shot_formats_refuse_a_second_generation(tournament_format):
    manager = RoundManager(TournamentConfig("Cup", format=tournament_format))

    with pytest.raises(TournamentStateException):
        manager.generate_round(_roster("a", "b"), [_played("a", "b", 1, 0)])


def test_carcassonne_generates_whole_schedule():
    manager = RoundManager(TournamentConfig("Meeples", format=FORMAT_CARCASSONNE))
    result = manager.generate_round(_roster("a", "b", "c", "d"))

    assert result.ok
    assert [plan.round_number for plan in result.plans] == [1, 2, 3]


def test_carcassonne_schedule_longer_than_limit_is_rejected():
    config = TournamentConfig("Meeples", format=FORMAT_CARCASSONNE, number_of_rounds=2)

    with pytest.raises(TournamentStateException):
        RoundManager(config).generate_round(_roster("a", "b", "c", "d"))


def test_round_robin_generates_all_pairs():
    manager = RoundManager(TournamentConfig("League", format=FORMAT_ROUND_ROBIN))
    result = manager.generate_round(_roster("a", "b", "c", "d"))

    assert len(result.plans) == 1
    assert len(result.plans[0].matches) == 6


def test_pairing_errors_are_returned():
    manager = RoundManager(TournamentConfig("Catan", format=FORMAT_CATAN))
    result = manager.generate_round(_roster("a", "b"))

    assert not result.ok
    assert result.plans == []
    assert isinstance(result.error, InsufficientParticipantsError)


def test_capacity_errors_are_returned():
    manager = RoundManager(TournamentConfig("Games", format=FORMAT_MULTIGAME))
    result = manager.generate_round(_roster("a", "b", "c"))

    assert isinstance(result.error, NoGamesConfiguredError)


def test_multigame_round_uses_configured_games():
    config = TournamentConfig(
        "Games",
        format=FORMAT_MULTIGAME,
        games=[GameConfig("catan", "Catan", 1, 4, 3)],
    )
    result = RoundManager(config).generate_round(
        _roster("a", "b", "c", "d"), rng=random.Random(2)
    )

    assert result.ok
    assert result.plans[0].matches[0].game_id == "catan"


def test_manual_mode_creates_blank_tables():
    config = TournamentConfig(
        "Manual", format=FORMAT_CATAN, generation_mode=MODE_MANUAL
    )
    result = RoundManager(config).generate_round(_roster(*"abcdefghi"))

    plan = result.plans[0]
    assert [group.size for group in plan.matches] == [3, 3, 3]
    assert plan.seated_ids() == []


def test_swiss_multiple_rounds_at_once():
    manager = RoundManager(TournamentConfig("Open", format=FORMAT_SWISS))
    result = manager.generate_round(
        _roster("a", "b", "c", "d"), rounds_to_generate=2, rng=random.Random(3)
    )

    assert [plan.round_number for plan in result.plans] == [1, 2]
