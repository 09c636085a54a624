import json

import pytest

from kleffpairing.constants import (
    FORMAT_CARCASSONNE,
    FORMAT_CATAN,
    FORMAT_ELIMINATORY,
    FORMAT_MULTIGAME,
    FORMAT_ROUND_ROBIN,
    FORMAT_SWISS,
)
from kleffpairing.testing.rtg import (
    RandomTournamentGenerator,
    ResultPattern,
    RTGConfig,
    SkillDistribution,
    count_violations,
    create_small_tournament,
    default_games,
)


@pytest.mark.parametrize(
    "tournament_format, participants",
    [
        (FORMAT_SWISS, 9),
        (FORMAT_ROUND_ROBIN, 6),
        (FORMAT_CARCASSONNE, 7),
        (FORMAT_CATAN, 10),
        (FORMAT_MULTIGAME, 12),
        (FORMAT_ELIMINATORY, 7),
    ],
)
def test_generated_tournaments_are_structurally_valid(tournament_format, participants):
    generator = create_small_tournament(tournament_format, participants, seed=42)
    tournament = generator.generate_complete_tournament()

    assert tournament["errors"] == []
    assert tournament["reports"]
    assert count_violations(tournament["reports"]) == 0
    assert len(tournament["standings"]) == participants
    assert all(match.is_completed for match in tournament["matches"])


def test_swiss_plays_requested_rounds():
    config = RTGConfig(num_participants=8, num_rounds=3, seed=7)
    tournament = RandomTournamentGenerator(config).generate_complete_tournament()

    assert [plan.round_number for plan in tournament["rounds"]] == [1, 2, 3]
    assert len(tournament["matches"]) == 12


def test_elimination_produces_champion():
    config = RTGConfig(
        num_participants=8,
        num_rounds=3,
        tournament_format=FORMAT_ELIMINATORY,
        result_pattern=ResultPattern.PREDICTABLE,
        seed=3,
    )
    tournament = RandomTournamentGenerator(config).generate_complete_tournament()

    assert len(tournament["rounds"]) == 3
    assert tournament["champion"] in {p.id for p in tournament["participants"]}
    assert tournament["standings"][0].participant_id == tournament["champion"]


def test_same_seed_same_tournament():
    config = RTGConfig(
        num_participants=10,
        num_rounds=3,
        tournament_format=FORMAT_CATAN,
        skill_distribution=SkillDistribution.CLUB,
        seed=11,
    )
    first = RandomTournamentGenerator(config).generate_complete_tournament()
    second = RandomTournamentGenerator(config).generate_complete_tournament()

    assert [p.to_dict() for p in first["rounds"]] == [
        p.to_dict() for p in second["rounds"]
    ]


def test_default_games_seat_everyone():
    games = default_games(30)

    assert sum(game.capacity for game in games) >= 30


def test_json_export():
    generator = create_small_tournament(FORMAT_MULTIGAME, 8, seed=5)
    tournament = generator.generate_complete_tournament()

    data = json.loads(generator.export_json_format(tournament))

    assert data["tournament_config"]["format"] == FORMAT_MULTIGAME
    assert len(data["participants"]) == 8
    assert len(data["rounds"]) == 3
    assert data["standings"][0]["rank"] == 1
