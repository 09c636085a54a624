import random

import pytest

from kleffpairing.constants import NOTICE_BYE
from kleffpairing.exceptions import InsufficientParticipantsError
from kleffpairing.models import Match, Participant, ParticipantResult
from kleffpairing.pairing import (
    bracket_round_name,
    create_elimination_pairings,
    match_winner,
)


def _roster(count):
    return [Participant(f"p{i}", f"Player {i}") for i in range(1, count + 1)]


def _completed(scores, winner_id=None):
    match = Match(round_number=1, participant_ids=["a", "b"])
    match.complete(
        {pid: ParticipantResult(pid, score=score) for pid, score in scores.items()},
        winner_id,
    )
    return match


def test_even_bracket_pairs_everyone():
    plan = create_elimination_pairings(_roster(8), rng=random.Random(2))[0]

    assert len(plan.matches) == 4
    assert sorted(plan.seated_ids()) == sorted(p.id for p in _roster(8))
    assert plan.byes == []


def test_odd_bracket_gives_a_bye():
    plan = create_elimination_pairings(_roster(7), rng=random.Random(4))[0]

    assert len(plan.matches) == 3
    assert len(plan.byes) == 1
    assert plan.byes[0] not in plan.seated_ids()
    assert plan.notices_of(NOTICE_BYE)


def test_seeded_bracket_is_reproducible():
    first = create_elimination_pairings(_roster(8), rng=random.Random(9))[0]
    second = create_elimination_pairings(_roster(8), rng=random.Random(9))[0]

    assert first.to_dict() == second.to_dict()


def test_bracket_needs_two_participants():
    with pytest.raises(InsufficientParticipantsError):
        create_elimination_pairings(_roster(1))


@pytest.mark.parametrize(
    "matches, round_number, name",
    [
        (1, 3, "Final"),
        (2, 2, "Semi-Finals"),
        (4, 1, "Quarter-Finals"),
        (3, 2, "Round 2"),
        (8, 1, "Round 1"),
    ],
)
def test_bracket_round_name(matches, round_number, name):
    assert bracket_round_name(matches, round_number) == name


def test_winner_from_scores():
    assert match_winner(_completed({"a": 3, "b": 1})) == "a"
    assert match_winner(_completed({"a": 0, "b": 2})) == "b"


def test_explicit_winner_takes_precedence():
    assert match_winner(_completed({"a": 3, "b": 1}, winner_id="b")) == "b"


def test_no_winner_for_ties_and_unfinished_matches():
    assert match_winner(_completed({"a": 2, "b": 2})) is None
    assert match_winner(Match(round_number=1, participant_ids=["a", "b"])) is None
    assert match_winner(_completed({})) is None


def test_missing_score_counts_as_zero():
    assert match_winner(_completed({"b": 1})) == "b"
