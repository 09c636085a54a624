import random

import pytest

from kleffpairing.constants import NOTICE_BYE, NOTICE_REPEAT_OPPONENT
from kleffpairing.exceptions import InsufficientParticipantsError
from kleffpairing.models import Participant
from kleffpairing.pairing import PairingHistory, create_swiss_pairings


def _roster(*ids):
    return [Participant(pid, pid.upper()) for pid in ids]


def _pairs(plan):
    return {frozenset(group.filled_ids) for group in plan.matches}


def test_first_round_pairs_everyone():
    plan = create_swiss_pairings(_roster("a", "b", "c", "d"), rng=random.Random(1))[0]

    assert plan.round_number == 1
    assert len(plan.matches) == 2
    assert sorted(plan.seated_ids()) == ["a", "b", "c", "d"]
    assert plan.byes == []


def test_odd_roster_gives_one_bye_with_notice():
    plan = create_swiss_pairings(
        _roster("a", "b", "c", "d", "e"), rng=random.Random(3)
    )[0]

    assert len(plan.matches) == 2
    assert len(plan.byes) == 1
    assert plan.byes[0] not in plan.seated_ids()
    assert plan.notices_of(NOTICE_BYE)[0].participant_ids == plan.byes


def test_bye_as_match_adds_single_seat_group():
    plan = create_swiss_pairings(
        _roster("a", "b", "c"), bye_as_match=True, rng=random.Random(5)
    )[0]

    bye_groups = [group for group in plan.matches if group.is_bye]
    assert len(bye_groups) == 1
    assert bye_groups[0].filled_ids == plan.byes
    assert len(plan.to_matches()) == 1


def test_standings_order_seeds_pairings():
    standings = {"a": (3, 10.0), "b": (0, 0.0), "c": (2, 5.0), "d": (1, 0.0)}
    plan = create_swiss_pairings(
        _roster("a", "b", "c", "d"), standings=standings, rng=random.Random(7)
    )[0]

    assert [group.filled_ids for group in plan.matches] == [["a", "c"], ["d", "b"]]


def test_previous_opponents_are_avoided():
    history = PairingHistory.build([["a", "b"], ["c", "d"]])
    for seed in range(10):
        plan = create_swiss_pairings(
            _roster("a", "b", "c", "d"), history, rng=random.Random(seed)
        )[0]
        assert not plan.notices_of(NOTICE_REPEAT_OPPONENT)
        assert {"a", "b"} not in [set(ids) for ids in _pairs(plan)]


def test_repeat_is_forced_and_reported_when_unavoidable():
    history = PairingHistory.build([["a", "b"]])
    plan = create_swiss_pairings(_roster("a", "b"), history, rng=random.Random(0))[0]

    assert _pairs(plan) == {frozenset({"a", "b"})}
    notice = plan.notices_of(NOTICE_REPEAT_OPPONENT)[0]
    assert set(notice.participant_ids) == {"a", "b"}


def test_multiple_rounds_use_fresh_pairs_and_leave_history_alone():
    history = PairingHistory()
    plans = create_swiss_pairings(
        _roster("a", "b", "c", "d"),
        history,
        rounds_to_generate=3,
        rng=random.Random(11),
        first_round=4,
    )

    assert [plan.round_number for plan in plans] == [4, 5, 6]
    all_pairs = [pair for plan in plans for pair in _pairs(plan)]
    assert len(all_pairs) == 6
    assert len(set(all_pairs)) == 6
    assert history.opponents == {}


def test_single_participant_is_rejected():
    with pytest.raises(InsufficientParticipantsError) as excinfo:
        create_swiss_pairings(_roster("a"))

    assert excinfo.value.minimum_required == 2
    assert excinfo.value.actual == 1


def test_only_fresh_opponent_is_chosen_over_repeats():
    standings = {"a": (3, 0.0), "b": (2, 0.0), "c": (1, 0.0), "d": (0, 0.0)}
    history = PairingHistory.build([["a", "b"], ["a", "c"]])

    plan = create_swiss_pairings(
        _roster("a", "b", "c", "d"), history, standings=standings
    )[0]

    assert [group.filled_ids for group in plan.matches] == [["a", "d"], ["b", "c"]]
    assert not plan.notices_of(NOTICE_REPEAT_OPPONENT)
