import random

import pytest

from kleffpairing.constants import NOTICE_REPEAT_OPPONENT, NOTICE_UNMATCHED
from kleffpairing.exceptions import InsufficientParticipantsError
from kleffpairing.models import Participant
from kleffpairing.pairing import PairingHistory, create_small_group_pairings
from kleffpairing.pairing.small_group import pick_group


def _roster(count):
    return [Participant(f"p{i}", f"Player {i}") for i in range(1, count + 1)]


@pytest.mark.parametrize(
    "count, sizes, unmatched",
    [(3, [3], 0), (4, [4], 0), (5, [4], 1), (7, [4, 3], 0), (8, [4, 4], 0)],
)
def test_tables_fill_to_four_first(count, sizes, unmatched):
    plan = create_small_group_pairings(_roster(count), rng=random.Random(1))[0]

    assert [group.size for group in plan.matches] == sizes
    assert len(plan.unmatched) == unmatched
    assert sorted(plan.accounted_ids()) == sorted(p.id for p in _roster(count))


def test_leftover_participant_is_reported():
    plan = create_small_group_pairings(_roster(5), rng=random.Random(2))[0]

    notice = plan.notices_of(NOTICE_UNMATCHED)[0]
    assert notice.participant_ids == plan.unmatched


def test_balanced_tables():
    plan = create_small_group_pairings(
        _roster(6), balance_tables=True, rng=random.Random(3)
    )[0]

    assert [group.size for group in plan.matches] == [3, 3]
    assert plan.unmatched == []


def test_pick_group_stops_on_conflict_free_sample():
    history = PairingHistory.build([["a", "b"]])
    group, conflicts = pick_group(["a", "b", "c", "d"], 2, history, random.Random(5))

    assert conflicts == 0
    assert set(group) != {"a", "b"}


def test_only_conflict_free_group_is_chosen():
    # p5 has met everyone, so {p1..p4} is the one table without a repeat.
    # The search draws 20 samples, so this is a strong preference and not a
    # guarantee; a miss is (4/5)**20, about 1%, and the seed is fixed.
    history = PairingHistory.build([["p5", f"p{i}"] for i in range(1, 5)])
    plan = create_small_group_pairings(_roster(5), history, rng=random.Random(11))[0]

    assert sorted(plan.matches[0].filled_ids) == ["p1", "p2", "p3", "p4"]
    assert plan.unmatched == ["p5"]
    assert not plan.notices_of(NOTICE_REPEAT_OPPONENT)


def test_repeats_are_reported_when_unavoidable():
    history = PairingHistory.build([["p1", "p2", "p3"]])
    plan = create_small_group_pairings(_roster(3), history, rng=random.Random(6))[0]

    notice = plan.notices_of(NOTICE_REPEAT_OPPONENT)[0]
    assert sorted(notice.participant_ids) == ["p1", "p2", "p3"]


def test_multiple_rounds_leave_history_alone():
    history = PairingHistory()
    plans = create_small_group_pairings(
        _roster(8), history, rounds_to_generate=3, rng=random.Random(7)
    )

    assert [plan.round_number for plan in plans] == [1, 2, 3]
    assert history.opponents == {}


def test_two_participants_are_rejected():
    with pytest.raises(InsufficientParticipantsError) as excinfo:
        create_small_group_pairings(_roster(2))

    assert excinfo.value.minimum_required == 3
