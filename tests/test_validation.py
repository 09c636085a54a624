from kleffpairing.constants import FORMAT_CATAN, FORMAT_ROUND_ROBIN
from kleffpairing.models import GameConfig, MatchGroup, RoundPlan
from kleffpairing.pairing import PairingHistory
from kleffpairing.validation import CriterionStatus, RoundPlanValidator


def _plan(*groups, byes=(), unmatched=()):
    return RoundPlan(
        round_number=1,
        matches=[MatchGroup(list(g)) for g in groups],
        byes=list(byes),
        unmatched=list(unmatched),
    )


def _criterion(report, name):
    return next(r for r in report.criteria_results if r.criterion == name)


def test_valid_round():
    report = RoundPlanValidator().validate_round_plan(
        _plan(["a", "b"], ["c", "d"], byes=["e"]), ["a", "b", "c", "d", "e"]
    )

    assert report.is_valid
    assert report.violations == []
    assert report.quality_warnings == []


def test_duplicate_seat_is_a_violation():
    report = RoundPlanValidator().validate_round_plan(
        _plan(["a", "b"], ["a", "c"]), ["a", "b", "c"]
    )

    assert not report.is_valid
    duplicates = _criterion(report, "no_duplicates")
    assert duplicates.details["participant_ids"] == ["a"]


def test_missing_and_unknown_participants():
    report = RoundPlanValidator().validate_round_plan(
        _plan(["a", "z"], unmatched=["c"]), ["a", "b", "c"]
    )

    completeness = _criterion(report, "completeness")
    assert completeness.details == {"missing": ["b"], "unexpected": ["z"]}


def test_group_size_bounds_per_game():
    games = [GameConfig("catan", "Catan", 1, 4, 3)]
    plan = RoundPlan(
        round_number=1,
        matches=[MatchGroup(["a", "b"], game_id="catan"), MatchGroup(["c", "d"])],
    )

    report = RoundPlanValidator().validate_round_plan(
        plan, ["a", "b", "c", "d"], min_size=2, max_size=4, games=games
    )

    sizes = _criterion(report, "group_sizes")
    assert sizes.status == CriterionStatus.VIOLATION
    assert [g["table"] for g in sizes.details["groups"]] == [1]


def test_repeats_are_quality_warnings():
    history = PairingHistory.build([MatchGroup(["a", "b"], game_id="catan")])
    plan = RoundPlan(
        round_number=2,
        matches=[MatchGroup(["a", "b"], game_id="catan"), MatchGroup(["c", "d"])],
    )

    report = RoundPlanValidator().validate_round_plan(
        plan, ["a", "b", "c", "d"], history=history
    )

    assert report.is_valid
    assert {w.criterion for w in report.quality_warnings} == {
        "repeat_opponents",
        "repeat_games",
    }


def test_checks_without_history_do_not_apply():
    report = RoundPlanValidator().validate_round_plan(_plan(["a", "b"]), ["a", "b"])

    assert _criterion(report, "repeat_opponents").status == (
        CriterionStatus.NOT_APPLICABLE
    )


def test_format_bounds():
    validator = RoundPlanValidator()
    pairs = _plan(["a", "b"], ["c", "d"])

    catan = validator.validate_for_format(pairs, ["a", "b", "c", "d"], FORMAT_CATAN)
    assert not catan.is_valid

    league = _plan(["a", "b"], ["a", "c"], ["b", "c"])
    robin = validator.validate_for_format(league, ["a", "b", "c"], FORMAT_ROUND_ROBIN)
    assert robin.is_valid


def test_feasibility():
    validator = RoundPlanValidator()

    assert validator.check_feasibility(4, 3) is None
    result = validator.check_feasibility(4, 4)
    assert result.details["min_repeats"] == 2
    assert validator.check_feasibility(8, 2, group_size=4) is None
    assert validator.check_feasibility(8, 3, group_size=4) is not None
