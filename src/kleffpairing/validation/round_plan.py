"""Round plan checker: verifies the structural rules every round must obey."""

# Kleff Pairing
# Copyright (C) 2025  Kleff Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from kleffpairing.constants import (
    FORMAT_CATAN,
    FORMAT_MULTIGAME,
    FORMAT_ROUND_ROBIN,
    HEAD_TO_HEAD_SIZE,
    SMALL_GROUP_MAX_SIZE,
    SMALL_GROUP_MIN_SIZE,
)
from kleffpairing.models.game import GameConfig
from kleffpairing.models.round_plan import RoundPlan
from kleffpairing.pairing.history import PairingHistory
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a round plan check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Types of round plan violations."""

    ABSOLUTE = "ABSOLUTE"  # structural: must never happen
    QUALITY = "QUALITY"  # repeats: should be minimized


@dataclass
class CriterionResult:
    """Result of validating a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def is_violation(self) -> bool:
        return self.status == CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete validation report for a round plan."""

    round_number: int
    violations: List[CriterionResult]
    quality_warnings: List[CriterionResult]
    criteria_results: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str

    @property
    def is_valid(self) -> bool:
        return self.overall_status == CriterionStatus.COMPLIANT


class RoundPlanValidator:
    """Checks generated rounds against the rules every format must keep.

    Absolute criteria:
    - No participant is seated twice in one round
    - Every group size is within the format's bounds
    - Every participant is seated, on a bye, or listed as unmatched

    Quality criteria (reported, never fatal):
    - Groups repeating an earlier pairing
    - Participants replaying a game
    """

    def check_no_duplicates(self, plan: RoundPlan) -> CriterionResult:
        """No participant appears in two groups of the same round."""
        counts = Counter(plan.seated_ids())
        duplicates = sorted(pid for pid, count in counts.items() if count > 1)
        if duplicates:
            return CriterionResult(
                criterion="no_duplicates",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.ABSOLUTE,
                description=f"Seated more than once: {duplicates}",
                details={"participant_ids": duplicates},
            )
        return CriterionResult(
            criterion="no_duplicates",
            status=CriterionStatus.COMPLIANT,
            description="Every participant is seated at most once",
        )

    def check_group_sizes(
        self,
        plan: RoundPlan,
        min_size: int,
        max_size: int,
        games: Optional[Sequence[GameConfig]] = None,
    ) -> CriterionResult:
        """Group sizes stay within bounds; per game bounds when games are given."""
        bounds = {
            game.id: (game.min_players, game.players_per_table) for game in games or ()
        }
        bad = []
        for index, group in enumerate(plan.matches, start=1):
            if group.is_bye:
                continue
            low, high = bounds.get(group.game_id, (min_size, max_size))
            if not (low <= group.size <= high):
                bad.append({"table": index, "size": group.size, "bounds": (low, high)})

        if bad:
            return CriterionResult(
                criterion="group_sizes",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.ABSOLUTE,
                description=f"{len(bad)} group(s) outside size bounds",
                details={"groups": bad},
            )
        return CriterionResult(
            criterion="group_sizes",
            status=CriterionStatus.COMPLIANT,
            description="All groups are within size bounds",
        )

    def check_completeness(
        self, plan: RoundPlan, participant_ids: Sequence[str]
    ) -> CriterionResult:
        """Every participant is accounted for exactly once, and nobody else."""
        expected = Counter(participant_ids)
        actual = Counter(plan.accounted_ids())
        missing = sorted((expected - actual).keys())
        extra = sorted((actual - expected).keys())
        if missing or extra:
            return CriterionResult(
                criterion="completeness",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.ABSOLUTE,
                description=f"Missing {missing}, unexpected {extra}",
                details={"missing": missing, "unexpected": extra},
            )
        return CriterionResult(
            criterion="completeness",
            status=CriterionStatus.COMPLIANT,
            description="Every participant is seated, on a bye or unmatched",
        )

    def check_repeat_opponents(
        self, plan: RoundPlan, history: Optional[PairingHistory]
    ) -> CriterionResult:
        if history is None:
            return CriterionResult(
                criterion="repeat_opponents",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No pairing history supplied",
            )
        repeats = [
            list(pair)
            for group in plan.matches
            for pair in group.pairs()
            if history.has_played(*pair)
        ]
        if repeats:
            return CriterionResult(
                criterion="repeat_opponents",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.QUALITY,
                description=f"{len(repeats)} repeat pairing(s)",
                details={"pairs": repeats},
            )
        return CriterionResult(
            criterion="repeat_opponents",
            status=CriterionStatus.COMPLIANT,
            description="No repeat pairings found",
        )

    def check_repeat_games(
        self, plan: RoundPlan, history: Optional[PairingHistory]
    ) -> CriterionResult:
        if history is None or not any(g.game_id for g in plan.matches):
            return CriterionResult(
                criterion="repeat_games",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No games assigned in this round",
            )
        replays = [
            (pid, group.game_id)
            for group in plan.matches
            if group.game_id is not None
            for pid in group.filled_ids
            if history.has_played_game(pid, group.game_id)
        ]
        if replays:
            return CriterionResult(
                criterion="repeat_games",
                status=CriterionStatus.VIOLATION,
                violation_type=ViolationType.QUALITY,
                description=f"{len(replays)} participant(s) replay a game",
                details={"replays": replays},
            )
        return CriterionResult(
            criterion="repeat_games",
            status=CriterionStatus.COMPLIANT,
            description="No participant replays a game",
        )

    def check_feasibility(
        self, participant_count: int, rounds: int, group_size: int = HEAD_TO_HEAD_SIZE
    ) -> Optional[CriterionResult]:
        """Check whether enough distinct pairs exist to avoid repeats entirely.

        Each group of ``k`` uses ``k(k-1)/2`` pairs. When the rounds need more
        pairs than ``C(n, 2)``, repeats are inevitable.

        Returns:
            CriterionResult if repeats are unavoidable, None otherwise.
        """
        if participant_count < 2 or rounds < 1 or group_size < 2:
            return None

        unique_pairs = participant_count * (participant_count - 1) // 2
        groups_per_round = participant_count // group_size
        pairs_needed = rounds * groups_per_round * group_size * (group_size - 1) // 2
        if pairs_needed <= unique_pairs:
            return None

        return CriterionResult(
            criterion="repeat_opponents",
            status=CriterionStatus.VIOLATION,
            violation_type=ViolationType.QUALITY,
            description=(
                f"{participant_count} participants over {rounds} rounds need "
                f"{pairs_needed} pairs, but only {unique_pairs} exist"
            ),
            details={
                "unique_pairs": unique_pairs,
                "pairs_needed": pairs_needed,
                "min_repeats": pairs_needed - unique_pairs,
            },
        )

    def validate_round_plan(
        self,
        plan: RoundPlan,
        participant_ids: Sequence[str],
        min_size: int = HEAD_TO_HEAD_SIZE,
        max_size: int = HEAD_TO_HEAD_SIZE,
        games: Optional[Sequence[GameConfig]] = None,
        history: Optional[PairingHistory] = None,
        single_appearance: bool = True,
    ) -> ValidationReport:
        """Validate a round plan against all criteria.

        Args:
            plan: The generated round
            participant_ids: Roster the round was generated for
            min_size: Smallest allowed group
            max_size: Largest allowed group
            games: Configured games; their bounds replace ``min_size`` and
                ``max_size`` for groups assigned to them
            history: Pairing history from before the round
            single_appearance: False for the one-round round robin, where
                participants appear in many matches

        Returns:
            ValidationReport with every criterion result
        """
        logger.debug("Validating round %s", plan.round_number)

        results = [self.check_group_sizes(plan, min_size, max_size, games)]
        if single_appearance:
            results.append(self.check_no_duplicates(plan))
            results.append(self.check_completeness(plan, participant_ids))
        results.append(self.check_repeat_opponents(plan, history))
        results.append(self.check_repeat_games(plan, history))

        violations = [
            r
            for r in results
            if r.is_violation and r.violation_type == ViolationType.ABSOLUTE
        ]
        warnings = [
            r
            for r in results
            if r.is_violation and r.violation_type == ViolationType.QUALITY
        ]
        overall = CriterionStatus.VIOLATION if violations else CriterionStatus.COMPLIANT

        if overall == CriterionStatus.COMPLIANT:
            summary = f"Round valid; {len(warnings)} quality criteria flagged"
        else:
            summary = (
                f"{len(violations)} absolute violation(s); "
                f"{len(warnings)} quality warning(s)"
            )
            logger.warning("Round %s: %s", plan.round_number, summary)

        return ValidationReport(
            round_number=plan.round_number,
            violations=violations,
            quality_warnings=warnings,
            criteria_results=results,
            overall_status=overall,
            summary=summary,
        )

    def validate_for_format(
        self,
        plan: RoundPlan,
        participant_ids: Sequence[str],
        tournament_format: str,
        games: Optional[Sequence[GameConfig]] = None,
        history: Optional[PairingHistory] = None,
    ) -> ValidationReport:
        """Validate a round with the size bounds of its tournament format."""
        if tournament_format == FORMAT_CATAN:
            low, high = SMALL_GROUP_MIN_SIZE, SMALL_GROUP_MAX_SIZE
        elif tournament_format == FORMAT_MULTIGAME:
            low, high = HEAD_TO_HEAD_SIZE, SMALL_GROUP_MAX_SIZE
        else:
            low = high = HEAD_TO_HEAD_SIZE
        return self.validate_round_plan(
            plan,
            participant_ids,
            min_size=low,
            max_size=high,
            games=games,
            history=history,
            single_appearance=tournament_format != FORMAT_ROUND_ROBIN,
        )
