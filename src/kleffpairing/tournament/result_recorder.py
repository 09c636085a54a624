"""Recording and validating match results."""

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

from typing import Dict, Iterable, Optional, Tuple

from kleffpairing.exceptions import InvalidResultException, KleffPairingException
from kleffpairing.models.match import Match, ParticipantResult
from kleffpairing.tournament.standings import tournament_points_for_placement
from kleffpairing.utils import setup_logger
from kleffpairing.utils.validation import (
    validate_placement,
    validate_score_strict,
    validate_victory_points,
)

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating scores, placements and victory points
    - Deriving tournament points from placements
    - Moving matches through their lifecycle
    - Preventing results from being recorded twice
    """

    def start_match(self, match: Match) -> None:
        """Mark a pending match as in progress."""
        match.start()
        logger.debug(f"Match {match.id} started")

    def record_scores(
        self,
        match: Match,
        scores: Dict[str, float],
        winner_id: Optional[str] = None,
    ) -> None:
        """Record head-to-head scores and complete the match.

        Args:
            match: The match to complete
            scores: Score per seated participant (0 to 999)
            winner_id: Explicit winner; decided from scores when omitted

        Raises:
            InvalidResultException: If a score is out of range, a participant
                is not seated in the match, or the winner is not in it
            MatchAlreadyCompletedException: If the match already has a result
        """
        seated = set(match.filled_ids)
        self._check_participants(match, scores.keys())
        if winner_id is not None and winner_id not in seated:
            raise InvalidResultException(
                f"Winner {winner_id} did not play in match {match.id}"
            )

        results = {
            pid: ParticipantResult(pid, score=validate_score_strict(score))
            for pid, score in scores.items()
        }
        match.complete(results, winner_id)
        logger.info(f"Recorded scores for match {match.id}: {dict(scores)}")

    def record_placements(
        self,
        match: Match,
        placements: Dict[str, Tuple[Optional[int], Optional[int]]],
    ) -> None:
        """Record victory points and placements for a multi-player match.

        Args:
            match: The match to complete
            placements: ``{participant_id: (victory_points, placement)}``

        Raises:
            InvalidResultException: If a value is invalid or a participant is
                not seated in the match
            MatchAlreadyCompletedException: If the match already has a result
        """
        self._check_participants(match, placements.keys())
        group_size = len(match.filled_ids)

        results = {}
        for pid, (victory_points, placement) in placements.items():
            points_check = validate_victory_points(victory_points)
            if not points_check:
                raise InvalidResultException(points_check.error_message)
            placement_check = validate_placement(placement, group_size)
            if not placement_check:
                raise InvalidResultException(placement_check.error_message)

            results[pid] = ParticipantResult(
                pid,
                victory_points=points_check.sanitized_value,
                placement=placement_check.sanitized_value,
                tournament_points=tournament_points_for_placement(
                    placement_check.sanitized_value
                ),
            )

        winner_id = next(
            (pid for pid, result in results.items() if result.placement == 1), None
        )
        match.complete(results, winner_id)
        logger.info(f"Recorded placements for match {match.id}")

    def clear_result(self, match: Match) -> None:
        """Reset a completed match to pending."""
        match.clear_result()
        logger.info(f"Cleared result of match {match.id}")

    def record_round_scores(
        self,
        matches: Dict[str, Match],
        results_data: Iterable[Tuple[str, Dict[str, float]]],
    ) -> bool:
        """Record scores for several matches of a round.

        Args:
            matches: Matches of the round (id -> Match)
            results_data: ``(match_id, scores)`` entries

        Returns:
            True if all results recorded successfully, False if any errors occurred
        """
        success = True
        for match_id, scores in results_data:
            match = matches.get(match_id)
            if match is None:
                logger.error(f"Cannot find match: {match_id}")
                success = False
                continue
            try:
                self.record_scores(match, scores)
            except KleffPairingException as e:
                logger.error(f"Could not record result for match {match_id}: {e}")
                success = False

        pending = [m.id for m in matches.values() if not m.is_completed]
        if pending:
            logger.warning(f"Matches still without a result: {pending}")
        return success

    @staticmethod
    def _check_participants(match: Match, participant_ids: Iterable[str]) -> None:
        seated = set(match.filled_ids)
        strangers = [pid for pid in participant_ids if pid not in seated]
        if strangers:
            raise InvalidResultException(
                f"Participants {strangers} are not seated in match {match.id}"
            )
