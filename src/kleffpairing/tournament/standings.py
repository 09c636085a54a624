"""Standings computed from completed match results."""

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

from typing import Dict, Iterable, List, Optional, Sequence, Union

from kleffpairing.constants import (
    STANDINGS_BY_FORMAT,
    STANDINGS_CARCASSONNE,
    STANDINGS_PLACEMENT,
    STANDINGS_WIN_LOSS,
    TOURNAMENT_POINTS_BY_PLACEMENT,
)
from kleffpairing.exceptions import UnknownFormatException
from kleffpairing.models.match import Match
from kleffpairing.models.participant import Participant, roster_ids
from kleffpairing.tournament.models import PlacementStanding, WinLossStanding
from kleffpairing.type_hints import SwissStandings
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)

Standing = Union[WinLossStanding, PlacementStanding]


def tournament_points_for_placement(placement: Optional[int]) -> int:
    """Tournament points for a finishing position (1st 6, 2nd 4, 3rd 2, 4th 1)."""
    if placement is None:
        return 0
    return TOURNAMENT_POINTS_BY_PLACEMENT.get(placement, 0)


def standings_variant_for_format(tournament_format: str) -> str:
    """Return the standings variant a tournament format is ranked with.

    Raises:
        UnknownFormatException: If the format is not known
    """
    try:
        return STANDINGS_BY_FORMAT[tournament_format]
    except KeyError:
        raise UnknownFormatException(
            f"Unknown tournament format: {tournament_format}"
        ) from None


class StandingsCalculator:
    """Ranks participants from completed matches.

    Standings are rebuilt from the full match list on every call, so two
    calls over the same input always agree.

    Two families of rules exist:

    Win/loss (Swiss, round robin, elimination, Carcassonne):
    - A match is won by ``winner_id`` when set, else by the highest score
    - Participants sharing the top score draw
    - Ranked by wins, then total score (Carcassonne: point differential)

    Placement (Catan, multi-game):
    - Tournament points from placement: 1st 6, 2nd 4, 3rd 2, 4th 1
    - Ranked by tournament points, victory points, then matches played
    """

    def calculate(
        self,
        roster: Sequence[Participant],
        matches: Iterable[Match],
        variant: str = STANDINGS_WIN_LOSS,
    ) -> List[Standing]:
        """Calculate ranked standings.

        Args:
            roster: Every participant to rank, including those without matches
            matches: Matches of the tournament; only completed ones count
            variant: ``win_loss``, ``carcassonne`` or ``placement``

        Returns:
            Standing rows sorted by rank
        """
        participant_ids = roster_ids(roster)
        completed = [match for match in matches if match.is_completed]

        if variant == STANDINGS_PLACEMENT:
            rows = self._placement_rows(participant_ids, completed)
        elif variant in (STANDINGS_WIN_LOSS, STANDINGS_CARCASSONNE):
            rows = self._win_loss_rows(participant_ids, completed)
        else:
            raise UnknownFormatException(f"Unknown standings variant: {variant}")

        ranked = self._sort(rows, variant)
        for position, row in enumerate(ranked, start=1):
            row.rank = position
        return ranked

    def calculate_for_format(
        self,
        roster: Sequence[Participant],
        matches: Iterable[Match],
        tournament_format: str,
    ) -> List[Standing]:
        return self.calculate(
            roster, matches, standings_variant_for_format(tournament_format)
        )

    def _win_loss_rows(
        self, participant_ids: List[str], matches: List[Match]
    ) -> List[WinLossStanding]:
        rows = {pid: WinLossStanding(pid) for pid in participant_ids}

        for match in matches:
            ids = match.filled_ids
            scores = {pid: match.score_of(pid) or 0.0 for pid in ids}
            winners = self._winners(match, scores)

            for pid in ids:
                row = rows.get(pid)
                if row is None:
                    logger.debug("Ignoring unknown participant %s in %s", pid, match.id)
                    continue
                row.matches_played += 1
                row.total_score += scores[pid]
                row.opponent_score += sum(
                    score for other, score in scores.items() if other != pid
                )
                if pid not in winners:
                    row.losses += 1
                elif len(winners) == 1:
                    row.wins += 1
                else:
                    row.draws += 1

        return [rows[pid] for pid in participant_ids]

    @staticmethod
    def _winners(match: Match, scores: Dict[str, float]) -> List[str]:
        """Participants who won (one) or drew (several) a match."""
        if match.winner_id is not None and match.winner_id in scores:
            return [match.winner_id]
        if not scores:
            return []
        top = max(scores.values())
        return [pid for pid, score in scores.items() if score == top]

    def _placement_rows(
        self, participant_ids: List[str], matches: List[Match]
    ) -> List[PlacementStanding]:
        rows = {pid: PlacementStanding(pid) for pid in participant_ids}

        for match in matches:
            for pid in match.filled_ids:
                row = rows.get(pid)
                if row is None:
                    logger.debug("Ignoring unknown participant %s in %s", pid, match.id)
                    continue
                row.matches_played += 1
                if match.game_id is not None:
                    row.games.add(match.game_id)

                result = match.results.get(pid)
                if result is None:
                    continue
                if result.placement == 1:
                    row.first_positions += 1
                row.total_victory_points += result.victory_points or 0
                row.total_tournament_points += tournament_points_for_placement(
                    result.placement
                )

        return [rows[pid] for pid in participant_ids]

    @staticmethod
    def _sort(rows: List[Standing], variant: str) -> List[Standing]:
        # sorted() is stable, so full ties keep roster order
        if variant == STANDINGS_PLACEMENT:
            return sorted(
                rows,
                key=lambda r: (
                    -r.total_tournament_points,
                    -r.total_victory_points,
                    -r.matches_played,
                ),
            )
        if variant == STANDINGS_CARCASSONNE:
            return sorted(rows, key=lambda r: (-r.wins, -r.point_differential))
        return sorted(rows, key=lambda r: (-r.wins, -r.total_score))


def swiss_standings(
    roster: Sequence[Participant], matches: Iterable[Match]
) -> SwissStandings:
    """Wins and point differential per participant, for Swiss seeding."""
    rows = StandingsCalculator().calculate(roster, matches, STANDINGS_WIN_LOSS)
    return {row.participant_id: (row.wins, row.point_differential) for row in rows}


#  LocalWords:  Carcassonne
