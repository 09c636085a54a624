"""Single elimination: first-round bracket and bracket helpers."""

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

import random
from typing import List, Optional, Sequence

from kleffpairing.constants import HEAD_TO_HEAD_SIZE, NOTICE_BYE
from kleffpairing.exceptions import InsufficientParticipantsError
from kleffpairing.models.match import Match, MatchGroup
from kleffpairing.models.participant import Participant, roster_ids
from kleffpairing.models.round_plan import RoundPlan
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)

ROUND_NAMES = {
    1: "Final",
    2: "Semi-Finals",
    4: "Quarter-Finals",
}


def create_elimination_pairings(
    roster: Sequence[Participant],
    rng: Optional[random.Random] = None,
    bye_as_match: bool = False,
    first_round: int = 1,
) -> List[RoundPlan]:
    """Shuffle the roster and pair neighbours for the first bracket round.

    Later rounds depend on results and are built by the caller from the
    winners. With an odd roster the last participant advances on a bye.
    """
    participant_ids = roster_ids(roster)
    if len(participant_ids) < HEAD_TO_HEAD_SIZE:
        raise InsufficientParticipantsError(HEAD_TO_HEAD_SIZE, len(participant_ids))

    rng = rng if rng is not None else random.Random()
    order = list(participant_ids)
    rng.shuffle(order)

    plan = RoundPlan(round_number=first_round)
    for index in range(0, len(order) - 1, 2):
        plan.matches.append(MatchGroup([order[index], order[index + 1]]))

    if len(order) % 2:
        bye_id = order[-1]
        plan.byes.append(bye_id)
        plan.add_notice(NOTICE_BYE, [bye_id], f"{bye_id} advances on a bye")
        if bye_as_match:
            plan.matches.append(MatchGroup([bye_id]))
        logger.info("Elimination bye for %s", bye_id)

    logger.info(
        "Generated elimination round %d with %d matches",
        plan.round_number,
        len(plan.matches),
    )
    return [plan]


def bracket_round_name(matches_in_round: int, round_number: int) -> str:
    """Display name of a bracket round.

    Rounds with one, two or four matches get their bracket name; any other
    round is named by its number.

    Example:
        >>> bracket_round_name(2, 3)
        'Semi-Finals'
    """
    return ROUND_NAMES.get(matches_in_round, f"Round {round_number}")


def match_winner(match: Match) -> Optional[str]:
    """Winner of a completed head-to-head match.

    An explicit ``winner_id`` takes precedence; otherwise the higher score
    wins, a missing score counting as zero. Returns None for unfinished
    matches, ties and matches without any score.
    """
    if not match.is_completed:
        return None
    if match.winner_id is not None:
        return match.winner_id

    ids = match.filled_ids
    if len(ids) != HEAD_TO_HEAD_SIZE:
        return None
    scores = [match.score_of(pid) for pid in ids]
    if all(score is None for score in scores):
        return None

    first, second = (score or 0 for score in scores)
    if first == second:
        return None
    return ids[0] if first > second else ids[1]
