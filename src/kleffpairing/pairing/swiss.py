"""Swiss pairing: greedy forward scan over a standings-sorted roster."""

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

from kleffpairing.constants import HEAD_TO_HEAD_SIZE, NOTICE_BYE, NOTICE_REPEAT_OPPONENT
from kleffpairing.exceptions import InsufficientParticipantsError
from kleffpairing.models.match import MatchGroup
from kleffpairing.models.participant import Participant, roster_ids
from kleffpairing.models.round_plan import RoundPlan
from kleffpairing.pairing.history import PairingHistory
from kleffpairing.type_hints import SwissStandings
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)


def _seed_order(
    participant_ids: List[str],
    standings: Optional[SwissStandings],
    rng: random.Random,
) -> List[str]:
    """Shuffle, then stable-sort by wins and differential when standings exist.

    The shuffle breaks ties between equal records randomly.
    """
    order = list(participant_ids)
    rng.shuffle(order)
    if standings:
        order.sort(
            key=lambda pid: (
                -standings.get(pid, (0, 0.0))[0],
                -standings.get(pid, (0, 0.0))[1],
            )
        )
    return order


def _pair_swiss_round(
    order: List[str],
    history: PairingHistory,
    round_number: int,
    bye_as_match: bool,
) -> RoundPlan:
    plan = RoundPlan(round_number=round_number)
    paired = set()

    for index, participant_id in enumerate(order):
        if participant_id in paired:
            continue
        remaining = [pid for pid in order[index + 1 :] if pid not in paired]

        if not remaining:
            # only the last unpaired participant can get here
            plan.byes.append(participant_id)
            plan.add_notice(
                NOTICE_BYE, [participant_id], f"{participant_id} receives a bye"
            )
            if bye_as_match:
                plan.matches.append(MatchGroup([participant_id]))
            logger.info("Round %d: bye for %s", round_number, participant_id)
            break

        opponent = next(
            (pid for pid in remaining if not history.has_played(participant_id, pid)),
            None,
        )
        if opponent is None:
            opponent = remaining[0]
            plan.add_notice(
                NOTICE_REPEAT_OPPONENT,
                [participant_id, opponent],
                f"{participant_id} and {opponent} play each other again",
            )
            logger.warning(
                "Round %d: no fresh opponent for %s, repeating against %s",
                round_number,
                participant_id,
                opponent,
            )

        paired.update((participant_id, opponent))
        plan.matches.append(MatchGroup([participant_id, opponent]))

    return plan


def create_swiss_pairings(
    roster: Sequence[Participant],
    history: Optional[PairingHistory] = None,
    rounds_to_generate: int = 1,
    standings: Optional[SwissStandings] = None,
    bye_as_match: bool = False,
    rng: Optional[random.Random] = None,
    first_round: int = 1,
) -> List[RoundPlan]:
    """
    Create Swiss pairings for one or more rounds.

    Each participant is matched with the first participant further down the
    seeding order they have not met yet; when everyone below has been met
    the next one down is taken anyway. The scan only looks forward, so an
    earlier pairing is never revisited to make room for a later one.

    - roster: checked-in participants
    - history: previous pairings; never modified
    - rounds_to_generate: rounds to generate back to back
    - standings: id -> (wins, point differential), used for seeding
    - bye_as_match: also emit a one-seat group for the bye
    - rng: random source; a fresh unseeded one when omitted
    - first_round: number of the first generated round
    Returns: one RoundPlan per generated round
    """
    participant_ids = roster_ids(roster)
    if len(participant_ids) < HEAD_TO_HEAD_SIZE:
        raise InsufficientParticipantsError(HEAD_TO_HEAD_SIZE, len(participant_ids))

    rng = rng if rng is not None else random.Random()
    working = history.copy() if history is not None else PairingHistory()

    plans = []
    for offset in range(rounds_to_generate):
        order = _seed_order(participant_ids, standings, rng)
        plan = _pair_swiss_round(order, working, first_round + offset, bye_as_match)
        for group in plan.matches:
            working.add_group(group.participant_ids)
        plans.append(plan)
        logger.info(
            "Generated Swiss round %d: %d matches, %d byes",
            plan.round_number,
            len(plan.matches),
            len(plan.byes),
        )
    return plans
