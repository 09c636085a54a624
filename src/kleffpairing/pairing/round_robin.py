"""Round robin: every pair once, as one round or as a circle schedule."""

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

from itertools import combinations
from typing import List, Optional, Sequence

from kleffpairing.constants import HEAD_TO_HEAD_SIZE, NOTICE_BYE
from kleffpairing.exceptions import InsufficientParticipantsError
from kleffpairing.models.match import MatchGroup
from kleffpairing.models.participant import Participant, roster_ids
from kleffpairing.models.round_plan import RoundPlan
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)


def _require_pairable(participant_ids: List[str]) -> None:
    if len(participant_ids) < HEAD_TO_HEAD_SIZE:
        raise InsufficientParticipantsError(HEAD_TO_HEAD_SIZE, len(participant_ids))


def create_round_robin_pairings(
    roster: Sequence[Participant], first_round: int = 1
) -> List[RoundPlan]:
    """Put every unordered pair of participants into one round.

    The result is a single plan of ``n(n-1)/2`` matches in roster order;
    participants appear in several matches of the same round, so the caller
    schedules them over time.
    """
    participant_ids = roster_ids(roster)
    _require_pairable(participant_ids)

    plan = RoundPlan(round_number=first_round)
    for first, second in combinations(participant_ids, 2):
        plan.matches.append(MatchGroup([first, second]))

    logger.info(
        "Generated round robin of %d matches for %d participants",
        len(plan.matches),
        len(participant_ids),
    )
    return [plan]


def create_round_robin_schedule(
    roster: Sequence[Participant], first_round: int = 1
) -> List[RoundPlan]:
    """Spread a round robin over rounds with the circle method.

    Each participant plays at most once per round. ``n - 1`` rounds for an
    even roster, ``n`` rounds for an odd one, where the participant facing
    the empty seat gets a bye.
    """
    participant_ids = roster_ids(roster)
    _require_pairable(participant_ids)

    seats: List[Optional[str]] = list(participant_ids)
    if len(seats) % 2:
        seats.append(None)
    seat_count = len(seats)

    plans = []
    for offset in range(seat_count - 1):
        plan = RoundPlan(round_number=first_round + offset)
        for index in range(seat_count // 2):
            first, second = seats[index], seats[seat_count - 1 - index]
            if first is None or second is None:
                idle = first if first is not None else second
                plan.byes.append(idle)
                plan.add_notice(NOTICE_BYE, [idle], f"{idle} receives a bye")
                continue
            plan.matches.append(MatchGroup([first, second]))
        plans.append(plan)
        # first seat stays fixed, the others rotate one place
        seats = [seats[0]] + seats[2:] + [seats[1]]

    logger.info(
        "Generated circle schedule of %d rounds for %d participants",
        len(plans),
        len(participant_ids),
    )
    return plans
