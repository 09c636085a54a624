"""Small-group pairing (3-4 per table) avoiding repeat opponents.

The group search is randomized greedy: each group is the least conflicted
of a handful of random samples from the remaining pool. It does not look
ahead, so it can leave conflicts a global search would avoid.
"""

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
from typing import List, Optional, Sequence, Tuple

from kleffpairing.constants import (
    NOTICE_REPEAT_OPPONENT,
    NOTICE_UNMATCHED,
    SMALL_GROUP_MAX_ATTEMPTS,
    SMALL_GROUP_MAX_SIZE,
    SMALL_GROUP_MIN_SIZE,
    SMALL_GROUP_TRIALS,
)
from kleffpairing.exceptions import InsufficientParticipantsError, NoViablePairingError
from kleffpairing.models.match import MatchGroup
from kleffpairing.models.participant import Participant, roster_ids
from kleffpairing.models.round_plan import RoundPlan
from kleffpairing.pairing.capacity import distribute_tables
from kleffpairing.pairing.history import PairingHistory
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)


def pick_group(
    pool: List[str],
    size: int,
    history: PairingHistory,
    rng: random.Random,
    trials: int = SMALL_GROUP_TRIALS,
) -> Tuple[List[str], int]:
    """Sample ``size`` players from the pool and keep the fewest conflicts.

    Stops at the first conflict-free sample.

    Returns:
        Tuple of (group, number of repeat pairs in it)
    """
    best: List[str] = []
    best_conflicts = None
    for _ in range(trials):
        candidate = rng.sample(pool, size)
        conflicts = history.count_conflicts(candidate)
        if best_conflicts is None or conflicts < best_conflicts:
            best, best_conflicts = candidate, conflicts
        if conflicts == 0:
            break
    return best, best_conflicts or 0


def _next_size(pool_size: int, planned: Optional[List[int]], formed: int) -> int:
    """Size of the next group, or 0 when no more groups can be formed."""
    if planned is not None:
        if formed >= len(planned) or planned[formed] < SMALL_GROUP_MIN_SIZE:
            return 0
        return planned[formed]
    if pool_size >= SMALL_GROUP_MAX_SIZE:
        return SMALL_GROUP_MAX_SIZE
    if pool_size >= SMALL_GROUP_MIN_SIZE:
        return SMALL_GROUP_MIN_SIZE
    return 0


def _pair_small_group_round(
    participant_ids: List[str],
    history: PairingHistory,
    round_number: int,
    balance_tables: bool,
    rng: random.Random,
) -> RoundPlan:
    plan = RoundPlan(round_number=round_number)
    pool = list(participant_ids)
    planned = (
        distribute_tables(len(pool), SMALL_GROUP_MAX_SIZE, SMALL_GROUP_MIN_SIZE)
        if balance_tables
        else None
    )

    attempts = 0
    while True:
        size = _next_size(len(pool), planned, len(plan.matches))
        if size == 0:
            break
        attempts += 1
        if attempts > SMALL_GROUP_MAX_ATTEMPTS:
            raise NoViablePairingError(
                f"Could not form a group of {size} in round {round_number}",
                participant_ids=pool,
            )

        group, conflicts = pick_group(pool, size, history, rng)
        if len(group) != size:
            continue

        if conflicts:
            plan.add_notice(
                NOTICE_REPEAT_OPPONENT,
                group,
                f"Table {len(plan.matches) + 1} repeats {conflicts} pairing(s)",
            )
            logger.warning(
                "Round %d: group %s has %d repeat pairs", round_number, group, conflicts
            )
        history.add_group(group)
        plan.matches.append(MatchGroup(list(group)))
        chosen = set(group)
        pool = [pid for pid in pool if pid not in chosen]
        attempts = 0

    if pool:
        plan.unmatched.extend(pool)
        plan.add_notice(
            NOTICE_UNMATCHED,
            pool,
            f"{len(pool)} participant(s) could not be seated this round",
        )
        logger.info("Round %d: unmatched %s", round_number, pool)
    return plan


def create_small_group_pairings(
    roster: Sequence[Participant],
    history: Optional[PairingHistory] = None,
    rounds_to_generate: int = 1,
    balance_tables: bool = False,
    rng: Optional[random.Random] = None,
    first_round: int = 1,
) -> List[RoundPlan]:
    """
    Create rounds of 3-4 player tables, steering away from repeat opponents.

    - roster: checked-in participants
    - history: previous pairings; never modified
    - rounds_to_generate: rounds to generate back to back
    - balance_tables: size tables with ``distribute_tables`` (6 players make
      two tables of 3) instead of filling tables of 4 first
    - rng: random source; a fresh unseeded one when omitted
    - first_round: number of the first generated round
    Returns: one RoundPlan per generated round
    Raises: InsufficientParticipantsError for fewer than 3 participants,
    NoViablePairingError when the attempt bound is exhausted
    """
    participant_ids = roster_ids(roster)
    if len(participant_ids) < SMALL_GROUP_MIN_SIZE:
        raise InsufficientParticipantsError(SMALL_GROUP_MIN_SIZE, len(participant_ids))

    rng = rng if rng is not None else random.Random()
    working = history.copy() if history is not None else PairingHistory()

    plans = []
    for offset in range(rounds_to_generate):
        plan = _pair_small_group_round(
            participant_ids, working, first_round + offset, balance_tables, rng
        )
        plans.append(plan)
        logger.info(
            "Generated small-group round %d: %d tables, %d unmatched",
            plan.round_number,
            len(plan.matches),
            len(plan.unmatched),
        )
    return plans
