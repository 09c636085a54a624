"""Multi-game table assignment.

Participants are spread over the configured games' tables so that, as far
as a bounded random search finds, everyone plays a game they have not
played yet against people they have not met yet.
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
from typing import List, Optional, Sequence

from kleffpairing.constants import (
    MULTI_GAME_TRIALS,
    NEW_GAME_BONUS,
    NOTICE_EXCESS_CAPACITY,
    NOTICE_REPEAT_GAME,
    NOTICE_REPEAT_OPPONENT,
    REPEAT_OPPONENT_PENALTY,
)
from kleffpairing.exceptions import InsufficientParticipantsError, NoViablePairingError
from kleffpairing.models.game import GameConfig, sort_games
from kleffpairing.models.match import MatchGroup
from kleffpairing.models.participant import Participant, roster_ids
from kleffpairing.models.round_plan import RoundPlan
from kleffpairing.pairing.capacity import CapacityPlan, plan_capacity
from kleffpairing.pairing.history import PairingHistory
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)


def score_table(candidate: Sequence[str], game_id: str, history: PairingHistory) -> int:
    """Score a candidate table: new-to-the-game players up, repeat pairs down."""
    score = sum(
        NEW_GAME_BONUS
        for pid in candidate
        if not history.has_played_game(pid, game_id)
    )
    score -= REPEAT_OPPONENT_PENALTY * history.count_conflicts(candidate)
    return score


def _pick_table(
    pool: List[str],
    size: int,
    game_id: str,
    history: PairingHistory,
    rng: random.Random,
) -> List[str]:
    best: List[str] = []
    best_score = None
    perfect = size * NEW_GAME_BONUS
    for _ in range(MULTI_GAME_TRIALS):
        candidate = rng.sample(pool, size)
        score = score_table(candidate, game_id, history)
        if best_score is None or score > best_score:
            best, best_score = candidate, score
        if score >= perfect:
            break
    return best


def _assign_round(
    participant_ids: List[str],
    games: List[GameConfig],
    capacity: CapacityPlan,
    history: PairingHistory,
    round_number: int,
    rng: random.Random,
) -> RoundPlan:
    plan = RoundPlan(round_number=round_number)
    pool = list(participant_ids)

    for game in games:
        allocation = capacity.allocation_for(game.id)
        if allocation is None:
            continue
        for table_number, size in enumerate(allocation.table_sizes, start=1):
            table = _pick_table(pool, size, game.id, history, rng)

            repeats = history.count_conflicts(table)
            if repeats:
                plan.add_notice(
                    NOTICE_REPEAT_OPPONENT,
                    table,
                    f"{game.name} table {table_number} repeats {repeats} pairing(s)",
                )
            replaying = [pid for pid in table if history.has_played_game(pid, game.id)]
            if replaying:
                plan.add_notice(
                    NOTICE_REPEAT_GAME,
                    replaying,
                    f"{len(replaying)} participant(s) play {game.name} again",
                )
            if repeats or replaying:
                logger.warning(
                    "Round %d: %s table %d forced %d repeat pairs and %d repeat plays",
                    round_number,
                    game.id,
                    table_number,
                    repeats,
                    len(replaying),
                )

            history.add_group(table, game.id)
            plan.matches.append(
                MatchGroup(list(table), game_id=game.id, table_number=table_number)
            )
            seated = set(table)
            pool = [pid for pid in pool if pid not in seated]

    if pool:
        raise NoViablePairingError(
            f"{len(pool)} participant(s) could not be assigned a table",
            participant_ids=pool,
        )
    return plan


def create_multi_game_pairings(
    roster: Sequence[Participant],
    games: Sequence[GameConfig],
    history: Optional[PairingHistory] = None,
    rounds_to_generate: int = 1,
    rng: Optional[random.Random] = None,
    first_round: int = 1,
) -> List[RoundPlan]:
    """
    Assign every participant to a table of one of the configured games.

    Games are filled in display order using the capacity plan's table
    sizes. For each table up to 100 random candidates are drawn and the
    best scoring one kept, stopping early on a table where nobody has
    played the game or met each other.

    - roster: checked-in participants
    - games: configured games with their tables
    - history: previous pairings and games played; never modified
    - rounds_to_generate: rounds to generate back to back
    - rng: random source; a fresh unseeded one when omitted
    - first_round: number of the first generated round
    Returns: one RoundPlan per generated round
    Raises: NoGamesConfiguredError, InsufficientCapacityError and
    InsufficientParticipantsError before any pairing; NoViablePairingError
    when the tables cannot seat everyone
    """
    participant_ids = roster_ids(roster)
    capacity = plan_capacity(len(participant_ids), games)

    smallest_table = min(game.min_players for game in games)
    if len(participant_ids) < smallest_table:
        raise InsufficientParticipantsError(smallest_table, len(participant_ids))
    if capacity.unseated:
        raise NoViablePairingError(
            f"Table sizes leave {capacity.unseated} participant(s) without a seat",
            participant_ids=participant_ids,
        )

    ordered = sort_games(games)
    rng = rng if rng is not None else random.Random()
    working = history.copy() if history is not None else PairingHistory()

    plans = []
    for offset in range(rounds_to_generate):
        plan = _assign_round(
            participant_ids, ordered, capacity, working, first_round + offset, rng
        )
        if capacity.is_excess:
            plan.add_notice(
                NOTICE_EXCESS_CAPACITY,
                [],
                f"{capacity.excess_seats} seats are left empty",
            )
        plans.append(plan)
        logger.info(
            "Generated multi-game round %d: %d tables over %d games",
            plan.round_number,
            len(plan.matches),
            len([a for a in capacity.allocations if a.table_sizes]),
        )
    return plans
