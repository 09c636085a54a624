"""Seat capacity checks and table-size distribution."""

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

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Set

from kleffpairing.constants import EXCESS_CAPACITY_RATIO
from kleffpairing.exceptions import InsufficientCapacityError, NoGamesConfiguredError
from kleffpairing.models.game import GameConfig, sort_games, total_capacity
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)


class CapacityStatus(Enum):
    OK = "ok"
    EXCESS = "excess"
    NO_PARTICIPANTS = "no_participants"


@dataclass
class GameAllocation:
    """Tables opened for one game and the seats at each.

    Attributes
    ----------
    game_id : str
        Game the tables belong to.
    table_sizes : list of int
        Seats used at each opened table, in table order.
    """

    game_id: str
    table_sizes: List[int] = field(default_factory=list)

    @property
    def seats(self) -> int:
        return sum(self.table_sizes)

    def to_dict(self) -> Dict[str, Any]:
        return {"game_id": self.game_id, "table_sizes": list(self.table_sizes)}


@dataclass
class CapacityPlan:
    """
    Outcome of checking a roster against the configured games.

    Attributes
    ----------
    participant_count : int
        Participants to seat.
    total_capacity : int
        Seats offered by all games together.
    status : CapacityStatus
        ``OK``, ``EXCESS`` (advisory) or ``NO_PARTICIPANTS``.
    excess_seats : int
        Seats left over when capacity exceeds the advisory ratio.
    allocations : list of GameAllocation
        Per-game table sizes, in game display order.
    unseated : int
        Participants the allocation heuristic could not place.
    """

    participant_count: int
    total_capacity: int
    status: CapacityStatus = CapacityStatus.OK
    excess_seats: int = 0
    allocations: List[GameAllocation] = field(default_factory=list)
    unseated: int = 0

    @property
    def is_excess(self) -> bool:
        return self.status == CapacityStatus.EXCESS

    @property
    def seated(self) -> int:
        return sum(allocation.seats for allocation in self.allocations)

    def allocation_for(self, game_id: str) -> Optional[GameAllocation]:
        for allocation in self.allocations:
            if allocation.game_id == game_id:
                return allocation
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize capacity plan to dictionary."""
        return {
            "participant_count": self.participant_count,
            "total_capacity": self.total_capacity,
            "status": self.status.value,
            "excess_seats": self.excess_seats,
            "allocations": [a.to_dict() for a in self.allocations],
            "unseated": self.unseated,
        }


def distribute_tables(
    participant_count: int, ideal_size: int, min_size: int
) -> List[int]:
    """Split participants into the fewest tables of at most ``ideal_size``.

    Tables are filled to ``ideal_size`` and the remainder sits at the last
    table. A remainder below ``min_size`` borrows seats from the full tables
    before it, as long as each donor stays at or above ``min_size``; when
    that is not possible one undersized table is kept. This is a relaxed
    bin-packing heuristic, not an optimal partition.

    Args:
        participant_count: Players to seat
        ideal_size: Preferred (and maximum) table size
        min_size: Smallest table size that can start a game

    Returns:
        Table sizes summing to ``participant_count``

    Example:
        >>> distribute_tables(9, 4, 3)
        [3, 3, 3]
    """
    if participant_count <= 0:
        return []
    if ideal_size < 1:
        raise ValueError("ideal_size must be positive")

    table_count = math.ceil(participant_count / ideal_size)
    sizes = [ideal_size] * (table_count - 1)
    sizes.append(participant_count - ideal_size * (table_count - 1))

    shortfall = min_size - sizes[-1]
    if shortfall <= 0 or table_count == 1:
        return sizes

    borrowed = list(sizes)
    for index in range(table_count - 2, -1, -1):
        if shortfall == 0:
            break
        take = min(borrowed[index] - min_size, shortfall)
        if take > 0:
            borrowed[index] -= take
            borrowed[-1] += take
            shortfall -= take

    if shortfall == 0:
        return borrowed

    logger.debug(
        "Accepting undersized table of %d (minimum %d) for %d players",
        sizes[-1],
        min_size,
        participant_count,
    )
    return sizes


def _fill_spare_seats(
    games: Sequence[GameConfig], allocations: List[GameAllocation], remaining: int
) -> int:
    """Put leftover players into free seats of tables already opened."""
    for game, allocation in zip(games, allocations):
        for index, size in enumerate(allocation.table_sizes):
            if remaining == 0:
                return 0
            take = min(game.players_per_table - size, remaining)
            if take > 0:
                allocation.table_sizes[index] += take
                remaining -= take
    return remaining


def _open_extra_table(
    games: Sequence[GameConfig], allocations: List[GameAllocation], remaining: int
) -> int:
    """Open a table for leftover players by moving seats from larger tables."""
    minimum_of = {game.id: game.min_players for game in games}
    for game, allocation in zip(games, allocations):
        if len(allocation.table_sizes) >= game.available_tables:
            continue
        needed = game.min_players - remaining
        if needed <= 0:
            allocation.table_sizes.append(remaining)
            return 0

        donors = []
        for donor in allocations:
            for index, size in enumerate(donor.table_sizes):
                spare = size - minimum_of[donor.game_id]
                if spare > 0:
                    donors.append((donor, index, spare))
        if sum(spare for _, _, spare in donors) < needed:
            continue

        for donor, index, spare in donors:
            take = min(spare, needed)
            donor.table_sizes[index] -= take
            needed -= take
            if needed == 0:
                break
        allocation.table_sizes.append(game.min_players)
        logger.debug(
            "Opened extra %s table of %d by moving seats", game.id, game.min_players
        )
        return 0
    return remaining


def _seat_options(game: GameConfig, limit: int) -> Set[int]:
    """Seat totals a game can host with some number of its tables open."""
    options = set()
    for tables in range(game.available_tables + 1):
        low = tables * game.min_players
        high = min(tables * game.players_per_table, limit)
        options.update(range(low, high + 1))
    return options


def _split_seats(game: GameConfig, seats: int) -> List[int]:
    """Spread seats evenly over the fewest tables that can hold them."""
    if seats == 0:
        return []
    first = math.ceil(seats / game.players_per_table)
    for tables in range(first, game.available_tables + 1):
        if tables * game.min_players <= seats:
            base, extra = divmod(seats, tables)
            return [base + 1] * extra + [base] * (tables - extra)
    raise ValueError(f"{game.id} cannot seat exactly {seats} players")


def _search_table_counts(
    participant_count: int, games: Sequence[GameConfig]
) -> Optional[List[GameAllocation]]:
    """Find per-game seat totals that seat everyone, earlier games first.

    ``reachable[i]`` holds the totals games ``i`` onwards can seat exactly.
    Each game then takes the largest total that leaves the rest reachable.
    """
    options = [_seat_options(game, participant_count) for game in games]
    reachable: List[Set[int]] = [set() for _ in games] + [{0}]
    for index in range(len(games) - 1, -1, -1):
        reachable[index] = {
            seats + rest
            for seats in options[index]
            for rest in reachable[index + 1]
            if seats + rest <= participant_count
        }
    if participant_count not in reachable[0]:
        return None

    allocations = []
    remaining = participant_count
    for index, game in enumerate(games):
        seats = max(s for s in options[index] if remaining - s in reachable[index + 1])
        allocations.append(GameAllocation(game.id, _split_seats(game, seats)))
        remaining -= seats
    return allocations


def allocate_tables(participant_count: int, games: Sequence[GameConfig]):
    """Spread participants over the games' tables in display order.

    Tables are filled greedily first. When that leaves players without a
    seat, the layout is rebuilt from per-game table counts that can seat
    everyone, preferring earlier games.

    Returns:
        Tuple of (allocations, unseated count)
    """
    ordered = sort_games(games)
    allocations = [GameAllocation(game.id) for game in ordered]
    remaining = participant_count

    for game, allocation in zip(ordered, allocations):
        for _ in range(game.available_tables):
            if remaining < game.min_players:
                break
            size = min(game.players_per_table, remaining)
            allocation.table_sizes.append(size)
            remaining -= size

    if remaining:
        remaining = _fill_spare_seats(ordered, allocations, remaining)
    if remaining:
        remaining = _open_extra_table(ordered, allocations, remaining)
    if remaining:
        searched = _search_table_counts(participant_count, ordered)
        if searched is not None:
            logger.debug("Rebuilt table layout to seat %d leftover players", remaining)
            allocations, remaining = searched, 0
    if remaining:
        logger.warning("Could not find seats for %d participants", remaining)

    return allocations, remaining


def plan_capacity(participant_count: int, games: Sequence[GameConfig]) -> CapacityPlan:
    """Check that the games can seat everyone and lay out their tables.

    Args:
        participant_count: Checked-in participants for the round
        games: Configured games

    Returns:
        CapacityPlan with status and per-game allocation

    Raises:
        NoGamesConfiguredError: If no game is configured
        InsufficientCapacityError: If seats are fewer than participants
    """
    if not games:
        raise NoGamesConfiguredError()

    available = total_capacity(games)
    if available < participant_count:
        raise InsufficientCapacityError(participant_count, available)

    plan = CapacityPlan(participant_count=participant_count, total_capacity=available)
    if participant_count == 0:
        plan.status = CapacityStatus.NO_PARTICIPANTS
        logger.info("Capacity check with no participants")
        return plan

    if available > EXCESS_CAPACITY_RATIO * participant_count:
        plan.status = CapacityStatus.EXCESS
        plan.excess_seats = available - participant_count
        logger.warning(
            "Capacity of %d seats greatly exceeds %d participants",
            available,
            participant_count,
        )

    plan.allocations, plan.unseated = allocate_tables(participant_count, games)
    return plan
