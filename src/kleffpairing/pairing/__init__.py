"""Pairing strategies for every tournament format."""

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

from kleffpairing.pairing.capacity import (
    CapacityPlan,
    CapacityStatus,
    GameAllocation,
    distribute_tables,
    plan_capacity,
)
from kleffpairing.pairing.elimination import (
    bracket_round_name,
    create_elimination_pairings,
    match_winner,
)
from kleffpairing.pairing.history import PairingHistory
from kleffpairing.pairing.manual import create_blank_round
from kleffpairing.pairing.multi_game import create_multi_game_pairings
from kleffpairing.pairing.round_robin import (
    create_round_robin_pairings,
    create_round_robin_schedule,
)
from kleffpairing.pairing.small_group import create_small_group_pairings
from kleffpairing.pairing.swiss import create_swiss_pairings

__all__ = [
    "CapacityPlan",
    "CapacityStatus",
    "GameAllocation",
    "PairingHistory",
    "bracket_round_name",
    "create_blank_round",
    "create_elimination_pairings",
    "create_multi_game_pairings",
    "create_round_robin_pairings",
    "create_round_robin_schedule",
    "create_small_group_pairings",
    "create_swiss_pairings",
    "distribute_tables",
    "match_winner",
    "plan_capacity",
]
