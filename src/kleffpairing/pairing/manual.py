"""Blank tables for manual seating."""

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

from kleffpairing.exceptions import InvalidConfigurationException
from kleffpairing.models.match import MatchGroup
from kleffpairing.models.round_plan import RoundPlan
from kleffpairing.pairing.capacity import distribute_tables
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)


def create_blank_round(
    participant_count: int,
    players_per_match: int,
    min_players: int = 2,
    round_number: int = 1,
) -> RoundPlan:
    """Create a round of empty tables for the organizer to fill in.

    Table sizes come from ``distribute_tables``; every seat is ``None``.
    """
    if players_per_match < 1 or min_players < 1:
        raise InvalidConfigurationException("Table sizes must be positive")

    plan = RoundPlan(round_number=round_number)
    for size in distribute_tables(participant_count, players_per_match, min_players):
        plan.matches.append(MatchGroup([None] * size))

    logger.info(
        "Created %d blank tables for round %d", len(plan.matches), round_number
    )
    return plan
