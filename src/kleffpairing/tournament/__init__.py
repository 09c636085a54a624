"""Tournament configuration, round generation, results and standings.

This package ties the pairing strategies to a configured tournament and
turns recorded results into standings.
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

from kleffpairing.tournament.models import (
    PlacementStanding,
    TournamentConfig,
    WinLossStanding,
)
from kleffpairing.tournament.result_recorder import ResultRecorder
from kleffpairing.tournament.round_manager import RoundGenerationResult, RoundManager
from kleffpairing.tournament.standings import (
    StandingsCalculator,
    standings_variant_for_format,
    swiss_standings,
    tournament_points_for_placement,
)

__all__ = [
    "TournamentConfig",
    "WinLossStanding",
    "PlacementStanding",
    "RoundManager",
    "RoundGenerationResult",
    "ResultRecorder",
    "StandingsCalculator",
    "standings_variant_for_format",
    "swiss_standings",
    "tournament_points_for_placement",
]
