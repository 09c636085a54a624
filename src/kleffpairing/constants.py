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

# --- Constants ---

# Tournament formats
FORMAT_SWISS = "swiss"
FORMAT_ROUND_ROBIN = "round_robin"
FORMAT_ELIMINATORY = "eliminatory"
FORMAT_CATAN = "catan"
FORMAT_MULTIGAME = "multigame"
FORMAT_CARCASSONNE = "carcassonne"

TOURNAMENT_FORMATS = (
    FORMAT_SWISS,
    FORMAT_ROUND_ROBIN,
    FORMAT_ELIMINATORY,
    FORMAT_CATAN,
    FORMAT_MULTIGAME,
    FORMAT_CARCASSONNE,
)

FORMAT_NAMES = {
    FORMAT_SWISS: "Swiss",
    FORMAT_ROUND_ROBIN: "Round Robin",
    FORMAT_ELIMINATORY: "Single Elimination",
    FORMAT_CATAN: "Catan",
    FORMAT_MULTIGAME: "Multi-Game",
    FORMAT_CARCASSONNE: "Carcassonne",
}

# Match generation modes
MODE_AUTO = "auto"
MODE_MANUAL = "manual"
DEFAULT_MODE = MODE_AUTO

# Match sizes
HEAD_TO_HEAD_SIZE = 2
SMALL_GROUP_MAX_SIZE = 4
SMALL_GROUP_MIN_SIZE = 3
MAX_MATCH_SLOTS = 4

# Per-format defaults (players per match, number of rounds)
FORMAT_DEFAULTS = {
    FORMAT_SWISS: {"players_per_match": 2, "number_of_rounds": None},
    FORMAT_ROUND_ROBIN: {"players_per_match": 2, "number_of_rounds": 1},
    FORMAT_ELIMINATORY: {"players_per_match": 2, "number_of_rounds": None},
    FORMAT_CATAN: {"players_per_match": 4, "number_of_rounds": 3},
    FORMAT_MULTIGAME: {"players_per_match": 4, "number_of_rounds": None},
    FORMAT_CARCASSONNE: {"players_per_match": 2, "number_of_rounds": None},
}

# Heuristic bounds
SMALL_GROUP_TRIALS = 20
SMALL_GROUP_MAX_ATTEMPTS = 100
MULTI_GAME_TRIALS = 100

# Multi-game candidate scoring
NEW_GAME_BONUS = 10
REPEAT_OPPONENT_PENALTY = 5

# Capacity advisory threshold (capacity above ratio x participants)
EXCESS_CAPACITY_RATIO = 1.5

# Score bounds for head-to-head results
MIN_MATCH_SCORE = 0
MAX_MATCH_SCORE = 999

# Placement to tournament points (Catan and multi-game scoring)
TOURNAMENT_POINTS_BY_PLACEMENT = {
    1: 6,
    2: 4,
    3: 2,
    4: 1,
}

# Standings variants
STANDINGS_WIN_LOSS = "win_loss"
STANDINGS_CARCASSONNE = "carcassonne"
STANDINGS_PLACEMENT = "placement"

STANDINGS_BY_FORMAT = {
    FORMAT_SWISS: STANDINGS_WIN_LOSS,
    FORMAT_ROUND_ROBIN: STANDINGS_WIN_LOSS,
    FORMAT_ELIMINATORY: STANDINGS_WIN_LOSS,
    FORMAT_CARCASSONNE: STANDINGS_CARCASSONNE,
    FORMAT_CATAN: STANDINGS_PLACEMENT,
    FORMAT_MULTIGAME: STANDINGS_PLACEMENT,
}

# Notice kinds attached to generated rounds
NOTICE_BYE = "bye"
NOTICE_REPEAT_OPPONENT = "repeat_opponent"
NOTICE_REPEAT_GAME = "repeat_game"
NOTICE_UNMATCHED = "unmatched"
NOTICE_EXCESS_CAPACITY = "excess_capacity"

# Environment variable controlling the package log level
LOG_LEVEL_ENV_VAR = "KLEFF_PAIRING_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
