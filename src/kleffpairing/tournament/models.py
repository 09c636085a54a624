"""Data models for tournament configuration and standings."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from kleffpairing.constants import (
    DEFAULT_MODE,
    FORMAT_DEFAULTS,
    FORMAT_SWISS,
    HEAD_TO_HEAD_SIZE,
    MAX_MATCH_SLOTS,
    MODE_AUTO,
    MODE_MANUAL,
    TOURNAMENT_FORMATS,
)
from kleffpairing.exceptions import (
    InvalidConfigurationException,
    UnknownFormatException,
)
from kleffpairing.models.game import GameConfig


@dataclass
class TournamentConfig:
    """Configuration settings for a tournament.

    Attributes:
        name: Tournament name
        format: One of ``TOURNAMENT_FORMATS``
        players_per_match: Seats per match; the format default when omitted
        number_of_rounds: Round limit, or None for an open-ended event
        generation_mode: ``auto`` pairs participants, ``manual`` creates
            blank tables
        games: Games offered (multi-game events)
    """

    name: str
    format: str = FORMAT_SWISS
    players_per_match: Optional[int] = None
    number_of_rounds: Optional[int] = None
    generation_mode: str = DEFAULT_MODE
    games: List[GameConfig] = field(default_factory=list)

    def __post_init__(self):
        if self.format not in TOURNAMENT_FORMATS:
            raise UnknownFormatException(f"Unknown tournament format: {self.format}")
        if self.generation_mode not in (MODE_AUTO, MODE_MANUAL):
            raise InvalidConfigurationException(
                f"Unknown generation mode: {self.generation_mode}"
            )

        defaults = FORMAT_DEFAULTS[self.format]
        if self.players_per_match is None:
            self.players_per_match = defaults["players_per_match"]
        if self.number_of_rounds is None:
            self.number_of_rounds = defaults["number_of_rounds"]

        if not (HEAD_TO_HEAD_SIZE <= self.players_per_match <= MAX_MATCH_SLOTS):
            raise InvalidConfigurationException(
                f"Players per match must be between {HEAD_TO_HEAD_SIZE} "
                f"and {MAX_MATCH_SLOTS}"
            )
        if self.number_of_rounds is not None and self.number_of_rounds < 1:
            raise InvalidConfigurationException("Number of rounds must be at least 1")

    @property
    def is_manual(self) -> bool:
        return self.generation_mode == MODE_MANUAL

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "format": self.format,
            "players_per_match": self.players_per_match,
            "number_of_rounds": self.number_of_rounds,
            "generation_mode": self.generation_mode,
            "games": [game.to_dict() for game in self.games],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Tournament"),
            format=data.get("format", FORMAT_SWISS),
            players_per_match=data.get("players_per_match"),
            number_of_rounds=data.get("number_of_rounds"),
            generation_mode=data.get("generation_mode", DEFAULT_MODE),
            games=[GameConfig.from_dict(g) for g in data.get("games", [])],
        )


@dataclass
class WinLossStanding:
    """Standing row for head-to-head formats.

    Attributes:
        participant_id: Participant the row belongs to
        matches_played: Completed matches
        wins: Matches won
        losses: Matches lost
        draws: Matches where the top score was shared
        total_score: Sum of own scores
        opponent_score: Sum of opponents' scores
        rank: 1-based position after sorting
    """

    participant_id: str
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total_score: float = 0.0
    opponent_score: float = 0.0
    rank: int = 0

    @property
    def point_differential(self) -> float:
        return self.total_score - self.opponent_score

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return {
            "participant_id": self.participant_id,
            "matches_played": self.matches_played,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "total_score": self.total_score,
            "opponent_score": self.opponent_score,
            "point_differential": self.point_differential,
            "rank": self.rank,
        }


@dataclass
class PlacementStanding:
    """Standing row for placement-scored formats (Catan, multi-game).

    Attributes:
        participant_id: Participant the row belongs to
        matches_played: Completed matches
        first_positions: Matches finished in first place
        total_victory_points: Sum of in-game victory points
        total_tournament_points: Sum of points awarded for placements
        games: Distinct games played
        rank: 1-based position after sorting
    """

    participant_id: str
    matches_played: int = 0
    first_positions: int = 0
    total_victory_points: int = 0
    total_tournament_points: int = 0
    games: Set[str] = field(default_factory=set)
    rank: int = 0

    @property
    def games_played(self) -> int:
        return len(self.games)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return {
            "participant_id": self.participant_id,
            "matches_played": self.matches_played,
            "first_positions": self.first_positions,
            "total_victory_points": self.total_victory_points,
            "total_tournament_points": self.total_tournament_points,
            "games_played": self.games_played,
            "rank": self.rank,
        }
