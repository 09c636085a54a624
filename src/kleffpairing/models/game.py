"""Game configuration data class for multi-game events."""

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

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from kleffpairing.utils.validation import validate_table_settings_strict


@dataclass(frozen=True)
class GameConfig:
    """A game offered at a multi-game event and the tables it can run.

    Attributes
    ----------
    id : str
        Game identifier.
    name : str
        Display name.
    available_tables : int
        Number of copies/tables that can run concurrently.
    players_per_table : int
        Ideal (and maximum) seats per table.
    min_players : int
        Fewest players a table can start with.
    order_index : int
        Display order; games are filled in this order.
    """

    id: str
    name: str
    available_tables: int
    players_per_table: int
    min_players: int = 2
    order_index: int = 0

    def __post_init__(self):
        validate_table_settings_strict(
            self.available_tables, self.players_per_table, self.min_players
        )

    @property
    def capacity(self) -> int:
        """Seats this game offers in one round."""
        return self.available_tables * self.players_per_table

    def to_dict(self) -> Dict[str, Any]:
        """Serialize game configuration to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "available_tables": self.available_tables,
            "players_per_table": self.players_per_table,
            "min_players": self.min_players,
            "order_index": self.order_index,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """Deserialize game configuration from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            available_tables=int(data.get("available_tables", 1)),
            players_per_table=int(data.get("players_per_table", 4)),
            min_players=int(data.get("min_players", 2)),
            order_index=int(data.get("order_index", 0) or 0),
        )


def sort_games(games: Iterable[GameConfig]) -> List[GameConfig]:
    """Return games in their configured display order (stable for ties)."""
    return sorted(games, key=lambda game: game.order_index)


def total_capacity(games: Iterable[GameConfig]) -> int:
    """Sum of seats over all games."""
    return sum(game.capacity for game in games)
