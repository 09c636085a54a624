"""Who has played whom, and which games each participant has played."""

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
from typing import Any, Dict, Iterable, Optional, Sequence, Set, Union

from kleffpairing.models.match import Match, MatchGroup
from kleffpairing.type_hints import RawGroup
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)

HistoryEntry = Union[MatchGroup, Match, RawGroup]


def _unpack(entry: HistoryEntry):
    """Return ``(filled ids, game id)`` for any accepted history entry."""
    if isinstance(entry, (MatchGroup, Match)):
        return entry.filled_ids, entry.game_id
    return [pid for pid in entry if pid is not None], None


@dataclass
class PairingHistory:
    """
    Tracks previous groupings to steer pairings away from repeats.

    Attributes
    ----------
    opponents : dict of str to set of str
        For each participant, everyone they have shared a match with.
        Symmetric: ``b in opponents[a]`` iff ``a in opponents[b]``.
    games : dict of str to set of str
        For each participant, the game ids they have played.
    """

    opponents: Dict[str, Set[str]] = field(default_factory=dict)
    games: Dict[str, Set[str]] = field(default_factory=dict)

    @classmethod
    def build(cls, matches: Iterable[HistoryEntry]) -> "PairingHistory":
        """Fold a list of past matches into a history.

        Args:
            matches: Match groups, matches, or plain sequences of ids

        Returns:
            A new history; the input is not modified
        """
        history = cls()
        count = 0
        for entry in matches:
            ids, game_id = _unpack(entry)
            history.add_group(ids, game_id)
            count += 1
        logger.debug("Built pairing history from %d matches", count)
        return history

    def add_pairing(self, first_id: str, second_id: str) -> None:
        """Record that two participants have played each other."""
        if first_id == second_id:
            return
        self.opponents.setdefault(first_id, set()).add(second_id)
        self.opponents.setdefault(second_id, set()).add(first_id)

    def add_group(
        self, participant_ids: Sequence[Optional[str]], game_id: Optional[str] = None
    ) -> None:
        """Record every pair inside a group, and the game if one is given."""
        ids = [pid for pid in participant_ids if pid is not None]
        for i, first in enumerate(ids):
            for second in ids[i + 1 :]:
                self.add_pairing(first, second)
        if game_id is not None:
            for pid in ids:
                self.games.setdefault(pid, set()).add(game_id)

    def has_played(self, first_id: str, second_id: str) -> bool:
        """Check if two participants have previously shared a match."""
        return second_id in self.opponents.get(first_id, ())

    def has_played_game(self, participant_id: str, game_id: str) -> bool:
        return game_id in self.games.get(participant_id, ())

    def opponents_of(self, participant_id: str) -> Set[str]:
        return set(self.opponents.get(participant_id, ()))

    def count_conflicts(self, participant_ids: Sequence[str]) -> int:
        """Number of already-played pairs inside a candidate group."""
        ids = list(participant_ids)
        return sum(
            1
            for i, first in enumerate(ids)
            for second in ids[i + 1 :]
            if self.has_played(first, second)
        )

    def copy(self) -> "PairingHistory":
        """Independent copy; updating it leaves this history untouched."""
        return PairingHistory(
            opponents={pid: set(seen) for pid, seen in self.opponents.items()},
            games={pid: set(seen) for pid, seen in self.games.items()},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "opponents": {pid: sorted(seen) for pid, seen in self.opponents.items()},
            "games": {pid: sorted(seen) for pid, seen in self.games.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        history = cls()
        for pid, seen in data.get("opponents", {}).items():
            for other in seen:
                history.add_pairing(str(pid), str(other))
        for pid, played in data.get("games", {}).items():
            history.games[str(pid)] = set(map(str, played))
        return history
