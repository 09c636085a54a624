"""Match groups, match records and the match lifecycle."""

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
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from kleffpairing.exceptions import (
    InvalidMatchTransitionException,
    MatchAlreadyCompletedException,
)
from kleffpairing.type_hints import Slot
from kleffpairing.utils import generate_id


class MatchStatus(Enum):
    """Lifecycle of a scheduled match."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


# completed -> pending is the explicit "clear result" reset
ALLOWED_TRANSITIONS: Dict[MatchStatus, FrozenSet[MatchStatus]] = {
    MatchStatus.PENDING: frozenset({MatchStatus.IN_PROGRESS, MatchStatus.COMPLETED}),
    MatchStatus.IN_PROGRESS: frozenset({MatchStatus.COMPLETED}),
    MatchStatus.COMPLETED: frozenset({MatchStatus.PENDING}),
}


@dataclass
class MatchGroup:
    """One scheduled contest among 2-4 participants.

    Attributes
    ----------
    participant_ids : list of str or None
        Seats of the match. ``None`` marks an unfilled slot to be assigned
        manually.
    game_id : str or None
        Game played at this table (multi-game events only).
    table_number : int or None
        1-based table of the game, when tables are numbered.
    """

    participant_ids: List[Slot]
    game_id: Optional[str] = None
    table_number: Optional[int] = None

    @property
    def filled_ids(self) -> List[str]:
        """Ids of the seats that are already assigned."""
        return [pid for pid in self.participant_ids if pid is not None]

    @property
    def size(self) -> int:
        return len(self.participant_ids)

    @property
    def is_bye(self) -> bool:
        """A group holding a single participant and nobody else."""
        return len(self.filled_ids) == 1 and all(
            pid is None for pid in self.participant_ids[1:]
        )

    def pairs(self) -> List[Tuple[str, str]]:
        """Every unordered pair of filled seats."""
        ids = self.filled_ids
        return [
            (ids[i], ids[j]) for i in range(len(ids)) for j in range(i + 1, len(ids))
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match group to dictionary."""
        return {
            "participant_ids": list(self.participant_ids),
            "game_id": self.game_id,
            "table_number": self.table_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchGroup":
        """Deserialize match group from dictionary."""
        return cls(
            participant_ids=list(data.get("participant_ids", [])),
            game_id=data.get("game_id"),
            table_number=data.get("table_number"),
        )


@dataclass
class ParticipantResult:
    """One participant's outcome in a completed match.

    Attributes
    ----------
    participant_id : str
        The participant this result belongs to.
    score : float or None
        Own score in head-to-head formats.
    victory_points : int
        In-game points (Catan victory points and similar).
    placement : int or None
        Finishing position within the match (1 = winner).
    tournament_points : int
        Points derived from ``placement``.
    """

    participant_id: str
    score: Optional[float] = None
    victory_points: int = 0
    placement: Optional[int] = None
    tournament_points: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant result to dictionary."""
        return {
            "participant_id": self.participant_id,
            "score": self.score,
            "victory_points": self.victory_points,
            "placement": self.placement,
            "tournament_points": self.tournament_points,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipantResult":
        """Deserialize participant result from dictionary."""
        return cls(
            participant_id=str(data["participant_id"]),
            score=data.get("score"),
            victory_points=data.get("victory_points") or 0,
            placement=data.get("placement"),
            tournament_points=data.get("tournament_points") or 0,
        )


@dataclass
class Match:
    """A persisted match: a group plus its status and results.

    The core never stores matches; callers hand them back in to rebuild
    pairing history and to compute standings.
    """

    round_number: int
    participant_ids: List[Slot]
    game_id: Optional[str] = None
    table_number: Optional[int] = None
    status: MatchStatus = MatchStatus.PENDING
    results: Dict[str, ParticipantResult] = field(default_factory=dict)
    winner_id: Optional[str] = None
    id: str = field(default_factory=lambda: generate_id("match"))

    @classmethod
    def from_group(cls, group: MatchGroup, round_number: int) -> "Match":
        """Create a pending match from a generated group."""
        return cls(
            round_number=round_number,
            participant_ids=list(group.participant_ids),
            game_id=group.game_id,
            table_number=group.table_number,
        )

    @property
    def filled_ids(self) -> List[str]:
        return [pid for pid in self.participant_ids if pid is not None]

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    def to_group(self) -> MatchGroup:
        """Return the seating of this match as a group."""
        return MatchGroup(
            participant_ids=list(self.participant_ids),
            game_id=self.game_id,
            table_number=self.table_number,
        )

    def score_of(self, participant_id: str) -> Optional[float]:
        result = self.results.get(participant_id)
        return result.score if result else None

    # ---- lifecycle ----

    def _transition(self, target: MatchStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidMatchTransitionException(
                f"Match {self.id} cannot move from {self.status.value} "
                f"to {target.value}"
            )
        self.status = target

    def start(self) -> None:
        """Mark the match as being played."""
        self._transition(MatchStatus.IN_PROGRESS)

    def complete(
        self,
        results: Dict[str, ParticipantResult],
        winner_id: Optional[str] = None,
    ) -> None:
        """Store results and mark the match completed.

        Raises:
            MatchAlreadyCompletedException: If results were already recorded
        """
        if self.status == MatchStatus.COMPLETED:
            raise MatchAlreadyCompletedException(f"Match {self.id} already completed")
        self._transition(MatchStatus.COMPLETED)
        self.results = dict(results)
        self.winner_id = winner_id

    def clear_result(self) -> None:
        """Reset a completed match to pending, discarding scores and winner."""
        self._transition(MatchStatus.PENDING)
        self.results = {}
        self.winner_id = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round_number": self.round_number,
            "participant_ids": list(self.participant_ids),
            "game_id": self.game_id,
            "table_number": self.table_number,
            "status": self.status.value,
            "results": [r.to_dict() for r in self.results.values()],
            "winner_id": self.winner_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        results = [ParticipantResult.from_dict(r) for r in data.get("results", [])]
        return cls(
            id=str(data.get("id") or generate_id("match")),
            round_number=int(data.get("round_number", 1)),
            participant_ids=list(data.get("participant_ids", [])),
            game_id=data.get("game_id"),
            table_number=data.get("table_number"),
            status=MatchStatus(data.get("status", MatchStatus.PENDING.value)),
            results={r.participant_id: r for r in results},
            winner_id=data.get("winner_id"),
        )
