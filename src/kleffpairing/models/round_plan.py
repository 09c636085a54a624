"""Data models for a generated round."""

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
from typing import Any, Dict, List

from kleffpairing.models.match import Match, MatchGroup


@dataclass
class PairingNotice:
    """Informational signal attached to a generated round.

    Attributes
    ----------
    kind : str
        One of ``bye``, ``repeat_opponent``, ``repeat_game``, ``unmatched``
        or ``excess_capacity``.
    participant_ids : list of str
        Participants the notice is about.
    message : str
        Human-readable description.
    """

    kind: str
    participant_ids: List[str] = field(default_factory=list)
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "participant_ids": list(self.participant_ids),
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingNotice":
        return cls(
            kind=data["kind"],
            participant_ids=list(data.get("participant_ids", [])),
            message=data.get("message", ""),
        )


@dataclass
class RoundPlan:
    """
    Ordered match groups for one round, plus byes and notices.

    Attributes
    ----------
    round_number : int
        1-based round number.
    matches : list of MatchGroup
        Generated groups in table order.
    byes : list of str
        Participants sitting out with a bye.
    unmatched : list of str
        Participants no group could be formed for.
    notices : list of PairingNotice
        Degenerate conditions met while pairing.
    """

    round_number: int
    matches: List[MatchGroup] = field(default_factory=list)
    byes: List[str] = field(default_factory=list)
    unmatched: List[str] = field(default_factory=list)
    notices: List[PairingNotice] = field(default_factory=list)

    def seated_ids(self) -> List[str]:
        """Every filled seat of the round, in table order."""
        return [pid for group in self.matches for pid in group.filled_ids]

    def accounted_ids(self) -> List[str]:
        """Seated, bye and unmatched participants (byes counted once)."""
        seated = self.seated_ids()
        seen = set(seated)
        return (
            seated
            + [pid for pid in self.byes if pid not in seen]
            + list(self.unmatched)
        )

    def notices_of(self, kind: str) -> List[PairingNotice]:
        return [notice for notice in self.notices if notice.kind == kind]

    def add_notice(self, kind: str, participant_ids: List[str], message: str) -> None:
        self.notices.append(PairingNotice(kind, list(participant_ids), message))

    def to_matches(self) -> List[Match]:
        """Create pending matches for this round's playable groups."""
        return [
            Match.from_group(group, self.round_number)
            for group in self.matches
            if not group.is_bye
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round plan to dictionary."""
        return {
            "round_number": self.round_number,
            "matches": [group.to_dict() for group in self.matches],
            "byes": list(self.byes),
            "unmatched": list(self.unmatched),
            "notices": [notice.to_dict() for notice in self.notices],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundPlan":
        """Deserialize round plan from dictionary."""
        return cls(
            round_number=int(data["round_number"]),
            matches=[MatchGroup.from_dict(g) for g in data.get("matches", [])],
            byes=list(data.get("byes", [])),
            unmatched=list(data.get("unmatched", [])),
            notices=[PairingNotice.from_dict(n) for n in data.get("notices", [])],
        )
