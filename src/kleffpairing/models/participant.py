"""Participant data class."""

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

from kleffpairing.utils import generate_id


@dataclass(frozen=True)
class Participant:
    """A registered, checked-in participant of a tournament.

    Attributes
    ----------
    id : str
        Opaque identifier owned by the surrounding roster.
    name : str
        Display name.
    """

    id: str
    name: str

    @classmethod
    def create(cls, name: str) -> "Participant":
        """Create a participant with a freshly generated id."""
        return cls(id=generate_id("participant"), name=name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        return cls(id=str(data["id"]), name=data.get("name", ""))


def roster_ids(roster: Iterable[Participant]) -> List[str]:
    """Return participant ids in roster order."""
    return [participant.id for participant in roster]


#  LocalWords:  Participant
