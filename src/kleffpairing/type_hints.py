"""Type hints used in Kleff Pairing."""

from typing import Dict, List, Literal, Optional, Sequence, Tuple

# Participant identifier (opaque, owned by the surrounding roster)
ParticipantId = str
GameId = str

# One seat in a match group; None is an unfilled "TBD" slot
Slot = Optional[ParticipantId]

# Tournament format literals
TournamentFormat = Literal[
    "swiss", "round_robin", "eliminatory", "catan", "multigame", "carcassonne"
]

# Match lifecycle literals (for serialization)
MatchStatusValue = Literal["pending", "in_progress", "completed"]

NoticeKind = Literal[
    "bye", "repeat_opponent", "repeat_game", "unmatched", "excess_capacity"
]

# Swiss seeding input: id -> (wins, point differential)
SwissRecord = Tuple[int, float]
SwissStandings = Dict[ParticipantId, SwissRecord]

# Raw historical group: the ids that sat together, optionally with a game
RawGroup = Sequence[Slot]

# All groups for one generated round
RoundGroups = List[List[ParticipantId]]

#  LocalWords:  SwissStandings RoundGroups
