from kleffpairing.models.game import GameConfig, sort_games, total_capacity
from kleffpairing.models.match import (
    ALLOWED_TRANSITIONS,
    Match,
    MatchGroup,
    MatchStatus,
    ParticipantResult,
)
from kleffpairing.models.participant import Participant, roster_ids
from kleffpairing.models.round_plan import PairingNotice, RoundPlan

__all__ = [
    "ALLOWED_TRANSITIONS",
    "GameConfig",
    "Match",
    "MatchGroup",
    "MatchStatus",
    "PairingNotice",
    "Participant",
    "ParticipantResult",
    "RoundPlan",
    "roster_ids",
    "sort_games",
    "total_capacity",
]
