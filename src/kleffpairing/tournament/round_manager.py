"""Round generation for a configured tournament."""

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

import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from kleffpairing.constants import (
    FORMAT_CARCASSONNE,
    FORMAT_CATAN,
    FORMAT_ELIMINATORY,
    FORMAT_MULTIGAME,
    FORMAT_ROUND_ROBIN,
    FORMAT_SWISS,
    HEAD_TO_HEAD_SIZE,
    SMALL_GROUP_MIN_SIZE,
)
from kleffpairing.exceptions import (
    CapacityException,
    PairingException,
    TournamentStateException,
    UnknownFormatException,
)
from kleffpairing.models.match import Match, MatchGroup
from kleffpairing.models.participant import Participant
from kleffpairing.models.round_plan import RoundPlan
from kleffpairing.pairing import (
    PairingHistory,
    create_blank_round,
    create_elimination_pairings,
    create_multi_game_pairings,
    create_round_robin_pairings,
    create_round_robin_schedule,
    create_small_group_pairings,
    create_swiss_pairings,
)
from kleffpairing.tournament.models import TournamentConfig
from kleffpairing.tournament.standings import swiss_standings
from kleffpairing.type_hints import SwissStandings
from kleffpairing.utils import setup_logger

logger = setup_logger(__name__)

# formats that produce their whole schedule in one go
_ONE_SHOT_FORMATS = (FORMAT_ROUND_ROBIN, FORMAT_CARCASSONNE, FORMAT_ELIMINATORY)


@dataclass
class RoundGenerationResult:
    """Outcome of a generate-round request.

    Attributes:
        plans: Generated rounds, empty when generation failed
        error: The pairing or capacity error that stopped generation
    """

    plans: List[RoundPlan] = field(default_factory=list)
    error: Optional[Union[PairingException, CapacityException]] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RoundManager:
    """Generates rounds for a tournament from its configuration.

    This class is responsible for:
    - Choosing the pairing strategy for the tournament's format
    - Numbering the next round from the matches already created
    - Enforcing the configured number of rounds
    - Rebuilding pairing history from existing matches
    """

    def __init__(self, config: TournamentConfig):
        """Initialize the round manager.

        Args:
            config: Tournament configuration
        """
        self.config = config

    @staticmethod
    def next_round_number(existing_matches: Sequence[Union[Match, MatchGroup]]) -> int:
        """Number of the round after the highest existing one (1 if none)."""
        rounds = [getattr(m, "round_number", 0) for m in existing_matches]
        return max(rounds, default=0) + 1

    def generate_round(
        self,
        roster: Sequence[Participant],
        existing_matches: Sequence[Match] = (),
        standings: Optional[SwissStandings] = None,
        rounds_to_generate: int = 1,
        rng: Optional[random.Random] = None,
    ) -> RoundGenerationResult:
        """Generate the next round(s) of the tournament.

        Args:
            roster: Checked-in participants
            existing_matches: Every match created so far, in any state
            standings: Swiss seeding; derived from ``existing_matches`` when omitted
            rounds_to_generate: Rounds to generate back to back
            rng: Random source for reproducible pairings

        Returns:
            RoundGenerationResult holding the plans, or the error that
            prevented pairing

        Raises:
            TournamentStateException: If the rounds would exceed the configured
                number of rounds, the generated schedule runs past that
                limit, or the format's schedule already exists
            UnknownFormatException: If the format has no pairing strategy
        """
        first_round = self.next_round_number(existing_matches)
        self._check_round_limit(first_round, rounds_to_generate)

        logger.info(
            f"Generating {rounds_to_generate} {self.config.format} round(s) from "
            f"round {first_round} for {len(roster)} participants"
        )

        try:
            if self.config.is_manual:
                plans = [self._blank_round(len(roster), first_round)]
            else:
                plans = self._dispatch(
                    roster,
                    existing_matches,
                    standings,
                    rounds_to_generate,
                    rng,
                    first_round,
                )
        except (PairingException, CapacityException) as e:
            logger.error(f"Round generation failed: {e}")
            return RoundGenerationResult(error=e)

        self._check_schedule_length(plans)

        for plan in plans:
            for notice in plan.notices:
                logger.info(f"Round {plan.round_number} notice: {notice.message}")
        return RoundGenerationResult(plans=plans)

    def _check_round_limit(self, first_round: int, rounds_to_generate: int) -> None:
        limit = self.config.number_of_rounds
        if self.config.format in _ONE_SHOT_FORMATS and first_round > 1:
            raise TournamentStateException(
                f"{self.config.format} matches have already been generated"
            )
        if limit is not None and first_round + rounds_to_generate - 1 > limit:
            raise TournamentStateException(
                f"Cannot create more rounds: tournament is limited to {limit} rounds"
            )

    def _check_schedule_length(self, plans: List[RoundPlan]) -> None:
        limit = self.config.number_of_rounds
        if limit is not None and plans and plans[-1].round_number > limit:
            raise TournamentStateException(
                f"{self.config.format} schedule needs {plans[-1].round_number} "
                f"rounds but the tournament is limited to {limit}"
            )

    def _blank_round(self, participant_count: int, round_number: int) -> RoundPlan:
        size = self.config.players_per_match
        minimum = (
            HEAD_TO_HEAD_SIZE if size <= HEAD_TO_HEAD_SIZE else SMALL_GROUP_MIN_SIZE
        )
        return create_blank_round(participant_count, size, minimum, round_number)

    def _dispatch(
        self,
        roster: Sequence[Participant],
        existing_matches: Sequence[Match],
        standings: Optional[SwissStandings],
        rounds_to_generate: int,
        rng: Optional[random.Random],
        first_round: int,
    ) -> List[RoundPlan]:
        tournament_format = self.config.format
        history = PairingHistory.build(existing_matches)

        if tournament_format == FORMAT_SWISS:
            if standings is None and existing_matches:
                standings = swiss_standings(roster, existing_matches)
            return create_swiss_pairings(
                roster,
                history,
                rounds_to_generate=rounds_to_generate,
                standings=standings,
                rng=rng,
                first_round=first_round,
            )
        if tournament_format == FORMAT_ROUND_ROBIN:
            return create_round_robin_pairings(roster, first_round=first_round)
        if tournament_format == FORMAT_CARCASSONNE:
            return create_round_robin_schedule(roster, first_round=first_round)
        if tournament_format == FORMAT_ELIMINATORY:
            return create_elimination_pairings(roster, rng=rng, first_round=first_round)
        if tournament_format == FORMAT_CATAN:
            return create_small_group_pairings(
                roster,
                history,
                rounds_to_generate=rounds_to_generate,
                rng=rng,
                first_round=first_round,
            )
        if tournament_format == FORMAT_MULTIGAME:
            return create_multi_game_pairings(
                roster,
                self.config.games,
                history,
                rounds_to_generate=rounds_to_generate,
                rng=rng,
                first_round=first_round,
            )
        raise UnknownFormatException(
            f"Pairing system '{tournament_format}' is not implemented"
        )
