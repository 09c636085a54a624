"""Exceptions for use in Kleff Pairing"""

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

from typing import Iterable, List, Optional


# ========== Base Application Exception ==========


class KleffPairingException(Exception):
    """Base exception for all Kleff Pairing errors.

    All custom exceptions in the library inherit from this class, so callers
    can catch every library-specific error with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(KleffPairingException):
    """Base exception for pairing-related errors."""

    pass


class InsufficientParticipantsError(PairingException):
    """Raised when a format has fewer participants than it needs to pair a round.

    Attributes
    ----------
    minimum_required : int
        Smallest roster the format can pair.
    actual : int
        Size of the roster that was supplied.
    """

    def __init__(self, minimum_required: int, actual: int):
        self.minimum_required = minimum_required
        self.actual = actual
        super().__init__(
            f"Need at least {minimum_required} participants, got {actual}"
        )


class NoViablePairingError(PairingException):
    """Raised when a grouping heuristic cannot seat the remaining pool."""

    def __init__(self, message: str, participant_ids: Optional[Iterable[str]] = None):
        self.participant_ids: List[str] = list(participant_ids or [])
        super().__init__(message)


# ========== Capacity Exceptions ==========


class CapacityException(KleffPairingException):
    """Base exception for table capacity errors."""

    pass


class InsufficientCapacityError(CapacityException):
    """Raised when the configured tables cannot seat every participant.

    Attributes
    ----------
    required : int
        Number of participants that need a seat.
    available : int
        Seats offered by all configured games.
    """

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient capacity: {available} slots for {required} participants"
        )

    @property
    def missing(self) -> int:
        """Seats still needed to cover every participant."""
        return self.required - self.available


class NoGamesConfiguredError(CapacityException):
    """Raised when a multi-game round is requested without any games."""

    def __init__(self, message: str = "No games configured for this tournament"):
        super().__init__(message)


# ========== Match State Exceptions ==========


class MatchStateException(KleffPairingException):
    """Base exception for match lifecycle errors."""

    pass


class InvalidMatchTransitionException(MatchStateException):
    """Raised when a match is moved to a status it cannot reach."""

    pass


class MatchAlreadyCompletedException(MatchStateException):
    """Raised when recording a result on a match that is already completed."""

    pass


# ========== Result Exceptions ==========


class ResultException(KleffPairingException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., score out of range)."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(KleffPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class UnknownFormatException(TournamentException):
    """Raised when a tournament format has no pairing strategy."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(KleffPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


class InvalidGameConfigurationException(ConfigurationException):
    """Raised when a game's table settings break its seating invariants."""

    pass
