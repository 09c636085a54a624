"""Validation utilities for Kleff Pairing.

This module provides reusable validation functions with consistent error handling.
"""

from typing import Optional

from kleffpairing.constants import MAX_MATCH_SCORE, MIN_MATCH_SCORE
from kleffpairing.exceptions import (
    InvalidGameConfigurationException,
    InvalidResultException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value=None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Score Validation ==========


def validate_score(score) -> ValidationResult:
    """Validate a head-to-head match score.

    Args:
        score: Score to validate (int, float or numeric string)

    Returns:
        ValidationResult with the score as a float when valid

    Example:
        >>> result = validate_score("42")
        >>> result.sanitized_value
        42.0
    """
    if score is None or (isinstance(score, str) and not score.strip()):
        return ValidationResult(is_valid=False, error_message="Score is required")

    try:
        value = float(score)
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False, error_message=f"Score must be a number: {score!r}"
        )

    if not (MIN_MATCH_SCORE <= value <= MAX_MATCH_SCORE):
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Score must be between {MIN_MATCH_SCORE} and {MAX_MATCH_SCORE}"
            ),
        )

    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_score_strict(score) -> float:
    """Validate a score and raise exception if invalid.

    Raises:
        InvalidResultException: If score is invalid
    """
    result = validate_score(score)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)
    return result.sanitized_value


# ========== Placement Validation ==========


def validate_placement(placement, group_size: int) -> ValidationResult:
    """Validate a finishing position inside a multi-player match.

    A missing placement is allowed (it scores zero tournament points).

    Args:
        placement: 1-based finishing position, or None
        group_size: Number of participants seated in the match

    Returns:
        ValidationResult with the placement as an int (or None)
    """
    if placement is None:
        return ValidationResult(is_valid=True, sanitized_value=None)

    try:
        value = int(placement)
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False, error_message=f"Placement must be an integer: {placement!r}"
        )

    if not (1 <= value <= group_size):
        return ValidationResult(
            is_valid=False,
            error_message=f"Placement must be between 1 and {group_size}",
        )

    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_victory_points(points) -> ValidationResult:
    """Validate victory points; they cannot be negative."""
    if points is None:
        return ValidationResult(is_valid=True, sanitized_value=0)
    try:
        value = int(points)
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Victory points must be an integer: {points!r}",
        )
    if value < 0:
        return ValidationResult(
            is_valid=False, error_message="Victory points cannot be negative"
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


# ========== Game Configuration Validation ==========


def validate_table_settings(
    available_tables: int, players_per_table: int, min_players: int
) -> ValidationResult:
    """Validate a game's table settings.

    Enforces ``players_per_table >= min_players >= 2`` and a non-negative
    table count.
    """
    if available_tables < 0:
        return ValidationResult(
            is_valid=False, error_message="Available tables cannot be negative"
        )
    if min_players < 2:
        return ValidationResult(
            is_valid=False, error_message="A table needs at least 2 players"
        )
    if players_per_table < min_players:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Players per table ({players_per_table}) cannot be below "
                f"minimum players ({min_players})"
            ),
        )
    return ValidationResult(
        is_valid=True,
        sanitized_value=(available_tables, players_per_table, min_players),
    )


def validate_table_settings_strict(
    available_tables: int, players_per_table: int, min_players: int
) -> None:
    """Validate table settings and raise exception if invalid.

    Raises:
        InvalidGameConfigurationException: If the settings are invalid
    """
    result = validate_table_settings(available_tables, players_per_table, min_players)
    if not result.is_valid:
        raise InvalidGameConfigurationException(result.error_message)
