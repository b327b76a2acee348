"""Validation utilities for Team Pairing.

This module provides reusable validation functions with consistent error handling.
Roster and maps import build on these to fail closed on malformed input.
"""

from typing import Any, Optional

from teampairing.constants import MAX_SCORE, MIN_SCORE, TEAM_SIZE
from teampairing.exceptions import ScoreValidationException


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
        sanitized_value: Any = None,
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


# ========== Text Validation ==========


def validate_text(
    value: Any, field_name: str = "Field", required: bool = True
) -> ValidationResult:
    """Validate a free-text field such as a team, player or army name.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages
        required: Whether an empty value is an error

    Returns:
        ValidationResult with the stripped string as sanitized value
    """
    if value is None:
        if required:
            return ValidationResult(
                is_valid=False,
                error_message=f"{field_name} is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    if not isinstance(value, str):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a string: {value!r}",
        )

    stripped = value.strip()
    if not stripped:
        if required:
            return ValidationResult(
                is_valid=False,
                error_message=f"{field_name} cannot be empty",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    return ValidationResult(is_valid=True, sanitized_value=stripped)


# ========== Score Validation ==========


def validate_score(score: Any, field_name: str = "Score") -> ValidationResult:
    """Validate a battleplan or matchup score.

    Scores are integers from 1 (weak) to 6 (strong). Booleans and floats
    are rejected even when they compare equal to an integer.

    Args:
        score: Score to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with the integer score as sanitized value
    """
    if isinstance(score, bool) or not isinstance(score, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be an integer: {score!r}",
        )

    if score < MIN_SCORE or score > MAX_SCORE:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be between {MIN_SCORE} and {MAX_SCORE}: {score}",
        )

    return ValidationResult(is_valid=True, sanitized_value=score)


def validate_score_strict(score: Any, field_name: str = "Score") -> int:
    """Validate score and return it or raise exception.

    Raises:
        ScoreValidationException: If score is invalid
    """
    result = validate_score(score, field_name)
    if not result.is_valid:
        raise ScoreValidationException(result.error_message)
    return result.sanitized_value


# ========== Roster Validation ==========


def validate_team_size(count: int, expected: int = TEAM_SIZE) -> ValidationResult:
    """Validate the number of players on a roster.

    Args:
        count: Number of players found
        expected: Required number of players

    Returns:
        ValidationResult with validation status
    """
    if count != expected:
        return ValidationResult(
            is_valid=False,
            error_message=f"Roster must have exactly {expected} players, found {count}",
        )
    return ValidationResult(is_valid=True, sanitized_value=count)
