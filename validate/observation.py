"""Checks on the user-entered parts of an observation."""

import re
from dataclasses import dataclass, field

MAX_COMMENT_LENGTH = 1000


@dataclass
class ValidationResult:
    """Outcome of a validation pass. ``errors`` lists every problem found."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=list(errors))


def validate_observation_data(
    comment: str | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
    max_comment_length: int = MAX_COMMENT_LENGTH,
) -> ValidationResult:
    """
    Validate coordinates and comment of an observation.

    Values that are None are not checked.

    Args:
        comment: Free-text comment from the observer
        latitude: Decimal degrees
        longitude: Decimal degrees
        max_comment_length: Comments must be shorter than this

    Returns:
        ValidationResult with one message per failed check
    """
    errors = []

    if latitude is not None and not -90 <= latitude <= 90:
        errors.append("Invalid latitude. Must be between -90 and 90")

    if longitude is not None and not -180 <= longitude <= 180:
        errors.append("Invalid longitude. Must be between -180 and 180")

    if comment and len(comment) > max_comment_length:
        errors.append(f"Comment must be less than {max_comment_length} characters")

    return ValidationResult.from_errors(errors)


def sanitize_input(text: str) -> str:
    """Trim whitespace and drop angle brackets."""
    return re.sub(r"[<>]", "", text.strip())
