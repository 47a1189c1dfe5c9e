"""Validate module - checks on submitted photos and observation fields."""

from .image import get_image_dimensions, validate_image_file
from .observation import ValidationResult, sanitize_input, validate_observation_data

__all__ = [
    "ValidationResult",
    "validate_image_file",
    "validate_observation_data",
    "sanitize_input",
    "get_image_dimensions",
]
