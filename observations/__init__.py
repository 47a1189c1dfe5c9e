"""Observations module - preparing moth sightings for submission."""

from .errors import InvalidImageError, MalerjaktError, ObservationError
from .payload import (
    ObservationPayload,
    Status,
    build_observation,
    decode_data_url,
    generate_image_filename,
    storage_path,
)

__all__ = [
    "build_observation",
    "decode_data_url",
    "generate_image_filename",
    "storage_path",
    "ObservationPayload",
    "Status",
    "MalerjaktError",
    "InvalidImageError",
    "ObservationError",
]
