"""EXIF module - GPS and camera metadata from JPEG bytes."""

from .extractor import (
    ExifResult,
    StageResult,
    dms_to_decimal,
    extract,
    extract_from_path,
    rational_to_float,
    to_iso_timestamp,
)
from .reader import ByteReader, ParseAnomaly

__all__ = [
    "extract",
    "extract_from_path",
    "ExifResult",
    "StageResult",
    "ByteReader",
    "ParseAnomaly",
    "dms_to_decimal",
    "rational_to_float",
    "to_iso_timestamp",
]
