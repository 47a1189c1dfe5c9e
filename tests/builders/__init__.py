"""Byte builders for JPEG/EXIF test fixtures."""

from .jpeg import (
    OSLO_LATITUDE,
    OSLO_LONGITUDE,
    TAG_DATETIME,
    TAG_DATETIME_ORIGINAL,
    TAG_MAKE,
    TAG_MODEL,
    Entry,
    ascii_entry,
    build_jpeg,
    build_tiff,
    gps_entries,
    long_entry,
    rational_entry,
    segment,
    short_entry,
)

__all__ = [
    "OSLO_LATITUDE",
    "OSLO_LONGITUDE",
    "TAG_DATETIME",
    "TAG_DATETIME_ORIGINAL",
    "TAG_MAKE",
    "TAG_MODEL",
    "Entry",
    "ascii_entry",
    "build_jpeg",
    "build_tiff",
    "gps_entries",
    "long_entry",
    "rational_entry",
    "segment",
    "short_entry",
]
