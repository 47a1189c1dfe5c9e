"""Geolocate module - where an observation was made."""

from .location import DeviceLocation, ResolvedLocation, is_valid_coordinate, resolve_location

__all__ = [
    "resolve_location",
    "is_valid_coordinate",
    "DeviceLocation",
    "ResolvedLocation",
]
