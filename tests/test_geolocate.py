"""Unit tests for geolocate module."""

import pytest

from exif_utils import ExifResult
from geolocate import DeviceLocation, is_valid_coordinate, resolve_location


@pytest.mark.unit
class TestResolveLocation:
    """Test resolve_location() function."""

    def test_exif_gps_wins_over_device(self):
        """Test the photo's own position is preferred."""
        exif = ExifResult(latitude=59.958333, longitude=10.752)
        device = DeviceLocation(63.43, 10.39, accuracy=12.0)

        location = resolve_location(exif, device)

        assert location.latitude == 59.958333
        assert location.longitude == 10.752
        assert location.source == "exif"
        assert location.accuracy is None

    def test_device_fallback_without_exif_gps(self):
        """Test the device position is used when the photo has no GPS."""
        exif = ExifResult(make="Canon")
        device = DeviceLocation(63.43, 10.39, accuracy=12.0)

        location = resolve_location(exif, device)

        assert (location.latitude, location.longitude) == (63.43, 10.39)
        assert location.accuracy == 12.0
        assert location.source == "device"

    def test_partial_exif_gps_falls_back(self):
        """Test a latitude without longitude is not used."""
        exif = ExifResult(latitude=59.9)
        location = resolve_location(exif, DeviceLocation(60.0, 11.0))
        assert location.source == "device"

    def test_no_exif_result(self):
        """Test None for the EXIF result uses the device."""
        location = resolve_location(None, DeviceLocation(60.0, 11.0))
        assert location.source == "device"

    def test_nothing_available(self):
        """Test None when neither photo nor device has a position."""
        assert resolve_location(ExifResult(), None) is None
        assert resolve_location(None) is None

    def test_equator_exif_position_is_used(self):
        """Test 0, 0 from EXIF counts as a position."""
        location = resolve_location(ExifResult(latitude=0.0, longitude=0.0), DeviceLocation(1, 1))
        assert location.source == "exif"


@pytest.mark.unit
class TestIsValidCoordinate:
    """Test is_valid_coordinate() function."""

    def test_oslo(self):
        assert is_valid_coordinate(59.9139, 10.7522)

    def test_bounds_inclusive(self):
        """Test the poles and the antimeridian are valid."""
        assert is_valid_coordinate(90, 180)
        assert is_valid_coordinate(-90, -180)

    def test_out_of_range(self):
        assert not is_valid_coordinate(90.1, 0)
        assert not is_valid_coordinate(0, -180.5)
