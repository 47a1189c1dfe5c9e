"""Pytest configuration and fixtures for all tests."""

import io
import tempfile
from pathlib import Path

import pytest

from tests.builders import (
    OSLO_LATITUDE,
    OSLO_LONGITUDE,
    TAG_DATETIME,
    TAG_MAKE,
    TAG_MODEL,
    ascii_entry,
    build_jpeg,
    build_tiff,
    gps_entries,
)


# ==================== EXIF Byte Fixtures ====================


@pytest.fixture
def camera_entries():
    """IFD0 entries for make, model and timestamp."""
    return [
        ascii_entry(TAG_MAKE, b"Canon\x00\x00"),
        ascii_entry(TAG_MODEL, "Canon EOS 90D"),
        ascii_entry(TAG_DATETIME, "2024:06:15 22:41:07"),
    ]


@pytest.fixture
def oslo_gps_entries():
    """GPS IFD entries for a position in Oslo, northern/eastern hemisphere."""
    return gps_entries(OSLO_LATITUDE, OSLO_LONGITUDE)


@pytest.fixture
def exif_jpeg(camera_entries, oslo_gps_entries):
    """A little-endian JPEG with camera details and a GPS position."""
    return build_jpeg(build_tiff(camera_entries, gps=oslo_gps_entries, little_endian=True))


# ==================== File System Fixtures ====================


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_image(temp_dir):
    """Create a temporary test image without EXIF data."""
    from PIL import Image

    image_path = temp_dir / "test_image.jpg"
    img = Image.new("RGB", (200, 150), color="blue")
    img.save(image_path, "JPEG")

    return image_path


@pytest.fixture
def jpeg_bytes():
    """Return JPEG bytes of a plain 200x150 image."""
    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (200, 150), color="green").save(buffer, "JPEG")
    return buffer.getvalue()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove Målerjakt settings from the environment."""
    for name in (
        "MALERJAKT_MAX_UPLOAD_BYTES",
        "MALERJAKT_ALLOWED_IMAGE_TYPES",
        "MALERJAKT_MIN_IMAGE_WIDTH",
        "MALERJAKT_MIN_IMAGE_HEIGHT",
        "MALERJAKT_MAX_COMMENT_LENGTH",
        "MALERJAKT_STORAGE_PREFIX",
        "LOG_LEVEL",
        "ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ==================== Pytest Configuration ====================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (files, CLI)")
    config.addinivalue_line("markers", "slow: Tests that take >1s to run")
