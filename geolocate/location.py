"""Choose the location stored with an observation."""

from dataclasses import dataclass

from exif_utils import ExifResult

SOURCE_EXIF = "exif"
SOURCE_DEVICE = "device"


@dataclass(frozen=True)
class DeviceLocation:
    """A position reported by the device at submission time."""

    latitude: float
    longitude: float
    accuracy: float | None = None


@dataclass(frozen=True)
class ResolvedLocation:
    latitude: float
    longitude: float
    accuracy: float | None
    source: str


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """Check that latitude is within [-90, 90] and longitude within [-180, 180]."""
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


def resolve_location(
    exif: ExifResult | None, device: DeviceLocation | None = None
) -> ResolvedLocation | None:
    """
    Pick the photo's own GPS position, falling back to the device position.

    Args:
        exif: Result of EXIF extraction for the submitted photo
        device: Current device location, if the user granted access

    Returns:
        ResolvedLocation tagged with its source, or None when neither the
        photo nor the device supplied a position
    """
    if exif is not None and exif.has_gps:
        return ResolvedLocation(
            latitude=exif.latitude,
            longitude=exif.longitude,
            accuracy=None,
            source=SOURCE_EXIF,
        )

    if device is not None:
        return ResolvedLocation(
            latitude=device.latitude,
            longitude=device.longitude,
            accuracy=device.accuracy,
            source=SOURCE_DEVICE,
        )

    return None
