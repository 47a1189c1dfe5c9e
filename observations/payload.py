"""Assemble the observation record handed to the backend."""

import base64
import binascii
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from config import Settings
from exif_utils import ExifResult, extract, to_iso_timestamp
from geolocate import DeviceLocation, resolve_location
from validate import sanitize_input, validate_image_file, validate_observation_data

from .errors import InvalidImageError, ObservationError

logger = logging.getLogger(__name__)


class Status(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


@dataclass
class ObservationPayload:
    """A validated observation, ready for upload and insert."""

    image_data: bytes
    image_filename: str
    image_path: str
    comment: str
    created_at: str
    latitude: float
    longitude: float
    accuracy: float | None = None
    location_source: str | None = None
    captured_at: str | None = None
    device_info: dict = field(default_factory=dict)
    exif: ExifResult = field(default_factory=ExifResult)
    status: Status = Status.PENDING
    user_id: str | None = None

    def to_record(self) -> dict:
        """
        Return the database row for this observation.

        The image bytes are not part of the row; they are uploaded to
        ``image_path`` separately.
        """
        return {
            "image_path": self.image_path,
            "comment": self.comment,
            "created_at": self.created_at,
            "captured_at": self.captured_at,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "accuracy": self.accuracy,
            "location_source": self.location_source,
            "device_info": self.device_info,
            "status": self.status.value,
            "user_id": self.user_id,
        }


def decode_data_url(data_url: str) -> bytes:
    """
    Decode a base64 ``data:image/...`` URL.

    Raises:
        InvalidImageError: If the URL is not an image data URL or does not decode
    """
    if not data_url.startswith("data:image/"):
        raise InvalidImageError("Invalid image format. Expected a data URL.")

    _, _, encoded = data_url.partition(",")
    if not encoded:
        raise InvalidImageError("Could not extract base64 data from image")

    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError("Failed to decode image data") from e


def generate_image_filename() -> str:
    return f"{uuid.uuid4()}.jpg"


def storage_path(filename: str, prefix: str = "public") -> str:
    """Object path of an uploaded image inside the observations bucket."""
    prefix = prefix.strip("/")
    return f"{prefix}/{filename}" if prefix else filename


def build_observation(
    image: bytes | str,
    comment: str | None = "",
    timestamp: str | None = None,
    device: DeviceLocation | None = None,
    device_info: dict | None = None,
    content_type: str | None = None,
    settings: Settings | None = None,
) -> ObservationPayload:
    """
    Turn a submitted photo and form fields into an observation payload.

    The photo's EXIF GPS position is used when present, otherwise the
    device location. Without either, the position is stored as 0, 0 with
    no location source.

    Args:
        image: Raw image bytes or a base64 data URL
        comment: Observer's comment, sanitized before use
        timestamp: Submission time (ISO 8601); defaults to now in UTC
        device: Device location at submission time
        device_info: User agent, platform and language of the submitting device
        content_type: MIME type of the upload; when given, size, type and
            dimensions are validated too
        settings: Limits and storage prefix; defaults to Settings()

    Returns:
        ObservationPayload with status Pending and no user

    Raises:
        InvalidImageError: If the image is missing or cannot be decoded
        ObservationError: If any validation check fails
    """
    settings = settings or Settings()

    image_data = decode_data_url(image) if isinstance(image, str) else bytes(image)
    if not image_data:
        raise InvalidImageError("No image file provided")

    errors = []
    if content_type is not None:
        image_check = validate_image_file(
            image_data,
            content_type,
            max_size_bytes=settings.max_upload_bytes,
            allowed_types=settings.allowed_image_types,
            min_width=settings.min_image_width,
            min_height=settings.min_image_height,
        )
        errors.extend(image_check.errors)

    exif = extract(image_data)
    location = resolve_location(exif, device)
    if location is None:
        logger.info("No EXIF or device location; storing observation at 0, 0")

    comment = sanitize_input(comment or "")
    latitude = location.latitude if location else 0.0
    longitude = location.longitude if location else 0.0

    data_check = validate_observation_data(
        comment, latitude, longitude, max_comment_length=settings.max_comment_length
    )
    errors.extend(data_check.errors)
    if errors:
        raise ObservationError(errors)

    filename = generate_image_filename()
    return ObservationPayload(
        image_data=image_data,
        image_filename=filename,
        image_path=storage_path(filename, settings.storage_prefix),
        comment=comment,
        created_at=timestamp or datetime.now(timezone.utc).isoformat(),
        latitude=latitude,
        longitude=longitude,
        accuracy=location.accuracy if location else None,
        location_source=location.source if location else None,
        captured_at=to_iso_timestamp(exif.timestamp),
        device_info=dict(device_info or {}),
        exif=exif,
    )
