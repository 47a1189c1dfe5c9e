"""Upload checks for observation photos."""

import io
import logging

from PIL import Image, UnidentifiedImageError

from .observation import ValidationResult

logger = logging.getLogger(__name__)

MAX_SIZE_BYTES = 10 * 1024 * 1024
ALLOWED_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
MIN_WIDTH = 100
MIN_HEIGHT = 100


def get_image_dimensions(image_data: bytes) -> tuple[int, int]:
    """
    Read width and height of an image without decoding its pixels.

    Raises:
        ValueError: If Pillow cannot identify the image
    """
    try:
        with Image.open(io.BytesIO(image_data)) as img:
            return img.width, img.height
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Failed to load image: {e}") from e


def validate_image_file(
    image_data: bytes,
    content_type: str,
    max_size_bytes: int = MAX_SIZE_BYTES,
    allowed_types: tuple[str, ...] = ALLOWED_TYPES,
    min_width: int = MIN_WIDTH,
    min_height: int = MIN_HEIGHT,
) -> ValidationResult:
    """
    Validate an uploaded photo's size, MIME type and dimensions.

    Args:
        image_data: Raw file bytes
        content_type: MIME type reported for the upload
        max_size_bytes: Largest accepted file
        allowed_types: Accepted MIME types
        min_width: Minimum width in pixels
        min_height: Minimum height in pixels

    Returns:
        ValidationResult collecting every failed check
    """
    errors = []

    size = len(image_data)
    if size > max_size_bytes:
        max_size_mb = round(max_size_bytes / (1024 * 1024))
        errors.append(
            f"File size must be less than {max_size_mb}MB. "
            f"Current size: {round(size / (1024 * 1024))}MB"
        )

    if (content_type or "").lower() not in allowed_types:
        errors.append(f"File type not supported. Allowed types: {', '.join(allowed_types)}")

    try:
        width, height = get_image_dimensions(image_data)
    except ValueError as e:
        logger.debug("Dimension check failed: %s", e)
        errors.append("Unable to read image dimensions")
    else:
        if width < min_width or height < min_height:
            errors.append(
                f"Image must be at least {min_width}x{min_height} pixels. "
                f"Current: {width}x{height}"
            )

    return ValidationResult.from_errors(errors)
