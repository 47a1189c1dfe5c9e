"""Environment-driven settings for Målerjakt."""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class Settings:
    """Upload limits, storage layout and logging options."""

    max_upload_bytes: int = 10 * 1024 * 1024
    allowed_image_types: tuple[str, ...] = DEFAULT_ALLOWED_IMAGE_TYPES
    min_image_width: int = 100
    min_image_height: int = 100
    max_comment_length: int = 1000
    storage_prefix: str = "public"
    log_level: str = "WARNING"
    environment: str = "development"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            load_env_file: Load a .env file from the working directory first

        Environment variables:
            MALERJAKT_MAX_UPLOAD_BYTES
            MALERJAKT_ALLOWED_IMAGE_TYPES (comma-separated MIME types)
            MALERJAKT_MIN_IMAGE_WIDTH
            MALERJAKT_MIN_IMAGE_HEIGHT
            MALERJAKT_MAX_COMMENT_LENGTH
            MALERJAKT_STORAGE_PREFIX
            LOG_LEVEL
            ENVIRONMENT

        Raises:
            ConfigError: If an integer setting does not parse
        """
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))

        allowed = os.getenv("MALERJAKT_ALLOWED_IMAGE_TYPES")
        if allowed:
            allowed_types = tuple(t.strip().lower() for t in allowed.split(",") if t.strip())
        else:
            allowed_types = DEFAULT_ALLOWED_IMAGE_TYPES

        return cls(
            max_upload_bytes=_get_int("MALERJAKT_MAX_UPLOAD_BYTES", cls.max_upload_bytes),
            allowed_image_types=allowed_types,
            min_image_width=_get_int("MALERJAKT_MIN_IMAGE_WIDTH", cls.min_image_width),
            min_image_height=_get_int("MALERJAKT_MIN_IMAGE_HEIGHT", cls.min_image_height),
            max_comment_length=_get_int("MALERJAKT_MAX_COMMENT_LENGTH", cls.max_comment_length),
            storage_prefix=os.getenv("MALERJAKT_STORAGE_PREFIX", cls.storage_prefix).strip("/"),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            environment=os.getenv("ENVIRONMENT", cls.environment).lower(),
        )
