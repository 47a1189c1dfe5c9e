"""Errors raised while preparing an observation."""


class MalerjaktError(Exception):
    """Base class for errors the CLI reports to the user."""


class InvalidImageError(MalerjaktError):
    """Raised when the submitted image cannot be decoded."""


class ObservationError(MalerjaktError):
    """Raised when an observation fails validation."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)
