"""Logging setup for the CLI and any service embedding the extractor."""

import json
import logging
import logging.config
import sys

# Attributes every LogRecord has; anything else came from ``extra=``
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with the source location and any ``extra`` fields."""

    def format(self, record):
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "module": record.module,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in entry:
                entry[key] = value
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def build_logging_config(level: str = "WARNING", environment: str = "development") -> dict:
    """
    Build a dictConfig for the given level and environment.

    Development gets readable text on stderr; production gets one JSON
    object per line.
    """
    if environment == "production":
        formatter = {"()": JsonFormatter, "datefmt": "%Y-%m-%dT%H:%M:%S%z"}
    else:
        formatter = {
            "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": sys.stderr,
                "formatter": "default",
            },
        },
        "loggers": {
            "root": {"level": level, "handlers": ["console"]},
            # Pillow logs every plugin it probes at DEBUG
            "PIL": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
    }


def setup_logging(level: str = "WARNING", environment: str = "development") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(build_logging_config(level, environment))
    logging.getLogger(__name__).debug(
        "Logging configured for %s environment at %s", environment, level
    )
