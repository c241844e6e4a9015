"""Process-wide logging configuration."""

from __future__ import annotations

import logging.config

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route package log records to stderr at the requested level."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": _LOG_FORMAT}},
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                }
            },
            "loggers": {
                "annotation_migrator": {
                    "handlers": ["stderr"],
                    "level": level.upper(),
                    "propagate": False,
                }
            },
        }
    )
