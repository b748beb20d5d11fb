"""Logging configuration for the API process."""
from __future__ import annotations

import logging
from logging.config import dictConfig

from smokes_hub.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a console handler for the ``smokes_hub`` logger tree."""
    resolved = (level or settings.log_level).upper()
    if resolved not in logging.getLevelNamesMapping():
        resolved = "INFO"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "smokes_hub": {
                    "handlers": ["console"],
                    "level": resolved,
                    "propagate": False,
                },
            },
        }
    )
