"""Process-wide logging for the tally service."""
from __future__ import annotations

import logging
import logging.config
from typing import Optional

LOG_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)s | %(message)s"

_configured = False


def configure_root_logger(level: str = "INFO") -> None:
    """Send the root and werkzeug loggers to stdout in one shared format.

    Only the first call has an effect. `create_app` calls it for every
    non-testing app, so WSGI servers and `flask run` get the same output as
    `python app.py`.
    """
    global _configured
    if _configured:
        return

    level = level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "tally": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "tally",
                },
            },
            "loggers": {
                "werkzeug": {"handlers": ["stdout"], "level": level, "propagate": False},
            },
            "root": {"handlers": ["stdout"], "level": level},
        }
    )
    _configured = True


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level.upper())
    return logger
