"""Mini README: Application-wide logging helpers for the finance tracker.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - one-off setup of the root handler and level.

Usage:
    Modules declare ``LOGGER = get_logger(__name__)`` at import time. The
    root handler is installed exactly once so reloading modules under
    uvicorn's auto-reload does not duplicate log lines.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_root_logger(level: int = logging.INFO) -> None:
    """Configure the root logger with the tracker's formatter."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        logging.getLogger().setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def level_for_environment(environment: str) -> int:
    """Map an environment label to a root logging level."""

    return logging.DEBUG if environment.strip().lower() == "development" else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
