from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER_NAME = "prefecture_weather"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stdout handler to the package logger.

    Safe to call more than once; later calls only update the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(level.upper())

    if not any(getattr(handler, "_prefecture_weather", False) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._prefecture_weather = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
