"""Centralized logging configuration for the gallery pipeline."""

import os
import sys
import logging
from typing import Optional

# Name given to the stdout handler installed by setup_logger
HANDLER_NAME = "gallery-pipeline-stdout"

STRUCTURED_FORMAT = (
    "%(asctime)s | %(name)s | %(levelname)-8s | "
    "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s"
)
# Progress lines already carry an elapsed-time prefix
SIMPLE_FORMAT = "%(levelname)-7s %(message)s"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _build_formatter() -> logging.Formatter:
    if os.getenv("LOG_FORMAT", "simple").lower() == "structured":
        return logging.Formatter(STRUCTURED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    return logging.Formatter(SIMPLE_FORMAT)


def pipeline_handlers(logger: logging.Logger) -> list:
    """Handlers on ``logger`` that were installed by ``setup_logger``."""
    return [h for h in logger.handlers if h.get_name() == HANDLER_NAME]


def setup_logger(name: str = "gallery-pipeline", level: Optional[str] = None) -> logging.Logger:
    """
    Configure a stdout logger for gallery builds.

    The level comes from ``level``, then ``LOG_LEVEL``, then INFO. The
    handler format is chosen once, when the handler is installed, from
    ``LOG_FORMAT`` ("simple" or "structured").

    Calling this again for the same name only updates the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))

    if not pipeline_handlers(logger):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(_build_formatter())
        logger.addHandler(handler)

    # Progress output is printed once, by this logger only
    logger.propagate = False
    return logger


def get_logger(name: str = "gallery-pipeline") -> logging.Logger:
    return setup_logger(name)


logger = setup_logger()
