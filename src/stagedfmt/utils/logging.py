"""Logging setup for the stagedfmt command line.

Modules log through ``logging.getLogger(__name__)``; only the CLI configures
handlers. Output goes to stderr so it never mixes with anything git parses.
"""

import logging
import sys
from typing import Optional, TextIO

HUMAN_FORMAT = "%(message)s"
DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ROOT_LOGGER_NAME = "stagedfmt"


def resolve_level(level_name: str, default: int = logging.WARNING) -> int:
    """Turn a level name such as ``"debug"`` into a logging level."""
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else default


def configure_logging(
    level_name: str = "WARNING",
    debug: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Args:
        level_name: Logging level name; debug mode forces DEBUG
        debug: Use the detailed format with timestamps and logger names
        stream: Output stream (defaults to stderr)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if debug else resolve_level(level_name))

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT if debug else HUMAN_FORMAT))
    logger.addHandler(handler)
    return logger

