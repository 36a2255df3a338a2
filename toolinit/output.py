"""
output.py

Responsibility: Configure how `toolinit` log records are written to the terminal.

Two targets are supported:
- `human`: a level marker followed by the message.
- `ide`: `file:line: <level>: toolinit: message`, the diagnostic format editors and
  IDE build logs understand.

A record may carry the location of the artifact it is about (not the Python call
site) via `extra={"location_file": ..., "location_line": ...}`.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import TextIO

LOGGER_NAME = "toolinit"


class OutputTarget(str, Enum):
    HUMAN = "human"
    IDE = "ide"


_HUMAN_MARKERS = {
    logging.DEBUG: "🗣",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
}

_IDE_LEVELS = {
    logging.DEBUG: "verbose",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
}


def _location(record: logging.LogRecord) -> str | None:
    file = getattr(record, "location_file", None)
    if not file:
        return None
    line = getattr(record, "location_line", None)
    if line is None:
        return f"{file}:"
    return f"{file}:{line}:"


def _bucket(levelno: int) -> int:
    # CRITICAL and custom levels fall into the nearest lower standard bucket.
    for level in (logging.ERROR, logging.WARNING, logging.INFO):
        if levelno >= level:
            return level
    return logging.DEBUG


class HumanFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        location = _location(record)
        if location:
            message = f"{location} {message}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{_HUMAN_MARKERS[_bucket(record.levelno)]} {message}"


class IdeFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        level = _IDE_LEVELS[_bucket(record.levelno)]
        prefix = f"{level}: {LOGGER_NAME}: {record.getMessage()}"
        location = _location(record)
        return f"{location} {prefix}" if location else prefix


def configure_logging(
    *,
    verbose: bool = False,
    target: OutputTarget | str = OutputTarget.HUMAN,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Install a single stream handler on the `toolinit` logger and return the logger.

    Calling this again replaces the previous handler.
    """
    target = OutputTarget(target)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(HumanFormatter() if target is OutputTarget.HUMAN else IdeFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger
