"""Logging configuration and helpers for the command line tool."""

from __future__ import annotations

import enum
import logging
import os
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import TextIO

PROGRAM_NAME = "splashsurf"
_VERSION = "0.10.0"
LOG_ENV_VAR = "SPLASHSURF_LOG"

TRACE = 5
OFF = logging.CRITICAL + 10
logging.addLevelName(TRACE, "TRACE")

_LEVEL_NAMES = {
    TRACE: "TRACE",
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "ERROR",
}

_ENV_LEVELS = {
    "off": OFF,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

logger = logging.getLogger(PROGRAM_NAME)


class VerbosityLevel(enum.Enum):
    NONE = 0
    VERBOSE = 1
    VERY_VERBOSE = 2
    VERY_VERY_VERBOSE = 3

    @classmethod
    def from_count(cls, count: int) -> VerbosityLevel:
        """Maps the number of -v flags to a verbosity level."""
        return cls(min(max(count, 0), 3))

    def to_level(self) -> int | None:
        """The log level this verbosity implies, or None if it implies none."""
        return {
            VerbosityLevel.NONE: None,
            VerbosityLevel.VERBOSE: logging.INFO,
            VerbosityLevel.VERY_VERBOSE: logging.DEBUG,
            VerbosityLevel.VERY_VERY_VERBOSE: TRACE,
        }[self]


def resolve_log_level(
    verbosity: VerbosityLevel, quiet: bool, env_level: str | None
) -> tuple[int, str | None]:
    """Returns the log level to use and the environment value if it was not recognised."""
    if quiet:
        return OFF, None
    level = verbosity.to_level()
    if level is not None:
        return level, None
    if env_level is None:
        return logging.INFO, None
    name = env_level.lower()
    if name in _ENV_LEVELS:
        return _ENV_LEVELS[name], None
    return logging.INFO, name


class _Formatter(logging.Formatter):
    def __init__(self, detailed: bool) -> None:
        super().__init__()
        self._detailed = detailed

    def format(self, record: logging.LogRecord) -> str:
        level = _LEVEL_NAMES.get(record.levelno, record.levelname)
        stamp = datetime.fromtimestamp(record.created).astimezone()
        message = record.getMessage()
        if self._detailed:
            return (
                f"[{stamp.isoformat(timespec='microseconds')}]"
                f"[{record.name}][{level}] {message}"
            )
        return f"[{stamp.strftime('%H:%M:%S')}.{stamp.microsecond // 1000:03d}][{level}] {message}"


def initialize_logging(
    verbosity: VerbosityLevel, quiet: bool, stream: TextIO | None = None
) -> logging.Logger:
    """Configures the package logger to write formatted records to the stream."""
    level, unknown = resolve_log_level(verbosity, quiet, os.environ.get(LOG_ENV_VAR))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(_Formatter(detailed=verbosity is not VerbosityLevel.NONE))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    if unknown is not None:
        logger.error(
            "Unknown log filter level '%s' defined in '%s' env variable, using INFO instead.",
            unknown,
            LOG_ENV_VAR,
        )
    return logger


def log_error(err: BaseException) -> None:
    """Logs an error and each exception in its cause chain."""
    logger.error("Error occurred: %s", err)
    seen = {id(err)}
    cause = err.__cause__ or err.__context__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        logger.error("  caused by: %s", cause)
        cause = cause.__cause__ or cause.__context__


def log_program_info(argv: Sequence[str] | None = None) -> None:
    """Logs the program name, version and command line."""
    args = sys.argv if argv is None else argv
    logger.info("%s v%s (%s)", PROGRAM_NAME, _VERSION, PROGRAM_NAME)
    logger.info("Called with command line: %s", " ".join(args))