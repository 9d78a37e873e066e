# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import sys
from enum import Enum
from functools import total_ordering
from typing import TextIO

# A custom log level for very chatty subprocess tracing.
TRACE = 5

logging.addLevelName(logging.WARNING, "WARN")
logging.addLevelName(TRACE, "TRACE")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@total_ordering
class LogLevel(Enum):
    """Exposes an enum of the Python `logging` module's levels, with the addition of TRACE.

    Ordering is by verbosity: `TRACE < DEBUG < ... < ERROR` compares the most verbose level as the
    smallest.
    """

    TRACE = ("trace", TRACE)
    DEBUG = ("debug", logging.DEBUG)
    INFO = ("info", logging.INFO)
    WARN = ("warn", logging.WARN)
    ERROR = ("error", logging.ERROR)

    _level: int

    def __new__(cls, value: str, level: int) -> LogLevel:
        member: LogLevel = object.__new__(cls)
        member._value_ = value
        member._level = level
        return member

    @classmethod
    def parse(cls, name: str) -> LogLevel:
        normalized = name.strip().lower()
        if normalized == "warning":
            normalized = "warn"
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(level.value for level in cls)
            raise ValueError(f"Unknown log level {name!r}, expected one of: {choices}")

    @property
    def level(self) -> int:
        return self._level

    def set_level_for(self, logger: logging.Logger) -> None:
        logger.setLevel(self.level)

    def __lt__(self, other):
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self._level < other._level


def initialize_logging(level: LogLevel, stream: TextIO | None = None) -> logging.Handler:
    """Routes all `thrift_compiler` logging at or above `level` to a single stream handler.

    Calling this again replaces the previously installed handler.
    """
    logger = logging.getLogger("thrift_compiler")
    for handler in list(logger.handlers):
        if getattr(handler, "_thrift_compiler_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._thrift_compiler_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    level.set_level_for(logger)
    return handler
