# topmark:header:start
#
#   project      : Quadletize
#   file         : logging.py
#   file_relpath : src/quadletize/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize logging with a TRACE level and colored output.

The codecs log their decisions (resolved fields, join-vs-repeat, built
structs) at TRACE level, which sits below DEBUG. The CLI configures the root
logger once per invocation via `setup_logging`; the level can be forced with
the ``QUADLETIZE_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

#: Environment variable overriding the log level.
LOG_LEVEL_ENV: Final[str] = "QUADLETIZE_LOG_LEVEL"


class QuadletizeLogger(logging.Logger):
    """Logger with an additional `trace` method."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` with severity TRACE.

        Args:
            msg (object): The message to be logged.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Extra record attributes.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(QuadletizeLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"

_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


class ChalkFormatter(logging.Formatter):
    """Formatter coloring each record by severity."""

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelno
        message = super().format(record)

        if level >= logging.CRITICAL:
            return chalk.red_bright(message)
        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        if level >= logging.DEBUG:
            return chalk.gray(message)
        if level >= TRACE_LEVEL:
            return chalk.blue(message)
        return chalk.dim.red(message)


def parse_log_level(value: str) -> int | None:
    """Parse a level name (``"TRACE"``, ``"debug"``) or number (``"10"``)."""
    v = value.strip().upper()
    if v.isdigit():
        return int(v)
    return _LEVEL_NAMES.get(v)


def resolve_env_log_level() -> int | None:
    """Return the level set in ``QUADLETIZE_LOG_LEVEL``, or None if unset or invalid."""
    val = os.environ.get(LOG_LEVEL_ENV)
    if not val:
        return None
    return parse_log_level(val)


def setup_logging(level: int | None = None) -> None:
    """Configure the root logger with colored output on stderr.

    Args:
        level (int | None): The level to use. When None, the environment is
            consulted via `resolve_env_log_level`, then CRITICAL is used.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stdout carries the rendered quadlet files
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = False


def get_logger(name: str) -> QuadletizeLogger:
    """Return the `QuadletizeLogger` named ``name``."""
    return cast("QuadletizeLogger", logging.getLogger(name))
