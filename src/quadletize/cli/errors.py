# topmark:header:start
#
#   project      : Quadletize
#   file         : errors.py
#   file_relpath : src/quadletize/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Exceptions for the Quadletize CLI.

Raise these from commands to stop with a message and a `ExitCode`. Click
catches them and calls `show()`, which prints in red to stderr.
"""

from __future__ import annotations

from typing import IO, Any

import click

from quadletize.cli.exit_codes import ExitCode


class QuadletizeError(click.ClickException):
    """Base class for all Quadletize CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        return str(self.message)

    def show(self, file: IO[Any] | None = None) -> None:
        click.secho(f"Error: {self.format_message()}", file=file, err=file is None, fg="bright_red")


class QuadletizeUsageError(QuadletizeError):
    """Invalid combination of flags or arguments."""

    exit_code = ExitCode.USAGE_ERROR


class QuadletizeDataError(QuadletizeError):
    """Input could not be parsed, or the quadlet file could not be rendered."""

    exit_code = ExitCode.DATA_ERROR


class QuadletizeFileExistsError(QuadletizeError):
    """Refusing to replace an existing output file."""

    exit_code = ExitCode.CANT_CREATE


class QuadletizeIOError(QuadletizeError):
    """Writing an output file failed."""

    exit_code = ExitCode.IO_ERROR


class QuadletizeConfigError(QuadletizeError):
    """Missing, unreadable or invalid configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class QuadletizeUnexpectedError(QuadletizeError):
    """Error for unhandled/unknown errors (last-resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR
