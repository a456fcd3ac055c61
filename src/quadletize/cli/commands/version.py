# topmark:header:start
#
#   project      : Quadletize
#   file         : version.py
#   file_relpath : src/quadletize/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize `version` command.

Prints the Quadletize version as installed in the active Python environment.
"""

from __future__ import annotations

import logging

import click

from quadletize.constants import QUADLETIZE_VERSION


@click.command(
    name="version",
    help="Show the current version of Quadletize.",
)
def version_command() -> None:
    """Print the installed version, with a heading when verbose."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    level: int = ctx.obj.get("verbosity_level", logging.WARNING)

    if level <= logging.INFO:
        click.secho("Quadletize version:", bold=True, underline=True)
        click.echo(f"    {click.style(QUADLETIZE_VERSION, bold=True)}")
    else:
        click.echo(QUADLETIZE_VERSION)
