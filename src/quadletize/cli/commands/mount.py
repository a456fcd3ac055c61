# topmark:header:start
#
#   project      : Quadletize
#   file         : mount.py
#   file_relpath : src/quadletize/cli/commands/mount.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize `mount` command.

Parses ``--mount`` specs and prints each in canonical form, one per line.
Useful to check what a ``Mount=`` line will look like.
"""

from __future__ import annotations

import click

from quadletize.cli.errors import QuadletizeDataError
from quadletize.config.logging import get_logger
from quadletize.quadlet.container.mount import Mount, ParseMountError, format_mount, parse_mount

logger = get_logger(__name__)


@click.command(
    name="mount",
    help="Parse mount specs and print their canonical form.",
)
@click.argument("specs", nargs=-1, required=True)
def mount_command(*, specs: tuple[str, ...]) -> None:
    """Print the canonical form of each spec in ``SPECS``.

    All specs are parsed before anything is printed.
    """
    mounts: list[Mount] = []
    for spec in specs:
        try:
            mounts.append(parse_mount(spec))
        except ParseMountError as exc:
            raise QuadletizeDataError(f"{spec}: {exc}") from exc
    for mount in mounts:
        logger.debug("canonical form of %r", mount)
        click.echo(format_mount(mount))
