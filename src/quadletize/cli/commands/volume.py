# topmark:header:start
#
#   project      : Quadletize
#   file         : volume.py
#   file_relpath : src/quadletize/cli/commands/volume.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize `volume` command: ``podman volume create`` to ``.volume``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from quadletize.cli.cmd_common import build_file, emit_file
from quadletize.cli.errors import QuadletizeUsageError
from quadletize.cli.options import global_options, output_options, section_options
from quadletize.quadlet.volume import ParseVolumeOptError, Volume, VolumePodmanArgs

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="volume",
    help="Generate a .volume quadlet from podman volume create options.",
)
@click.argument("name")
@click.option("-d", "--driver", type=str, default=None, help="Volume driver.")
@click.option(
    "--opt",
    "opts",
    multiple=True,
    help="Driver option: 'type=', 'device=', 'o=' or 'copy'. Repeatable.",
)
@click.option("--label", "labels", multiple=True, help="Set a label. Repeatable.")
@click.option("--ignore", is_flag=True, default=False, help="Do not fail if the volume exists.")
@click.option(
    "--volume-name",
    type=str,
    default=None,
    help="podman volume name, if it differs from the file name.",
)
@section_options
@global_options
@output_options
@click.pass_context
def volume_command(
    ctx: click.Context,
    *,
    name: str,
    driver: str | None,
    opts: tuple[str, ...],
    labels: tuple[str, ...],
    ignore: bool,
    volume_name: str | None,
    output_dir: Path | None,
    overwrite: bool | None,
    **shared: Any,
) -> None:
    """Generate a ``.volume`` quadlet file named after ``NAME``."""
    podman_args = VolumePodmanArgs(driver=driver, ignore=ignore)
    volume = Volume(
        label=list(labels),
        volume_name=volume_name,
        podman_args=None if podman_args == VolumePodmanArgs() else podman_args,
    )
    try:
        volume.apply_opts(opts)
    except ParseVolumeOptError as exc:
        raise QuadletizeUsageError(str(exc)) from exc
    emit_file(
        ctx,
        build_file(ctx, name, volume, shared),
        output_dir=output_dir,
        overwrite=overwrite,
    )
