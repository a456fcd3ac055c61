# topmark:header:start
#
#   project      : Quadletize
#   file         : kube.py
#   file_relpath : src/quadletize/cli/commands/kube.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize `kube` command (``podman kube play`` options to a ``.kube`` file).

``io.containers.autoupdate`` annotations become ``AutoUpdate=`` keys; every
other annotation is passed through ``PodmanArgs=``.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

import click

from quadletize.cli.cmd_common import build_file, emit_file
from quadletize.cli.errors import QuadletizeUsageError
from quadletize.cli.options import global_options, output_options, section_options
from quadletize.quadlet.kube import Kube, KubePodmanArgs, extract_auto_updates, yaml_name

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="kube",
    help="Generate a .kube quadlet from podman kube play options.",
)
@click.argument("yaml")
@click.option("--name", type=str, default=None, help="File name; defaults to the YAML file name.")
@click.option("--annotation", "annotations", multiple=True, help="Add an annotation. Repeatable.")
@click.option("--configmap", "config_maps", multiple=True, help="ConfigMap YAML file. Repeatable.")
@click.option("--log-driver", type=str, default=None, help="Logging driver.")
@click.option("--log-opt", "log_opts", multiple=True, help="Logging driver option. Repeatable.")
@click.option("--network", "networks", multiple=True, help="Connect to a network. Repeatable.")
@click.option("-p", "--publish", "publish", multiple=True, help="Publish a port. Repeatable.")
@click.option("--userns", type=str, default=None, help="User namespace mode.")
@click.option("--build/--no-build", "build", default=None, help="Build images before playing.")
@click.option("--context-dir", type=str, default=None, help="Build context directory.")
@section_options
@global_options
@output_options
@click.pass_context
def kube_command(
    ctx: click.Context,
    *,
    yaml: str,
    name: str | None,
    annotations: tuple[str, ...],
    config_maps: tuple[str, ...],
    log_driver: str | None,
    log_opts: tuple[str, ...],
    networks: tuple[str, ...],
    publish: tuple[str, ...],
    userns: str | None,
    build: bool | None,
    context_dir: str | None,
    output_dir: Path | None,
    overwrite: bool | None,
    **shared: Any,
) -> None:
    """Generate a ``.kube`` quadlet file for ``YAML``."""
    file_name: str | None = name or yaml_name(yaml)
    if not file_name:
        raise QuadletizeUsageError(f"cannot derive a file name from '{yaml}'; use --name")
    auto_updates, rest = extract_auto_updates(annotations)
    podman_args = KubePodmanArgs(
        annotation=rest,
        build=build,
        context_dir=PurePosixPath(context_dir) if context_dir else None,
        log_opt=list(log_opts),
    )
    kube = Kube(
        auto_update=auto_updates,
        config_map=[PurePosixPath(p) for p in config_maps],
        log_driver=log_driver,
        network=list(networks),
        podman_args=None if podman_args.is_empty() else podman_args,
        publish_port=list(publish),
        user_ns=userns,
        yaml=yaml,
    )
    emit_file(
        ctx,
        build_file(ctx, file_name, kube, shared),
        output_dir=output_dir,
        overwrite=overwrite,
    )
