# topmark:header:start
#
#   project      : Quadletize
#   file         : build.py
#   file_relpath : src/quadletize/cli/commands/build.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize `build` command (``podman build`` options to a ``.build`` file).

The image tag is required; the file is named after it unless ``--name`` is
given::

    quadletize build -t localhost/app:latest -f Containerfile .
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

import click

from quadletize.cli.cli_types import EnumChoiceParam, ParsedParam
from quadletize.cli.cmd_common import build_file, emit_file
from quadletize.cli.commands.container import default_name
from quadletize.cli.options import global_options, output_options, section_options
from quadletize.quadlet.build import Build, BuildPodmanArgs, BuildSecret
from quadletize.quadlet.container import PullPolicy

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="build",
    help="Generate a .build quadlet from podman build options.",
)
@click.argument("context", required=False, default=None)
@click.option("-t", "--tag", "tag", type=str, required=True, help="Name of the built image.")
@click.option("--name", type=str, default=None, help="File name; defaults to the image name.")
@click.option("-f", "--file", "containerfile", type=str, default=None, help="Containerfile path or URL.")
@click.option("--annotation", "annotations", multiple=True, help="Add an image annotation. Repeatable.")
@click.option("--arch", type=str, default=None, help="Architecture to build for.")
@click.option("--authfile", type=str, default=None, help="Authentication file.")
@click.option("--dns", "dns", multiple=True, help="Set a DNS server. Repeatable.")
@click.option("--dns-option", "dns_options", multiple=True, help="Set a DNS option. Repeatable.")
@click.option("--dns-search", "dns_searches", multiple=True, help="Set a DNS search domain. Repeatable.")
@click.option("--env", "env", multiple=True, help="Add an environment variable. Repeatable.")
@click.option(
    "--force-rm/--no-force-rm",
    "force_rm",
    default=True,
    help="Remove intermediate containers, even after a failed build.",
)
@click.option("--group-add", "group_adds", multiple=True, help="Add a supplementary group. Repeatable.")
@click.option("--label", "labels", multiple=True, help="Add an image label. Repeatable.")
@click.option("--network", "networks", multiple=True, help="Network mode for RUN. Repeatable.")
@click.option("--pull", type=EnumChoiceParam(PullPolicy), default=None, help="Image pull policy.")
@click.option(
    "--secret",
    "secrets",
    type=ParsedParam(BuildSecret.parse, "secret"),
    multiple=True,
    help="Build secret, 'id=ID,src=PATH'. Repeatable.",
)
@click.option("--target", type=str, default=None, help="Build stage to build.")
@click.option("--tls-verify/--no-tls-verify", "tls_verify", default=None, help="Verify registry TLS.")
@click.option("--variant", type=str, default=None, help="Architecture variant.")
@click.option("-v", "--volume", "volumes", multiple=True, help="Volume for RUN. Repeatable.")
@click.option("--build-arg", "build_args", multiple=True, help="Build argument. Repeatable.")
@click.option("--layers/--no-layers", "layers", default=None, help="Cache intermediate layers.")
@click.option("--no-cache", is_flag=True, default=False, help="Do not use cached layers.")
@click.option("--squash", is_flag=True, default=False, help="Squash new layers into one.")
@section_options
@global_options
@output_options
@click.pass_context
def build_command(
    ctx: click.Context,
    *,
    context: str | None,
    tag: str,
    name: str | None,
    containerfile: str | None,
    annotations: tuple[str, ...],
    arch: str | None,
    authfile: str | None,
    dns: tuple[str, ...],
    dns_options: tuple[str, ...],
    dns_searches: tuple[str, ...],
    env: tuple[str, ...],
    force_rm: bool,
    group_adds: tuple[str, ...],
    labels: tuple[str, ...],
    networks: tuple[str, ...],
    pull: PullPolicy | None,
    secrets: tuple[BuildSecret, ...],
    target: str | None,
    tls_verify: bool | None,
    variant: str | None,
    volumes: tuple[str, ...],
    build_args: tuple[str, ...],
    layers: bool | None,
    no_cache: bool,
    squash: bool,
    output_dir: Path | None,
    overwrite: bool | None,
    **shared: Any,
) -> None:
    """Generate a ``.build`` quadlet file for image ``--tag``."""
    podman_args = BuildPodmanArgs(
        build_arg=list(build_args),
        layers=layers,
        no_cache=no_cache,
        squash=squash,
    )
    build = Build(
        annotation=list(annotations),
        arch=arch,
        auth_file=PurePosixPath(authfile) if authfile else None,
        dns=list(dns),
        dns_option=list(dns_options),
        dns_search=list(dns_searches),
        environment=list(env),
        file=containerfile,
        force_rm=force_rm,
        group_add=list(group_adds),
        image_tag=tag,
        label=list(labels),
        network=list(networks),
        podman_args=None if podman_args.is_empty() else podman_args,
        pull=pull,
        secret=list(secrets),
        set_working_directory=context,
        target=target,
        tls_verify=tls_verify,
        variant=variant,
        volume=list(volumes),
    )
    emit_file(
        ctx,
        build_file(ctx, name or default_name(tag), build, shared),
        output_dir=output_dir,
        overwrite=overwrite,
    )
