# topmark:header:start
#
#   project      : Quadletize
#   file         : pod.py
#   file_relpath : src/quadletize/cli/commands/pod.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize `pod` command (``podman pod create`` options to a ``.pod`` file)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from quadletize.cli.cli_types import ParsedParam
from quadletize.cli.cmd_common import build_file, emit_file
from quadletize.cli.options import global_options, output_options, section_options
from quadletize.quadlet.container.volume import Volume
from quadletize.quadlet.pod import Pod, PodPodmanArgs

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="pod",
    help="Generate a .pod quadlet from podman pod create options.",
)
@click.argument("name")
@click.option("--add-host", "add_hosts", multiple=True, help="Add a host-to-IP mapping. Repeatable.")
@click.option("--dns", "dns", multiple=True, help="Set a DNS server. Repeatable.")
@click.option("--dns-option", "dns_options", multiple=True, help="Set a DNS option. Repeatable.")
@click.option("--dns-search", "dns_searches", multiple=True, help="Set a DNS search domain. Repeatable.")
@click.option("--network", "networks", multiple=True, help="Connect to a network. Repeatable.")
@click.option("--network-alias", "network_aliases", multiple=True, help="Network alias. Repeatable.")
@click.option("-p", "--publish", "publish", multiple=True, help="Publish a port. Repeatable.")
@click.option(
    "--volume",
    "volumes",
    type=ParsedParam(Volume.parse, "volume"),
    multiple=True,
    help="Bind mount a volume, '[SOURCE:]CONTAINER-DIR[:OPTIONS]'. Repeatable.",
)
@click.option("--hostname", type=str, default=None, help="Pod host name.")
@click.option("--infra-name", type=str, default=None, help="Name of the infra container.")
@click.option("--share", "shares", multiple=True, help="Namespace to share. Repeatable.")
@click.option("--userns", type=str, default=None, help="User namespace mode.")
@click.option(
    "--pod-name",
    type=str,
    default=None,
    help="podman pod name, if it differs from the file name.",
)
@section_options
@global_options
@output_options
@click.pass_context
def pod_command(
    ctx: click.Context,
    *,
    name: str,
    add_hosts: tuple[str, ...],
    dns: tuple[str, ...],
    dns_options: tuple[str, ...],
    dns_searches: tuple[str, ...],
    networks: tuple[str, ...],
    network_aliases: tuple[str, ...],
    publish: tuple[str, ...],
    volumes: tuple[Volume, ...],
    hostname: str | None,
    infra_name: str | None,
    shares: tuple[str, ...],
    userns: str | None,
    pod_name: str | None,
    output_dir: Path | None,
    overwrite: bool | None,
    **shared: Any,
) -> None:
    """Generate a ``.pod`` quadlet file named after ``NAME``."""
    podman_args = PodPodmanArgs(
        hostname=hostname,
        infra_name=infra_name,
        share=list(shares),
        userns=userns,
    )
    pod = Pod(
        add_host=list(add_hosts),
        dns=list(dns),
        dns_option=list(dns_options),
        dns_search=list(dns_searches),
        network=list(networks),
        network_alias=list(network_aliases),
        podman_args=None if podman_args.is_empty() else podman_args,
        pod_name=pod_name,
        publish_port=list(publish),
        volume=list(volumes),
    )
    emit_file(
        ctx,
        build_file(ctx, name, pod, shared),
        output_dir=output_dir,
        overwrite=overwrite,
    )
