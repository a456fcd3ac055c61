# topmark:header:start
#
#   project      : Quadletize
#   file         : network.py
#   file_relpath : src/quadletize/cli/commands/network.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize `network` command: ``podman network create`` to ``.network``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from quadletize.cli.cmd_common import build_file, emit_file
from quadletize.cli.options import global_options, output_options, section_options
from quadletize.quadlet.network import NETWORK_DRIVERS, Network, NetworkPodmanArgs

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="network",
    help="Generate a .network quadlet from podman network create options.",
)
@click.argument("name")
@click.option("--disable-dns", is_flag=True, default=False, help="Disable the DNS plugin.")
@click.option("--dns", "dns", multiple=True, help="DNS server for the network. Repeatable.")
@click.option(
    "-d",
    "--driver",
    type=click.Choice(NETWORK_DRIVERS),
    default=None,
    help="Network driver.",
)
@click.option("--gateway", "gateways", multiple=True, help="Gateway for a subnet. Repeatable.")
@click.option("--internal", is_flag=True, default=False, help="Restrict external access.")
@click.option("--ipam-driver", type=str, default=None, help="IP address management driver.")
@click.option("--ip-range", "ip_ranges", multiple=True, help="Allocate from this range. Repeatable.")
@click.option("--ipv6", is_flag=True, default=False, help="Enable IPv6.")
@click.option("--label", "labels", multiple=True, help="Set a label. Repeatable.")
@click.option("--opt", "opts", multiple=True, help="Driver option. Repeatable.")
@click.option("--subnet", "subnets", multiple=True, help="Subnet in CIDR notation. Repeatable.")
@click.option("--interface-name", type=str, default=None, help="Host interface name.")
@click.option("--route", "routes", multiple=True, help="Static route. Repeatable.")
@click.option(
    "--network-name",
    type=str,
    default=None,
    help="podman network name, if it differs from the file name.",
)
@section_options
@global_options
@output_options
@click.pass_context
def network_command(
    ctx: click.Context,
    *,
    name: str,
    disable_dns: bool,
    dns: tuple[str, ...],
    driver: str | None,
    gateways: tuple[str, ...],
    internal: bool,
    ipam_driver: str | None,
    ip_ranges: tuple[str, ...],
    ipv6: bool,
    labels: tuple[str, ...],
    opts: tuple[str, ...],
    subnets: tuple[str, ...],
    interface_name: str | None,
    routes: tuple[str, ...],
    network_name: str | None,
    output_dir: Path | None,
    overwrite: bool | None,
    **shared: Any,
) -> None:
    """Generate a ``.network`` quadlet file named after ``NAME``."""
    podman_args = NetworkPodmanArgs(interface_name=interface_name, route=list(routes))
    network = Network(
        disable_dns=disable_dns,
        dns=list(dns),
        driver=driver,
        gateway=list(gateways),
        internal=internal,
        ipam_driver=ipam_driver,
        ip_range=list(ip_ranges),
        ipv6=ipv6,
        label=list(labels),
        network_name=network_name,
        options=",".join(opts) if opts else None,
        podman_args=None if podman_args == NetworkPodmanArgs() else podman_args,
        subnet=list(subnets),
    )
    emit_file(
        ctx,
        build_file(ctx, name, network, shared),
        output_dir=output_dir,
        overwrite=overwrite,
    )
