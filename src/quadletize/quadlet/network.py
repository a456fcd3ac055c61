# topmark:header:start
#
#   project      : Quadletize
#   file         : network.py
#   file_relpath : src/quadletize/quadlet/network.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Network]`` resource section (``podman network create``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Final

from quadletize.quadlet.globals import args_or_none
from quadletize.serde.quadlet import JoinOption, quote_spaces_join
from quadletize.serde.shape import option, serde


@serde(rename_all="kebab-case")
@dataclass
class NetworkPodmanArgs:
    """``podman network create`` options without a quadlet key."""

    interface_name: str | None = None
    route: list[str] = field(default_factory=list)


@serde(rename_all="PascalCase")
@dataclass
class Network:
    disable_dns: bool = option(default=False, rename="DisableDNS", skip_default=True)
    dns: list[str] = option(default_factory=list, rename="DNS")
    driver: str | None = None
    gateway: list[str] = field(default_factory=list)
    internal: bool = option(default=False, skip_default=True)
    ipam_driver: str | None = option(default=None, rename="IPAMDriver")
    ip_range: list[str] = option(default_factory=list, rename="IPRange")
    ipv6: bool = option(default=False, rename="IPv6", skip_default=True)
    label: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    network_name: str | None = None
    options: str | None = None
    podman_args: NetworkPodmanArgs | None = option(default=None, serialize_with=args_or_none)
    subnet: list[str] = field(default_factory=list)

    JOIN_KEYS: ClassVar[frozenset[JoinOption]] = frozenset({JoinOption.LABEL})
    EXTENSION: ClassVar[str] = "network"


#: Drivers accepted by ``podman network create --driver``.
NETWORK_DRIVERS: Final[tuple[str, ...]] = ("bridge", "macvlan", "ipvlan")
