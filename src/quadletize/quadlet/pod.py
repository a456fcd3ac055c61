# topmark:header:start
#
#   project      : Quadletize
#   file         : pod.py
#   file_relpath : src/quadletize/quadlet/pod.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Pod]`` resource section (``podman pod create``).

The pod file carries the network, DNS and volume setup shared by its
containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from quadletize.quadlet.container.volume import Volume
from quadletize.quadlet.globals import args_or_none
from quadletize.serde.quadlet import JoinOption
from quadletize.serde.shape import option, serde


@serde(rename_all="kebab-case")
@dataclass
class PodPodmanArgs:
    """``podman pod create`` options without a quadlet key."""

    hostname: str | None = None
    infra_name: str | None = None
    share: list[str] = field(default_factory=list)
    userns: str | None = None

    def is_empty(self) -> bool:
        return self == PodPodmanArgs()


@serde(rename_all="PascalCase")
@dataclass
class Pod:
    add_host: list[str] = field(default_factory=list)
    dns: list[str] = option(default_factory=list, rename="DNS")
    dns_option: list[str] = option(default_factory=list, rename="DNSOption")
    dns_search: list[str] = option(default_factory=list, rename="DNSSearch")
    network: list[str] = field(default_factory=list)
    network_alias: list[str] = field(default_factory=list)
    podman_args: PodPodmanArgs | None = option(default=None, serialize_with=args_or_none)
    pod_name: str | None = None
    publish_port: list[str] = field(default_factory=list)
    volume: list[Volume] = field(default_factory=list)

    JOIN_KEYS: ClassVar[frozenset[JoinOption]] = frozenset()
    EXTENSION: ClassVar[str] = "pod"
