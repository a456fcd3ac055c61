# topmark:header:start
#
#   project      : Quadletize
#   file         : __init__.py
#   file_relpath : src/quadletize/quadlet/container/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Container]`` resource section (``podman run``).

Options with a quadlet key are fields of `Container`. Options without one
are collected in `ContainerPodmanArgs` and rendered into ``PodmanArgs=``
with the args serializer.

A container runs either an ``Image=`` or an exploded ``Rootfs=`` directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, ClassVar

from quadletize.core.enum_mixins import KeyedStrEnum
from quadletize.escape import join_shell_tokens
from quadletize.quadlet.container.device import Device
from quadletize.quadlet.container.mount import Mount, format_mount
from quadletize.quadlet.container.rootfs import Rootfs
from quadletize.quadlet.container.volume import Volume
from quadletize.quadlet.globals import args_or_none
from quadletize.serde.quadlet import JoinOption, quote_spaces_join
from quadletize.serde.shape import option, serde

if TYPE_CHECKING:
    from collections.abc import Sequence


class AutoUpdate(KeyedStrEnum):
    REGISTRY = ("registry", "Update when the registry has a newer image")
    LOCAL = ("local", "Update when the local image changed")


class PullPolicy(KeyedStrEnum):
    ALWAYS = ("always", "Always pull the image")
    MISSING = ("missing", "Pull the image if it is not present")
    NEVER = ("never", "Never pull the image")
    NEWER = ("newer", "Pull if the registry image is newer")


def format_mounts(mounts: Sequence[Mount]) -> list[str]:
    """Field hook rendering mounts as their canonical specs."""
    return [format_mount(m) for m in mounts]


def join_colon(values: Sequence[str]) -> str | None:
    """Field hook joining paths with ``:`` (``Mask=``), or nothing if empty."""
    return ":".join(values) if values else None


def exec_line(command: Sequence[str]) -> str | None:
    """Field hook rendering the container command as a shell line."""
    return join_shell_tokens(command) if command else None


@serde(rename_all="kebab-case")
@dataclass
class ContainerPodmanArgs:
    """``podman run`` options without a quadlet key."""

    add_host: list[str] = field(default_factory=list)
    cpu_shares: int | None = None
    cpus: float | None = None
    interactive: bool = option(default=False, skip_default=True)
    memory: str | None = None
    privileged: bool = option(default=False, skip_default=True)
    security_opt: list[str] = field(default_factory=list)
    tty: bool = option(default=False, skip_default=True)

    def is_empty(self) -> bool:
        return self == ContainerPodmanArgs()


@serde(rename_all="PascalCase")
@dataclass(kw_only=True)
class Container:
    add_capability: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    add_device: list[Device] = field(default_factory=list)
    annotation: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    auto_update: AutoUpdate | None = None
    container_name: str | None = None
    dns: list[str] = option(default_factory=list, rename="DNS")
    drop_capability: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    entrypoint: str | None = None
    environment: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    environment_file: list[PurePosixPath] = field(default_factory=list)
    exec_: list[str] = option(default_factory=list, rename="Exec", serialize_with=exec_line)
    expose_host_port: list[str] = field(default_factory=list)
    group: str | None = None
    health_cmd: str | None = None
    health_interval: str | None = None
    host_name: str | None = None
    image: str | None = None
    ip: str | None = option(default=None, rename="IP")
    ip6: str | None = option(default=None, rename="IP6")
    label: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    log_driver: str | None = None
    mask: list[str] = option(default_factory=list, serialize_with=join_colon)
    mount: list[Mount] = option(default_factory=list, serialize_with=format_mounts)
    network: list[str] = field(default_factory=list)
    no_new_privileges: bool = option(default=False, skip_default=True)
    notify: bool = option(default=False, skip_default=True)
    pids_limit: int | None = None
    podman_args: ContainerPodmanArgs | None = option(default=None, serialize_with=args_or_none)
    publish_port: list[str] = field(default_factory=list)
    pull: PullPolicy | None = None
    read_only: bool = option(default=False, skip_default=True)
    rootfs: Rootfs | None = None
    run_init: bool = option(default=False, skip_default=True)
    secret: list[str] = field(default_factory=list)
    shm_size: str | None = None
    stop_timeout: int | None = None
    sysctl: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    timezone: str | None = None
    tmpfs: list[str] = field(default_factory=list)
    user: str | None = None
    user_ns: str | None = option(default=None, rename="UserNS")
    volume: list[Volume] = field(default_factory=list)
    working_dir: PurePosixPath | None = None

    JOIN_KEYS: ClassVar[frozenset[JoinOption]] = frozenset(
        {
            JoinOption.ADD_CAPABILITY,
            JoinOption.ANNOTATION,
            JoinOption.DROP_CAPABILITY,
            JoinOption.ENVIRONMENT,
            JoinOption.LABEL,
            JoinOption.SYSCTL,
        }
    )
    EXTENSION: ClassVar[str] = "container"
