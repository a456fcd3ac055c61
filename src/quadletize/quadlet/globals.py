# topmark:header:start
#
#   project      : Quadletize
#   file         : globals.py
#   file_relpath : src/quadletize/quadlet/globals.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Options every quadlet resource section accepts: ``ContainersConfModule=``
and ``GlobalArgs=``.

`Globals` is never rendered on its own; it is merged into the resource
section through the tuple form of the quadlet serializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any

from quadletize.core.enum_mixins import KeyedStrEnum
from quadletize.serde import args
from quadletize.serde.shape import is_struct, option, serde


class CgroupManager(KeyedStrEnum):
    SYSTEMD = ("systemd", "Use systemd to manage cgroups")
    CGROUPFS = ("cgroupfs", "Manage cgroups directly")


@serde(rename_all="kebab-case")
@dataclass
class PodmanGlobalArgs:
    """``podman`` options given before the subcommand."""

    cgroup_manager: CgroupManager | None = None
    events_backend: str | None = None
    log_level: str | None = None
    root: PurePosixPath | None = None
    runroot: PurePosixPath | None = None
    storage_driver: str | None = None
    storage_opt: list[str] = field(default_factory=list)
    syslog: bool = option(default=False, skip_default=True)
    tmpdir: PurePosixPath | None = None

    def is_empty(self) -> bool:
        return self == PodmanGlobalArgs()


def args_or_none(value: Any) -> str | None:
    """Field hook rendering an args struct, or nothing when it is empty.

    Non-struct values (already rendered strings, None) pass through.
    """
    if not is_struct(value):
        return value
    text: str = args.to_string(value)
    return text or None


@serde(rename_all="PascalCase")
@dataclass
class Globals:
    containers_conf_module: list[PurePosixPath] = field(default_factory=list)
    global_args: PodmanGlobalArgs | None = option(default=None, serialize_with=args_or_none)

    def is_empty(self) -> bool:
        return not self.containers_conf_module and (
            self.global_args is None or self.global_args.is_empty()
        )
