# topmark:header:start
#
#   project      : Quadletize
#   file         : __init__.py
#   file_relpath : src/quadletize/quadlet/container/mount/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``Mount=`` option of a container: a union of mount types.

Text form is the mount-options language with a leading ``type=`` key, e.g.
``type=bind,source=/src,destination=/dst,readonly=true``. The type must come
first: `parse_mount` reads it, picks the variant class, then lets the variant
consume the remaining options.

Variants: `Bind`, `DevPts`, `Glob`, `Image`, `Ramfs`, `Tmpfs`, `Volume`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, Final, Union

from quadletize.config.logging import get_logger
from quadletize.quadlet.container.mount.idmap import Idmap
from quadletize.quadlet.container.mount.mode import DEVPTS_MODE_DEFAULT, Mode
from quadletize.quadlet.container.mount.tmpfs import Size, TmpfsOptions
from quadletize.serde import mount_options
from quadletize.serde.errors import MountOptionsError
from quadletize.serde.shape import option, serde

if TYPE_CHECKING:
    from quadletize.config.logging import QuadletizeLogger

logger: QuadletizeLogger = get_logger(__name__)

#: Default maximum number of PTYs of a devpts mount.
DEVPTS_MAX_DEFAULT: Final[int] = 1_048_576


class ParseMountError(ValueError):
    """A mount spec could not be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(f"error while deserializing mount options: {message}")


class BindPropagation(str, Enum):
    """Bind propagation of a bind mount; ``rprivate`` unless set."""

    SHARED = "shared"
    SLAVE = "slave"
    PRIVATE = "private"
    UNBINDABLE = "unbindable"
    RSHARED = "rshared"
    RSLAVE = "rslave"
    RUNBINDABLE = "runbindable"
    RPRIVATE = "rprivate"


class SELinuxRelabel(str, Enum):
    """SELinux relabeling of a bind mount's source."""

    SHARED = "shared"
    PRIVATE = "private"


class _MountOptions:
    """Text conversion shared by all mount variants."""

    def __str__(self) -> str:
        return mount_options.to_string(self)


@serde(rename_all="kebab-case", tag=("type", "bind"))
@dataclass(frozen=True, kw_only=True)
class Bind(_MountOptions):
    source: PurePosixPath = option(aliases=("src",))
    destination: PurePosixPath | None = option(default=None, aliases=("dst", "target"))
    read_only: bool = option(default=False, rename="readonly", aliases=("ro",), skip_default=True)
    bind_propagation: BindPropagation = option(default=BindPropagation.RPRIVATE, skip_default=True)
    bind_nonrecursive: bool = option(default=False, skip_default=True)
    relabel: SELinuxRelabel | None = None
    idmap: Idmap | None = None
    chown: bool = option(default=False, aliases=("U",), skip_default=True)


@serde(rename_all="kebab-case", tag=("type", "glob"))
@dataclass(frozen=True, kw_only=True)
class Glob(Bind):
    """Bind mount whose source is a glob (``/usr/lib/libfoo*``)."""


@serde(rename_all="kebab-case", tag=("type", "devpts"))
@dataclass(frozen=True, kw_only=True)
class DevPts(_MountOptions):
    destination: PurePosixPath = option(aliases=("dst", "target"))
    uid: int = option(default=0, skip_default=True)
    gid: int = option(default=0, skip_default=True)
    mode: Mode = option(default=DEVPTS_MODE_DEFAULT, skip_default=True)
    max: int = option(default=DEVPTS_MAX_DEFAULT, skip_default=True)


@serde(rename_all="kebab-case", tag=("type", "image"))
@dataclass(frozen=True, kw_only=True)
class Image(_MountOptions):
    """Mount of an image's root file system."""

    source: str = option(aliases=("src",))
    destination: PurePosixPath = option(aliases=("dst", "target"))
    read_write: bool = option(default=False, rename="readwrite", aliases=("rw",), skip_default=True)


@serde(tag=("type", "tmpfs"))
@dataclass(frozen=True, kw_only=True)
class Tmpfs(TmpfsOptions, _MountOptions):
    pass


@serde(tag=("type", "ramfs"))
@dataclass(frozen=True, kw_only=True)
class Ramfs(TmpfsOptions, _MountOptions):
    pass


@serde(rename_all="kebab-case", tag=("type", "volume"))
@dataclass(frozen=True, kw_only=True)
class Volume(_MountOptions):
    """Mount of a named volume; an anonymous volume when ``source`` is unset."""

    source: str | None = option(default=None, aliases=("src",))
    destination: PurePosixPath = option(aliases=("dst", "target"))
    read_only: bool = option(default=False, rename="readonly", aliases=("ro",), skip_default=True)
    chown: bool = option(default=False, aliases=("U",), skip_default=True)
    idmap: Idmap | None = None


Mount = Union[Bind, DevPts, Glob, Image, Ramfs, Tmpfs, Volume]

MOUNT_TYPES: Final[dict[str, type[Any]]] = {
    "bind": Bind,
    "devpts": DevPts,
    "glob": Glob,
    "image": Image,
    "ramfs": Ramfs,
    "tmpfs": Tmpfs,
    "volume": Volume,
}


def parse_mount(text: str) -> Mount:
    """Parse a ``--mount`` spec.

    Args:
        text (str): Mount options starting with ``type=``.

    Returns:
        Mount: The mount variant named by ``type``.

    Raises:
        ParseMountError: If the spec is not valid for its mount type.
    """
    try:
        mount: Mount = mount_options.from_str_tagged(MOUNT_TYPES, text)
    except MountOptionsError as exc:
        raise ParseMountError(str(exc)) from exc
    logger.debug("parsed mount %r", mount)
    return mount


def format_mount(mount: Mount) -> str:
    """Return the canonical mount spec of ``mount``."""
    return mount_options.to_string(mount)


__all__ = [
    "DEVPTS_MAX_DEFAULT",
    "MOUNT_TYPES",
    "Bind",
    "BindPropagation",
    "DevPts",
    "Glob",
    "Idmap",
    "Image",
    "Mode",
    "Mount",
    "ParseMountError",
    "Ramfs",
    "SELinuxRelabel",
    "Size",
    "Tmpfs",
    "Volume",
    "format_mount",
    "parse_mount",
]
