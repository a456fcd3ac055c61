# topmark:header:start
#
#   project      : Quadletize
#   file         : volume.py
#   file_relpath : src/quadletize/quadlet/container/volume.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``Volume=`` option of a container (``podman run --volume``).

Text form: ``[source:]container_path[:options]``. The source is a host path
when it starts with ``.``, ``/``, ``~`` or ``%`` and a named volume otherwise.

Unlike mount specs, volume options are order sensitive: ``upperdir=`` and
``workdir=`` are only valid after ``O``, later ``ro``/``rw`` style pairs
override earlier ones. `VolumeOptions.parse` folds the comma separated
tokens into an accumulator one at a time.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, Final, Union

from quadletize.quadlet.container.mount import BindPropagation, SELinuxRelabel
from quadletize.quadlet.container.mount.idmap import Idmap, ParseIdmapError

if TYPE_CHECKING:
    from quadletize.serde.shape import Visitor

_HOST_PATH_PREFIXES: Final[tuple[str, ...]] = (".", "/", "~", "%")

_RELABEL_FLAGS: Final[dict[str, SELinuxRelabel]] = {
    "z": SELinuxRelabel.SHARED,
    "Z": SELinuxRelabel.PRIVATE,
}

# option -> (attribute, value)
_TOGGLES: Final[dict[str, tuple[str, bool]]] = {
    "rw": ("read_only", False),
    "ro": ("read_only", True),
    "U": ("chown", True),
    "nocopy": ("no_copy", True),
    "copy": ("no_copy", False),
    "nodev": ("devices", False),
    "dev": ("devices", True),
    "noexec": ("no_executables", True),
    "exec": ("no_executables", False),
    "nosuid": ("suid", False),
    "suid": ("suid", True),
    "rbind": ("recursive_bind", True),
    "bind": ("recursive_bind", False),
}


class ParseVolumeError(ValueError):
    """Invalid volume spec."""


class ContainerPathNotAbsoluteError(ParseVolumeError):
    def __init__(self, path: str) -> None:
        super().__init__(f"container path `{path}` must be an absolute path")
        self.path: str = path


class VolumeOptionsError(ParseVolumeError):
    """Invalid volume options."""


class MultipleOptionError(VolumeOptionsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"multiple `{name}` options given")
        self.name: str = name


class RequiresValueError(VolumeOptionsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"option `{name}` requires a value")
        self.name: str = name


class OverlayMissingError(VolumeOptionsError):
    def __init__(self) -> None:
        super().__init__("`upperdir` and `workdir` options require that `O` is specified first")


class UnknownVolumeOptionError(VolumeOptionsError):
    def __init__(self, name: str) -> None:
        super().__init__(f"unknown volume option: {name}")
        self.name: str = name


class VolumeIdmapError(VolumeOptionsError):
    def __init__(self, source: ParseIdmapError) -> None:
        super().__init__(f"error parsing idmap: {source}")


@dataclass(frozen=True)
class NamedVolume:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class HostPath:
    """Host path source, kept verbatim so relative and specifier prefixes survive."""

    path: str

    def __str__(self) -> str:
        return self.path


Source = Union[NamedVolume, HostPath]


def parse_source(text: str) -> Source:
    """Classify a volume source as a host path or a named volume."""
    if text.startswith(_HOST_PATH_PREFIXES):
        return HostPath(text)
    return NamedVolume(text)


@dataclass
class Overlay:
    """Overlay (``O``) mount with optional upper and work directories."""

    upper_dir: PurePosixPath | None = None
    work_dir: PurePosixPath | None = None

    def __str__(self) -> str:
        parts: list[str] = ["O"]
        if self.upper_dir is not None:
            parts.append(f"upperdir={self.upper_dir}")
        if self.work_dir is not None:
            parts.append(f"workdir={self.work_dir}")
        return ",".join(parts)


@dataclass
class VolumeOptions:
    """Options of a container volume, in their canonical output order."""

    read_only: bool = False
    selinux_relabel: SELinuxRelabel | None = None
    overlay: Overlay | None = None
    chown: bool = False
    no_copy: bool = False
    devices: bool = False
    no_executables: bool = False
    suid: bool = False
    recursive_bind: bool = False
    bind_propagation: BindPropagation = BindPropagation.RPRIVATE
    idmap: Idmap | None = None

    def _fold(self, token: str) -> VolumeOptions:
        name, _, raw = token.partition("=")
        value: str | None = raw or None

        if name in _TOGGLES:
            attr, flag = _TOGGLES[name]
            setattr(self, attr, flag)
        elif name in _RELABEL_FLAGS:
            self.selinux_relabel = _RELABEL_FLAGS[name]
        elif name == "O":
            if self.overlay is not None:
                raise MultipleOptionError("O")
            self.overlay = Overlay()
        elif name in ("upperdir", "workdir"):
            if value is None:
                raise RequiresValueError(name)
            if self.overlay is None:
                raise OverlayMissingError()
            attr = "upper_dir" if name == "upperdir" else "work_dir"
            if getattr(self.overlay, attr) is not None:
                raise MultipleOptionError(name)
            setattr(self.overlay, attr, PurePosixPath(value))
        elif name == "idmap":
            if self.idmap is not None:
                raise MultipleOptionError("idmap")
            try:
                self.idmap = Idmap.parse(value) if value is not None else Idmap()
            except ParseIdmapError as exc:
                raise VolumeIdmapError(exc) from exc
        else:
            try:
                self.bind_propagation = BindPropagation(name)
            except ValueError:
                raise UnknownVolumeOptionError(name) from None
        return self

    @classmethod
    def parse(cls, text: str) -> VolumeOptions:
        """Parse ``[:]option[=value],...``.

        Raises:
            VolumeOptionsError: For repeated, unknown or out of order options.
        """
        text = text.removeprefix(":")
        tokens: list[str] = text.split(",")
        if tokens[-1] == "":
            tokens.pop()
        return functools.reduce(VolumeOptions._fold, tokens, cls())

    def tokens(self) -> list[str]:
        """Options in canonical order, without separators."""
        out: list[str] = []
        if self.read_only:
            out.append("ro")
        if self.selinux_relabel is not None:
            out.append("z" if self.selinux_relabel is SELinuxRelabel.SHARED else "Z")
        if self.overlay is not None:
            out.append(str(self.overlay))
        for attr, name in (
            ("chown", "U"),
            ("no_copy", "nocopy"),
            ("devices", "dev"),
            ("no_executables", "noexec"),
            ("suid", "suid"),
            ("recursive_bind", "rbind"),
        ):
            if getattr(self, attr):
                out.append(name)
        if self.bind_propagation is not BindPropagation.RPRIVATE:
            out.append(self.bind_propagation.value)
        if self.idmap is not None:
            out.append("idmap" if self.idmap.is_empty() else f"idmap={self.idmap}")
        return out

    def __str__(self) -> str:
        tokens: list[str] = self.tokens()
        return ":" + ",".join(tokens) if tokens else ""


@dataclass
class Volume:
    """A container volume."""

    container_path: PurePosixPath
    source: Source | None = None
    options: VolumeOptions = field(default_factory=VolumeOptions)

    @classmethod
    def parse(cls, text: str) -> Volume:
        """Parse ``[source:]container_path[:options]``.

        Raises:
            ContainerPathNotAbsoluteError: If the container path is relative.
            VolumeOptionsError: If the options are invalid.
        """
        parts: list[str] = text.split(":", 2)
        if len(parts) == 1:
            source_text, container_path, options_text = None, parts[0], None
        else:
            source_text, container_path = parts[0], parts[1]
            options_text = parts[2] if len(parts) == 3 else None

        if not container_path.startswith("/"):
            raise ContainerPathNotAbsoluteError(container_path)
        return cls(
            container_path=PurePosixPath(container_path),
            source=parse_source(source_text) if source_text is not None else None,
            options=VolumeOptions.parse(options_text) if options_text is not None else VolumeOptions(),
        )

    def __str__(self) -> str:
        prefix: str = f"{self.source}:" if self.source is not None else ""
        return f"{prefix}{self.container_path}{self.options}"

    def __describe__(self, visitor: Visitor[Any]) -> Any:
        return visitor.visit_str(str(self))
