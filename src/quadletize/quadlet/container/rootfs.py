# topmark:header:start
#
#   project      : Quadletize
#   file         : rootfs.py
#   file_relpath : src/quadletize/quadlet/container/rootfs.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Exploded container directories for the ``Rootfs=`` container option.

Text form: ``PATH[:[O][,idmap[=IDMAP]]]``, as taken by ``podman run --rootfs``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from quadletize.quadlet.container.mount.idmap import Idmap, ParseIdmapError

if TYPE_CHECKING:
    from quadletize.serde.shape import Visitor


class ParseRootfsError(ValueError):
    """Invalid rootfs spec."""


class UnknownRootfsOptionError(ParseRootfsError):
    def __init__(self, option: str) -> None:
        super().__init__(f"unknown rootfs option: {option}")
        self.option: str = option


class RootfsIdmapError(ParseRootfsError):
    def __init__(self, source: ParseIdmapError) -> None:
        super().__init__(f"error parsing idmap: {source}")


@dataclass(frozen=True)
class Rootfs:
    """An exploded container on the host file system.

    Attributes:
        path (str): Directory holding the container root, kept verbatim.
        overlay (bool): Mount ``path`` as overlay storage (``O``).
        idmap (Idmap | None): Idmapped mount into the container user namespace.
    """

    path: str
    overlay: bool = False
    idmap: Idmap | None = None

    @classmethod
    def parse(cls, text: str) -> Rootfs:
        """Parse ``PATH[:[O][,idmap[=IDMAP]]]``.

        Raises:
            UnknownRootfsOptionError: For an option other than ``O`` or ``idmap``.
            RootfsIdmapError: If the idmap value is malformed.
        """
        path, sep, options = text.rpartition(":")
        if not sep:
            return cls(path=text)

        overlay: bool = False
        idmap: Idmap | None = None
        for option in options.split(","):
            if not option:
                continue
            if option == "O":
                overlay = True
            elif option == "idmap":
                idmap = Idmap()
            elif option.startswith("idmap="):
                try:
                    idmap = Idmap.parse(option[len("idmap=") :])
                except ParseIdmapError as exc:
                    raise RootfsIdmapError(exc) from exc
            else:
                raise UnknownRootfsOptionError(option)
        return cls(path=path, overlay=overlay, idmap=idmap)

    def __str__(self) -> str:
        options: list[str] = []
        if self.overlay:
            options.append("O")
        if self.idmap is not None:
            options.append("idmap" if self.idmap.is_empty() else f"idmap={self.idmap}")
        if not options:
            return self.path
        return f"{self.path}:{','.join(options)}"

    def __describe__(self, visitor: Visitor[Any]) -> Any:
        return visitor.visit_str(str(self))
