# topmark:header:start
#
#   project      : Quadletize
#   file         : device.py
#   file_relpath : src/quadletize/quadlet/container/device.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Host devices for the ``AddDevice=`` container option.

Text form: ``host[:container][:permissions]`` where permissions are any of
``r`` (read), ``w`` (write) and ``m`` (mknod). Accepted spellings include
``/dev/fuse``, ``/dev/fuse:/dev/fuse``, ``/dev/fuse:/dev/fuse:rw``,
``/dev/fuse::rw`` and ``/dev/fuse:r:w``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from quadletize.serde.shape import Visitor


class ParseDeviceError(ValueError):
    """Invalid device spec."""


class EmptyHostPathError(ParseDeviceError):
    def __init__(self) -> None:
        super().__init__("host device path cannot be empty")


class UnknownPermissionError(ParseDeviceError):
    def __init__(self, permission: str) -> None:
        super().__init__(f"unknown permission '{permission}'")
        self.permission: str = permission


@dataclass(frozen=True)
class Device:
    host: PurePosixPath
    container: PurePosixPath | None = None
    read: bool = False
    write: bool = False
    mknod: bool = False

    @classmethod
    def parse(cls, text: str) -> Device:
        """Parse ``host[:container][:permissions]``.

        Raises:
            EmptyHostPathError: If the host path is empty.
            UnknownPermissionError: For a permission other than ``r``, ``w``, ``m``.
        """
        host, _, rest = text.partition(":")
        if not host:
            raise EmptyHostPathError()
        second, _, third = rest.partition(":")

        container: PurePosixPath | None = None
        if second.startswith("/"):
            container = PurePosixPath(second)
            permissions: str = third
        else:
            # host:perms, host::perms and host:perms:perms
            permissions = second + third

        flags: dict[str, bool] = {"r": False, "w": False, "m": False}
        for char in permissions:
            if char not in flags:
                raise UnknownPermissionError(char)
            flags[char] = True

        return cls(
            host=PurePosixPath(host),
            container=container,
            read=flags["r"],
            write=flags["w"],
            mknod=flags["m"],
        )

    @property
    def permissions(self) -> str:
        """Permission letters in ``rwm`` order."""
        return "".join(c for c, on in (("r", self.read), ("w", self.write), ("m", self.mknod)) if on)

    def __str__(self) -> str:
        text: str = str(self.host)
        if self.container is not None:
            text += f":{self.container}"
        if self.permissions:
            text += f":{self.permissions}"
        return text

    def __describe__(self, visitor: Visitor[Any]) -> Any:
        return visitor.visit_str(str(self))
