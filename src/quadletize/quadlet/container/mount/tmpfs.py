# topmark:header:start
#
#   project      : Quadletize
#   file         : tmpfs.py
#   file_relpath : src/quadletize/quadlet/container/mount/tmpfs.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Options shared by ``tmpfs`` and ``ramfs`` mounts, and the tmpfs `Size`."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, Final

from quadletize.quadlet.container.mount.mode import TMPFS_MODE_DEFAULT, Mode
from quadletize.serde.shape import option

if TYPE_CHECKING:
    from quadletize.serde.shape import Visitor

_U64_MAX: Final[int] = 2**64 - 1
_U8_MAX: Final[int] = 2**8 - 1
_DIGITS_RE: Final[re.Pattern[str]] = re.compile(r"\+?[0-9]+")


class ParseSizeError(ValueError):
    """The numeric part of a size is not an integer in range."""

    def __init__(self, value: str) -> None:
        super().__init__(f"size must be an integer: {value}")
        self.value: str = value


class SizeUnit(str, Enum):
    """Unit of a tmpfs `Size`; the value is the text suffix."""

    BYTES = ""
    KIBIBYTES = "k"
    MEBIBYTES = "m"
    GIBIBYTES = "g"
    PERCENT = "%"
    UNLIMITED = "unlimited"


_SUFFIXES: Final[dict[str, SizeUnit]] = {
    "%": SizeUnit.PERCENT,
    "g": SizeUnit.GIBIBYTES,
    "G": SizeUnit.GIBIBYTES,
    "m": SizeUnit.MEBIBYTES,
    "M": SizeUnit.MEBIBYTES,
    "k": SizeUnit.KIBIBYTES,
    "K": SizeUnit.KIBIBYTES,
}


@dataclass(frozen=True)
class Size:
    """Size of a tmpfs/ramfs mount.

    ``Size()`` is unlimited. Percentages are of the host's physical memory and
    must fit in ``0..255``; all other amounts are unsigned 64-bit integers.
    """

    amount: int = 0
    unit: SizeUnit = SizeUnit.UNLIMITED

    @classmethod
    def parse(cls, text: str) -> Size:
        """Parse ``1024``, ``64k``, ``256M``, ``2g``, ``50%`` or ``""`` (unlimited).

        Raises:
            ParseSizeError: If the number is missing, malformed or out of range.
        """
        if not text:
            return cls()
        unit: SizeUnit | None = _SUFFIXES.get(text[-1])
        number: str = text[:-1] if unit is not None else text
        unit = unit or SizeUnit.BYTES
        limit: int = _U8_MAX if unit is SizeUnit.PERCENT else _U64_MAX
        if not _DIGITS_RE.fullmatch(number) or int(number) > limit:
            raise ParseSizeError(number)
        return cls(int(number), unit)

    def __str__(self) -> str:
        if self.unit is SizeUnit.UNLIMITED:
            return ""
        return f"{self.amount}{self.unit.value}"

    def __describe__(self, visitor: Visitor[Any]) -> Any:
        return visitor.visit_str(str(self))

    @classmethod
    def __parse_option__(cls, raw: str | None) -> Size:
        return cls.parse(raw or "")


@dataclass(frozen=True, kw_only=True)
class TmpfsOptions:
    """Options of a tmpfs or ramfs mount.

    ``tmpcopyup`` defaults to true and is only ever written in its negative
    spelling, ``notmpcopyup``. Both spellings are accepted on input.
    """

    destination: PurePosixPath = option(aliases=("dst", "target"))
    read_only: bool = option(
        default=False, rename="readonly", aliases=("ro",), skip_default=True, multiple=True
    )
    size: Size = option(default=Size(), rename="tmpfs-size", skip_default=True)
    mode: Mode = option(default=TMPFS_MODE_DEFAULT, rename="tmpfs-mode", skip_default=True)
    tmpcopyup: bool = option(default=True, negation="notmpcopyup", skip_default=True, multiple=True)
    chown: bool = option(default=False, aliases=("U",), skip_default=True, multiple=True)
