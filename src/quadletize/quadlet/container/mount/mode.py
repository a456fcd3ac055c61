# topmark:header:start
#
#   project      : Quadletize
#   file         : mode.py
#   file_relpath : src/quadletize/quadlet/container/mount/mode.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""File permission mode written in octal without a leading zero (``755``)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from quadletize.serde.shape import Visitor

_OCTAL_RE: Final[re.Pattern[str]] = re.compile(r"[0-7]+")


class Mode(int):
    """An ``int`` that renders as octal text."""

    @classmethod
    def parse(cls, text: str) -> Mode:
        """Parse octal digits, e.g. ``"1777"``.

        Raises:
            ValueError: If ``text`` is not an octal number.
        """
        if not _OCTAL_RE.fullmatch(text):
            raise ValueError(f"invalid octal mode: {text!r}")
        return cls(int(text, 8))

    def __str__(self) -> str:
        return format(self, "o")

    def __repr__(self) -> str:
        return f"Mode(0o{self:o})"

    def __describe__(self, visitor: Visitor[Any]) -> Any:
        return visitor.visit_str(str(self))

    @classmethod
    def __parse_option__(cls, raw: str | None) -> Mode:
        if raw is None:
            raise ValueError("a mode is required")
        return cls.parse(raw)


#: Default mode of devpts mounts.
DEVPTS_MODE_DEFAULT: Final[Mode] = Mode(0o600)

#: Default mode of tmpfs and ramfs mounts.
TMPFS_MODE_DEFAULT: Final[Mode] = Mode(0o1777)
