# topmark:header:start
#
#   project      : Quadletize
#   file         : enum_mixins.py
#   file_relpath : src/quadletize/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""String enums keyed by their quadlet/podman spelling.

`KeyedStrEnum` members carry a stable key (the text written to quadlet files
and accepted by podman), a human label for help output, and aliases accepted
by `KeyedStrEnum.parse`.

Example:
    ```python
    class PullPolicy(KeyedStrEnum):
        ALWAYS = ("always", "Always pull the image")
        MISSING = ("missing", "Pull the image if not present")

    PullPolicy.parse("Always") is PullPolicy.ALWAYS
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

_KS = TypeVar("_KS", bound="KeyedStrEnum")


def _norm_token(s: str) -> str:
    """Normalize an identifier-like string for lenient matching."""
    return s.strip().lower().replace("-", "_").replace(" ", "_")


class KeyedStrEnum(str, Enum):
    """Enum whose ``.value`` is the machine key; label and aliases are attributes.

    Attributes:
        label (str): Human-readable description.
        aliases (tuple[str, ...]): Alternative spellings accepted by `parse`.
    """

    label: str
    aliases: tuple[str, ...]

    def __new__(
        cls: type[_KS],
        key: str,
        label: str,
        aliases: Iterable[str] = (),
    ) -> _KS:
        obj: _KS = str.__new__(cls, key)
        obj._value_ = key
        obj.label = label
        obj.aliases = tuple(aliases)
        return obj

    def __str__(self) -> str:
        return self.value

    @property
    def key(self) -> str:
        """Stable machine key (same as ``.value``)."""
        return self.value

    @classmethod
    def parse(cls: type[_KS], raw: str | None) -> _KS | None:
        """Match ``raw`` against keys, member names and aliases.

        Matching ignores case and treats ``-``, ``_`` and spaces alike.
        Returns None when nothing matches.
        """
        if raw is None:
            return None
        token: str = _norm_token(raw)
        for m in cls:
            if token in (_norm_token(m.value), _norm_token(m.name)):
                return m
            if any(token == _norm_token(a) for a in m.aliases):
                return m
        return None

    @classmethod
    def keys(cls) -> list[str]:
        """All member keys in declaration order."""
        return [m.value for m in cls]
