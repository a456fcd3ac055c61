# topmark:header:start
#
#   project      : Quadletize
#   file         : idmap.py
#   file_relpath : src/quadletize/quadlet/container/mount/idmap.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Custom UID/GID mappings for the ``idmap`` mount option.

Text form: ``uids=0-1-10#@10-11-10;gids=0-100-10``. Either list may be
missing and the two may come in any order; ``uids`` is written first. Each
mapping is ``[@]from-to-length``, where ``@`` marks IDs relative to the
container user namespace.

An empty `Idmap` means "idmap with podman's defaults" and is written as a bare
``idmap`` option.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Sequence

    from quadletize.serde.shape import Visitor

_U32_MAX: Final[int] = 2**32 - 1
_DIGITS_RE: Final[re.Pattern[str]] = re.compile(r"\+?[0-9]+")


class ParseIdmapError(ValueError):
    """Invalid idmap text."""


class MissingPrefixError(ParseIdmapError):
    def __init__(self) -> None:
        super().__init__('mapping must be prefixed with "uids=" or "gids="')


class RepeatedPrefixError(ParseIdmapError):
    def __init__(self, prefix: str) -> None:
        super().__init__(f'"{prefix}=" prefix repeated')
        self.prefix: str = prefix


class UnknownPrefixError(ParseIdmapError):
    def __init__(self, prefix: str) -> None:
        super().__init__(f"unknown mapping prefix: {prefix}=")
        self.prefix: str = prefix


class ParseMappingError(ParseIdmapError):
    """Invalid ``[@]from-to-length`` mapping."""


class NotTripletError(ParseMappingError):
    def __init__(self, count: int) -> None:
        super().__init__(f"mapping must contain 3 numbers, given {count} numbers")
        self.count: int = count


class MappingIntError(ParseMappingError):
    def __init__(self, value: str) -> None:
        super().__init__(f"error parsing `{value}` as an integer")
        self.value: str = value


def _parse_id(value: str) -> int:
    if not _DIGITS_RE.fullmatch(value) or int(value) > _U32_MAX:
        raise MappingIntError(value)
    return int(value)


@dataclass(frozen=True)
class IdMapping:
    """One UID or GID range mapping."""

    from_id: int
    to_id: int
    length: int
    container_relative: bool = False

    @classmethod
    def parse(cls, text: str) -> IdMapping:
        """Parse ``[@]from-to-length``.

        Raises:
            NotTripletError: If there are not exactly three numbers.
            MappingIntError: If a number is not a 32-bit unsigned integer.
        """
        relative: bool = text.startswith("@")
        parts: list[str] = (text[1:] if relative else text).split("-")
        if len(parts) != 3:
            raise NotTripletError(len(parts))
        from_id, to_id, length = (_parse_id(p) for p in parts)
        return cls(from_id=from_id, to_id=to_id, length=length, container_relative=relative)

    def __str__(self) -> str:
        prefix: str = "@" if self.container_relative else ""
        return f"{prefix}{self.from_id}-{self.to_id}-{self.length}"


def _parse_mappings(text: str | None) -> tuple[IdMapping, ...]:
    if text is None:
        return ()
    return tuple(IdMapping.parse(part) for part in text.split("#"))


def _split_prefix(text: str) -> tuple[str, str]:
    prefix, sep, rest = text.partition("=")
    if not sep:
        raise MissingPrefixError()
    return prefix, rest


@dataclass(frozen=True)
class Idmap:
    """UID and GID mappings of an idmapped mount."""

    uids: tuple[IdMapping, ...] = ()
    gids: tuple[IdMapping, ...] = ()

    @classmethod
    def from_mappings(
        cls,
        uids: Sequence[IdMapping] = (),
        gids: Sequence[IdMapping] = (),
    ) -> Idmap:
        return cls(uids=tuple(uids), gids=tuple(gids))

    def is_empty(self) -> bool:
        return not self.uids and not self.gids

    @classmethod
    def parse(cls, text: str) -> Idmap:
        """Parse ``uids=...;gids=...`` (either part optional, any order).

        Raises:
            ParseIdmapError: If the text is malformed.
        """
        first, sep, second = text.partition(";")
        first_prefix, first_ids = _split_prefix(first)
        second_part: tuple[str, str] | None = _split_prefix(second) if sep else None

        uids: str | None = None
        gids: str | None = None
        if second_part is None:
            if first_prefix == "uids":
                uids = first_ids
            elif first_prefix == "gids":
                gids = first_ids
            else:
                raise UnknownPrefixError(first_prefix)
        else:
            prefixes: tuple[str, str] = (first_prefix, second_part[0])
            if prefixes == ("uids", "gids"):
                uids, gids = first_ids, second_part[1]
            elif prefixes == ("gids", "uids"):
                gids, uids = first_ids, second_part[1]
            elif prefixes == ("uids", "uids"):
                raise RepeatedPrefixError("uids")
            elif prefixes == ("gids", "gids"):
                raise RepeatedPrefixError("gids")
            else:
                unknown: str = first_prefix if first_prefix not in ("uids", "gids") else second_part[0]
                raise UnknownPrefixError(unknown)

        return cls(uids=_parse_mappings(uids), gids=_parse_mappings(gids))

    def __str__(self) -> str:
        parts: list[str] = []
        if self.uids:
            parts.append("uids=" + "#".join(str(m) for m in self.uids))
        if self.gids:
            parts.append("gids=" + "#".join(str(m) for m in self.gids))
        return ";".join(parts)

    def __describe__(self, visitor: Visitor[Any]) -> Any:
        if self.is_empty():
            return visitor.visit_unit()
        return visitor.visit_str(str(self))

    @classmethod
    def __parse_option__(cls, raw: str | None) -> Idmap:
        return cls() if raw is None else cls.parse(raw)
