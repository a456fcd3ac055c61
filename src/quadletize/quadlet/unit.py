# topmark:header:start
#
#   project      : Quadletize
#   file         : unit.py
#   file_relpath : src/quadletize/quadlet/unit.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Unit]`` section: description and ordering/requirement dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from quadletize.serde.quadlet import JoinOption
from quadletize.serde.shape import serde


@serde(rename_all="PascalCase")
@dataclass
class Unit:
    description: str | None = None
    wants: list[str] = field(default_factory=list)
    requires: list[str] = field(default_factory=list)
    before: list[str] = field(default_factory=list)
    after: list[str] = field(default_factory=list)

    JOIN_KEYS: ClassVar[frozenset[JoinOption]] = frozenset(
        {JoinOption.WANTS, JoinOption.REQUIRES, JoinOption.BEFORE, JoinOption.AFTER}
    )

    def is_empty(self) -> bool:
        return self == Unit()

    def add_dependency(self, name: str) -> None:
        """Require ``name`` and order this unit after it."""
        if name not in self.requires:
            self.requires.append(name)
        if name not in self.after:
            self.after.append(name)
