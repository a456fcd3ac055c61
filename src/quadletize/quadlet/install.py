# topmark:header:start
#
#   project      : Quadletize
#   file         : install.py
#   file_relpath : src/quadletize/quadlet/install.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Install]`` section, which enables the unit at boot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from quadletize.serde.quadlet import JoinOption, quote_spaces_join
from quadletize.serde.shape import option, serde

if TYPE_CHECKING:
    from collections.abc import Sequence


@serde(rename_all="PascalCase")
@dataclass
class Install:
    wanted_by: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    required_by: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)

    JOIN_KEYS: ClassVar[frozenset[JoinOption]] = frozenset({JoinOption.WANTED_BY, JoinOption.REQUIRED_BY})

    @classmethod
    def from_targets(
        cls,
        wanted_by: Sequence[str] = (),
        required_by: Sequence[str] = (),
        *,
        default_wanted_by: Sequence[str] = ("default.target",),
    ) -> Install:
        """Build the section, using ``default_wanted_by`` when no target is given."""
        if not wanted_by and not required_by:
            wanted_by = default_wanted_by
        return cls(wanted_by=list(wanted_by), required_by=list(required_by))
