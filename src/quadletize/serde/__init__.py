# topmark:header:start
#
#   project      : Quadletize
#   file         : __init__.py
#   file_relpath : src/quadletize/serde/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Codecs turning option structs into podman and quadlet text.

- `quadletize.serde.args`: struct to ``--flag value`` shell arguments.
- `quadletize.serde.quadlet`: struct(s) to ``[Section]`` / ``Key=value`` text.
- `quadletize.serde.mount_options`: struct to and from ``key=value,...``.

Structs are dataclasses decorated with `serde` and declaring fields with
`option` where per-field rules are needed.
"""

from __future__ import annotations

from quadletize.serde.errors import (
    CustomError,
    InvalidFlagError,
    InvalidTypeError,
    MountOptionsError,
    NestedError,
    SerdeError,
    ShapeError,
)
from quadletize.serde.shape import UNIT, RenameRule, UnitType, Visitor, describe, option, serde

__all__ = [
    "UNIT",
    "CustomError",
    "InvalidFlagError",
    "InvalidTypeError",
    "MountOptionsError",
    "NestedError",
    "RenameRule",
    "SerdeError",
    "ShapeError",
    "UnitType",
    "Visitor",
    "describe",
    "option",
    "serde",
]
