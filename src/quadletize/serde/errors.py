# topmark:header:start
#
#   project      : Quadletize
#   file         : errors.py
#   file_relpath : src/quadletize/serde/errors.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Exceptions raised by the args, quadlet and mount-options codecs.

Hierarchy:

- `SerdeError`
    - `ShapeError`: the value has a shape the codec cannot render at that
      position.
        - `NestedError`: a struct or map appeared where only scalars and
          sequences are allowed.
        - `InvalidTypeError`: any other unsupported shape (bytes, unit in a
          quadlet field, non-struct at the top level).
    - `InvalidFlagError`: a field key cannot be used as a command line flag.
    - `MountOptionsError`: mount-options text could not be deserialized.
    - `CustomError`: a value's own conversion logic failed.

Every error aborts the whole call; the codecs never return partial output.
"""

from __future__ import annotations


class SerdeError(Exception):
    """Base class for all codec errors."""


class ShapeError(SerdeError):
    """The value's shape is not supported at this position."""


class NestedError(ShapeError):
    """A nested struct or map was found where only flat values are allowed."""

    def __init__(self, what: str = "struct") -> None:
        super().__init__(f"nested {what}s are not supported")


class InvalidTypeError(ShapeError):
    """An unsupported value type was found."""

    def __init__(self, what: str) -> None:
        super().__init__(f"invalid type: {what}")
        self.what: str = what


class InvalidFlagError(SerdeError):
    """A field key is empty or contains whitespace."""

    def __init__(self, key: str) -> None:
        super().__init__(f"invalid flag: {key!r}")
        self.key: str = key


class MountOptionsError(SerdeError, ValueError):
    """Mount-options text does not match the target struct."""


class CustomError(SerdeError):
    """A field's own conversion logic reported an error.

    Attributes:
        key (str | None): Output key of the field that failed, when known.
    """

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(f"{key}: {message}" if key else message)
        self.key: str | None = key
