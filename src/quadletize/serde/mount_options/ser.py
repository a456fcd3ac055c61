# topmark:header:start
#
#   project      : Quadletize
#   file         : ser.py
#   file_relpath : src/quadletize/serde/mount_options/ser.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Mount-options serializer: struct to ``key[=value],...`` text."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from quadletize.config.logging import get_logger
from quadletize.serde.errors import CustomError, InvalidTypeError, NestedError, SerdeError
from quadletize.serde.shape import Visitor, describe, format_float, is_struct, iter_fields

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from quadletize.config.logging import QuadletizeLogger

logger: QuadletizeLogger = get_logger(__name__)


class _Bare:
    def __repr__(self) -> str:
        return "BARE"


#: Returned by the value writer for keys emitted without ``=value``.
BARE: Final[_Bare] = _Bare()


class _ValueText(Visitor[Any]):
    """Text of one option value; None omits the option, BARE emits the key alone."""

    def visit_none(self) -> None:
        return None

    def visit_unit(self) -> _Bare:
        return BARE

    def visit_bool(self, value: bool) -> str:
        return "true" if value else "false"

    def visit_int(self, value: int) -> str:
        return str(value)

    def visit_float(self, value: float) -> str:
        return format_float(value)

    def visit_str(self, value: str) -> str:
        return value

    def visit_enum(self, value: str) -> str:
        return value

    def visit_seq(self, items: Sequence[Any]) -> str:
        raise InvalidTypeError("sequence")

    def visit_struct(self, value: Any) -> str:
        raise NestedError("struct")

    def visit_map(self, value: Mapping[Any, Any]) -> str:
        raise NestedError("map")


def to_string(value: Any) -> str:
    """Serialize a struct into comma separated mount options.

    Fields are written in declaration order (after the tag, if the struct has
    one). ``None`` fields are omitted and unit values are written as a bare key.

    Args:
        value (Any): A dataclass instance.

    Returns:
        str: The options, without a trailing comma.

    Raises:
        ShapeError: If ``value`` is not a struct, or a field is a sequence,
            struct or map. This is a programming error, not bad user input.
        CustomError: If a field's own conversion fails.
    """
    if not is_struct(value):
        raise InvalidTypeError(type(value).__name__)

    parts: list[str] = []
    for key, field_value in iter_fields(value):
        try:
            text: Any = describe(field_value, _ValueText())
        except SerdeError:
            raise
        except ValueError as exc:
            raise CustomError(str(exc), key=key) from exc
        if text is None:
            continue
        parts.append(key if text is BARE else f"{key}={text}")
    return ",".join(parts)
