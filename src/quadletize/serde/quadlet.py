# topmark:header:start
#
#   project      : Quadletize
#   file         : quadlet.py
#   file_relpath : src/quadletize/serde/quadlet.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Serialize structs into quadlet (systemd unit style) section text.

Top-level shapes:

- a struct renders as ``[Section]`` followed by one ``Key=value`` line per
  field;
- a ``list`` of structs renders one section per struct, separated by a blank
  line;
- a ``tuple`` of structs renders a single section named after the first
  struct, containing the fields of every struct in order.

Sequences repeat their key once per element, unless the key is one of the
``join_keys`` given by the caller, in which case the elements are joined with
spaces onto one line. Joining only applies to keys that are known
`JoinOption` values; any other key silently keeps the repeat behavior.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from quadletize.config.logging import get_logger
from quadletize.escape import quote_if_whitespace
from quadletize.serde.errors import CustomError, InvalidTypeError, SerdeError
from quadletize.serde.shape import (
    Visitor,
    describe,
    format_float,
    is_struct,
    iter_fields,
    section_name,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from quadletize.config.logging import QuadletizeLogger

logger: QuadletizeLogger = get_logger(__name__)


class JoinOption(str, Enum):
    """Quadlet keys whose sequence values may be joined onto a single line."""

    ADD_CAPABILITY = "AddCapability"
    AFTER = "After"
    ANNOTATION = "Annotation"
    BEFORE = "Before"
    DROP_CAPABILITY = "DropCapability"
    ENVIRONMENT = "Environment"
    LABEL = "Label"
    REQUIRED_BY = "RequiredBy"
    REQUIRES = "Requires"
    SYSCTL = "Sysctl"
    WANTED_BY = "WantedBy"
    WANTS = "Wants"

    @classmethod
    def from_key(cls, key: str) -> JoinOption | None:
        """Return the member for ``key``, or None if the key is not joinable."""
        try:
            return cls(key)
        except ValueError:
            return None


def coerce_join_keys(join_keys: Iterable[JoinOption | str]) -> frozenset[JoinOption]:
    """Normalize a collection of join keys to `JoinOption` members.

    Strings that are not joinable keys are dropped with a warning.
    """
    result: set[JoinOption] = set()
    for key in join_keys:
        option: JoinOption | None = JoinOption.from_key(key)
        if option is None:
            logger.warning("ignoring unknown join key %r", key)
            continue
        result.add(option)
    return frozenset(result)


def quote_spaces_join(values: Iterable[Any]) -> list[str]:
    """Field hook quoting every element that contains whitespace.

    Use with ``option(serialize_with=quote_spaces_join)`` on joined keys so
    elements survive the space-joined rendering.
    """
    return [quote_if_whitespace(str(v)) for v in values]


class _ScalarText(Visitor["str | None"]):
    """Text form of one sequence element in a joined line."""

    def visit_none(self) -> None:
        return None

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


class _FieldWriter(Visitor[None]):
    """Writes the ``Key=value`` lines of one field."""

    def __init__(self, lines: list[str], key: str, *, join: bool) -> None:
        self._lines: list[str] = lines
        self._key: str = key
        self._join: bool = join

    def _line(self, text: str) -> None:
        self._lines.append(f"{self._key}={text}\n")

    def visit_none(self) -> None:
        return None

    def visit_bool(self, value: bool) -> None:
        self._line("true" if value else "false")

    def visit_int(self, value: int) -> None:
        self._line(str(value))

    def visit_float(self, value: float) -> None:
        self._line(format_float(value))

    def visit_str(self, value: str) -> None:
        self._line(value)

    def visit_enum(self, value: str) -> None:
        self._line(value)

    def visit_seq(self, items: Sequence[Any]) -> None:
        if not self._join:
            for item in items:
                describe(item, self)
            return
        texts: list[str] = []
        for item in items:
            text: str | None = describe(item, _ScalarText())
            if text is not None:
                texts.append(text)
        if texts:
            self._line(" ".join(texts))

    def visit_map(self, value: Mapping[Any, Any]) -> None:
        raise InvalidTypeError("map")


def _should_join(key: str, join_keys: frozenset[JoinOption]) -> bool:
    option: JoinOption | None = JoinOption.from_key(key)
    if option is None:
        logger.trace("key %r is not a join option, repeating", key)
        return False
    return option in join_keys


def _write_fields(value: Any, lines: list[str], join_keys: frozenset[JoinOption]) -> None:
    for key, field_value in iter_fields(value):
        writer = _FieldWriter(lines, key, join=_should_join(key, join_keys))
        try:
            describe(field_value, writer)
        except SerdeError:
            raise
        except ValueError as exc:
            raise CustomError(str(exc), key=key) from exc


def _require_struct(value: Any) -> Any:
    if not is_struct(value):
        raise InvalidTypeError(type(value).__name__)
    return value


def _section(value: Any, join_keys: frozenset[JoinOption], *, header: bool) -> str:
    lines: list[str] = [f"[{section_name(value)}]\n"] if header else []
    _write_fields(value, lines, join_keys)
    return "".join(lines)


def to_string(
    value: Any,
    join_keys: Iterable[JoinOption | str] = frozenset(),
    *,
    header: bool = True,
) -> str:
    """Serialize a struct, list of structs or tuple of structs to quadlet text.

    Args:
        value (Any): The value to render (see module docstring for shapes).
        join_keys (Iterable[JoinOption | str]): Keys whose sequences are
            joined onto one space-separated line.
        header (bool): Emit the ``[Section]`` header line. Only meaningful
            for a single struct.

    Returns:
        str: The rendered text; every line ends with ``\\n``.

    Raises:
        InvalidTypeError: For unsupported top-level or field shapes.
        CustomError: If a field's own conversion fails.
    """
    keys: frozenset[JoinOption] = coerce_join_keys(join_keys)

    if isinstance(value, list):
        return "\n".join(_section(_require_struct(v), keys, header=True) for v in value)

    if isinstance(value, tuple):
        if not value:
            raise InvalidTypeError("empty tuple")
        structs: list[Any] = [_require_struct(v) for v in value]
        lines: list[str] = [f"[{section_name(structs[0])}]\n"] if header else []
        for struct in structs:
            _write_fields(struct, lines, keys)
        return "".join(lines)

    return _section(_require_struct(value), keys, header=header)
