# topmark:header:start
#
#   project      : Quadletize
#   file         : de.py
#   file_relpath : src/quadletize/serde/mount_options/de.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Mount-options deserializer: ``key[=value],...`` text to struct.

Input is a single-pass stream of comma separated tokens. Each token is split
once on the first ``=``; a missing or empty right-hand side is "no value",
which turns into ``True`` for booleans and into the present-but-default state
for optionals (e.g. a bare ``idmap``).

Token order does not matter, but every required field must appear, unknown
keys are rejected and a key may only repeat when its field allows it.
Errors speak of "options" rather than fields because they reach end users.

Target types come from the dataclass annotations:

- ``bool``, ``int``, ``float``, ``str`` and path types;
- ``Enum`` subclasses, matched by value;
- ``X | None``: the optional wrapper around any of these;
- ``Any``: the scalar is inferred with `infer_scalar`;
- classes with a ``__parse_option__(raw)`` classmethod, which receive the raw
  value (``None`` when absent) and raise ``ValueError`` on bad input.
"""

from __future__ import annotations

import functools
import re
import types
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Final, TypeVar, Union, get_args, get_origin, get_type_hints

from quadletize.config.logging import get_logger
from quadletize.serde.errors import InvalidTypeError, MountOptionsError
from quadletize.serde.shape import UNIT, FieldSpec, fields_of

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from quadletize.config.logging import QuadletizeLogger

logger: QuadletizeLogger = get_logger(__name__)

T = TypeVar("T")

_INT_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?|\.[0-9]+(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_U64_MAX: Final[int] = 2**64 - 1
_I64_MIN: Final[int] = -(2**63)
_I64_MAX: Final[int] = 2**63 - 1


class OptionsReader:
    """Iterator over the ``(key, value)`` tokens of a mount-options string.

    A trailing comma does not produce an empty token. The value is ``None``
    when the token has no ``=`` or nothing after it.
    """

    def __init__(self, text: str) -> None:
        segments: list[str] = text.split(",")
        if segments[-1] == "":
            segments.pop()
        self._segments: Iterator[str] = iter(segments)

    def __iter__(self) -> OptionsReader:
        return self

    def __next__(self) -> tuple[str, str | None]:
        segment: str = next(self._segments)
        key, _, raw = segment.partition("=")
        return key, raw or None


def infer_scalar(raw: str | None) -> Any:
    """Infer a scalar from option text.

    Order: empty is None, ``true``/``false`` are booleans, then unsigned and
    signed 64-bit integers, then floats, then a single character, else the
    string itself.
    """
    if not raw:
        return None
    if raw in ("true", "false"):
        return raw == "true"
    if _INT_RE.fullmatch(raw):
        number = int(raw)
        if 0 <= number <= _U64_MAX and not raw.startswith("-"):
            return number
        if _I64_MIN <= number <= _I64_MAX:
            return number
    if _FLOAT_RE.fullmatch(raw):
        return float(raw)
    return raw


@functools.cache
def _type_hints(cls: type[Any]) -> dict[str, Any]:
    return get_type_hints(cls)


@functools.cache
def _key_lookup(cls: type[Any]) -> dict[str, tuple[FieldSpec, bool]]:
    lookup: dict[str, tuple[FieldSpec, bool]] = {}
    for spec in fields_of(cls):
        for key in spec.keys:
            lookup[key] = (spec, False)
        if spec.options.negation is not None:
            lookup[spec.options.negation] = (spec, True)
    return lookup


def _expected(cls: type[Any]) -> str:
    keys: list[str] = [spec.key for spec in fields_of(cls)]
    if not keys:
        return "there are no options"
    if len(keys) == 1:
        return f"expected `{keys[0]}`"
    return "expected one of " + ", ".join(f"`{k}`" for k in keys)


def _unwrap_optional(tp: Any) -> Any:
    if get_origin(tp) in (Union, types.UnionType):
        args: list[Any] = [a for a in get_args(tp) if a is not type(None)]
        return args[0] if len(args) == 1 else Any
    return tp


def _parse_bool(raw: str | None, key: str) -> bool:
    if raw is None:
        return True
    if raw in ("true", "false"):
        return raw == "true"
    raise MountOptionsError(f"invalid value `{raw}` for option `{key}`, expected `true` or `false`")


def convert_option(tp: Any, raw: str | None, key: str) -> Any:
    """Convert the raw text of option ``key`` into a value of type ``tp``.

    Args:
        tp (Any): The resolved field annotation.
        raw (str | None): The option value, ``None`` for "no value".
        key (str): The option key as written, for error messages.

    Returns:
        Any: The converted value.

    Raises:
        MountOptionsError: If ``raw`` is not valid for ``tp``.
        InvalidTypeError: If ``tp`` is not a supported field type.
    """
    tp = _unwrap_optional(tp)

    if tp is Any:
        return infer_scalar(raw)

    hook: Any = getattr(tp, "__parse_option__", None)
    if hook is not None:
        try:
            return hook(raw)
        except ValueError as exc:
            raise MountOptionsError(f"invalid value for option `{key}`: {exc}") from exc

    if tp is bool:
        return _parse_bool(raw, key)
    if tp is type(UNIT):
        if raw is not None:
            raise MountOptionsError(f"option `{key}` does not take a value")
        return UNIT
    if raw is None:
        raise MountOptionsError(f"option `{key}` requires a value")

    if isinstance(tp, type) and issubclass(tp, Enum):
        try:
            return tp(raw)
        except ValueError:
            variants: str = ", ".join(f"`{m.value}`" for m in tp)
            raise MountOptionsError(
                f"unknown variant `{raw}` for option `{key}`, expected one of {variants}"
            ) from None
    if tp is int:
        if not _INT_RE.fullmatch(raw):
            raise MountOptionsError(f"invalid value `{raw}` for option `{key}`, expected an integer")
        return int(raw)
    if tp is float:
        if not _FLOAT_RE.fullmatch(raw):
            raise MountOptionsError(f"invalid value `{raw}` for option `{key}`, expected a number")
        return float(raw)
    if tp is str:
        return raw
    if isinstance(tp, type) and issubclass(tp, PurePath):
        return tp(raw)
    raise InvalidTypeError(getattr(tp, "__name__", repr(tp)))


def build(cls: type[T], entries: Iterator[tuple[str, str | None]]) -> T:
    """Consume ``entries`` and construct ``cls`` from them.

    Args:
        cls (type[T]): The target dataclass.
        entries (Iterator[tuple[str, str | None]]): Remaining option tokens.

    Returns:
        T: The constructed struct.

    Raises:
        MountOptionsError: For unknown, duplicate, missing or invalid options.
    """
    hints: dict[str, Any] = _type_hints(cls)
    lookup: dict[str, tuple[FieldSpec, bool]] = _key_lookup(cls)
    values: dict[str, Any] = {}

    for key, raw in entries:
        found: tuple[FieldSpec, bool] | None = lookup.get(key)
        if found is None:
            raise MountOptionsError(f"unknown option `{key}`, {_expected(cls)}")
        spec, negated = found
        if spec.name in values and not spec.options.multiple:
            raise MountOptionsError(f"duplicate option `{spec.key}`")
        if negated:
            if raw is not None:
                raise MountOptionsError(f"option `{key}` does not take a value")
            values[spec.name] = False
        else:
            values[spec.name] = convert_option(hints[spec.name], raw, key)

    for spec in fields_of(cls):
        if spec.required and spec.name not in values:
            raise MountOptionsError(f"missing option `{spec.key}`")

    logger.trace("built %s from options: %r", cls.__name__, values)
    return cls(**values)


def from_str(cls: type[T], text: str) -> T:
    """Deserialize mount options into ``cls``.

    Args:
        cls (type[T]): The target dataclass.
        text (str): Comma separated ``key[=value]`` tokens.

    Returns:
        T: The constructed struct.
    """
    return build(cls, OptionsReader(text))


def from_str_tagged(variants: Mapping[str, type[T]], text: str, *, tag: str = "type") -> T:
    """Deserialize an internally tagged union from mount options.

    The first token must be the tag; its value selects the variant class that
    deserializes the remaining tokens.

    Args:
        variants (Mapping[str, type[T]]): Tag value to variant class.
        text (str): Comma separated ``key[=value]`` tokens.
        tag (str): The tag key.

    Returns:
        T: The constructed variant.

    Raises:
        MountOptionsError: If the tag is not first, names an unknown variant,
            or the remaining tokens do not fit the variant.
    """
    reader = OptionsReader(text)
    first: tuple[str, str | None] | None = next(reader, None)
    if first is None or first[0] != tag:
        raise MountOptionsError(f'"{tag}" must be the first mount option')
    name: str = first[1] or ""
    cls: type[T] | None = variants.get(name)
    if cls is None:
        expected: str = ", ".join(f"`{v}`" for v in variants)
        raise MountOptionsError(f"unknown variant `{name}`, expected one of {expected}")
    return build(cls, reader)
