# topmark:header:start
#
#   project      : Quadletize
#   file         : shape.py
#   file_relpath : src/quadletize/serde/shape.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Value shapes and the visitor protocol shared by all codecs.

A value describes its own shape to a visitor with `describe`, and the visitor
decides what to do with it. The supported shapes form a small closed set:

- ``None`` (absent optional), `UNIT` (flag marker), ``bool``, ``int``,
  ``float``, ``str``, path objects (rendered as ``str``), ``Enum`` members;
- ``list``/``tuple`` sequences;
- dataclass instances (structs);
- mappings and ``bytes``, which codecs reject.

Composite value types take part by defining ``__describe__(visitor)``.

Structs are plain dataclasses. The `serde` class decorator sets struct-level
rules (key renaming, section name, tag) and `option` builds dataclass fields
that carry per-field metadata (rename, aliases, default skipping, negation).
"""

from __future__ import annotations

import dataclasses
import functools
import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Final, Generic, TypeVar

from quadletize.config.logging import get_logger
from quadletize.serde.errors import CustomError, InvalidTypeError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from quadletize.config.logging import QuadletizeLogger

logger: QuadletizeLogger = get_logger(__name__)

R = TypeVar("R")
T = TypeVar("T")

#: Key under which field metadata is stored in ``dataclasses.Field.metadata``.
SERDE_METADATA_KEY: Final[str] = "quadletize.serde"


class _Unit:
    """Marker for a value that carries no data; only its presence matters."""

    _instance: _Unit | None = None

    def __new__(cls) -> _Unit:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNIT"

    def __reduce__(self) -> str:
        return "UNIT"


#: The single unit value.
UNIT: Final[_Unit] = _Unit()

#: Type of `UNIT`, for field annotations such as ``marker: UnitType | None``.
UnitType = _Unit


class RenameRule(str, Enum):
    """Struct-level rule mapping Python field names to output keys."""

    KEBAB_CASE = "kebab-case"
    PASCAL_CASE = "PascalCase"
    LOWERCASE = "lowercase"

    def apply(self, name: str) -> str:
        """Return ``name`` (a snake_case identifier) converted by this rule."""
        if self is RenameRule.KEBAB_CASE:
            return name.replace("_", "-")
        if self is RenameRule.PASCAL_CASE:
            return "".join(part[:1].upper() + part[1:] for part in name.split("_"))
        return name.replace("_", "").lower()


@dataclasses.dataclass(frozen=True)
class FieldOptions:
    """Per-field serialization metadata.

    Attributes:
        rename (str | None): Output key overriding the struct rename rule.
        aliases (tuple[str, ...]): Extra keys accepted when deserializing.
        skip_default (bool): Omit the field when it equals its default.
        negation (str | None): Bare key meaning ``False``; emitted instead of
            the field key when the value is ``False``.
        serialize_with (Callable[[Any], Any] | None): Transform applied to the
            value before it reaches a serializer.
        multiple (bool): Allow the key to repeat on deserialization.
    """

    rename: str | None = None
    aliases: tuple[str, ...] = ()
    skip_default: bool = False
    negation: str | None = None
    serialize_with: Callable[[Any], Any] | None = None
    multiple: bool = False


@dataclasses.dataclass(frozen=True)
class StructOptions:
    """Struct-level serialization metadata set by the `serde` decorator."""

    rename_all: RenameRule | None = None
    section: str | None = None
    tag: tuple[str, str] | None = None


_DEFAULT_STRUCT_OPTIONS: Final[StructOptions] = StructOptions()
_DEFAULT_FIELD_OPTIONS: Final[FieldOptions] = FieldOptions()


def option(
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    rename: str | None = None,
    aliases: Sequence[str] = (),
    skip_default: bool = False,
    negation: str | None = None,
    serialize_with: Callable[[Any], Any] | None = None,
    multiple: bool = False,
) -> Any:
    """Declare a dataclass field with serialization metadata.

    Args:
        default (Any): Field default, as for `dataclasses.field`.
        default_factory (Any): Field default factory, as for `dataclasses.field`.
        rename (str | None): Explicit output key.
        aliases (Sequence[str]): Extra keys accepted on deserialization.
        skip_default (bool): Omit the field when it equals its default.
        negation (str | None): Bare key meaning ``False`` for tri-state flags.
        serialize_with (Callable[[Any], Any] | None): Value transform applied
            before serialization.
        multiple (bool): Allow the key (or its negation) to repeat on input.

    Returns:
        Any: A `dataclasses.Field` to assign in the class body.
    """
    kwargs: dict[str, Any] = {
        "metadata": {
            SERDE_METADATA_KEY: FieldOptions(
                rename=rename,
                aliases=tuple(aliases),
                skip_default=skip_default,
                negation=negation,
                serialize_with=serialize_with,
                multiple=multiple,
            )
        }
    }
    if default is not dataclasses.MISSING:
        kwargs["default"] = default
    if default_factory is not dataclasses.MISSING:
        kwargs["default_factory"] = default_factory
    return dataclasses.field(**kwargs)


def serde(
    *,
    rename_all: RenameRule | str | None = None,
    section: str | None = None,
    tag: tuple[str, str] | None = None,
) -> Callable[[type[T]], type[T]]:
    """Class decorator attaching struct-level serialization rules.

    Apply it on top of ``@dataclass``.

    Args:
        rename_all (RenameRule | str | None): Rule mapping field names to keys.
        section (str | None): Quadlet section name; defaults to the class name.
        tag (tuple[str, str] | None): ``(key, value)`` discriminant emitted
            before any field, for tagged unions.

    Returns:
        Callable[[type[T]], type[T]]: The decorator.
    """
    rule: RenameRule | None = RenameRule(rename_all) if rename_all is not None else None

    def _decorate(cls: type[T]) -> type[T]:
        if not dataclasses.is_dataclass(cls):
            raise TypeError(f"@serde requires a dataclass, got {cls.__name__}")
        cls.__serde_struct__ = StructOptions(  # type: ignore[attr-defined]
            rename_all=rule,
            section=section,
            tag=tag,
        )
        return cls

    return _decorate


def struct_options(cls: type[Any]) -> StructOptions:
    """Return the struct-level rules of ``cls`` (inherited when not set)."""
    return getattr(cls, "__serde_struct__", _DEFAULT_STRUCT_OPTIONS)


def section_name(value: Any) -> str:
    """Return the quadlet section name for a struct instance."""
    cls: type[Any] = type(value)
    return struct_options(cls).section or cls.__name__


def is_struct(value: Any) -> bool:
    """Return True if ``value`` is a dataclass instance."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


@dataclasses.dataclass(frozen=True)
class FieldSpec:
    """A struct field resolved against its struct's rename rule.

    Attributes:
        name (str): Python attribute name.
        key (str): Output key.
        options (FieldOptions): Per-field metadata.
        default (Any): The default value, or ``dataclasses.MISSING``.
    """

    name: str
    key: str
    options: FieldOptions
    default: Any

    @property
    def required(self) -> bool:
        """Whether the field has no default."""
        return self.default is dataclasses.MISSING

    @property
    def keys(self) -> tuple[str, ...]:
        """The primary key followed by all aliases."""
        return (self.key, *self.options.aliases)


@functools.cache
def fields_of(cls: type[Any]) -> tuple[FieldSpec, ...]:
    """Resolve the serialized fields of a dataclass, in declaration order.

    Args:
        cls (type[Any]): A dataclass type.

    Returns:
        tuple[FieldSpec, ...]: One spec per init field.
    """
    rule: RenameRule | None = struct_options(cls).rename_all
    specs: list[FieldSpec] = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        opts: FieldOptions = f.metadata.get(SERDE_METADATA_KEY, _DEFAULT_FIELD_OPTIONS)
        key: str = (
            opts.rename
            if opts.rename is not None
            else (rule.apply(f.name) if rule is not None else f.name)
        )
        default: Any = f.default
        if default is dataclasses.MISSING and f.default_factory is not dataclasses.MISSING:
            default = f.default_factory()
        specs.append(FieldSpec(name=f.name, key=key, options=opts, default=default))
    logger.trace("resolved %d fields for %s", len(specs), cls.__name__)
    return tuple(specs)


def iter_fields(value: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(key, value)`` pairs of a struct in serialization order.

    The tag pair (if any) comes first. Fields equal to their default are
    skipped when marked ``skip_default``; ``False`` negated flags yield their
    negation key with `UNIT`; ``serialize_with`` hooks are applied.

    Args:
        value (Any): A dataclass instance.

    Yields:
        tuple[str, Any]: Output key and value to serialize.

    Raises:
        CustomError: If a ``serialize_with`` hook raises ``ValueError``.
    """
    cls: type[Any] = type(value)
    tag: tuple[str, str] | None = struct_options(cls).tag
    if tag is not None:
        yield tag
    for spec in fields_of(cls):
        current: Any = getattr(value, spec.name)
        opts: FieldOptions = spec.options
        if opts.skip_default and not spec.required and current == spec.default:
            continue
        if opts.negation is not None and current is False:
            yield opts.negation, UNIT
            continue
        if opts.serialize_with is not None:
            try:
                current = opts.serialize_with(current)
            except ValueError as exc:
                raise CustomError(str(exc), key=spec.key) from exc
        yield spec.key, current


def format_float(value: float) -> str:
    """Render a float the way podman documents numbers.

    Integral values drop the fractional part (``1.0`` -> ``1``) and exponent
    notation is expanded, so ``--cpus 1.0`` renders as ``--cpus 1``.

    Args:
        value (float): The number to render.

    Returns:
        str: Decimal text without exponent.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    text: str = repr(value)
    if "e" not in text:
        return text
    return format(Decimal(text), "f")


class Visitor(Generic[R]):
    """Receives the shape of a value from `describe`.

    Every method raises `InvalidTypeError` unless overridden; a codec
    overrides exactly the shapes it supports.
    """

    def visit_none(self) -> R:
        raise InvalidTypeError("none")

    def visit_unit(self) -> R:
        raise InvalidTypeError("unit")

    def visit_bool(self, value: bool) -> R:
        raise InvalidTypeError("bool")

    def visit_int(self, value: int) -> R:
        raise InvalidTypeError("integer")

    def visit_float(self, value: float) -> R:
        raise InvalidTypeError("float")

    def visit_str(self, value: str) -> R:
        raise InvalidTypeError("string")

    def visit_bytes(self, value: bytes) -> R:
        raise InvalidTypeError("bytes")

    def visit_enum(self, value: str) -> R:
        raise InvalidTypeError("enum")

    def visit_seq(self, items: Sequence[Any]) -> R:
        raise InvalidTypeError("sequence")

    def visit_struct(self, value: Any) -> R:
        raise InvalidTypeError("struct")

    def visit_map(self, value: Mapping[Any, Any]) -> R:
        raise InvalidTypeError("map")


def describe(value: Any, visitor: Visitor[R]) -> R:
    """Dispatch ``value`` to the visitor method matching its shape.

    Args:
        value (Any): The value to describe.
        visitor (Visitor[R]): The receiving visitor.

    Returns:
        R: Whatever the visitor returns.

    Raises:
        InvalidTypeError: If ``value`` has no supported shape.
    """
    hook: Callable[[Visitor[R]], R] | None = getattr(value, "__describe__", None)
    if hook is not None and not isinstance(value, type):
        return hook(visitor)
    if value is None:
        return visitor.visit_none()
    if value is UNIT:
        return visitor.visit_unit()
    if isinstance(value, bool):
        return visitor.visit_bool(value)
    if isinstance(value, Enum):
        return visitor.visit_enum(str(value.value))
    if isinstance(value, int):
        return visitor.visit_int(value)
    if isinstance(value, float):
        return visitor.visit_float(value)
    if isinstance(value, str):
        return visitor.visit_str(value)
    if isinstance(value, PurePath):
        return visitor.visit_str(str(value))
    if isinstance(value, (bytes, bytearray)):
        return visitor.visit_bytes(bytes(value))
    if is_struct(value):
        return visitor.visit_struct(value)
    if isinstance(value, Mapping):
        return visitor.visit_map(value)
    if isinstance(value, (list, tuple)):
        return visitor.visit_seq(value)
    raise InvalidTypeError(type(value).__name__)
