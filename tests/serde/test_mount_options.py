# topmark:header:start
#
#   project      : Quadletize
#   file         : test_mount_options.py
#   file_relpath : tests/serde/test_mount_options.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Tests for the mount-options codec (`quadletize.serde.mount_options`)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

import pytest

from quadletize.serde import UNIT, UnitType, option, serde
from quadletize.serde.errors import InvalidTypeError, MountOptionsError, NestedError
from quadletize.serde.mount_options import (
    OptionsReader,
    from_str,
    from_str_tagged,
    infer_scalar,
    to_string,
)
from tests.conftest import mark_serde, parametrize


class Propagation(str, Enum):
    SHARED = "shared"
    PRIVATE = "private"


@serde(rename_all="kebab-case")
@dataclass(frozen=True)
class Options:
    destination: PurePosixPath = option(aliases=("dst",))
    read_only: bool = option(default=False, rename="readonly", aliases=("ro",), skip_default=True)
    uid: int | None = None
    ratio: float | None = None
    propagation: Propagation | None = None
    label: str | None = None
    marker: UnitType | None = None
    copy: bool = option(default=True, negation="nocopy", skip_default=True)


@serde(rename_all="kebab-case", tag=("type", "one"))
@dataclass(frozen=True)
class One:
    path: str


@serde(rename_all="kebab-case", tag=("type", "two"))
@dataclass(frozen=True)
class Two:
    size: int = 0


@serde(rename_all="kebab-case")
@dataclass(frozen=True)
class Anything:
    value: Any = None


@dataclass
class WithList:
    items: list[str] = field(default_factory=lambda: ["a"])


@dataclass
class WithNested:
    inner: One = field(default_factory=lambda: One(path="/x"))


VARIANTS: dict[str, type[Any]] = {"one": One, "two": Two}


@mark_serde
def test_reader_splits_and_partitions() -> None:
    assert list(OptionsReader("a=1,b,c=,d=x=y,")) == [
        ("a", "1"),
        ("b", None),
        ("c", None),
        ("d", "x=y"),
    ]
    assert list(OptionsReader("")) == []


@mark_serde
@parametrize(
    "raw, expected",
    [
        (None, None),
        ("", None),
        ("true", True),
        ("false", False),
        ("42", 42),
        ("18446744073709551615", 2**64 - 1),
        ("-7", -7),
        ("1.5", 1.5),
        ("x", "x"),
        ("text", "text"),
    ],
)
def test_infer_scalar(raw: str | None, expected: Any) -> None:
    value: Any = infer_scalar(raw)
    assert value == expected
    assert type(value) is type(expected)


@mark_serde
def test_infer_scalar_out_of_range_integer_is_a_float() -> None:
    assert infer_scalar("99999999999999999999") == float("99999999999999999999")


@mark_serde
def test_serialize_in_declaration_order() -> None:
    value = Options(
        destination=PurePosixPath("/data"),
        read_only=True,
        uid=1000,
        ratio=0.5,
        propagation=Propagation.SHARED,
        label="web",
        marker=UNIT,
        copy=False,
    )
    assert to_string(value) == (
        "destination=/data,readonly=true,uid=1000,ratio=0.5,propagation=shared,"
        "label=web,marker,nocopy"
    )


@mark_serde
def test_serialize_omits_none_and_defaults() -> None:
    assert to_string(Options(destination=PurePosixPath("/data"))) == "destination=/data"


@mark_serde
def test_deserialize_is_order_insensitive_and_accepts_aliases() -> None:
    value: Options = from_str(Options, "label=web,ro,uid=1000,dst=/data,propagation=private,marker")
    assert value == Options(
        destination=PurePosixPath("/data"),
        read_only=True,
        uid=1000,
        propagation=Propagation.PRIVATE,
        label="web",
        marker=UNIT,
    )


@mark_serde
def test_deserialize_negation() -> None:
    assert from_str(Options, "destination=/d,nocopy").copy is False
    assert from_str(Options, "destination=/d,copy").copy is True
    assert from_str(Options, "destination=/d,copy=false").copy is False


@mark_serde
@parametrize(
    "text, message",
    [
        ("destination=/d,bogus", "unknown option `bogus`"),
        ("readonly", "missing option `destination`"),
        ("destination=/a,dst=/b", "duplicate option `destination`"),
        ("destination=/d,readonly=yes", "invalid value `yes`"),
        ("destination=/d,uid=abc", "expected an integer"),
        ("destination=/d,ratio=fast", "expected a number"),
        ("destination=/d,uid", "requires a value"),
        ("destination=/d,propagation=weird", "unknown variant `weird`"),
        ("destination=/d,marker=1", "does not take a value"),
        ("destination=/d,nocopy=1", "does not take a value"),
    ],
)
def test_deserialize_errors(text: str, message: str) -> None:
    with pytest.raises(MountOptionsError, match=message):
        from_str(Options, text)


@mark_serde
def test_any_field_infers_its_type() -> None:
    assert from_str(Anything, "value=12").value == 12
    assert from_str(Anything, "value").value is None


@mark_serde
def test_tagged_dispatch() -> None:
    assert from_str_tagged(VARIANTS, "type=one,path=/x") == One(path="/x")
    assert from_str_tagged(VARIANTS, "type=two,size=3") == Two(size=3)
    assert to_string(Two(size=3)) == "type=two,size=3"


@mark_serde
@parametrize(
    "text, message",
    [
        ("path=/x,type=one", '"type" must be the first mount option'),
        ("", '"type" must be the first mount option'),
        ("type=three,path=/x", "unknown variant `three`, expected one of `one`, `two`"),
        ("type=one", "missing option `path`"),
    ],
)
def test_tagged_errors(text: str, message: str) -> None:
    with pytest.raises(MountOptionsError, match=message):
        from_str_tagged(VARIANTS, text)


@mark_serde
@parametrize(
    "value, error",
    [
        (WithList(), InvalidTypeError),
        (WithNested(), NestedError),
        ("type=bind", InvalidTypeError),
    ],
)
def test_serialize_shape_errors(value: Any, error: type[Exception]) -> None:
    with pytest.raises(error):
        to_string(value)
