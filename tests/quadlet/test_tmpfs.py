# topmark:header:start
#
#   project      : Quadletize
#   file         : test_tmpfs.py
#   file_relpath : tests/quadlet/test_tmpfs.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Tests for tmpfs sizes and octal modes."""

from __future__ import annotations

import pytest

from quadletize.quadlet.container.mount.mode import DEVPTS_MODE_DEFAULT, TMPFS_MODE_DEFAULT, Mode
from quadletize.quadlet.container.mount.tmpfs import ParseSizeError, Size, SizeUnit
from tests.conftest import mark_quadlet, parametrize


@mark_quadlet
@parametrize(
    "text, expected, canonical",
    [
        ("", Size(), ""),
        ("1024", Size(1024, SizeUnit.BYTES), "1024"),
        ("64k", Size(64, SizeUnit.KIBIBYTES), "64k"),
        ("64K", Size(64, SizeUnit.KIBIBYTES), "64k"),
        ("256m", Size(256, SizeUnit.MEBIBYTES), "256m"),
        ("256M", Size(256, SizeUnit.MEBIBYTES), "256m"),
        ("2g", Size(2, SizeUnit.GIBIBYTES), "2g"),
        ("2G", Size(2, SizeUnit.GIBIBYTES), "2g"),
        ("50%", Size(50, SizeUnit.PERCENT), "50%"),
        ("18446744073709551615", Size(2**64 - 1, SizeUnit.BYTES), "18446744073709551615"),
    ],
)
def test_size_parse(text: str, expected: Size, canonical: str) -> None:
    size: Size = Size.parse(text)
    assert size == expected
    assert str(size) == canonical


@mark_quadlet
@parametrize("text", ["k", "lots", "1.5g", "-1m", "256%", "18446744073709551616", "1t"])
def test_size_errors(text: str) -> None:
    with pytest.raises(ParseSizeError, match="size must be an integer"):
        Size.parse(text)


@mark_quadlet
def test_size_without_value_is_unlimited() -> None:
    assert Size.__parse_option__(None) == Size()
    assert Size().unit is SizeUnit.UNLIMITED


@mark_quadlet
def test_mode_is_octal() -> None:
    mode: Mode = Mode.parse("1777")
    assert mode == 0o1777
    assert mode == TMPFS_MODE_DEFAULT
    assert str(mode) == "1777"
    assert repr(mode) == "Mode(0o1777)"
    assert str(DEVPTS_MODE_DEFAULT) == "600"


@mark_quadlet
@parametrize("text", ["", "8", "0x1ff", "rwx"])
def test_mode_errors(text: str) -> None:
    with pytest.raises(ValueError, match="invalid octal mode"):
        Mode.parse(text)
