# topmark:header:start
#
#   project      : Quadletize
#   file         : args.py
#   file_relpath : src/quadletize/serde/args.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Serialize a flat struct into a shell argument string.

The output is meant for quadlet options such as ``PodmanArgs=`` and
``GlobalArgs=``, which podman splits again with shell rules.

Rendering per field, in declaration order:

| value              | tokens                                  |
|--------------------|-----------------------------------------|
| ``True``           | ``--key``                               |
| ``False``          | ``--key false``                         |
| ``None``           | nothing                                 |
| `UNIT`             | ``--key``                               |
| scalar / enum      | ``--key value``                         |
| sequence           | ``--key item`` repeated per element     |
| struct / map       | `NestedError`                           |
| bytes / other      | `InvalidTypeError`                      |

Example:
    ```python
    @serde(rename_all="kebab-case")
    @dataclass
    class Args:
        interactive: bool = True
        publish: list[str] = field(default_factory=lambda: ["8080:80"])

    to_string(Args())  # "--interactive --publish 8080:80"
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from quadletize.config.logging import get_logger
from quadletize.escape import join_shell_tokens
from quadletize.serde.errors import (
    CustomError,
    InvalidFlagError,
    InvalidTypeError,
    NestedError,
    SerdeError,
)
from quadletize.serde.shape import Visitor, describe, format_float, is_struct, iter_fields

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from quadletize.config.logging import QuadletizeLogger

logger: QuadletizeLogger = get_logger(__name__)


def _check_flag(key: str) -> str:
    if not key or any(ch.isspace() for ch in key):
        raise InvalidFlagError(key)
    return f"--{key}"


class _FieldWriter(Visitor[None]):
    """Appends the tokens of one field to a shared token list."""

    def __init__(self, tokens: list[str], flag: str) -> None:
        self._tokens: list[str] = tokens
        self._flag: str = flag

    def _push(self, *tokens: str) -> None:
        self._tokens.append(self._flag)
        self._tokens.extend(tokens)

    def visit_none(self) -> None:
        return None

    def visit_unit(self) -> None:
        self._push()

    def visit_bool(self, value: bool) -> None:
        if value:
            self._push()
        else:
            self._push("false")

    def visit_int(self, value: int) -> None:
        self._push(str(value))

    def visit_float(self, value: float) -> None:
        self._push(format_float(value))

    def visit_str(self, value: str) -> None:
        self._push(value)

    def visit_enum(self, value: str) -> None:
        self._push(value)

    def visit_seq(self, items: Sequence[Any]) -> None:
        for item in items:
            describe(item, self)

    def visit_struct(self, value: Any) -> None:
        raise NestedError("struct")

    def visit_map(self, value: Mapping[Any, Any]) -> None:
        raise NestedError("map")


def to_tokens(value: Any) -> list[str]:
    """Serialize a struct into unquoted argument tokens.

    Args:
        value (Any): A dataclass instance.

    Returns:
        list[str]: Flags and values in output order.

    Raises:
        InvalidTypeError: If ``value`` is not a struct or a field has an
            unsupported type.
        InvalidFlagError: If a field key is empty or contains whitespace.
        NestedError: If a field holds a struct or map.
        CustomError: If a field's own conversion fails.
    """
    if not is_struct(value):
        raise InvalidTypeError(type(value).__name__)

    # all keys are validated before any value is rendered
    pairs: list[tuple[str, str, Any]] = [
        (key, _check_flag(key), field_value) for key, field_value in iter_fields(value)
    ]
    tokens: list[str] = []
    for key, flag, field_value in pairs:
        writer = _FieldWriter(tokens, flag)
        try:
            describe(field_value, writer)
        except SerdeError:
            raise
        except ValueError as exc:
            raise CustomError(str(exc), key=key) from exc
    logger.trace("args tokens for %s: %r", type(value).__name__, tokens)
    return tokens


def to_string(value: Any) -> str:
    """Serialize a struct into a single shell-quoted argument string.

    Args:
        value (Any): A dataclass instance.

    Returns:
        str: The arguments joined with single spaces, each token shell-quoted.
    """
    return join_shell_tokens(to_tokens(value))
