# topmark:header:start
#
#   project      : Quadletize
#   file         : cli_types.py
#   file_relpath : src/quadletize/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Click parameter types for Quadletize options.

- `EnumChoiceParam` converts to a `KeyedStrEnum` member (keys, names and
  aliases accepted, case-insensitive).
- `ParsedParam` wraps a ``parse(text)`` function of a composite value type,
  turning its ``ValueError`` into a click usage error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

import click

from quadletize.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from collections.abc import Callable

    from click.shell_completion import CompletionItem

E = TypeVar("E", bound=KeyedStrEnum)
T = TypeVar("T")


class EnumChoiceParam(click.ParamType, Generic[E]):
    """Convert a string to a member of a `KeyedStrEnum`."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__.lower()
        self.choices = enum_cls.keys()

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        raise click.BadParameter(message, param=param, ctx=ctx)

    def get_metavar(self, param: click.Parameter, ctx: click.Context | None = None) -> str:
        return "[" + "|".join(self.choices) + "]"

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        if value is None or isinstance(value, self.enum_cls):
            return value
        member: E | None = self.enum_cls.parse(str(value))
        if member is None:
            self._fail_noreturn(
                f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
                param,
                ctx,
            )
        return member

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[CompletionItem]:
        from click.shell_completion import CompletionItem

        return [CompletionItem(c) for c in self.choices if c.startswith(incomplete)]


class ParsedParam(click.ParamType, Generic[T]):
    """Convert a string with a value type's ``parse`` function."""

    def __init__(self, parse: Callable[[str], T], name: str) -> None:
        self._parse: Callable[[str], T] = parse
        self.name = name

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> T:
        if not isinstance(value, str):
            return value
        try:
            return self._parse(value)
        except ValueError as exc:
            self.fail(f"invalid {self.name} '{value}': {exc}", param, ctx)
