# topmark:header:start
#
#   project      : Quadletize
#   file         : escape.py
#   file_relpath : src/quadletize/escape.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Token-level escaping shared by the serializers.

Three total functions live here:

- `shell_quote` renders one token so a POSIX shell splits it back into
  exactly that token. ASCII control characters other than the whitespace
  controls (``\\t``, ``\\n``, ``\\v``, ``\\f``, ``\\r``) are stripped first.
- `join_shell_tokens` quotes every token and joins them with single spaces.
- `quote_if_whitespace` wraps a value in double quotes when it contains
  whitespace, as quadlet expects for ``Label=``-style options.
"""

from __future__ import annotations

import re
import shlex
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

# ASCII controls minus \t \n \v \f \r
_STRIPPED_CONTROLS: Final[re.Pattern[str]] = re.compile(r"[\x00-\x08\x0e-\x1f\x7f]")


def strip_controls(token: str) -> str:
    """Remove ASCII control characters that a shell cannot carry in a token."""
    return _STRIPPED_CONTROLS.sub("", token)


def shell_quote(token: str) -> str:
    """Quote a single token for a POSIX shell.

    Tokens made only of shell-safe characters are returned unchanged; anything
    else is wrapped in single quotes with embedded single quotes escaped.

    Args:
        token (str): The raw token.

    Returns:
        str: The sanitized, quoted token.
    """
    return shlex.quote(strip_controls(token))


def join_shell_tokens(tokens: Iterable[str]) -> str:
    """Quote each token with `shell_quote` and join them with single spaces.

    Args:
        tokens (Iterable[str]): Tokens in output order.

    Returns:
        str: The joined command line; empty when ``tokens`` is empty.
    """
    return " ".join(shell_quote(token) for token in tokens)


def quote_if_whitespace(value: str) -> str:
    """Wrap ``value`` in double quotes if it contains any whitespace.

    Literal newlines are rewritten to the two characters ``\\n``. No other
    escaping is applied.

    Args:
        value (str): The value to render.

    Returns:
        str: ``value`` unchanged, or quoted.
    """
    if any(ch.isspace() for ch in value):
        return '"' + value.replace("\n", "\\n") + '"'
    return value
