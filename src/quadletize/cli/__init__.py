# topmark:header:start
#
#   project      : Quadletize
#   file         : __init__.py
#   file_relpath : src/quadletize/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize CLI package.

The console script entry point is defined in ``pyproject.toml`` as::

    [project.scripts]
    quadletize = "quadletize.cli.main:cli"

All subcommands live in ``quadletize.cli.commands``.
"""

from __future__ import annotations

__all__: list[str] = []
