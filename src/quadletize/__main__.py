# topmark:header:start
#
#   project      : Quadletize
#   file         : __main__.py
#   file_relpath : src/quadletize/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Module entry point for ``python -m quadletize``.

Delegates to :func:`quadletize.cli.main.cli`, the same entry point as the
``quadletize`` console script.
"""

from __future__ import annotations

from quadletize.cli.main import cli

if __name__ == "__main__":
    cli()
