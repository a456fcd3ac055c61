# topmark:header:start
#
#   project      : Quadletize
#   file         : constants.py
#   file_relpath : src/quadletize/constants.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

QUADLETIZE_VERSION: str = get_version("quadletize")
