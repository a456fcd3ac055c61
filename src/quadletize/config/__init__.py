# topmark:header:start
#
#   project      : Quadletize
#   file         : __init__.py
#   file_relpath : src/quadletize/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize configuration and logging setup."""

from __future__ import annotations

from quadletize.config.model import Config, ConfigError, MutableConfig

__all__ = [
    "Config",
    "ConfigError",
    "MutableConfig",
]
