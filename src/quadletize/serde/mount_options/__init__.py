# topmark:header:start
#
#   project      : Quadletize
#   file         : __init__.py
#   file_relpath : src/quadletize/serde/mount_options/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Bidirectional codec for the ``key[=value],...`` mount-options language.

Used for ``--mount`` specs and other composite option values, e.g.
``type=bind,source=/a,destination=/b,readonly``.
"""

from __future__ import annotations

from quadletize.serde.mount_options.de import (
    OptionsReader,
    build,
    convert_option,
    from_str,
    from_str_tagged,
    infer_scalar,
)
from quadletize.serde.mount_options.ser import to_string

__all__ = [
    "OptionsReader",
    "build",
    "convert_option",
    "from_str",
    "from_str_tagged",
    "infer_scalar",
    "to_string",
]
