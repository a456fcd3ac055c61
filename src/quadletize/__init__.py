# topmark:header:start
#
#   project      : Quadletize
#   file         : __init__.py
#   file_relpath : src/quadletize/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize package.

Quadletize turns podman command line options into quadlet unit files. The
``serde`` package holds the three serializers (podman arguments, quadlet
sections and mount options); ``quadlet`` holds the section types and the
composite values (mounts, volumes, devices) built on them.
"""

from __future__ import annotations
