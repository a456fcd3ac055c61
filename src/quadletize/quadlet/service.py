# topmark:header:start
#
#   project      : Quadletize
#   file         : service.py
#   file_relpath : src/quadletize/quadlet/service.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Service]`` section."""

from __future__ import annotations

from dataclasses import dataclass

from quadletize.core.enum_mixins import KeyedStrEnum
from quadletize.serde.shape import serde


class RestartPolicy(KeyedStrEnum):
    """systemd ``Restart=`` values.

    podman's ``unless-stopped`` has no systemd equivalent and maps to
    ``always``.
    """

    NO = ("no", "Never restart")
    ON_SUCCESS = ("on-success", "Restart after a clean exit")
    ON_FAILURE = ("on-failure", "Restart after an unclean exit")
    ON_ABNORMAL = ("on-abnormal", "Restart after a signal or timeout")
    ON_WATCHDOG = ("on-watchdog", "Restart after a watchdog timeout")
    ON_ABORT = ("on-abort", "Restart after an uncaught signal")
    ALWAYS = ("always", "Always restart", ("unless-stopped",))


@serde(rename_all="PascalCase")
@dataclass
class Service:
    restart: RestartPolicy | None = None
    timeout_start_sec: int | None = None

    def is_empty(self) -> bool:
        return self == Service()
