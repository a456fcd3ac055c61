# topmark:header:start
#
#   project      : Quadletize
#   file         : volume.py
#   file_relpath : src/quadletize/quadlet/volume.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Volume]`` resource section (``podman volume create``).

Driver options given as ``--opt`` map onto quadlet keys:

- ``type=X`` becomes ``Type=X``;
- ``device=X`` becomes ``Device=X``;
- ``copy`` becomes ``Copy=true``;
- ``o=a,uid=1,gid=2`` becomes ``User=1``, ``Group=2`` and ``Options=a``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from quadletize.quadlet.globals import args_or_none
from quadletize.serde.quadlet import JoinOption, quote_spaces_join
from quadletize.serde.shape import option, serde

if TYPE_CHECKING:
    from collections.abc import Iterable


class ParseVolumeOptError(ValueError):
    def __init__(self, opt: str) -> None:
        super().__init__(f"`{opt}` is not a valid volume driver option")
        self.opt: str = opt


@serde(rename_all="kebab-case")
@dataclass
class VolumePodmanArgs:
    """``podman volume create`` options without a quadlet key."""

    driver: str | None = None
    ignore: bool = option(default=False, skip_default=True)


@serde(rename_all="PascalCase")
@dataclass
class Volume:
    copy: bool = option(default=False, skip_default=True)
    device: str | None = None
    group: str | None = None
    label: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    options: str | None = None
    podman_args: VolumePodmanArgs | None = option(default=None, serialize_with=args_or_none)
    fs_type: str | None = option(default=None, rename="Type")
    user: str | None = None
    volume_name: str | None = None

    JOIN_KEYS: ClassVar[frozenset[JoinOption]] = frozenset({JoinOption.LABEL})
    EXTENSION: ClassVar[str] = "volume"

    def apply_opts(self, opts: Iterable[str]) -> Volume:
        """Apply ``--opt`` driver options in order.

        Args:
            opts (Iterable[str]): Options such as ``type=tmpfs`` or ``o=uid=1000``.

        Returns:
            Volume: ``self``, for chaining.

        Raises:
            ParseVolumeOptError: For an unrecognized option.
        """
        mount_options: list[str] = []
        for opt in opts:
            name, sep, value = opt.partition("=")
            if opt == "copy":
                self.copy = True
            elif sep and name == "type":
                self.fs_type = value
            elif sep and name == "device":
                self.device = value
            elif sep and name == "o":
                for item in value.split(","):
                    key, _, item_value = item.partition("=")
                    if key == "uid":
                        self.user = item_value
                    elif key == "gid":
                        self.group = item_value
                    else:
                        mount_options.append(item)
            else:
                raise ParseVolumeOptError(opt)
        if mount_options:
            self.options = ",".join(mount_options)
        return self
