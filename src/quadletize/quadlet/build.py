# topmark:header:start
#
#   project      : Quadletize
#   file         : build.py
#   file_relpath : src/quadletize/quadlet/build.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Build]`` resource section (``podman build``).

``File=`` and ``SetWorkingDirectory=`` take a path or a URL and are kept as
given. Build secrets use the ``id=ID,src=PATH`` form of ``podman build
--secret``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, ClassVar

from quadletize.quadlet.container import PullPolicy
from quadletize.quadlet.globals import args_or_none
from quadletize.serde.quadlet import JoinOption, quote_spaces_join
from quadletize.serde.shape import option, serde

if TYPE_CHECKING:
    from quadletize.serde.shape import Visitor


class ParseSecretError(ValueError):
    """Invalid build secret."""


@dataclass(frozen=True)
class BuildSecret:
    secret_id: str
    source: PurePosixPath

    @classmethod
    def parse(cls, text: str) -> BuildSecret:
        """Parse ``id=ID,src=PATH`` (either order).

        Raises:
            ParseSecretError: For a missing ``=``, an unknown or repeated
                option, or a missing ``id`` or ``src``.
        """
        secret_id: str | None = None
        source: str | None = None
        for item in text.split(","):
            name, sep, value = item.partition("=")
            if not sep:
                raise ParseSecretError("secret option missing `=`")
            if name == "id":
                if secret_id is not None:
                    raise ParseSecretError("secret `id` cannot be set multiple times")
                secret_id = value
            elif name == "src":
                if source is not None:
                    raise ParseSecretError("secret `src` cannot be set multiple times")
                source = value
            else:
                raise ParseSecretError(f"unknown secret option `{name}`")
        if secret_id is None:
            raise ParseSecretError("missing secret `id`")
        if source is None:
            raise ParseSecretError("missing secret `src`")
        return cls(secret_id=secret_id, source=PurePosixPath(source))

    def __str__(self) -> str:
        return f"id={self.secret_id},src={self.source}"

    def __describe__(self, visitor: Visitor[Any]) -> Any:
        return visitor.visit_str(str(self))


@serde(rename_all="kebab-case")
@dataclass
class BuildPodmanArgs:
    """``podman build`` options without a quadlet key."""

    build_arg: list[str] = field(default_factory=list)
    layers: bool | None = None
    no_cache: bool = option(default=False, skip_default=True)
    squash: bool = option(default=False, skip_default=True)

    def is_empty(self) -> bool:
        return self == BuildPodmanArgs()


@serde(rename_all="PascalCase")
@dataclass(kw_only=True)
class Build:
    annotation: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    arch: str | None = None
    auth_file: PurePosixPath | None = None
    dns: list[str] = option(default_factory=list, rename="DNS")
    dns_option: list[str] = option(default_factory=list, rename="DNSOption")
    dns_search: list[str] = option(default_factory=list, rename="DNSSearch")
    environment: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    file: str | None = None
    force_rm: bool = option(default=True, rename="ForceRM", skip_default=True)
    group_add: list[str] = field(default_factory=list)
    image_tag: str
    label: list[str] = option(default_factory=list, serialize_with=quote_spaces_join)
    network: list[str] = field(default_factory=list)
    podman_args: BuildPodmanArgs | None = option(default=None, serialize_with=args_or_none)
    pull: PullPolicy | None = None
    secret: list[BuildSecret] = field(default_factory=list)
    set_working_directory: str | None = None
    target: str | None = None
    tls_verify: bool | None = option(default=None, rename="TLSVerify")
    variant: str | None = None
    volume: list[str] = field(default_factory=list)

    JOIN_KEYS: ClassVar[frozenset[JoinOption]] = frozenset(
        {JoinOption.ANNOTATION, JoinOption.ENVIRONMENT, JoinOption.LABEL}
    )
    EXTENSION: ClassVar[str] = "build"
