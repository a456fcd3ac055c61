# topmark:header:start
#
#   project      : Quadletize
#   file         : image.py
#   file_relpath : src/quadletize/quadlet/image.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Image]`` resource section (``podman image pull``)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, ClassVar

from quadletize.quadlet.globals import args_or_none
from quadletize.serde.quadlet import JoinOption
from quadletize.serde.shape import option, serde

if TYPE_CHECKING:
    from quadletize.serde.shape import Visitor


@dataclass(frozen=True)
class DecryptionKey:
    """Key file, and optional passphrase, for decrypting an image.

    Text form: ``KEY[:PASSPHRASE]``. Only the first ``:`` separates the two,
    so passphrases may contain colons.
    """

    key: PurePosixPath
    passphrase: str | None = None

    @classmethod
    def parse(cls, text: str) -> DecryptionKey:
        key, sep, passphrase = text.partition(":")
        return cls(key=PurePosixPath(key), passphrase=passphrase if sep else None)

    def __str__(self) -> str:
        if self.passphrase is None:
            return str(self.key)
        return f"{self.key}:{self.passphrase}"

    def __describe__(self, visitor: Visitor[Any]) -> Any:
        return visitor.visit_str(str(self))


@serde(rename_all="kebab-case")
@dataclass
class ImagePodmanArgs:
    """``podman image pull`` options without a quadlet key."""

    platform: str | None = None
    quiet: bool = option(default=False, skip_default=True)
    retry: int | None = None
    retry_delay: str | None = None

    def is_empty(self) -> bool:
        return self == ImagePodmanArgs()


@serde(rename_all="PascalCase")
@dataclass(kw_only=True)
class Image:
    all_tags: bool = option(default=False, skip_default=True)
    arch: str | None = None
    auth_file: PurePosixPath | None = None
    cert_dir: PurePosixPath | None = None
    creds: str | None = None
    decryption_key: DecryptionKey | None = None
    image: str
    image_tag: str | None = None
    os: str | None = option(default=None, rename="OS")
    podman_args: ImagePodmanArgs | None = option(default=None, serialize_with=args_or_none)
    tls_verify: bool | None = option(default=None, rename="TLSVerify")
    variant: str | None = None

    JOIN_KEYS: ClassVar[frozenset[JoinOption]] = frozenset()
    EXTENSION: ClassVar[str] = "image"
