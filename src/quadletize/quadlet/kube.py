# topmark:header:start
#
#   project      : Quadletize
#   file         : kube.py
#   file_relpath : src/quadletize/quadlet/kube.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""The ``[Kube]`` resource section (``podman kube play``).

``Yaml=`` is a path, absolute or relative to the unit file, or a URL. Per
container auto-update policies come from ``io.containers.autoupdate``
annotations, see `extract_auto_updates`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, ClassVar, Final
from urllib.parse import urlsplit

from quadletize.config.logging import get_logger
from quadletize.quadlet.container import AutoUpdate
from quadletize.quadlet.globals import args_or_none
from quadletize.serde.quadlet import JoinOption
from quadletize.serde.shape import option, serde

if TYPE_CHECKING:
    from collections.abc import Iterable

    from quadletize.config.logging import QuadletizeLogger
    from quadletize.serde.shape import Visitor

logger: QuadletizeLogger = get_logger(__name__)

#: Annotation read by ``podman auto-update``.
AUTO_UPDATE_ANNOTATION: Final[str] = "io.containers.autoupdate"


@dataclass(frozen=True)
class KubeAutoUpdate:
    """An ``AutoUpdate=`` value: a policy for all containers, or for one.

    Renders as ``registry`` or ``CONTAINER/registry``.
    """

    policy: AutoUpdate
    container: str | None = None

    @classmethod
    def from_annotation(cls, annotation: str) -> KubeAutoUpdate | None:
        """Parse ``io.containers.autoupdate[/CONTAINER]=POLICY``.

        Returns:
            KubeAutoUpdate | None: The policy, or None if ``annotation`` is not
            a valid auto-update annotation.
        """
        if not annotation.startswith(AUTO_UPDATE_ANNOTATION):
            return None
        target, sep, value = annotation[len(AUTO_UPDATE_ANNOTATION) :].partition("=")
        if not sep:
            return None
        try:
            policy = AutoUpdate(value)
        except ValueError:
            return None
        if not target:
            return cls(policy=policy)
        if target.startswith("/"):
            return cls(policy=policy, container=target[1:])
        return None

    def to_annotation(self) -> str:
        if self.container is None:
            return f"{AUTO_UPDATE_ANNOTATION}={self.policy.value}"
        return f"{AUTO_UPDATE_ANNOTATION}/{self.container}={self.policy.value}"

    def __str__(self) -> str:
        if self.container is None:
            return str(self.policy.value)
        return f"{self.container}/{self.policy.value}"

    def __describe__(self, visitor: Visitor[Any]) -> Any:
        return visitor.visit_str(str(self))


def extract_auto_updates(
    annotations: Iterable[str],
) -> tuple[list[KubeAutoUpdate], list[str]]:
    """Split auto-update annotations from the rest.

    Annotations with the auto-update key but an invalid value are kept with
    the other annotations.

    Args:
        annotations (Iterable[str]): ``key=value`` annotations.

    Returns:
        tuple[list[KubeAutoUpdate], list[str]]: Parsed policies in input order,
        and the remaining annotations.
    """
    updates: list[KubeAutoUpdate] = []
    rest: list[str] = []
    for annotation in annotations:
        update: KubeAutoUpdate | None = KubeAutoUpdate.from_annotation(annotation)
        if update is None:
            rest.append(annotation)
        else:
            updates.append(update)
    logger.trace("extracted %d auto-update annotations", len(updates))
    return updates, rest


def is_url(text: str) -> bool:
    parts = urlsplit(text)
    return len(parts.scheme) > 1 and bool(parts.netloc or parts.path)


def yaml_name(yaml: str) -> str | None:
    """Name of the YAML file without its extension.

    ``https://example.com/test.yaml`` and ``test.yaml`` both give ``test``.
    """
    if is_url(yaml):
        last: str = urlsplit(yaml).path.rsplit("/", 1)[-1]
        return last.split(".", 1)[0] or None
    return PurePosixPath(yaml).stem or None


@serde(rename_all="kebab-case")
@dataclass
class KubePodmanArgs:
    """``podman kube play`` options without a quadlet key."""

    annotation: list[str] = field(default_factory=list)
    build: bool | None = None
    context_dir: PurePosixPath | None = None
    log_opt: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self == KubePodmanArgs()


@serde(rename_all="PascalCase")
@dataclass(kw_only=True)
class Kube:
    auto_update: list[KubeAutoUpdate] = field(default_factory=list)
    config_map: list[PurePosixPath] = field(default_factory=list)
    log_driver: str | None = None
    network: list[str] = field(default_factory=list)
    podman_args: KubePodmanArgs | None = option(default=None, serialize_with=args_or_none)
    publish_port: list[str] = field(default_factory=list)
    user_ns: str | None = option(default=None, rename="UserNS")
    yaml: str

    JOIN_KEYS: ClassVar[frozenset[JoinOption]] = frozenset()
    EXTENSION: ClassVar[str] = "kube"
