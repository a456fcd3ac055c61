# topmark:header:start
#
#   project      : Quadletize
#   file         : file.py
#   file_relpath : src/quadletize/quadlet/file.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Assemble a complete quadlet file from its sections.

Section order: ``[Unit]``, the resource (``[Container]``, ``[Pod]``,
``[Kube]``, ``[Network]``, ``[Volume]``, ``[Build]`` or ``[Image]``, merged
with `Globals`), ``[Service]``, ``[Install]``. Sections are separated by one
blank line. Rendering is all or nothing: if a section fails, `File.render`
raises and nothing is returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from quadletize.config.logging import get_logger
from quadletize.serde import quadlet

if TYPE_CHECKING:
    from quadletize.config.logging import QuadletizeLogger
    from quadletize.quadlet.build import Build
    from quadletize.quadlet.container import Container
    from quadletize.quadlet.globals import Globals
    from quadletize.quadlet.image import Image
    from quadletize.quadlet.install import Install
    from quadletize.quadlet.kube import Kube
    from quadletize.quadlet.network import Network
    from quadletize.quadlet.pod import Pod
    from quadletize.quadlet.service import Service
    from quadletize.quadlet.unit import Unit
    from quadletize.quadlet.volume import Volume

    Resource = Union[Container, Pod, Kube, Network, Volume, Build, Image]

logger: QuadletizeLogger = get_logger(__name__)


def _render(section: Any) -> str:
    return quadlet.to_string(section, getattr(section, "JOIN_KEYS", frozenset()))


@dataclass
class File:
    """A quadlet file: one resource plus optional systemd sections.

    Attributes:
        name (str): File name without extension.
        resource (Resource): The resource section.
        unit (Unit | None): ``[Unit]`` section.
        globals (Globals | None): Options merged into the resource section.
        service (Service | None): ``[Service]`` section.
        install (Install | None): ``[Install]`` section.
    """

    name: str
    resource: Resource
    unit: Unit | None = None
    globals: Globals | None = None
    service: Service | None = None
    install: Install | None = None

    @property
    def file_name(self) -> str:
        """``{name}.{extension}``, e.g. ``web.container``."""
        return f"{self.name}.{self.resource.EXTENSION}"

    def _resource_text(self) -> str:
        join_keys: frozenset[Any] = self.resource.JOIN_KEYS
        if self.globals is None or self.globals.is_empty():
            return quadlet.to_string(self.resource, join_keys)
        return quadlet.to_string((self.resource, self.globals), join_keys)

    def render(self) -> str:
        """Render the file text.

        Returns:
            str: All sections, separated by blank lines.

        Raises:
            SerdeError: If any section cannot be serialized.
        """
        sections: list[str] = []
        if self.unit is not None and not self.unit.is_empty():
            sections.append(_render(self.unit))
        sections.append(self._resource_text())
        if self.service is not None and not self.service.is_empty():
            sections.append(_render(self.service))
        if self.install is not None:
            sections.append(_render(self.install))
        logger.debug("rendered %s with %d sections", self.file_name, len(sections))
        return "\n".join(sections)
