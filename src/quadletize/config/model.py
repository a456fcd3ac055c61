# topmark:header:start
#
#   project      : Quadletize
#   file         : model.py
#   file_relpath : src/quadletize/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Configuration model: a mutable builder and a frozen snapshot.

Build a configuration with `MutableConfig` (defaults, then TOML tables, then
CLI overrides) and `freeze` it into a `Config` before use. A frozen `Config`
is never mutated; call `Config.thaw` to derive a new builder.

Recognized keys (in ``quadletize.toml`` or ``[tool.quadletize]``):

| key          | type          | meaning                                       |
|--------------|---------------|-----------------------------------------------|
| output_dir   | string        | directory for generated files (stdout if unset) |
| overwrite    | bool          | replace existing files in ``output_dir``      |
| install      | bool          | always emit an ``[Install]`` section          |
| wanted_by    | list[string]  | ``WantedBy=`` targets used with ``install``   |
| restart      | string        | default ``Restart=`` policy                   |
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from quadletize.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from quadletize.config.logging import QuadletizeLogger

logger: QuadletizeLogger = get_logger(__name__)

DEFAULT_WANTED_BY: Final[tuple[str, ...]] = ("default.target",)


class ConfigError(ValueError):
    """A configuration source is unreadable or holds invalid values."""


@dataclass(frozen=True)
class Config:
    """Immutable configuration snapshot.

    Attributes:
        output_dir (Path | None): Where to write files; None means stdout.
        overwrite (bool): Replace existing files.
        install (bool): Emit an ``[Install]`` section by default.
        wanted_by (tuple[str, ...]): Default ``WantedBy=`` targets.
        restart (str | None): Default restart policy name.
        config_files (tuple[Path, ...]): Files merged into this snapshot.
    """

    output_dir: Path | None
    overwrite: bool
    install: bool
    wanted_by: tuple[str, ...]
    restart: str | None
    config_files: tuple[Path, ...]

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this snapshot."""
        return MutableConfig(
            output_dir=self.output_dir,
            overwrite=self.overwrite,
            install=self.install,
            wanted_by=list(self.wanted_by),
            restart=self.restart,
            config_files=list(self.config_files),
        )


def _expect(value: Any, kind: type | tuple[type, ...], key: str, source: Path | None) -> Any:
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        where: str = f" in {source}" if source else ""
        raise ConfigError(f"invalid value for '{key}'{where}: {value!r}")
    return value


@dataclass
class MutableConfig:
    """Builder for `Config`."""

    output_dir: Path | None = None
    overwrite: bool = False
    install: bool = False
    wanted_by: list[str] = field(default_factory=lambda: list(DEFAULT_WANTED_BY))
    restart: str | None = None
    config_files: list[Path] = field(default_factory=list)

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the built-in defaults."""
        return cls()

    def merge_dict(self, data: Mapping[str, Any], *, source: Path | None = None) -> MutableConfig:
        """Merge a parsed TOML table into this builder.

        Args:
            data (Mapping[str, Any]): The table (top-level keys as documented above).
            source (Path | None): File the table came from, for messages.

        Returns:
            MutableConfig: ``self``, for chaining.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        for key, value in data.items():
            if key == "output_dir":
                raw: str = _expect(value, str, key, source)
                base: Path = source.parent if source is not None else Path.cwd()
                self.output_dir = (base / raw) if raw else None
            elif key == "overwrite":
                self.overwrite = _expect(value, bool, key, source)
            elif key == "install":
                self.install = _expect(value, bool, key, source)
            elif key == "wanted_by":
                items: list[Any] = _expect(value, list, key, source)
                self.wanted_by = [_expect(v, str, key, source) for v in items]
            elif key == "restart":
                self.restart = _expect(value, str, key, source)
            else:
                logger.warning("unknown configuration key '%s'%s", key, f" in {source}" if source else "")
        if source is not None:
            self.config_files.append(source)
        return self

    def freeze(self) -> Config:
        """Return an immutable snapshot of this builder."""
        return Config(
            output_dir=self.output_dir,
            overwrite=self.overwrite,
            install=self.install,
            wanted_by=tuple(self.wanted_by),
            restart=self.restart,
            config_files=tuple(self.config_files),
        )
