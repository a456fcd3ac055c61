# topmark:header:start
#
#   project      : Quadletize
#   file         : io.py
#   file_relpath : src/quadletize/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Locate and read TOML configuration files.

Parsing is done with `tomlkit`; tables are returned as plain ``dict`` values.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from quadletize.config.logging import get_logger
from quadletize.config.model import ConfigError, MutableConfig

if TYPE_CHECKING:
    from quadletize.config.logging import QuadletizeLogger

logger: QuadletizeLogger = get_logger(__name__)

CONFIG_FILE_NAME: Final[str] = "quadletize.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"


def load_toml_dict(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path (Path): The TOML document.

    Returns:
        dict[str, Any]: The parsed content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"cannot read {path}: {e}") from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigError(f"invalid TOML in {path}: {e}") from e
    data: Any = doc.unwrap()
    return data if isinstance(data, dict) else {}


def extract_table(path: Path, data: dict[str, Any]) -> dict[str, Any] | None:
    """Return the quadletize table of a parsed file, or None if it has none.

    ``pyproject.toml`` keeps its settings under ``[tool.quadletize]``; any
    other file is the table itself.
    """
    if path.name != PYPROJECT_FILE_NAME:
        return data
    tool: Any = data.get("tool", {})
    table: Any = tool.get("quadletize") if isinstance(tool, dict) else None
    return table if isinstance(table, dict) else None


def discover_config_file(directory: Path) -> Path | None:
    """Find the configuration file that applies to ``directory``.

    ``quadletize.toml`` wins over a ``pyproject.toml`` with a
    ``[tool.quadletize]`` table.
    """
    candidate: Path = directory / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate
    pyproject: Path = directory / PYPROJECT_FILE_NAME
    if pyproject.is_file() and extract_table(pyproject, load_toml_dict(pyproject)) is not None:
        return pyproject
    return None


def load_config(path: Path | None = None, *, discover: bool = True) -> MutableConfig:
    """Build a configuration from defaults and one optional file.

    Args:
        path (Path | None): Explicit configuration file.
        discover (bool): Look for a configuration file in the working
            directory when ``path`` is None.

    Returns:
        MutableConfig: The merged builder, ready for CLI overrides.

    Raises:
        ConfigError: If the file is unreadable or holds invalid values.
    """
    config: MutableConfig = MutableConfig.from_defaults()
    if path is None and discover:
        path = discover_config_file(Path.cwd())
    if path is None:
        logger.debug("no configuration file, using defaults")
        return config

    logger.info("loading configuration from %s", path)
    table: dict[str, Any] | None = extract_table(path, load_toml_dict(path))
    if table is None:
        logger.warning("%s has no [tool.quadletize] table", path)
        return config
    return config.merge_dict(table, source=path)
