# topmark:header:start
#
#   project      : Quadletize
#   file         : test_config_loading.py
#   file_relpath : tests/config/test_config_loading.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Tests for configuration discovery and TOML loading."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from quadletize.config import ConfigError
from quadletize.config.io import (
    discover_config_file,
    extract_table,
    load_config,
    load_toml_dict,
)
from tests.conftest import mark_config

if TYPE_CHECKING:
    from quadletize.config import Config


@mark_config
def test_no_file_uses_defaults(isolation: Path) -> None:
    assert discover_config_file(isolation) is None
    config: Config = load_config().freeze()
    assert config.config_files == ()
    assert config.output_dir is None


@mark_config
def test_quadletize_toml_is_discovered(isolation: Path) -> None:
    (isolation / "quadletize.toml").write_text('output_dir = "units"\ninstall = true\n')
    config: Config = load_config().freeze()
    assert config.output_dir == isolation / "units"
    assert config.install is True
    assert config.config_files == (isolation / "quadletize.toml",)


@mark_config
def test_pyproject_tool_table_is_discovered(isolation: Path) -> None:
    (isolation / "pyproject.toml").write_text(
        '[project]\nname = "x"\n\n[tool.quadletize]\nrestart = "always"\n'
    )
    assert discover_config_file(isolation) == isolation / "pyproject.toml"
    assert load_config().freeze().restart == "always"


@mark_config
def test_pyproject_without_table_is_skipped(isolation: Path) -> None:
    (isolation / "pyproject.toml").write_text('[project]\nname = "x"\n')
    assert discover_config_file(isolation) is None


@mark_config
def test_quadletize_toml_wins_over_pyproject(isolation: Path) -> None:
    (isolation / "pyproject.toml").write_text("[tool.quadletize]\noverwrite = true\n")
    (isolation / "quadletize.toml").write_text("overwrite = false\n")
    assert discover_config_file(isolation) == isolation / "quadletize.toml"
    assert load_config().freeze().overwrite is False


@mark_config
def test_explicit_path_and_no_discovery(isolation: Path, tmp_path: Path) -> None:
    (isolation / "quadletize.toml").write_text("install = true\n")
    explicit: Path = tmp_path / "other.toml"
    explicit.write_text('wanted_by = ["multi-user.target"]\n')

    config: Config = load_config(explicit).freeze()
    assert config.install is False
    assert config.wanted_by == ("multi-user.target",)

    assert load_config(discover=False).freeze().install is False


@mark_config
def test_explicit_pyproject_without_table_gives_defaults(tmp_path: Path) -> None:
    path: Path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "x"\n')
    assert load_config(path).freeze().config_files == ()


@mark_config
def test_extract_table() -> None:
    data = {"tool": {"quadletize": {"install": True}}}
    assert extract_table(Path("pyproject.toml"), data) == {"install": True}
    assert extract_table(Path("pyproject.toml"), {"tool": {}}) is None
    assert extract_table(Path("quadletize.toml"), {"install": True}) == {"install": True}


@mark_config
def test_invalid_toml_raises(tmp_path: Path) -> None:
    path: Path = tmp_path / "quadletize.toml"
    path.write_text("install = = true\n")
    with pytest.raises(ConfigError, match="invalid TOML"):
        load_toml_dict(path)


@mark_config
def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="cannot read"):
        load_config(tmp_path / "absent.toml")


@mark_config
def test_invalid_value_in_file_raises(tmp_path: Path) -> None:
    path: Path = tmp_path / "quadletize.toml"
    path.write_text('overwrite = "sometimes"\n')
    with pytest.raises(ConfigError, match="invalid value for 'overwrite'"):
        load_config(path)
