# topmark:header:start
#
#   project      : Quadletize
#   file         : test_quadletize_cli.py
#   file_relpath : tests/cli/test_quadletize_cli.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""End-to-end tests for the Quadletize commands.

Every invocation either passes ``--no-config`` or runs inside ``tmp_path`` so
configuration files in the repository are never picked up.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from quadletize.cli.commands.container import default_name
from quadletize.cli.errors import QuadletizeUsageError
from quadletize.cli.exit_codes import ExitCode
from quadletize.cli.options import resolve_verbosity
from quadletize.config.logging import TRACE_LEVEL
from quadletize.constants import QUADLETIZE_VERSION
from tests.cli.conftest import assert_SUCCESS, run_cli, run_cli_in
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


@mark_cli
def test_version() -> None:
    result: Result = run_cli(["--no-config", "version"])
    assert_SUCCESS(result)
    assert result.output.strip() == QUADLETIZE_VERSION


@mark_cli
def test_version_verbose_has_heading() -> None:
    result: Result = run_cli(["--no-config", "-v", "version"])
    assert_SUCCESS(result)
    assert "Quadletize version:" in result.output
    assert QUADLETIZE_VERSION in result.output


@mark_cli
def test_no_subcommand_prints_hint_and_help() -> None:
    result: Result = run_cli(["--no-config"])
    assert_SUCCESS(result)
    assert "Hint:" in result.output
    assert "container" in result.output


@mark_cli
def test_verbose_and_quiet_are_exclusive() -> None:
    result: Result = run_cli(["--no-config", "-v", "-q", "version"])
    assert result.exit_code == ExitCode.USAGE_ERROR
    assert "mutually exclusive" in result.output


@mark_cli
@parametrize(
    "verbose, quiet, level",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (3, 0, TRACE_LEVEL),
        (4, 0, TRACE_LEVEL),
        (0, 1, logging.ERROR),
        (0, 2, logging.ERROR),
    ],
)
def test_resolve_verbosity(verbose: int, quiet: int, level: int) -> None:
    assert resolve_verbosity(verbose, quiet) == level


@mark_cli
def test_resolve_verbosity_conflict() -> None:
    with pytest.raises(QuadletizeUsageError):
        resolve_verbosity(1, 1)


@mark_cli
def test_mount_prints_canonical_specs() -> None:
    result: Result = run_cli(
        ["--no-config", "mount", "type=bind,src=/a,dst=/b,ro", "type=tmpfs,dst=/t,tmpfs-mode=1777"]
    )
    assert_SUCCESS(result)
    assert result.output == (
        "type=bind,source=/a,destination=/b,readonly=true\ntype=tmpfs,destination=/t\n"
    )


@mark_cli
def test_mount_error_prints_nothing_else() -> None:
    result: Result = run_cli(["--no-config", "mount", "type=tmpfs,dst=/t", "source=/a,type=bind"])
    assert result.exit_code == ExitCode.DATA_ERROR
    assert '"type" must be the first mount option' in result.output
    assert "type=tmpfs,destination=/t" not in result.output


@mark_cli
def test_mount_requires_a_spec() -> None:
    result: Result = run_cli(["--no-config", "mount"])
    assert result.exit_code == 2


@mark_cli
@parametrize(
    "image, name",
    [
        ("docker.io/library/nginx:latest", "nginx"),
        ("alpine", "alpine"),
        ("quay.io/org/app@sha256:abc", "app"),
        ("localhost:5000/app:1.0", "app"),
    ],
)
def test_default_name(image: str, name: str) -> None:
    assert default_name(image) == name


@mark_cli
def test_container_to_stdout() -> None:
    result: Result = run_cli(
        [
            "--no-config",
            "container",
            "--name",
            "web",
            "-p",
            "8080:80",
            "-e",
            "TZ=UTC",
            "--mount",
            "type=tmpfs,dst=/tmp",
            "--description",
            "Web server",
            "--restart",
            "unless-stopped",
            "--wanted-by",
            "multi-user.target",
            "docker.io/library/nginx:latest",
        ]
    )
    assert_SUCCESS(result)
    assert result.output == (
        "[Unit]\n"
        "Description=Web server\n"
        "\n"
        "[Container]\n"
        "ContainerName=web\n"
        "Environment=TZ=UTC\n"
        "Image=docker.io/library/nginx:latest\n"
        "Mount=type=tmpfs,destination=/tmp\n"
        "PublishPort=8080:80\n"
        "\n"
        "[Service]\n"
        "Restart=always\n"
        "\n"
        "[Install]\n"
        "WantedBy=multi-user.target\n"
    )


@mark_cli
def test_container_command_and_podman_args() -> None:
    result: Result = run_cli(
        ["--no-config", "container", "-i", "-t", "--cpus", "1.5", "alpine", "--", "sh", "-c", "echo hi"]
    )
    assert_SUCCESS(result)
    assert result.output == (
        "[Container]\n"
        "Exec=sh -c 'echo hi'\n"
        "Image=alpine\n"
        "PodmanArgs=--cpus 1.5 --interactive --tty\n"
    )


@mark_cli
def test_container_volume_and_device() -> None:
    result: Result = run_cli(
        [
            "--no-config",
            "container",
            "--volume",
            "./data:/data:rw,Z",
            "--device",
            "/dev/fuse:mwr",
            "img",
        ]
    )
    assert_SUCCESS(result)
    assert result.output == (
        "[Container]\nAddDevice=/dev/fuse:rwm\nImage=img\nVolume=./data:/data:Z\n"
    )


@mark_cli
@parametrize(
    "option, value",
    [
        ("--mount", "type=nfs,dst=/a"),
        ("--volume", "relative"),
        ("--device", "/dev/fuse:x"),
        ("--restart", "sometimes"),
        ("--pull", "eventually"),
    ],
)
def test_container_bad_option_value_is_usage_error(option: str, value: str) -> None:
    result: Result = run_cli(["--no-config", "container", option, value, "img"])
    assert result.exit_code == 2
    assert "Invalid value" in result.output or "invalid" in result.output


@mark_cli
def test_network_command() -> None:
    result: Result = run_cli(
        [
            "--no-config",
            "network",
            "lan",
            "-d",
            "macvlan",
            "--subnet",
            "10.0.0.0/24",
            "--opt",
            "parent=eth0",
            "--opt",
            "mode=bridge",
            "--interface-name",
            "mv0",
            "--root",
            "/srv/podman",
        ]
    )
    assert_SUCCESS(result)
    assert result.output == (
        "[Network]\n"
        "Driver=macvlan\n"
        "Options=parent=eth0,mode=bridge\n"
        "PodmanArgs=--interface-name mv0\n"
        "Subnet=10.0.0.0/24\n"
        "GlobalArgs=--root /srv/podman\n"
    )


@mark_cli
def test_network_rejects_unknown_driver() -> None:
    result: Result = run_cli(["--no-config", "network", "lan", "-d", "overlay"])
    assert result.exit_code == 2


@mark_cli
def test_volume_command() -> None:
    result: Result = run_cli(
        [
            "--no-config",
            "volume",
            "data",
            "--opt",
            "type=tmpfs",
            "--opt",
            "o=size=1g,uid=1000",
            "--label",
            "a=b",
            "--install",
        ]
    )
    assert_SUCCESS(result)
    assert result.output == (
        "[Volume]\n"
        "Label=a=b\n"
        "Options=size=1g\n"
        "Type=tmpfs\n"
        "User=1000\n"
        "\n"
        "[Install]\n"
        "WantedBy=default.target\n"
    )


@mark_cli
def test_volume_bad_opt() -> None:
    result: Result = run_cli(["--no-config", "volume", "data", "--opt", "bogus"])
    assert result.exit_code == ExitCode.USAGE_ERROR
    assert "`bogus` is not a valid volume driver option" in result.output


@mark_cli
def test_output_dir_and_overwrite_guard(tmp_path: Path) -> None:
    argv: list[str] = ["--no-config", "volume", "data", "-o", "out"]
    target: Path = tmp_path / "out" / "data.volume"

    result: Result = run_cli_in(tmp_path, argv)
    assert_SUCCESS(result)
    assert target.read_text(encoding="utf-8") == "[Volume]\n"
    assert "Wrote" in result.output

    result = run_cli_in(tmp_path, [*argv, "--driver", "local"])
    assert result.exit_code == ExitCode.CANT_CREATE
    assert "already exists" in result.output
    assert target.read_text(encoding="utf-8") == "[Volume]\n"

    result = run_cli_in(tmp_path, [*argv, "--driver", "local", "--overwrite"])
    assert_SUCCESS(result)
    assert target.read_text(encoding="utf-8") == "[Volume]\nPodmanArgs=--driver local\n"


@mark_cli
def test_configuration_is_discovered(tmp_path: Path) -> None:
    (tmp_path / "quadletize.toml").write_text(
        'output_dir = "units"\ninstall = true\nwanted_by = ["multi-user.target"]\n'
        'restart = "on-failure"\n'
    )
    result: Result = run_cli_in(tmp_path, ["container", "nginx"])
    assert_SUCCESS(result)
    assert (tmp_path / "units" / "nginx.container").read_text(encoding="utf-8") == (
        "[Container]\n"
        "Image=nginx\n"
        "\n"
        "[Service]\n"
        "Restart=on-failure\n"
        "\n"
        "[Install]\n"
        "WantedBy=multi-user.target\n"
    )


@mark_cli
def test_flags_override_configuration(tmp_path: Path) -> None:
    (tmp_path / "quadletize.toml").write_text("install = true\noverwrite = true\n")
    result: Result = run_cli_in(tmp_path, ["container", "--no-install", "nginx"])
    assert_SUCCESS(result)
    assert result.output == "[Container]\nImage=nginx\n"


@mark_cli
def test_explicit_config_file(tmp_path: Path) -> None:
    config: Path = tmp_path / "custom.toml"
    config.write_text('restart = "always"\n')
    result: Result = run_cli_in(tmp_path, ["--config", str(config), "volume", "data"])
    assert_SUCCESS(result)
    assert result.output == "[Volume]\n\n[Service]\nRestart=always\n"


@mark_cli
def test_invalid_configuration_exits_with_config_error(tmp_path: Path) -> None:
    (tmp_path / "quadletize.toml").write_text('overwrite = "sometimes"\n')
    result: Result = run_cli_in(tmp_path, ["version"])
    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "invalid value for 'overwrite'" in result.output


@mark_cli
def test_no_config_skips_discovery(tmp_path: Path) -> None:
    (tmp_path / "quadletize.toml").write_text("install = = true\n")
    result: Result = run_cli_in(tmp_path, ["--no-config", "volume", "data"])
    assert_SUCCESS(result)
    assert result.output == "[Volume]\n"


@mark_cli
def test_container_rootfs() -> None:
    result: Result = run_cli(["--no-config", "container", "--rootfs", "/srv/app:O"])
    assert_SUCCESS(result)
    assert result.output == "[Container]\nRootfs=/srv/app:O\n"


@mark_cli
def test_container_bad_rootfs() -> None:
    result: Result = run_cli(["--no-config", "container", "--rootfs", "/srv/app:X"])
    assert result.exit_code == 2
    assert "unknown rootfs option: X" in result.output


@mark_cli
def test_pod_command() -> None:
    result: Result = run_cli(
        ["--no-config", "pod", "app", "-p", "8080:80", "--volume", "data:/data", "--share", "net"]
    )
    assert_SUCCESS(result)
    assert result.output == (
        "[Pod]\nPodmanArgs=--share net\nPublishPort=8080:80\nVolume=data:/data\n"
    )


@mark_cli
def test_kube_command_splits_auto_update_annotations() -> None:
    result: Result = run_cli(
        [
            "--no-config",
            "kube",
            "https://example.com/app.yaml",
            "--annotation",
            "io.containers.autoupdate=registry",
            "--annotation",
            "team=web",
        ]
    )
    assert_SUCCESS(result)
    assert result.output == (
        "[Kube]\n"
        "AutoUpdate=registry\n"
        "PodmanArgs=--annotation team=web\n"
        "Yaml=https://example.com/app.yaml\n"
    )


@mark_cli
def test_kube_file_name_from_yaml(tmp_path: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["--no-config", "kube", "deploy/web.yaml", "-o", "out"])
    assert_SUCCESS(result)
    assert (tmp_path / "out" / "web.kube").read_text(encoding="utf-8") == (
        "[Kube]\nYaml=deploy/web.yaml\n"
    )


@mark_cli
def test_kube_without_file_name_is_usage_error() -> None:
    result: Result = run_cli(["--no-config", "kube", "https://example.com/"])
    assert result.exit_code == ExitCode.USAGE_ERROR
    assert "--name" in result.output


@mark_cli
def test_image_command() -> None:
    result: Result = run_cli(
        ["--no-config", "image", "--tls-verify", "--decryption-key", "/k.pem", "quay.io/org/app:1"]
    )
    assert_SUCCESS(result)
    assert result.output == (
        "[Image]\nDecryptionKey=/k.pem\nImage=quay.io/org/app:1\nTLSVerify=true\n"
    )


@mark_cli
def test_build_command(tmp_path: Path) -> None:
    result: Result = run_cli_in(
        tmp_path,
        [
            "--no-config",
            "build",
            "-t",
            "localhost/app:latest",
            "-f",
            "Containerfile",
            "--secret",
            "src=/s,id=a",
            "-o",
            "out",
            ".",
        ],
    )
    assert_SUCCESS(result)
    assert (tmp_path / "out" / "app.build").read_text(encoding="utf-8") == (
        "[Build]\n"
        "File=Containerfile\n"
        "ImageTag=localhost/app:latest\n"
        "Secret=id=a,src=/s\n"
        "SetWorkingDirectory=.\n"
    )


@mark_cli
def test_build_requires_a_tag() -> None:
    result: Result = run_cli(["--no-config", "build", "."])
    assert result.exit_code == 2


@mark_cli
def test_build_bad_secret() -> None:
    result: Result = run_cli(["--no-config", "build", "-t", "app", "--secret", "id=a"])
    assert result.exit_code == 2
    assert "missing secret `src`" in result.output
