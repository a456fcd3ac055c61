# topmark:header:start
#
#   project      : Quadletize
#   file         : cmd_common.py
#   file_relpath : src/quadletize/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Helpers shared by the resource commands.

The commands stay thin: they build their resource section and hand it to
`build_file`, which adds the systemd sections from the shared options and
the configuration, then `emit_file` renders and writes the result.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

import click

from quadletize.cli.errors import (
    QuadletizeDataError,
    QuadletizeFileExistsError,
    QuadletizeIOError,
)
from quadletize.config.logging import get_logger
from quadletize.config.model import Config, MutableConfig
from quadletize.quadlet.file import File
from quadletize.quadlet.globals import Globals, PodmanGlobalArgs
from quadletize.quadlet.install import Install
from quadletize.quadlet.service import RestartPolicy, Service
from quadletize.quadlet.unit import Unit
from quadletize.serde.errors import SerdeError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from quadletize.config.logging import QuadletizeLogger
    from quadletize.quadlet.file import Resource
    from quadletize.quadlet.globals import CgroupManager

logger: QuadletizeLogger = get_logger(__name__)


def get_config(ctx: click.Context) -> Config:
    """Return the configuration loaded by the group, or the defaults."""
    ctx.ensure_object(dict)
    config: Config | None = ctx.obj.get("config")
    if config is None:
        config = MutableConfig.from_defaults().freeze()
        ctx.obj["config"] = config
    return config


def build_unit(
    *,
    description: str | None,
    wants: Sequence[str],
    requires: Sequence[str],
    before: Sequence[str],
    after: Sequence[str],
) -> Unit:
    return Unit(
        description=description,
        wants=list(wants),
        requires=list(requires),
        before=list(before),
        after=list(after),
    )


def build_service(
    config: Config,
    *,
    restart: RestartPolicy | None,
    timeout_start_sec: int | None,
) -> Service:
    """Build ``[Service]``, falling back to the configured restart policy."""
    if restart is None and config.restart is not None:
        restart = RestartPolicy.parse(config.restart)
        if restart is None:
            logger.warning("ignoring unknown configured restart policy %r", config.restart)
    return Service(restart=restart, timeout_start_sec=timeout_start_sec)


def build_install(
    config: Config,
    *,
    install: bool | None,
    wanted_by: Sequence[str],
    required_by: Sequence[str],
) -> Install | None:
    """Build ``[Install]`` when requested by a flag, a target or the configuration.

    ``--no-install`` wins over everything else.
    """
    if install is False:
        return None
    if install is None and not wanted_by and not required_by and not config.install:
        return None
    return Install.from_targets(wanted_by, required_by, default_wanted_by=config.wanted_by)


def build_globals(
    *,
    containers_conf_module: Sequence[str],
    cgroup_manager: CgroupManager | None,
    root: str | None,
    runroot: str | None,
    storage_driver: str | None,
    storage_opt: Sequence[str],
    syslog: bool,
) -> Globals:
    global_args = PodmanGlobalArgs(
        cgroup_manager=cgroup_manager,
        root=PurePosixPath(root) if root else None,
        runroot=PurePosixPath(runroot) if runroot else None,
        storage_driver=storage_driver,
        storage_opt=list(storage_opt),
        syslog=syslog,
    )
    return Globals(
        containers_conf_module=[PurePosixPath(p) for p in containers_conf_module],
        global_args=None if global_args.is_empty() else global_args,
    )


def build_file(ctx: click.Context, name: str, resource: Resource, options: dict[str, Any]) -> File:
    """Wrap ``resource`` with the sections described by the shared options.

    Args:
        ctx (click.Context): Current context, used for the configuration.
        name (str): File name without extension.
        resource (Resource): The resource section.
        options (dict[str, Any]): Values of the `section_options` and
            `global_options` parameters.

    Returns:
        File: The assembled quadlet file.
    """
    config: Config = get_config(ctx)
    return File(
        name=name,
        resource=resource,
        unit=build_unit(
            description=options["description"],
            wants=options["wants"],
            requires=options["requires"],
            before=options["before"],
            after=options["after"],
        ),
        globals=build_globals(
            containers_conf_module=options["containers_conf_module"],
            cgroup_manager=options["cgroup_manager"],
            root=options["root"],
            runroot=options["runroot"],
            storage_driver=options["storage_driver"],
            storage_opt=options["storage_opt"],
            syslog=options["syslog"],
        ),
        service=build_service(
            config,
            restart=options["restart"],
            timeout_start_sec=options["timeout_start_sec"],
        ),
        install=build_install(
            config,
            install=options["install"],
            wanted_by=options["wanted_by"],
            required_by=options["required_by"],
        ),
    )


def emit_file(
    ctx: click.Context,
    file: File,
    *,
    output_dir: Path | None,
    overwrite: bool | None,
) -> Path | None:
    """Render ``file`` and print it, or write it into the output directory.

    Args:
        ctx (click.Context): Current context, used for the configuration.
        file (File): The file to render.
        output_dir (Path | None): Directory from the command line; falls back
            to the configured one. None on both means stdout.
        overwrite (bool | None): Flag from the command line; falls back to
            the configured value.

    Returns:
        Path | None: The written path, or None when printed to stdout.

    Raises:
        QuadletizeDataError: If rendering fails.
        QuadletizeFileExistsError: If the target exists and overwriting is off.
        QuadletizeIOError: If writing fails.
    """
    config: Config = get_config(ctx)
    try:
        text: str = file.render()
    except SerdeError as exc:
        raise QuadletizeDataError(f"cannot render {file.file_name}: {exc}") from exc

    directory: Path | None = output_dir if output_dir is not None else config.output_dir
    if directory is None:
        click.echo(text, nl=False)
        return None

    path: Path = directory / file.file_name
    if overwrite is None:
        overwrite = config.overwrite
    if path.exists() and not overwrite:
        raise QuadletizeFileExistsError(f"{path} already exists (use --overwrite to replace it)")

    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        logger.error("failed to write %s: %s", path, exc)
        raise QuadletizeIOError(f"cannot write {path}: {exc}") from exc

    logger.info("wrote %s", path)
    click.echo(f"Wrote {path}", err=True)
    return path
