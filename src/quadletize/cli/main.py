# topmark:header:start
#
#   project      : Quadletize
#   file         : main.py
#   file_relpath : src/quadletize/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize command line entry point.

Group-level options (verbosity, configuration) are resolved once and placed
into ``ctx.obj`` for the subcommands:

- ``ctx.obj["verbosity_level"]``: logging level from ``-v``/``-q``.
- ``ctx.obj["log_level"]``: effective logging level (``QUADLETIZE_LOG_LEVEL``
  wins over the flags).
- ``ctx.obj["config"]``: the frozen `Config`.
"""

from __future__ import annotations

from pathlib import Path

import click

from quadletize.cli.commands.build import build_command
from quadletize.cli.commands.container import container_command
from quadletize.cli.commands.image import image_command
from quadletize.cli.commands.kube import kube_command
from quadletize.cli.commands.mount import mount_command
from quadletize.cli.commands.network import network_command
from quadletize.cli.commands.pod import pod_command
from quadletize.cli.commands.version import version_command
from quadletize.cli.commands.volume import volume_command
from quadletize.cli.errors import QuadletizeConfigError
from quadletize.cli.options import common_verbose_options, resolve_verbosity
from quadletize.config.io import load_config
from quadletize.config.logging import get_logger, resolve_env_log_level, setup_logging
from quadletize.config.model import Config, ConfigError

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    config_path: Path | None,
    no_config: bool,
) -> None:
    """Initialize logging and configuration on the Click context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` is populated.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        config_path (Path | None): Explicit configuration file.
        no_config (bool): Skip configuration discovery.

    Raises:
        QuadletizeConfigError: If the configuration cannot be loaded.
    """
    ctx.ensure_object(dict)

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = level_cli

    level_env: int | None = resolve_env_log_level()
    level: int = level_env if level_env is not None else level_cli
    ctx.obj["log_level"] = level
    setup_logging(level=level)

    try:
        config: Config = load_config(config_path, discover=not no_config).freeze()
    except ConfigError as exc:
        raise QuadletizeConfigError(str(exc)) from exc
    logger.debug("configuration files: %s", [str(p) for p in config.config_files] or "none")
    ctx.obj["config"] = config


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Generate podman quadlet files from podman command line options.",
)
@common_verbose_options
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from this file (quadletize.toml or pyproject.toml).",
)
@click.option(
    "--no-config",
    is_flag=True,
    default=False,
    help="Do not look for a configuration file in the working directory.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    config_path: Path | None,
    no_config: bool,
) -> None:
    """Entry point for the Quadletize CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        config_path=config_path,
        no_config=no_config,
    )

    if ctx.invoked_subcommand is None:
        click.echo("Hint: use 'quadletize container IMAGE' to generate a .container file.")
        click.echo()
        click.echo(ctx.get_help())


cli.add_command(container_command)

cli.add_command(pod_command)

cli.add_command(kube_command)

cli.add_command(network_command)

cli.add_command(volume_command)

cli.add_command(build_command)

cli.add_command(image_command)

cli.add_command(mount_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
