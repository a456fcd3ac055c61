# topmark:header:start
#
#   project      : Quadletize
#   file         : options.py
#   file_relpath : src/quadletize/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Reusable CLI options for the Quadletize commands.

Verbosity is shared by the group; the systemd section, podman global and
output options are shared by the ``container``, ``network`` and ``volume``
commands so they accept the same flags.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from quadletize.cli.cli_types import EnumChoiceParam
from quadletize.cli.errors import QuadletizeUsageError
from quadletize.config.logging import TRACE_LEVEL
from quadletize.quadlet.globals import CgroupManager
from quadletize.quadlet.service import RestartPolicy

P = ParamSpec("P")
R = TypeVar("R")

LOG_LEVELS = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the logging level from ``-v`` and ``-q`` counts.

    Args:
        verbose_count: Number of times ``-v`` was passed.
        quiet_count: Number of times ``-q`` was passed.

    Returns:
        The logging level as an integer.

    Raises:
        QuadletizeUsageError: If both flags are used together.

    Behavior:
        Three or more -v flags set TRACE level.
        Two -v flags set DEBUG level.
        One -v flag sets INFO level.
        One or more -q flags set ERROR level.
        Default level is WARNING.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise QuadletizeUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return LOG_LEVELS["TRACE"]
    if verbose_count == 2:  # -vv
        return LOG_LEVELS["DEBUG"]
    if verbose_count == 1:  # -v
        return LOG_LEVELS["INFO"]

    if quiet_count >= 1:  # -q
        return LOG_LEVELS["ERROR"]

    return LOG_LEVELS["WARNING"]


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counted ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Repeat up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


def section_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``[Unit]``, ``[Service]`` and ``[Install]`` options.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function.
    """
    f = click.option(
        "--description",
        type=str,
        default=None,
        help="Unit description (Description=).",
    )(f)
    for name, key in (
        ("wants", "Wants"),
        ("requires", "Requires"),
        ("before", "Before"),
        ("after", "After"),
    ):
        f = click.option(
            f"--{name}",
            name,
            multiple=True,
            metavar="UNIT",
            help=f"Add a unit to {key}=. Repeatable.",
        )(f)
    f = click.option(
        "--restart",
        type=EnumChoiceParam(RestartPolicy),
        default=None,
        help="Service restart policy (Restart=). 'unless-stopped' maps to 'always'.",
    )(f)
    f = click.option(
        "--timeout-start-sec",
        type=click.IntRange(min=0),
        default=None,
        help="Service start timeout in seconds (TimeoutStartSec=).",
    )(f)
    f = click.option(
        "--install/--no-install",
        "install",
        default=None,
        help="Emit an [Install] section. Defaults to the configured value.",
    )(f)
    f = click.option(
        "--wanted-by",
        "wanted_by",
        multiple=True,
        metavar="UNIT",
        help="Add a target to WantedBy=. Implies --install. Repeatable.",
    )(f)
    f = click.option(
        "--required-by",
        "required_by",
        multiple=True,
        metavar="UNIT",
        help="Add a target to RequiredBy=. Implies --install. Repeatable.",
    )(f)
    return f


def global_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the options shared by every resource section.

    Covers ``ContainersConfModule=`` and the podman global arguments that end
    up in ``GlobalArgs=``.
    """
    f = click.option(
        "--containers-conf-module",
        "containers_conf_module",
        multiple=True,
        metavar="PATH",
        help="Load a containers.conf module (ContainersConfModule=). Repeatable.",
    )(f)
    f = click.option(
        "--cgroup-manager",
        type=EnumChoiceParam(CgroupManager),
        default=None,
        help="podman --cgroup-manager.",
    )(f)
    f = click.option("--root", type=str, default=None, help="podman --root.")(f)
    f = click.option("--runroot", type=str, default=None, help="podman --runroot.")(f)
    f = click.option("--storage-driver", type=str, default=None, help="podman --storage-driver.")(f)
    f = click.option(
        "--storage-opt",
        multiple=True,
        help="podman --storage-opt. Repeatable.",
    )(f)
    f = click.option("--syslog", is_flag=True, default=False, help="podman --syslog.")(f)
    return f


def output_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-o/--output-dir`` and ``--overwrite``."""
    f = click.option(
        "-o",
        "--output-dir",
        "output_dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Write the quadlet file into this directory instead of stdout.",
    )(f)
    f = click.option(
        "--overwrite/--no-overwrite",
        "overwrite",
        default=None,
        help="Replace an existing file in the output directory.",
    )(f)
    return f
