# topmark:header:start
#
#   project      : Quadletize
#   file         : container.py
#   file_relpath : src/quadletize/cli/commands/container.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize `container` command.

Takes ``podman run`` style options and produces a ``.container`` file::

    quadletize container --name web -p 8080:80 --mount type=tmpfs,dst=/tmp \\
        docker.io/library/nginx:latest
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

import click

from quadletize.cli.cli_types import EnumChoiceParam, ParsedParam
from quadletize.cli.cmd_common import build_file, emit_file
from quadletize.cli.options import global_options, output_options, section_options
from quadletize.config.logging import get_logger
from quadletize.quadlet.container import AutoUpdate, Container, ContainerPodmanArgs, PullPolicy
from quadletize.quadlet.container.device import Device
from quadletize.quadlet.container.mount import parse_mount
from quadletize.quadlet.container.rootfs import Rootfs
from quadletize.quadlet.container.volume import Volume

if TYPE_CHECKING:
    from pathlib import Path

    from quadletize.config.logging import QuadletizeLogger
    from quadletize.quadlet.container.mount import Mount

logger: QuadletizeLogger = get_logger(__name__)


def default_name(image: str) -> str:
    """Derive a file name from an image reference.

    ``docker.io/library/nginx:latest`` gives ``nginx``.
    """
    name: str = image.rsplit("/", 1)[-1]
    name = name.split("@", 1)[0]
    return name.split(":", 1)[0] or "container"


@click.command(
    name="container",
    help="Generate a .container quadlet from podman run options.",
)
@click.argument("image")
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
@click.option("--name", type=str, default=None, help="Container and file name.")
@click.option(
    "--rootfs",
    "rootfs",
    is_flag=True,
    default=False,
    help="Treat IMAGE as an exploded container directory, 'PATH[:[O][,idmap[=IDMAP]]]'.",
)
@click.option(
    "--mount",
    "mounts",
    type=ParsedParam(parse_mount, "mount"),
    multiple=True,
    help="Attach a filesystem mount, e.g. 'type=bind,src=/a,dst=/b'. Repeatable.",
)
@click.option(
    "--volume",
    "volumes",
    type=ParsedParam(Volume.parse, "volume"),
    multiple=True,
    help="Bind mount a volume, '[SOURCE:]CONTAINER-DIR[:OPTIONS]'. Repeatable.",
)
@click.option(
    "--device",
    "devices",
    type=ParsedParam(Device.parse, "device"),
    multiple=True,
    help="Add a host device, 'HOST[:CONTAINER][:PERMISSIONS]'. Repeatable.",
)
@click.option("-p", "--publish", "publish", multiple=True, help="Publish a port. Repeatable.")
@click.option("--expose", "expose", multiple=True, help="Expose a port to the host. Repeatable.")
@click.option("-e", "--env", "env", multiple=True, help="Set an environment variable. Repeatable.")
@click.option("--env-file", "env_file", multiple=True, help="Read environment from a file. Repeatable.")
@click.option("-l", "--label", "labels", multiple=True, help="Set a label. Repeatable.")
@click.option("--annotation", "annotations", multiple=True, help="Set an annotation. Repeatable.")
@click.option("--cap-add", "cap_add", multiple=True, help="Add a Linux capability. Repeatable.")
@click.option("--cap-drop", "cap_drop", multiple=True, help="Drop a Linux capability. Repeatable.")
@click.option("--sysctl", "sysctls", multiple=True, help="Set a namespaced kernel parameter. Repeatable.")
@click.option("--dns", "dns", multiple=True, help="Set a DNS server. Repeatable.")
@click.option("--network", "networks", multiple=True, help="Connect to a network. Repeatable.")
@click.option("--secret", "secrets", multiple=True, help="Give the container a secret. Repeatable.")
@click.option("--tmpfs", "tmpfs", multiple=True, help="Mount a tmpfs, 'PATH[:OPTIONS]'. Repeatable.")
@click.option("--mask", "masks", multiple=True, help="Mask a path in the container. Repeatable.")
@click.option("--entrypoint", type=str, default=None, help="Override the image entrypoint.")
@click.option("--hostname", type=str, default=None, help="Container host name.")
@click.option("--ip", type=str, default=None, help="Static IPv4 address.")
@click.option("--ip6", type=str, default=None, help="Static IPv6 address.")
@click.option("--user", type=str, default=None, help="Run as this user.")
@click.option("--group", type=str, default=None, help="Run as this group.")
@click.option("--userns", type=str, default=None, help="User namespace mode.")
@click.option("-w", "--workdir", type=str, default=None, help="Working directory inside the container.")
@click.option("--tz", type=str, default=None, help="Container time zone.")
@click.option("--health-cmd", type=str, default=None, help="Health check command.")
@click.option("--health-interval", type=str, default=None, help="Health check interval.")
@click.option("--log-driver", type=str, default=None, help="Logging driver.")
@click.option("--shm-size", type=str, default=None, help="Size of /dev/shm.")
@click.option("--pids-limit", type=int, default=None, help="Process limit.")
@click.option("--stop-timeout", type=int, default=None, help="Seconds to wait before killing.")
@click.option(
    "--pull",
    type=EnumChoiceParam(PullPolicy),
    default=None,
    help="Image pull policy.",
)
@click.option(
    "--auto-update",
    type=EnumChoiceParam(AutoUpdate),
    default=None,
    help="Auto-update policy.",
)
@click.option("--read-only", is_flag=True, default=False, help="Mount the root filesystem read-only.")
@click.option("--init", "run_init", is_flag=True, default=False, help="Run an init inside the container.")
@click.option("--no-new-privileges", is_flag=True, default=False, help="Disallow privilege escalation.")
@click.option("--sdnotify-container", "notify", is_flag=True, default=False, help="Let the container notify systemd.")
@click.option("--add-host", "add_hosts", multiple=True, help="Add a host-to-IP mapping. Repeatable.")
@click.option("--cpu-shares", type=int, default=None, help="CPU shares.")
@click.option("--cpus", type=float, default=None, help="Number of CPUs.")
@click.option("-m", "--memory", type=str, default=None, help="Memory limit.")
@click.option("--security-opt", "security_opts", multiple=True, help="Security option. Repeatable.")
@click.option("--privileged", is_flag=True, default=False, help="Give extended privileges.")
@click.option("-i", "--interactive", is_flag=True, default=False, help="Keep STDIN open.")
@click.option("-t", "--tty", is_flag=True, default=False, help="Allocate a pseudo-TTY.")
@section_options
@global_options
@output_options
@click.pass_context
def container_command(
    ctx: click.Context,
    *,
    image: str,
    command: tuple[str, ...],
    name: str | None,
    rootfs: bool,
    mounts: tuple[Mount, ...],
    volumes: tuple[Volume, ...],
    devices: tuple[Device, ...],
    publish: tuple[str, ...],
    expose: tuple[str, ...],
    env: tuple[str, ...],
    env_file: tuple[str, ...],
    labels: tuple[str, ...],
    annotations: tuple[str, ...],
    cap_add: tuple[str, ...],
    cap_drop: tuple[str, ...],
    sysctls: tuple[str, ...],
    dns: tuple[str, ...],
    networks: tuple[str, ...],
    secrets: tuple[str, ...],
    tmpfs: tuple[str, ...],
    masks: tuple[str, ...],
    entrypoint: str | None,
    hostname: str | None,
    ip: str | None,
    ip6: str | None,
    user: str | None,
    group: str | None,
    userns: str | None,
    workdir: str | None,
    tz: str | None,
    health_cmd: str | None,
    health_interval: str | None,
    log_driver: str | None,
    shm_size: str | None,
    pids_limit: int | None,
    stop_timeout: int | None,
    pull: PullPolicy | None,
    auto_update: AutoUpdate | None,
    read_only: bool,
    run_init: bool,
    no_new_privileges: bool,
    notify: bool,
    add_hosts: tuple[str, ...],
    cpu_shares: int | None,
    cpus: float | None,
    memory: str | None,
    security_opts: tuple[str, ...],
    privileged: bool,
    interactive: bool,
    tty: bool,
    output_dir: Path | None,
    overwrite: bool | None,
    **shared: Any,
) -> None:
    """Generate a ``.container`` quadlet file."""
    podman_args = ContainerPodmanArgs(
        add_host=list(add_hosts),
        cpu_shares=cpu_shares,
        cpus=cpus,
        interactive=interactive,
        memory=memory,
        privileged=privileged,
        security_opt=list(security_opts),
        tty=tty,
    )
    root: Rootfs | None = None
    if rootfs:
        try:
            root = Rootfs.parse(image)
        except ValueError as exc:
            raise click.BadParameter(str(exc), ctx=ctx, param_hint="'IMAGE'") from exc
    container = Container(
        image=None if root is not None else image,
        rootfs=root,
        exec_=list(command),
        container_name=name,
        mount=list(mounts),
        volume=list(volumes),
        add_device=list(devices),
        publish_port=list(publish),
        expose_host_port=list(expose),
        environment=list(env),
        environment_file=[PurePosixPath(p) for p in env_file],
        label=list(labels),
        annotation=list(annotations),
        add_capability=list(cap_add),
        drop_capability=list(cap_drop),
        sysctl=list(sysctls),
        dns=list(dns),
        network=list(networks),
        secret=list(secrets),
        tmpfs=list(tmpfs),
        mask=list(masks),
        entrypoint=entrypoint,
        host_name=hostname,
        ip=ip,
        ip6=ip6,
        user=user,
        group=group,
        user_ns=userns,
        working_dir=PurePosixPath(workdir) if workdir else None,
        timezone=tz,
        health_cmd=health_cmd,
        health_interval=health_interval,
        log_driver=log_driver,
        shm_size=shm_size,
        pids_limit=pids_limit,
        stop_timeout=stop_timeout,
        pull=pull,
        auto_update=auto_update,
        read_only=read_only,
        run_init=run_init,
        no_new_privileges=no_new_privileges,
        notify=notify,
        podman_args=None if podman_args.is_empty() else podman_args,
    )
    file_name: str = name or (default_name(root.path) if root is not None else default_name(image))
    logger.debug("building %s.container from image %s", file_name, image)
    emit_file(
        ctx,
        build_file(ctx, file_name, container, shared),
        output_dir=output_dir,
        overwrite=overwrite,
    )
