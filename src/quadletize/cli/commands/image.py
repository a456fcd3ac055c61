# topmark:header:start
#
#   project      : Quadletize
#   file         : image.py
#   file_relpath : src/quadletize/cli/commands/image.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadletize `image` command (``podman image pull`` options to a ``.image`` file)."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

import click

from quadletize.cli.cli_types import ParsedParam
from quadletize.cli.cmd_common import build_file, emit_file
from quadletize.cli.commands.container import default_name
from quadletize.cli.options import global_options, output_options, section_options
from quadletize.quadlet.image import DecryptionKey, Image, ImagePodmanArgs

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="image",
    help="Generate a .image quadlet from podman image pull options.",
)
@click.argument("image")
@click.option("--name", type=str, default=None, help="File name; defaults to the image name.")
@click.option("-a", "--all-tags", is_flag=True, default=False, help="Pull all tagged images.")
@click.option("--arch", type=str, default=None, help="Architecture to pull.")
@click.option("--authfile", type=str, default=None, help="Authentication file.")
@click.option("--cert-dir", type=str, default=None, help="Registry certificate directory.")
@click.option("--creds", type=str, default=None, help="Registry credentials, 'USER[:PASSWORD]'.")
@click.option(
    "--decryption-key",
    type=ParsedParam(DecryptionKey.parse, "decryption key"),
    default=None,
    help="Decryption key, 'KEY[:PASSPHRASE]'.",
)
@click.option("--os", "os_name", type=str, default=None, help="Operating system to pull.")
@click.option("--tls-verify/--no-tls-verify", "tls_verify", default=None, help="Verify registry TLS.")
@click.option("--variant", type=str, default=None, help="Architecture variant.")
@click.option("--platform", type=str, default=None, help="Platform, 'OS/ARCH[/VARIANT]'.")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Suppress pull progress.")
@click.option("--retry", type=int, default=None, help="Number of pull retries.")
@click.option("--retry-delay", type=str, default=None, help="Delay between retries.")
@section_options
@global_options
@output_options
@click.pass_context
def image_command(
    ctx: click.Context,
    *,
    image: str,
    name: str | None,
    all_tags: bool,
    arch: str | None,
    authfile: str | None,
    cert_dir: str | None,
    creds: str | None,
    decryption_key: DecryptionKey | None,
    os_name: str | None,
    tls_verify: bool | None,
    variant: str | None,
    platform: str | None,
    quiet: bool,
    retry: int | None,
    retry_delay: str | None,
    output_dir: Path | None,
    overwrite: bool | None,
    **shared: Any,
) -> None:
    """Generate a ``.image`` quadlet file for ``IMAGE``."""
    podman_args = ImagePodmanArgs(
        platform=platform,
        quiet=quiet,
        retry=retry,
        retry_delay=retry_delay,
    )
    resource = Image(
        all_tags=all_tags,
        arch=arch,
        auth_file=PurePosixPath(authfile) if authfile else None,
        cert_dir=PurePosixPath(cert_dir) if cert_dir else None,
        creds=creds,
        decryption_key=decryption_key,
        image=image,
        os=os_name,
        podman_args=None if podman_args.is_empty() else podman_args,
        tls_verify=tls_verify,
        variant=variant,
    )
    emit_file(
        ctx,
        build_file(ctx, name or default_name(image), resource, shared),
        output_dir=output_dir,
        overwrite=overwrite,
    )
