# topmark:header:start
#
#   project      : Quadletize
#   file         : test_canonical_property.py
#   file_relpath : tests/quadlet/test_canonical_property.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

# pyright: strict

"""Property tests: canonical text parses back to the value it came from.

Also checks that shell-quoted command lines split back into the original
tokens (minus stripped control characters).
"""

from __future__ import annotations

import shlex

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from quadletize.escape import join_shell_tokens, strip_controls
from quadletize.quadlet.container.device import Device
from quadletize.quadlet.container.mount import Mount, format_mount, parse_mount
from quadletize.quadlet.container.rootfs import Rootfs
from quadletize.quadlet.container.volume import Volume as ContainerVolume
from tests.strategies_quadletize import s_container_volume, s_device, s_mount, s_rootfs

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

PROPERTY_SETTINGS = settings(
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
    max_examples=200,
)


@PROPERTY_SETTINGS
@given(mount=s_mount())
def test_mount_text_is_canonical(mount: Mount) -> None:
    text: str = format_mount(mount)
    parsed: Mount = parse_mount(text)
    assert parsed == mount
    assert type(parsed) is type(mount)
    assert format_mount(parsed) == text


@PROPERTY_SETTINGS
@given(volume=s_container_volume())
def test_container_volume_text_is_canonical(volume: ContainerVolume) -> None:
    text: str = str(volume)
    assert ContainerVolume.parse(text) == volume


@PROPERTY_SETTINGS
@given(device=s_device())
def test_device_text_is_canonical(device: Device) -> None:
    assert Device.parse(str(device)) == device


@PROPERTY_SETTINGS
@given(rootfs=s_rootfs())
def test_rootfs_text_is_canonical(rootfs: Rootfs) -> None:
    assert Rootfs.parse(str(rootfs)) == rootfs


@PROPERTY_SETTINGS
@given(tokens=st.lists(st.text(max_size=12), max_size=6))
def test_shell_line_splits_back(tokens: list[str]) -> None:
    line: str = join_shell_tokens(tokens)
    assert shlex.split(line) == [strip_controls(t) for t in tokens]
