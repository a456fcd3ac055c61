# topmark:header:start
#
#   project      : Quadletize
#   file         : strategies_quadletize.py
#   file_relpath : tests/strategies_quadletize.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for mount, volume and device values.

Generated values are always in canonical form, so rendering and parsing them
again must give back an equal value. Path segments and names are drawn from a
small alphabet that never contains the ``,``, ``=`` or ``:`` separators.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import PurePosixPath
from typing import Any

from hypothesis import strategies as st

from quadletize.quadlet.container.device import Device
from quadletize.quadlet.container.mount import (
    Bind,
    BindPropagation,
    DevPts,
    Glob,
    Image,
    Mode,
    Mount,
    Ramfs,
    SELinuxRelabel,
    Size,
    Tmpfs,
    Volume,
)
from quadletize.quadlet.container.mount.idmap import Idmap, IdMapping
from quadletize.quadlet.container.mount.tmpfs import SizeUnit
from quadletize.quadlet.container.rootfs import Rootfs
from quadletize.quadlet.container.volume import (
    HostPath,
    NamedVolume,
    Overlay,
    Source,
)
from quadletize.quadlet.container.volume import Volume as ContainerVolume
from quadletize.quadlet.container.volume import VolumeOptions

Draw = Callable[[st.SearchStrategy[Any]], Any]

U32_MAX: int = 2**32 - 1

SEGMENT: st.SearchStrategy[str] = st.from_regex(r"[a-z0-9_][a-z0-9_-]{0,7}", fullmatch=True)
NAME: st.SearchStrategy[str] = st.from_regex(r"[a-z0-9][a-z0-9._-]{0,11}", fullmatch=True)


def s_abs_path() -> st.SearchStrategy[PurePosixPath]:
    """Absolute POSIX paths of one to four segments."""
    return st.lists(SEGMENT, min_size=1, max_size=4).map(lambda parts: PurePosixPath("/", *parts))


def s_id_mapping() -> st.SearchStrategy[IdMapping]:
    ids: st.SearchStrategy[int] = st.integers(min_value=0, max_value=U32_MAX)
    return st.builds(IdMapping, ids, ids, ids, st.booleans())


def s_idmap() -> st.SearchStrategy[Idmap]:
    """Idmaps, including the empty one (rendered as a bare ``idmap``)."""
    mappings: st.SearchStrategy[list[IdMapping]] = st.lists(s_id_mapping(), max_size=3)
    return st.builds(Idmap.from_mappings, mappings, mappings)


def s_size() -> st.SearchStrategy[Size]:
    sized: st.SearchStrategy[Size] = st.builds(
        Size,
        st.integers(min_value=0, max_value=2**64 - 1),
        st.sampled_from([SizeUnit.BYTES, SizeUnit.KIBIBYTES, SizeUnit.MEBIBYTES, SizeUnit.GIBIBYTES]),
    )
    percent: st.SearchStrategy[Size] = st.builds(
        Size, st.integers(min_value=0, max_value=255), st.just(SizeUnit.PERCENT)
    )
    return st.one_of(st.just(Size()), sized, percent)


def s_mode() -> st.SearchStrategy[Mode]:
    return st.integers(min_value=0, max_value=0o7777).map(Mode)


def _bind_kwargs() -> dict[str, st.SearchStrategy[Any]]:
    return {
        "source": s_abs_path(),
        "destination": st.none() | s_abs_path(),
        "read_only": st.booleans(),
        "bind_propagation": st.sampled_from(BindPropagation),
        "bind_nonrecursive": st.booleans(),
        "relabel": st.none() | st.sampled_from(SELinuxRelabel),
        "idmap": st.none() | s_idmap(),
        "chown": st.booleans(),
    }


def _tmpfs_kwargs() -> dict[str, st.SearchStrategy[Any]]:
    return {
        "destination": s_abs_path(),
        "read_only": st.booleans(),
        "size": s_size(),
        "mode": s_mode(),
        "tmpcopyup": st.booleans(),
        "chown": st.booleans(),
    }


def s_mount() -> st.SearchStrategy[Mount]:
    """Any mount variant with arbitrary option values."""
    return st.one_of(
        st.builds(Bind, **_bind_kwargs()),
        st.builds(Glob, **_bind_kwargs()),
        st.builds(
            DevPts,
            destination=s_abs_path(),
            uid=st.integers(min_value=0, max_value=U32_MAX),
            gid=st.integers(min_value=0, max_value=U32_MAX),
            mode=s_mode(),
            max=st.integers(min_value=0, max_value=2**20),
        ),
        st.builds(Image, source=NAME, destination=s_abs_path(), read_write=st.booleans()),
        st.builds(Tmpfs, **_tmpfs_kwargs()),
        st.builds(Ramfs, **_tmpfs_kwargs()),
        st.builds(
            Volume,
            source=st.none() | NAME,
            destination=s_abs_path(),
            read_only=st.booleans(),
            chown=st.booleans(),
            idmap=st.none() | s_idmap(),
        ),
    )


def s_device() -> st.SearchStrategy[Device]:
    return st.builds(
        Device,
        s_abs_path(),
        st.none() | s_abs_path(),
        st.booleans(),
        st.booleans(),
        st.booleans(),
    )


def s_volume_source() -> st.SearchStrategy[Source]:
    host_prefix: st.SearchStrategy[str] = st.sampled_from(["/", "./", "~/", "%h/"])
    host: st.SearchStrategy[Source] = st.builds(
        lambda prefix, rest: HostPath(prefix + rest), host_prefix, SEGMENT
    )
    # named volumes must not look like host paths
    named: st.SearchStrategy[Source] = st.from_regex(r"[a-z][a-z0-9_-]{0,11}", fullmatch=True).map(
        NamedVolume
    )
    return st.one_of(host, named)


def s_volume_options() -> st.SearchStrategy[VolumeOptions]:
    overlay: st.SearchStrategy[Overlay | None] = st.none() | st.builds(
        Overlay, st.none() | s_abs_path(), st.none() | s_abs_path()
    )
    return st.builds(
        VolumeOptions,
        read_only=st.booleans(),
        selinux_relabel=st.none() | st.sampled_from(SELinuxRelabel),
        overlay=overlay,
        chown=st.booleans(),
        no_copy=st.booleans(),
        devices=st.booleans(),
        no_executables=st.booleans(),
        suid=st.booleans(),
        recursive_bind=st.booleans(),
        bind_propagation=st.sampled_from(BindPropagation),
        idmap=st.none() | s_idmap(),
    )


@st.composite
def s_container_volume(draw: Draw) -> ContainerVolume:
    """Container volumes; options only appear together with a source."""
    container_path: PurePosixPath = draw(s_abs_path())
    source: Source | None = draw(st.none() | s_volume_source())
    options: VolumeOptions = draw(s_volume_options()) if source is not None else VolumeOptions()
    return ContainerVolume(container_path=container_path, source=source, options=options)


def s_rootfs() -> st.SearchStrategy[Rootfs]:
    path: st.SearchStrategy[str] = st.builds(
        lambda prefix, rest: prefix + rest, st.sampled_from(["/", "./", "%h/"]), SEGMENT
    )
    return st.builds(Rootfs, path, st.booleans(), st.none() | s_idmap())
