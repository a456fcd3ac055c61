# topmark:header:start
#
#   project      : Quadletize
#   file         : __init__.py
#   file_relpath : src/quadletize/quadlet/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The Quadletize Authors
#
# topmark:header:end

"""Quadlet sections and file assembly."""

from __future__ import annotations

from quadletize.quadlet.build import Build, BuildPodmanArgs
from quadletize.quadlet.container import Container, ContainerPodmanArgs
from quadletize.quadlet.file import File
from quadletize.quadlet.globals import Globals, PodmanGlobalArgs
from quadletize.quadlet.image import Image, ImagePodmanArgs
from quadletize.quadlet.install import Install
from quadletize.quadlet.kube import Kube, KubePodmanArgs
from quadletize.quadlet.network import Network, NetworkPodmanArgs
from quadletize.quadlet.pod import Pod, PodPodmanArgs
from quadletize.quadlet.service import RestartPolicy, Service
from quadletize.quadlet.unit import Unit
from quadletize.quadlet.volume import Volume, VolumePodmanArgs

__all__ = [
    "Build",
    "BuildPodmanArgs",
    "Container",
    "ContainerPodmanArgs",
    "File",
    "Globals",
    "Image",
    "ImagePodmanArgs",
    "Install",
    "Kube",
    "KubePodmanArgs",
    "Network",
    "NetworkPodmanArgs",
    "Pod",
    "PodPodmanArgs",
    "PodmanGlobalArgs",
    "RestartPolicy",
    "Service",
    "Unit",
    "Volume",
    "VolumePodmanArgs",
]
