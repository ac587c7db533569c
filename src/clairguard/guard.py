# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Resource guard.

Classifies a named local resource before the caller decides whether to acquire
it. Checks are advisory: nothing is locked or reserved, and the state is read
fresh from the filesystem (or the container runtime) on every call.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import InputError
from .models import ContainerState, ResourceState

if TYPE_CHECKING:
    from .docker import DockerClient


def _require_name(name: str | None) -> str:
    if name is None or not str(name).strip():
        raise InputError("missing required argument: resource name")
    return str(name)


def check_resource(name: str, directory: str | os.PathLike[str] | None = None, *, substring: bool = False) -> ResourceState:
    """
    Classify `name` against the top level of `directory` (cwd when omitted).

    A directory named exactly `name` is a CONFLICT even when a file also matches.
    Files match by exact name unless `substring` is set, in which case any file
    whose name contains `name` counts (so `toolkit` satisfies `tool`).
    """
    name = _require_name(name)
    base = Path(directory) if directory is not None else Path.cwd()

    # Only the top level is inspected.
    with os.scandir(base) as it:
        entries = [(entry.name, entry.is_dir()) for entry in it]

    if any(is_dir and entry_name == name for entry_name, is_dir in entries):
        return ResourceState.CONFLICT

    for entry_name, is_dir in entries:
        if is_dir:
            continue
        if entry_name == name or (substring and name in entry_name):
            return ResourceState.PRESENT
    return ResourceState.ABSENT


def check_container(name: str, docker: DockerClient) -> ContainerState:
    """Classify a named container as RUNNING, STOPPED or ABSENT."""
    return docker.container_state(_require_name(name))


__all__ = ["check_container", "check_resource"]
