# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scanner client binaries and their guarded acquisition."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from .config import ClairSettings, load_clair_settings
from .errors import InputError, ResourceConflictError
from .guard import check_resource
from .http.client import HttpClient
from .models import BinarySpec, ResourceState

logger = logging.getLogger(__name__)

CLAIRCTL = "clairctl"
CLAIR_SCANNER = "clair-scanner"


def clairctl_spec(settings: ClairSettings | None = None) -> BinarySpec:
    settings = settings or load_clair_settings()
    return BinarySpec(name=CLAIRCTL, url=settings.clairctl_url)


def clair_scanner_spec(settings: ClairSettings | None = None) -> BinarySpec:
    settings = settings or load_clair_settings()
    return BinarySpec(name=CLAIR_SCANNER, url=settings.clair_scanner_url)


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH | stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH)


def guard_binary(spec: BinarySpec, directory: Path) -> ResourceState:
    """
    Classify `spec.name` in `directory`, raising on anything that must abort the run.

    A missing or unreadable directory is an InputError; a same-named directory
    is a ResourceConflictError. Otherwise returns PRESENT or ABSENT.
    """
    directory = Path(directory)
    try:
        state = check_resource(spec.name, directory)
    except OSError as exc:
        raise InputError(f"cannot read working directory {directory}: {exc.strerror or exc}") from exc
    if state == ResourceState.CONFLICT:
        raise ResourceConflictError(spec.name, directory / spec.name)
    return state


def ensure_binary(spec: BinarySpec, directory: Path, http_client: HttpClient) -> Path:
    """Make sure `spec.name` exists in `directory`, downloading it if absent."""
    directory = Path(directory)
    target = directory / spec.name
    state = guard_binary(spec, directory)
    if state == ResourceState.PRESENT:
        logger.info("%s already present at %s, skipping download", spec.name, target)
        return target

    http_client.download(spec.url, target)
    _make_executable(target)
    logger.info("installed %s at %s", spec.name, target)
    return target


__all__ = ["CLAIRCTL", "CLAIR_SCANNER", "clair_scanner_spec", "clairctl_spec", "ensure_binary", "guard_binary"]
