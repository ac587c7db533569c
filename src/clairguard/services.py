# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Database and scan-engine containers."""

from __future__ import annotations

import logging
import time

from .config import ClairSettings, load_clair_settings
from .docker import DockerClient
from .guard import check_container
from .models import ContainerSpec, ContainerState

logger = logging.getLogger(__name__)


def database_spec(settings: ClairSettings) -> ContainerSpec:
    return ContainerSpec(name=settings.db_name, image=settings.db_image)


def engine_spec(settings: ClairSettings) -> ContainerSpec:
    return ContainerSpec(
        name=settings.clair_name,
        image=settings.clair_image,
        ports=("6060:6060", "6061:6061"),
        links=(f"{settings.db_name}:postgres",),
    )


def ensure_container(spec: ContainerSpec, docker: DockerClient) -> bool:
    """Run, resume or leave `spec` alone. Returns True if anything was started."""
    state = check_container(spec.name, docker)
    if state == ContainerState.RUNNING:
        logger.info("container %s already running", spec.name)
        return False
    if state == ContainerState.STOPPED:
        logger.info("resuming container %s", spec.name)
        docker.start_container(spec.name)
        return True
    logger.info("starting container %s from %s", spec.name, spec.image)
    docker.run_container(spec)
    return True


def ensure_services(docker: DockerClient, settings: ClairSettings | None = None) -> list[str]:
    """
    Bring up the vulnerability database, then the Clair engine linked to it.

    Sleeps `settings.settle_seconds` once if either container had to be started.
    Returns the names of containers that were started or resumed.
    """
    settings = settings or load_clair_settings()
    started = [spec.name for spec in (database_spec(settings), engine_spec(settings)) if ensure_container(spec, docker)]
    if started and settings.settle_seconds > 0:
        logger.info("waiting %.0fs for %s to settle", settings.settle_seconds, ", ".join(started))
        time.sleep(settings.settle_seconds)
    return started


__all__ = ["database_spec", "engine_spec", "ensure_container", "ensure_services"]
