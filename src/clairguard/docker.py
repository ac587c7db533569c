# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""External command execution and the docker CLI wrapper."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from .errors import CommandError
from .models import CommandResult, ContainerSpec, ContainerState

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127
_MISSING_MARKERS = ("no such object", "no such container")


class CommandRunner(Protocol):
    """Minimal protocol for running an external command to completion."""

    def run(self, args: list[str], *, cwd: Path | None = None, capture: bool = True) -> CommandResult: ...


class SubprocessRunner:
    """Blocking subprocess-backed CommandRunner."""

    def run(self, args: list[str], *, cwd: Path | None = None, capture: bool = True) -> CommandResult:
        logger.debug("running %s (cwd=%s)", " ".join(args), cwd)
        try:
            proc = subprocess.run(
                args,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=capture,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            return CommandResult(args=list(args), returncode=COMMAND_NOT_FOUND, stderr=f"command not found: {args[0]}")
        return CommandResult(
            args=list(args),
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )


class DockerClient:
    """Thin wrapper over the docker CLI for named, long-running containers."""

    def __init__(self, runner: CommandRunner | None = None, docker_bin: str = "docker"):
        self.runner = runner or SubprocessRunner()
        self.docker_bin = docker_bin

    def _run(self, *args: str) -> CommandResult:
        return self.runner.run([self.docker_bin, *args])

    def container_state(self, name: str) -> ContainerState:
        result = self._run("inspect", "--type", "container", "--format", "{{.State.Running}}", name)
        if not result.ok:
            stderr = (result.stderr or "").lower()
            if any(marker in stderr for marker in _MISSING_MARKERS):
                return ContainerState.ABSENT
            raise CommandError(result, f"could not inspect container '{name}'")
        if result.stdout.strip().lower() == "true":
            return ContainerState.RUNNING
        return ContainerState.STOPPED

    def run_container(self, spec: ContainerSpec) -> CommandResult:
        result = self._run("run", *spec.run_args())
        if not result.ok:
            raise CommandError(result, f"could not start container '{spec.name}' from {spec.image}")
        return result

    def start_container(self, name: str) -> CommandResult:
        result = self._run("start", name)
        if not result.ok:
            raise CommandError(result, f"could not resume container '{name}'")
        return result

    def bridge_gateway(self) -> str:
        """Address of the default bridge network, reachable from inside containers."""
        result = self._run("network", "inspect", "bridge", "--format", "{{(index .IPAM.Config 0).Gateway}}")
        if not result.ok or not result.stdout.strip():
            raise CommandError(result, "could not determine the docker bridge gateway address")
        return result.stdout.strip()
