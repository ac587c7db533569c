# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Resource descriptors and derived resource states."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ResourceState(str, Enum):
    """Local state of a named file resource, derived fresh on every check."""

    CONFLICT = "CONFLICT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


class ContainerState(str, Enum):
    """State of a named container as reported by the container runtime."""

    RUNNING = "RUNNING"
    STOPPED = "STOPPED"
    ABSENT = "ABSENT"


@dataclass(frozen=True)
class BinarySpec:
    """A downloadable executable: canonical local filename plus fixed release URL."""

    name: str
    url: str


@dataclass(frozen=True)
class ContainerSpec:
    """A long-running named container and how to start it."""

    name: str
    image: str
    ports: tuple[str, ...] = field(default_factory=tuple)
    links: tuple[str, ...] = field(default_factory=tuple)

    def run_args(self) -> list[str]:
        """Arguments for `docker run` (after the `run` verb)."""
        args = ["-d", "--name", self.name]
        for port in self.ports:
            args.extend(["-p", port])
        for link in self.links:
            args.append(f"--link={link}")
        args.append(self.image)
        return args
