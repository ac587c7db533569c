# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for ClairGuard."""

from .command import CommandResult
from .report import SEVERITY_ORDER, ScanReport, Vulnerability
from .resource import BinarySpec, ContainerSpec, ContainerState, ResourceState

__all__ = [
    "BinarySpec",
    "CommandResult",
    "ContainerSpec",
    "ContainerState",
    "ResourceState",
    "SEVERITY_ORDER",
    "ScanReport",
    "Vulnerability",
]
