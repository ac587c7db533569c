# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ClairGuard package entrypoint.

ClairGuard brings up a local Clair stack (vulnerability database plus scan
engine containers), fetches a scanner client binary, and scans container images
with it. Every check that decides whether to acquire a resource goes through
the resource guard in `clairguard.guard`.
"""

from .config import ClairSettings, HttpSettings, load_clair_settings, load_http_settings
from .errors import (
    ClairGuardError,
    CommandError,
    DownloadError,
    ErrorCategory,
    InputError,
    ResourceConflictError,
    ServiceUnavailableError,
)
from .guard import check_container, check_resource
from .log import setup_logging
from .models import BinarySpec, ContainerSpec, ContainerState, ResourceState, ScanReport, Vulnerability
from .runtime import ClairGuard
from .version import __version__

__all__ = [
    "BinarySpec",
    "ClairGuard",
    "ClairGuardError",
    "ClairSettings",
    "CommandError",
    "ContainerSpec",
    "ContainerState",
    "DownloadError",
    "ErrorCategory",
    "HttpSettings",
    "InputError",
    "ResourceConflictError",
    "ResourceState",
    "ScanReport",
    "ServiceUnavailableError",
    "Vulnerability",
    "check_container",
    "check_resource",
    "load_clair_settings",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
