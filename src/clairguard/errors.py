# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models.command import CommandResult


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class ClairGuardError(Exception):
    """Base class for errors raised by ClairGuard itself."""


class InputError(ClairGuardError, ValueError):
    """A required argument is missing or invalid."""


class ResourceConflictError(ClairGuardError):
    """A same-named directory blocks placing a resource."""

    def __init__(self, name: str, path: Path):
        self.name = name
        self.path = path
        super().__init__(
            f"'{name}' exists as a directory at {path}; remove or rename it so the '{name}' binary can be placed there"
        )


class CommandError(ClairGuardError):
    """An external command exited unsuccessfully."""

    def __init__(self, result: CommandResult, message: str | None = None):
        self.result = result
        output = (result.stderr or result.stdout or "").strip()
        summary = message or f"command failed with exit code {result.returncode}: {' '.join(result.args)}"
        super().__init__(f"{summary}\n{output}" if output else summary)

    @property
    def returncode(self) -> int:
        return self.result.returncode


class DownloadError(ClairGuardError):
    """Fetching a release artifact failed."""

    def __init__(self, url: str, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        self.url = url
        self.category = category
        super().__init__(f"download of {url} failed: {message}")


class ServiceUnavailableError(ClairGuardError):
    """The Clair engine did not pass its health check."""


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCategory.HTTP_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: Optional[ErrorCategory]) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during download",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.HTTP_ERROR: "Release server returned an error status",
        ErrorCategory.UNKNOWN_ERROR: "Network error during download",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Download failed due to network error")