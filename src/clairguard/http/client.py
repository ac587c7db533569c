# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..config import HttpSettings, load_http_settings


class HttpClient(Protocol):
    """Minimal protocol for the two HTTP operations ClairGuard needs."""

    def download(self, url: str, dest: Path) -> Path: ...

    def status(self, url: str) -> int | None: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())
