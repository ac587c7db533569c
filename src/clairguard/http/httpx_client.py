# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import DownloadError, categorize_exception, error_category_to_reason
from .client import HttpClient
from .retry import RetryConfig, call_with_retries

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self.retry_config = RetryConfig.from_settings(self.settings)
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
            headers={"User-Agent": self.settings.user_agent},
        )

    def _stream_to(self, url: str, dest: Path) -> None:
        with self._client.stream("GET", url) as resp:
            resp.raise_for_status()
            with open(dest, "wb") as fh:
                for chunk in resp.iter_bytes():
                    if chunk:
                        fh.write(chunk)

    def download(self, url: str, dest: Path) -> Path:
        """
        Stream `url` into `dest`.

        The body is written to a sibling `.part` file that is renamed into
        place only after the transfer completes; on failure it is removed.
        """
        dest = Path(dest)
        partial = dest.with_name(dest.name + ".part")
        logger.info("downloading %s -> %s", url, dest)
        try:
            call_with_retries(lambda: self._stream_to(url, partial), retry_config=self.retry_config)
        except httpx.HTTPError as exc:
            partial.unlink(missing_ok=True)
            category = categorize_exception(exc)
            detail = str(exc) or error_category_to_reason(category)
            raise DownloadError(url, detail, category) from exc
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
        os.replace(partial, dest)
        return dest

    def status(self, url: str) -> int | None:
        """Return the HTTP status for a GET of `url`, or None if it is unreachable."""
        try:
            resp = self._client.get(url)
        except httpx.HTTPError as exc:
            logger.debug("GET %s failed: %s", url, exc)
            return None
        return resp.status_code

    def close(self) -> None:
        self._client.close()
