# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry helper for transport-level failures."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import httpx

from ..config import HttpSettings, load_http_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Retry policy derived from HttpSettings."""

    max_attempts: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0

    @classmethod
    def from_settings(cls, settings: HttpSettings) -> RetryConfig:
        """Build a retry config from the shared HttpSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries),
            backoff_factor=settings.backoff_factor,
            initial_delay=settings.initial_delay,
        )


def build_default_retry_config() -> RetryConfig:
    """Create a RetryConfig from environment-backed HttpSettings."""
    return RetryConfig.from_settings(load_http_settings())


def call_with_retries(func: Callable[[], T], *, retry_config: RetryConfig | None = None) -> T:
    """
    Call `func`, retrying httpx transport errors with exponential backoff.

    HTTP status errors are raised immediately; a server that answered is not
    retried. The last transport error is re-raised once attempts run out.
    """
    cfg = retry_config or build_default_retry_config()
    delay = cfg.initial_delay
    attempt = 0
    while True:
        try:
            return func()
        except httpx.TransportError as exc:
            attempt += 1
            if attempt >= cfg.max_attempts:
                raise
            logger.info("transport error (%s), retrying in %.1fs (attempt %d/%d)", exc, delay, attempt + 1, cfg.max_attempts)
            time.sleep(delay)
            delay *= cfg.backoff_factor
