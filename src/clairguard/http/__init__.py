# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .client import HttpClient, create_default_http_client
from .httpx_client import HttpxClient
from .retry import RetryConfig, build_default_retry_config, call_with_retries

__all__ = [
    "HttpClient",
    "HttpxClient",
    "RetryConfig",
    "build_default_retry_config",
    "call_with_retries",
    "create_default_http_client",
]
