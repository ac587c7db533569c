# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for ClairGuard."""

import os
from dataclasses import dataclass
from pathlib import Path

from .version import __version__

DEFAULT_USER_AGENT = f"ClairGuard/{__version__} (container image vulnerability scanning via Clair)"

DEFAULT_CLAIRCTL_URL = "https://github.com/jgsqware/clairctl/releases/download/v1.2.8/clairctl-linux-amd64"
DEFAULT_CLAIR_SCANNER_URL = "https://github.com/arminc/clair-scanner/releases/download/v8/clair-scanner_linux_amd64"

SEVERITY_THRESHOLDS = ("Unknown", "Negligible", "Low", "Medium", "High", "Critical", "Defcon1")


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(name: str, default: str | None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass
class HttpSettings:
    """HTTP client defaults used for release downloads and health probes."""

    timeout: float = 60.0
    max_retries: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_float_env("CLAIRGUARD_HTTP_TIMEOUT", cls.timeout),
            max_retries=_int_env("CLAIRGUARD_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("CLAIRGUARD_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("CLAIRGUARD_HTTP_INITIAL_DELAY", cls.initial_delay),
            user_agent=os.getenv("CLAIRGUARD_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("CLAIRGUARD_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("CLAIRGUARD_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


@dataclass
class ClairSettings:
    """
    Names, images and endpoints for the Clair stack.

    `workdir` of None means the process working directory at the time the
    settings are used, not when they were created.
    """

    workdir: str | None = None
    docker_bin: str = "docker"
    db_name: str = "db"
    db_image: str = "arminc/clair-db:latest"
    clair_name: str = "clair"
    clair_image: str = "arminc/clair-local-scan:latest"
    clair_api_url: str = "http://localhost:6060"
    clair_health_url: str = "http://localhost:6061/health"
    clairctl_url: str = DEFAULT_CLAIRCTL_URL
    clair_scanner_url: str = DEFAULT_CLAIR_SCANNER_URL
    settle_seconds: float = 10.0
    threshold: str = "High"
    report_path: str = "clair-report.json"
    scanner_ip: str | None = None
    local_images: bool = True

    @property
    def work_path(self) -> Path:
        # Absolute: scanner binaries are executed with cwd=work_path.
        return Path(self.workdir).resolve() if self.workdir else Path.cwd()

    @classmethod
    def from_env(cls) -> "ClairSettings":
        """Create settings from environment variables (evaluated at call time)."""
        settle = _float_env("CLAIRGUARD_SETTLE_SECONDS", cls.settle_seconds)
        if settle < 0:
            settle = cls.settle_seconds
        return cls(
            workdir=_str_env("CLAIRGUARD_WORKDIR", None),
            docker_bin=_str_env("CLAIRGUARD_DOCKER_BIN", cls.docker_bin) or cls.docker_bin,
            db_name=_str_env("CLAIRGUARD_DB_NAME", cls.db_name) or cls.db_name,
            db_image=_str_env("CLAIRGUARD_DB_IMAGE", cls.db_image) or cls.db_image,
            clair_name=_str_env("CLAIRGUARD_CLAIR_NAME", cls.clair_name) or cls.clair_name,
            clair_image=_str_env("CLAIRGUARD_CLAIR_IMAGE", cls.clair_image) or cls.clair_image,
            clair_api_url=_str_env("CLAIRGUARD_CLAIR_API_URL", cls.clair_api_url) or cls.clair_api_url,
            clair_health_url=_str_env("CLAIRGUARD_CLAIR_HEALTH_URL", cls.clair_health_url) or cls.clair_health_url,
            clairctl_url=_str_env("CLAIRGUARD_CLAIRCTL_URL", cls.clairctl_url) or cls.clairctl_url,
            clair_scanner_url=_str_env("CLAIRGUARD_CLAIR_SCANNER_URL", cls.clair_scanner_url) or cls.clair_scanner_url,
            settle_seconds=settle,
            threshold=_str_env("CLAIRGUARD_THRESHOLD", cls.threshold) or cls.threshold,
            report_path=_str_env("CLAIRGUARD_REPORT_PATH", cls.report_path) or cls.report_path,
            scanner_ip=_str_env("CLAIRGUARD_SCANNER_IP", None),
            local_images=_bool_env("CLAIRGUARD_LOCAL_IMAGES", cls.local_images),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_clair_settings() -> ClairSettings:
    """Load Clair stack settings from environment with sensible defaults."""
    return ClairSettings.from_env()
