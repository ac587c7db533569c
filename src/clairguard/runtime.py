# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level ClairGuard facade for preparing the Clair stack and scanning images."""

from __future__ import annotations

from contextlib import suppress
from pathlib import Path

from .binaries import clair_scanner_spec, clairctl_spec, ensure_binary, guard_binary
from .config import ClairSettings, load_clair_settings, load_http_settings
from .docker import CommandRunner, DockerClient, SubprocessRunner
from .errors import ServiceUnavailableError
from .http.client import HttpClient, create_default_http_client
from .models import BinarySpec, ScanReport
from .scan import ClairctlScanner, ClairScannerRunner, normalize_threshold
from .services import ensure_services


class ClairGuard:
    """
    Convenience wrapper that wires settings, the docker CLI and the HTTP client.

    Each public scan method brings the containers up, makes sure the scanner
    binary is in the working directory, runs the scanner's health check and,
    when an image is given, scans it.
    """

    def __init__(
        self,
        settings: ClairSettings | None = None,
        *,
        runner: CommandRunner | None = None,
        http_client: HttpClient | None = None,
    ):
        self.settings = settings or load_clair_settings()
        self.runner = runner or SubprocessRunner()
        self.http_client = http_client or create_default_http_client(load_http_settings())
        self.docker = DockerClient(self.runner, docker_bin=self.settings.docker_bin)

    def prepare(self, spec: BinarySpec) -> Path:
        """Ensure both containers are up and `spec` is installed; return the binary path."""
        # Conflicts and an unusable workdir abort before any container is started.
        guard_binary(spec, self.settings.work_path)
        ensure_services(self.docker, self.settings)
        return ensure_binary(spec, self.settings.work_path, self.http_client)

    def html_report(self, image: str | None = None) -> ScanReport | None:
        binary = self.prepare(clairctl_spec(self.settings))
        scanner = ClairctlScanner(binary, self.runner, self.settings)
        if not scanner.health():
            raise ServiceUnavailableError("clairctl reports the Clair engine as unhealthy")
        if not image:
            return None
        return scanner.scan(image)

    def json_report(
        self,
        image: str | None = None,
        *,
        threshold: str | None = None,
        report_path: str | None = None,
    ) -> ScanReport | None:
        threshold = normalize_threshold(threshold or self.settings.threshold)
        binary = self.prepare(clair_scanner_spec(self.settings))
        scanner = ClairScannerRunner(binary, self.runner, self.settings, self.http_client)
        if not scanner.health():
            raise ServiceUnavailableError(f"Clair health check at {self.settings.clair_health_url} failed")
        if not image:
            return None
        ip = self.settings.scanner_ip or self.docker.bridge_gateway()
        return scanner.scan(image, ip=ip, threshold=threshold, report_path=report_path)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> ClairGuard:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
