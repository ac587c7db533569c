# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""clair-scanner driver: threshold scan producing a JSON report."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from ..config import SEVERITY_THRESHOLDS, ClairSettings, load_clair_settings
from ..docker import CommandRunner, SubprocessRunner
from ..errors import CommandError, InputError
from ..http.client import HttpClient, create_default_http_client
from ..models import CommandResult, ScanReport

logger = logging.getLogger(__name__)


def normalize_threshold(value: str) -> str:
    """Match `value` case-insensitively against clair-scanner's severity names."""
    for name in SEVERITY_THRESHOLDS:
        if name.lower() == str(value or "").strip().lower():
            return name
    raise InputError(f"invalid threshold {value!r}; expected one of {', '.join(SEVERITY_THRESHOLDS)}")


def load_report(path: Path, result: CommandResult) -> ScanReport:
    """Parse the JSON report clair-scanner wrote for the run that produced `result`."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except ValueError as exc:
        raise CommandError(result, f"clair-scanner wrote an unreadable report to {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise CommandError(result, f"clair-scanner report at {path} is not a JSON object")
    return ScanReport.from_clair_scanner(data, exit_code=result.returncode, report_path=str(path))


class ClairScannerRunner:
    """Runs the clair-scanner binary; its console output goes straight to the terminal."""

    name = "clair-scanner"

    def __init__(
        self,
        binary: Path,
        runner: CommandRunner | None = None,
        settings: ClairSettings | None = None,
        http_client: HttpClient | None = None,
    ):
        self.binary = Path(binary)
        self.runner = runner or SubprocessRunner()
        self.settings = settings or load_clair_settings()
        self.http_client = http_client or create_default_http_client()

    def health(self) -> bool:
        status = self.http_client.status(self.settings.clair_health_url)
        if status != 200:
            logger.warning("Clair health endpoint %s returned %s", self.settings.clair_health_url, status)
            return False
        return True

    def scan(self, image: str, *, ip: str, threshold: str | None = None, report_path: str | None = None) -> ScanReport:
        if not image or not image.strip():
            raise InputError("missing required argument: image")
        if not ip:
            raise InputError("missing required argument: scanner ip")
        threshold = normalize_threshold(threshold or self.settings.threshold)
        report = Path(report_path or self.settings.report_path)
        if not report.is_absolute():
            report = self.settings.work_path / report

        args = [
            str(self.binary),
            f"--clair={self.settings.clair_api_url}",
            f"--ip={ip}",
            "-t",
            threshold,
            "-r",
            str(report),
            image,
        ]
        # The scanner only rewrites the report on success; a stale file would be misread.
        report.unlink(missing_ok=True)
        result = self.runner.run(args, cwd=self.settings.work_path, capture=False)
        if not report.exists():
            raise CommandError(result, f"clair-scanner produced no report for {image}")
        if not result.ok:
            logger.info("clair-scanner exited with %d for %s", result.returncode, image)
        return load_report(report, result)
