# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""clairctl driver: health check plus push/analyze/report to an HTML report."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import ClairSettings, load_clair_settings
from ..docker import CommandRunner, SubprocessRunner
from ..errors import CommandError, InputError
from ..models import CommandResult, ScanReport

logger = logging.getLogger(__name__)

_UNHEALTHY_MARKER = "✘"


def html_report_name(image: str) -> str:
    """File name clairctl gives the HTML report for `image`."""
    name = image.rsplit("@", 1)[0]
    last = name.rsplit("/", 1)[-1]
    if ":" not in last:
        name = f"{name}:latest"
    return "analysis-" + name.replace("/", "-").replace(":", "-") + ".html"


class ClairctlScanner:
    """Runs the clairctl binary against the local Clair engine."""

    name = "clairctl"

    def __init__(self, binary: Path, runner: CommandRunner | None = None, settings: ClairSettings | None = None):
        self.binary = Path(binary)
        self.runner = runner or SubprocessRunner()
        self.settings = settings or load_clair_settings()

    def _run(self, *args: str) -> CommandResult:
        return self.runner.run([str(self.binary), *args], cwd=self.settings.work_path)

    def health(self) -> bool:
        result = self._run("health")
        healthy = result.ok and _UNHEALTHY_MARKER not in result.stdout
        if not healthy:
            logger.warning("clairctl health check failed: %s", (result.stderr or result.stdout).strip())
        return healthy

    def scan(self, image: str) -> ScanReport:
        if not image or not image.strip():
            raise InputError("missing required argument: image")
        local = ["--local"] if self.settings.local_images else []
        outputs = []
        for step in ("push", "analyze", "report"):
            logger.info("clairctl %s %s", step, image)
            result = self._run(step, *local, image)
            if not result.ok:
                raise CommandError(result, f"clairctl {step} failed for {image}")
            outputs.append(result.stdout)

        report_path = self.settings.work_path / "reports" / "html" / html_report_name(image)
        return ScanReport(
            image=image,
            scanner=self.name,
            report_path=str(report_path),
            output="".join(outputs),
        )
