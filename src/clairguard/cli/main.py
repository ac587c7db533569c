# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""ClairGuard CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import SEVERITY_THRESHOLDS, ClairSettings, load_clair_settings, load_http_settings
from ..errors import ClairGuardError, InputError, ResourceConflictError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models import ScanReport
from ..runtime import ClairGuard

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INPUT_ERROR = 2
EXIT_CONFLICT = 3

CLI_DESCRIPTION_LIMIT = 120


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("image", nargs="?", help="Image to scan; omit to only bring the stack up and health-check it")
    common.add_argument("--workdir", help="Directory holding scanner binaries and reports (default: cwd)")
    common.add_argument("--json", action="store_true", help="Output JSON instead of human-friendly summary")
    common.add_argument("--log-level", help="Logging level (default: CLAIRGUARD_LOG_LEVEL or WARNING)")
    common.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification when downloading scanner binaries",
    )

    parser = argparse.ArgumentParser(description="ClairGuard container image vulnerability scanner (Clair orchestration)")
    sub = parser.add_subparsers(dest="mode", required=True)
    sub.add_parser("html", parents=[common], help="Scan with clairctl and write a browsable HTML report")
    json_parser = sub.add_parser("json", parents=[common], help="Scan with clair-scanner and write a JSON report")
    json_parser.add_argument(
        "-t",
        "--threshold",
        help=f"Severity threshold for unapproved vulnerabilities ({', '.join(SEVERITY_THRESHOLDS)})",
    )
    json_parser.add_argument("-r", "--report", help="JSON report path (default: clair-report.json)")
    return parser


def _truncate(text: str, limit: int = CLI_DESCRIPTION_LIMIT) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(report: ScanReport | None) -> None:
    if report is None:
        print("[ClairGuard] Clair is up and healthy; no image given, nothing scanned.")
        return

    print(f"[ClairGuard] Image: {report.image} ({report.scanner})")
    if report.report_path:
        print(f"Report: {report.report_path}")
    if report.scanner != "clair-scanner":
        return

    counts = report.severity_counts()
    if counts:
        print("Vulnerabilities: " + ", ".join(f"{sev}={n}" for sev, n in counts.items()))
    else:
        print("Vulnerabilities: none")
    if report.unapproved:
        print(f"Unapproved ({len(report.unapproved)}):")
        by_name = {v.name: v for v in report.vulnerabilities}
        for name in report.unapproved:
            vuln = by_name.get(name)
            if vuln is None:
                print(f"- {name}")
                continue
            fixed = f", fixed by {vuln.fixed_by}" if vuln.fixed_by else ""
            print(f"- {name} [{vuln.severity}] {vuln.feature_name} {vuln.feature_version}{fixed}")
            if vuln.description:
                print(f"    {_truncate(vuln.description)}")


def _exit_code_for(exc: ClairGuardError) -> int:
    if isinstance(exc, InputError):
        return EXIT_INPUT_ERROR
    if isinstance(exc, ResourceConflictError):
        return EXIT_CONFLICT
    return EXIT_FAILURE


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ClairSettings = load_clair_settings()
    if args.workdir:
        settings.workdir = args.workdir
    http_settings = load_http_settings()
    if args.ignore_ssl_errors:
        http_settings.verify_ssl = False

    http_client = create_default_http_client(http_settings)

    try:
        with ClairGuard(settings, http_client=http_client) as guard:
            if args.mode == "html":
                report = guard.html_report(args.image)
            else:
                report = guard.json_report(args.image, threshold=args.threshold, report_path=args.report)
    except ClairGuardError as exc:
        print(f"[ClairGuard] error: {exc}", file=sys.stderr)
        return _exit_code_for(exc)

    if args.json:
        _print_json(report.to_dict() if report is not None else {"status": "healthy", "image": None})
    else:
        _pretty_print(report)

    return report.exit_code if report is not None else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
