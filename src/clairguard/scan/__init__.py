# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scanner drivers."""

from .clair_scanner import ClairScannerRunner, load_report, normalize_threshold
from .clairctl import ClairctlScanner, html_report_name

__all__ = [
    "ClairScannerRunner",
    "ClairctlScanner",
    "html_report_name",
    "load_report",
    "normalize_threshold",
]
