# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclasses for scan reports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

SEVERITY_ORDER = ("Defcon1", "Critical", "High", "Medium", "Low", "Negligible", "Unknown")


@dataclass
class Vulnerability:
    """One vulnerable feature reported by clair-scanner."""

    name: str
    feature_name: str = ""
    feature_version: str = ""
    namespace: str = ""
    severity: str = "Unknown"
    fixed_by: str = ""
    link: str = ""
    description: str = ""
    approved: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, unapproved: set[str] | None = None) -> Vulnerability:
        name = str(data.get("vulnerability") or data.get("name") or "")
        return cls(
            name=name,
            feature_name=str(data.get("featurename") or ""),
            feature_version=str(data.get("featureversion") or ""),
            namespace=str(data.get("namespace") or ""),
            severity=str(data.get("severity") or "Unknown"),
            fixed_by=str(data.get("fixedby") or ""),
            link=str(data.get("link") or ""),
            description=str(data.get("description") or ""),
            approved=unapproved is not None and name not in unapproved,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "feature_name": self.feature_name,
            "feature_version": self.feature_version,
            "namespace": self.namespace,
            "severity": self.severity,
            "fixed_by": self.fixed_by,
            "link": self.link,
            "description": self.description,
            "approved": self.approved,
        }


@dataclass
class ScanReport:
    """Outcome of one scanner run against an image."""

    image: str
    scanner: str
    exit_code: int = 0
    report_path: str | None = None
    vulnerabilities: list[Vulnerability] = field(default_factory=list)
    unapproved: list[str] = field(default_factory=list)
    output: str = ""

    def severity_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for vuln in self.vulnerabilities:
            counts[vuln.severity] = counts.get(vuln.severity, 0) + 1
        ordered = {sev: counts.pop(sev) for sev in SEVERITY_ORDER if sev in counts}
        ordered.update(counts)
        return ordered

    def to_dict(self) -> dict[str, Any]:
        return {
            "image": self.image,
            "scanner": self.scanner,
            "exit_code": self.exit_code,
            "report_path": self.report_path,
            "severity_counts": self.severity_counts(),
            "unapproved": list(self.unapproved),
            "vulnerabilities": [v.to_dict() for v in self.vulnerabilities],
        }

    @classmethod
    def from_clair_scanner(
        cls,
        data: Mapping[str, Any],
        *,
        exit_code: int = 0,
        report_path: str | None = None,
        output: str = "",
    ) -> ScanReport:
        """Build a report from clair-scanner's JSON output (`-r` file)."""
        raw_unapproved = data.get("unapproved")
        unapproved = [str(item) for item in raw_unapproved if item] if isinstance(raw_unapproved, list) else []
        unapproved_set = set(unapproved)
        raw_vulns = data.get("vulnerabilities")
        if not isinstance(raw_vulns, list):
            raw_vulns = []
        vulns = [
            Vulnerability.from_mapping(item, unapproved=unapproved_set) for item in raw_vulns if isinstance(item, Mapping)
        ]
        return cls(
            image=str(data.get("image") or ""),
            scanner="clair-scanner",
            exit_code=exit_code,
            report_path=report_path,
            vulnerabilities=vulns,
            unapproved=unapproved,
            output=output,
        )
