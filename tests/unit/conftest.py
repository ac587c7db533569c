# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from pathlib import Path

import pytest

from clairguard.models import CommandResult


class FakeRunner:
    """
    CommandRunner double that emulates the docker CLI and the two scanner binaries.

    `containers` maps container names to "running" or "stopped"; missing names are absent.
    """

    def __init__(self):
        self.calls: list[list[str]] = []
        self.containers: dict[str, str] = {}
        self.gateway = "172.17.0.1"
        self.daemon_down = False
        self.fail_run = False
        self.binary_results: dict[str, CommandResult] = {}
        self.scanner_report: dict | None = None
        self.scanner_returncode = 0

    def run(self, args, *, cwd=None, capture=True):  # noqa: ARG002
        args = list(args)
        self.calls.append(args)
        if args[0] == "docker":
            return self._docker(args)
        return self._binary(args)

    def _docker(self, args):
        verb = args[1]
        if self.daemon_down:
            return CommandResult(args, 1, stderr="Cannot connect to the Docker daemon at unix:///var/run/docker.sock")
        if verb == "inspect":
            name = args[-1]
            state = self.containers.get(name)
            if state is None:
                return CommandResult(args, 1, stderr=f"Error: No such object: {name}")
            return CommandResult(args, 0, stdout="true\n" if state == "running" else "false\n")
        if verb == "run":
            if self.fail_run:
                return CommandResult(args, 125, stderr="Unable to find image")
            name = args[args.index("--name") + 1]
            self.containers[name] = "running"
            return CommandResult(args, 0, stdout="0123abcd\n")
        if verb == "start":
            self.containers[args[2]] = "running"
            return CommandResult(args, 0, stdout=f"{args[2]}\n")
        if verb == "network":
            return CommandResult(args, 0, stdout=f"{self.gateway}\n")
        return CommandResult(args, 1, stderr=f"unknown verb {verb}")

    def _binary(self, args):
        binary = Path(args[0]).name
        if binary == "clair-scanner":
            if self.scanner_report is not None:
                report_path = Path(args[args.index("-r") + 1])
                report_path.write_text(json.dumps(self.scanner_report), encoding="utf-8")
            return CommandResult(args, self.scanner_returncode)
        key = args[1] if len(args) > 1 else ""
        return self.binary_results.get(key, CommandResult(args, 0, stdout=f"{key} ok\n"))

    def docker_verbs(self):
        return [call[1] for call in self.calls if call[0] == "docker"]


class FakeHttpClient:
    def __init__(self, health_status=200):
        self.downloads: list[tuple[str, Path]] = []
        self.health_status = health_status
        self.closed = False

    def download(self, url, dest):
        self.downloads.append((url, Path(dest)))
        Path(dest).write_bytes(b"#!/bin/sh\nexit 0\n")
        return Path(dest)

    def status(self, url):  # noqa: ARG002
        return self.health_status

    def close(self):
        self.closed = True


SAMPLE_REPORT = {
    "image": "nginx:1.19",
    "unapproved": ["CVE-2021-3520", "CVE-2020-1967"],
    "vulnerabilities": [
        {
            "featurename": "lz4",
            "featureversion": "1.8.3-1",
            "vulnerability": "CVE-2021-3520",
            "namespace": "debian:10",
            "description": "There's a flaw in lz4. An attacker who submits a crafted file to an application linked with lz4 may be able to trigger an integer overflow.",
            "link": "https://security-tracker.debian.org/tracker/CVE-2021-3520",
            "severity": "Critical",
            "fixedby": "1.8.3-1+deb10u1",
        },
        {
            "featurename": "openssl",
            "featureversion": "1.1.1d-0+deb10u3",
            "vulnerability": "CVE-2020-1967",
            "namespace": "debian:10",
            "description": "Server or client applications that call SSL_check_chain() may crash.",
            "link": "https://security-tracker.debian.org/tracker/CVE-2020-1967",
            "severity": "High",
            "fixedby": "",
        },
        {
            "featurename": "tar",
            "featureversion": "1.30+dfsg-6",
            "vulnerability": "CVE-2005-2541",
            "namespace": "debian:10",
            "description": "Tar 1.15.1 does not properly warn the user when extracting setuid or setgid files.",
            "link": "https://security-tracker.debian.org/tracker/CVE-2005-2541",
            "severity": "Negligible",
            "fixedby": "",
        },
    ],
}


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def fake_http():
    return FakeHttpClient()


@pytest.fixture
def sample_report():
    return json.loads(json.dumps(SAMPLE_REPORT))
