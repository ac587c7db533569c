# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""External command result model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CommandResult:
    """Captured outcome of one external command invocation."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0
