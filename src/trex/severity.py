# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """How serious the diagnostics collected by a category are."""

    ERROR = "error"
    WARNING = "warning"


_SEVERITY_STYLE: Final[dict[Severity, str]] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "bold yellow",
}


def severity_style(severity: Severity) -> str:
    """Return the rich style used for category headers of ``severity``."""

    return _SEVERITY_STYLE.get(severity, "bold")
