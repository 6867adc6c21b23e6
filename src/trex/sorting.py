# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Natural, numeric-aware ordering for rendered diagnostics."""

from __future__ import annotations

import re
from typing import Final

from .models import Diagnostic

_NUMBER_RUN: Final[re.Pattern[str]] = re.compile(r"(\d+(?:\.\d+)?)")

NaturalKey = tuple[tuple[int, float | str], ...]


def natural_key(text: str) -> NaturalKey:
    """Split ``text`` into number and text runs so ``"9"`` sorts before ``"10"``.

    Numbers compare numerically, everything else case-insensitively. Each run is
    tagged so a number never gets compared against a string.
    """

    parts: list[tuple[int, float | str]] = []
    for chunk in _NUMBER_RUN.split(text):
        if not chunk:
            continue
        if _NUMBER_RUN.fullmatch(chunk):
            parts.append((0, float(chunk)))
        else:
            parts.append((1, chunk.lower()))
    return tuple(parts)


def diagnostic_sort_key(diagnostic: Diagnostic) -> NaturalKey:
    """Return the natural key of a diagnostic's rendered reference and message."""

    return natural_key(f"{diagnostic.reference} {diagnostic.message}")


def sort_diagnostics(diagnostics: list[Diagnostic]) -> list[Diagnostic]:
    return sorted(diagnostics, key=diagnostic_sort_key)


__all__ = ["diagnostic_sort_key", "natural_key", "sort_diagnostics"]
