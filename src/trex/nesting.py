# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Track which input file TeX is reading from its ``(file ... )`` notation."""

from __future__ import annotations

import re
from typing import Final

from .constants import NESTING_SEPARATOR, NESTING_SUFFIX
from .context import ParseContext
from .models import LogicalLine

_TRIGGER_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^\((?:\.{0,2}/|[\w-][\w./-]*\.\w+)"),
    re.compile(r"^\[[^\]]"),
    re.compile(r"^\)"),
)
_PAGE_MARKER: Final[re.Pattern[str]] = re.compile(r"\[[^\]]+\](.*)", re.DOTALL)
_CLOSE_RUN: Final[re.Pattern[str]] = re.compile(r"(\)+)(.*)", re.DOTALL)
_OPEN_FILE: Final[re.Pattern[str]] = re.compile(r"\(([^()\[]+)(.*)", re.DOTALL)


class NestingTracker:
    """Maintain the stack of files TeX currently has open.

    The tracker claims lines made of file openings, closings and page markers
    such as ``(./chapter.tex [3] )`` so they never reach the catch-all rules.
    It renders nothing itself; categories read :attr:`state` when recording
    diagnostics.
    """

    name = "File nesting"

    def __init__(self) -> None:
        self._stack: list[str] = []

    @property
    def stack(self) -> tuple[str, ...]:
        return tuple(self._stack)

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def state(self) -> str:
        """Return ``"a|b: "`` for everything below the outermost file, else ``""``."""
        if len(self._stack) <= 1:
            return ""
        return NESTING_SEPARATOR.join(self._stack[1:]) + NESTING_SUFFIX

    def reset(self) -> None:
        self._stack.clear()

    def handle(self, line: LogicalLine, context: ParseContext) -> bool:
        del context
        text = line.text
        if not any(pattern.match(text) for pattern in _TRIGGER_PATTERNS):
            return False
        self.parse(text)
        return True

    def parse(self, text: str) -> None:
        """Apply every open, close and page token found in ``text``."""

        remainder = text
        while remainder:
            remainder = remainder.lstrip()
            if not remainder:
                break
            if match := _PAGE_MARKER.match(remainder):
                remainder = match.group(1)
                continue
            if match := _CLOSE_RUN.match(remainder):
                for _ in match.group(1):
                    if self._stack:
                        self._stack.pop()
                remainder = match.group(2)
                continue
            if match := _OPEN_FILE.match(remainder):
                name = match.group(1).strip()
                if name:
                    self._stack.append(name)
                remainder = match.group(2)
                continue
            break


__all__ = ["NestingTracker"]
