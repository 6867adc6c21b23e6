# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory view of the LaTeX source used to locate diagnostics."""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from pathlib import Path

from .errors import SourceUnavailableError

LOGGER = logging.getLogger(__name__)


class SourceText:
    """Immutable source buffer answering "which lines match?" queries."""

    def __init__(self, text: str, *, path: Path | None = None) -> None:
        self._text = text
        self.path = path
        self._newlines = [match.start() for match in re.finditer("\n", text)]

    @classmethod
    def load(cls, path: Path) -> SourceText:
        """Read ``path`` once and wrap it.

        Raises:
            SourceUnavailableError: When the file cannot be read.
        """

        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SourceUnavailableError(path, exc.strerror or str(exc)) from exc
        LOGGER.debug("loaded source %s (%d characters)", path, len(text))
        return cls(text, path=path)

    @property
    def text(self) -> str:
        return self._text

    def line_number_at(self, offset: int) -> int:
        """Return the 1-based line number containing character ``offset``."""

        return bisect_right(self._newlines, offset - 1) + 1

    def find_lines(self, pattern: re.Pattern[str] | str) -> list[int]:
        """Return the distinct line numbers where ``pattern`` starts a match."""

        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        numbers: list[int] = []
        for match in compiled.finditer(self._text):
            number = self.line_number_at(match.start())
            if number not in numbers:
                numbers.append(number)
        return numbers

    def lines_containing(self, needle: str) -> list[int]:
        """Return the line numbers holding the literal ``needle``."""

        if not needle:
            return []
        return self.find_lines(re.escape(needle))


__all__ = ["SourceText"]
