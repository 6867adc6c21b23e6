# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reassemble TeX's hard-wrapped terminal output into logical lines."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .constants import TEX_WRAP_WIDTH, UNDEFINED_PREFIX
from .models import LogicalLine


def split_output(output: str | Sequence[str]) -> list[str]:
    """Return ``output`` as a list of physical lines."""

    if isinstance(output, str):
        return output.splitlines()
    return [str(line).rstrip("\r\n") for line in output]


def _continues(line: str) -> bool:
    return len(line) == TEX_WRAP_WIDTH or line.startswith(UNDEFINED_PREFIX)


class LineMerger:
    """Iterate logical lines over a fixed block of compiler output.

    TeX breaks every line at 79 characters, so a physical line of exactly that
    width is glued to its successor. ``! Undefined control sequence`` errors
    are followed by the offending ``l.N`` context on the next line and are
    merged with it as well. Each call to :meth:`__iter__` starts over.
    """

    def __init__(self, output: str | Sequence[str]) -> None:
        self._lines = split_output(output)

    @property
    def lines(self) -> list[str]:
        """Return the physical lines backing this merger."""
        return self._lines

    def __iter__(self) -> Iterator[LogicalLine]:
        pending: list[str] = []
        for index, line in enumerate(self._lines):
            pending.append(line)
            if _continues(line):
                continue
            yield LogicalLine(text="".join(pending), index=index)
            pending = []
        if pending:
            yield LogicalLine(text="".join(pending), index=len(self._lines) - 1)


def merge_lines(output: str | Sequence[str]) -> list[str]:
    """Return the logical line texts of ``output``."""

    return [logical.text for logical in LineMerger(output)]


__all__ = ["LineMerger", "merge_lines", "split_output"]
