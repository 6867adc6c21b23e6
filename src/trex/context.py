# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parse context and the handler protocol used by the pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import LogicalLine
    from .nesting import NestingTracker
    from .source import SourceText


@dataclass(slots=True)
class ParseContext:
    """State visible to every handler during one classification pass."""

    lines: Sequence[str]
    nesting: NestingTracker | None = None
    source: SourceText | None = None

    @property
    def file_context(self) -> str:
        """Return the nesting label for diagnostics recorded right now."""
        return self.nesting.state if self.nesting is not None else ""

    def following(self, index: int, count: int | None = None) -> Sequence[str]:
        """Return up to ``count`` physical lines after ``index`` (all when ``None``)."""
        start = index + 1
        if count is None:
            return self.lines[start:]
        return self.lines[start : start + count]


@runtime_checkable
class LineHandler(Protocol):
    """Anything that may claim a logical line during classification."""

    name: str

    def handle(self, line: LogicalLine, context: ParseContext) -> bool:
        """Return ``True`` when the line was claimed and must not reach later handlers."""
        ...


__all__ = ["LineHandler", "ParseContext"]
