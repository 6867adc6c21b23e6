# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Category rules that claim compiler messages and collect diagnostics."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Final

from .constants import NO_REFERENCE
from .context import ParseContext
from .models import Diagnostic, LogicalLine
from .severity import Severity

MATCH_ALL: Final[re.Pattern[str]] = re.compile(r".*")

_LINE_STRICT: Final[re.Pattern[str]] = re.compile(r"lines? (?P<line>[0-9\-]+)")
_LINE_LOOSE: Final[re.Pattern[str]] = re.compile(r"(?:lines? |l[^0-9])(?P<line>[0-9\-]+)")

ReferenceExtractor = Callable[[str, int, ParseContext], str]
MessageFormatter = Callable[["Category", str, str], str]


def default_reference(text: str, index: int, context: ParseContext) -> str:
    """Return the ``line N`` / ``lines N-M`` / ``l.N`` number found in ``text``."""

    del index, context
    for pattern in (_LINE_STRICT, _LINE_LOOSE):
        if match := pattern.search(text):
            return match.group("line")
    return NO_REFERENCE


def default_message(category: Category, reference: str, text: str) -> str:
    """Return the ``message`` group (or whole match) of the category print pattern."""

    del reference
    match = category.print_pattern.search(text)
    if match is None:
        return text
    if "message" in match.re.groupindex and match.group("message") is not None:
        return match.group("message")
    return match.group(0)


@dataclass(slots=True)
class Category:
    """A named rule grouping one class of compiler diagnostics.

    ``display_limit`` caps the rendered rows: ``None`` shows everything and
    ``0`` keeps only the header with its count. ``extra_lines`` pulls that many
    following physical lines into the text handed to the strategies, for
    messages TeX spreads over several lines.
    """

    name: str
    match_pattern: re.Pattern[str]
    print_pattern: re.Pattern[str] = MATCH_ALL
    display_limit: int | None = None
    extra_lines: int = 0
    severity: Severity = Severity.WARNING
    reference_extractor: ReferenceExtractor = default_reference
    message_formatter: MessageFormatter = default_message
    diagnostics: list[Diagnostic] = field(default_factory=list)
    max_reference_width: int = 0
    _seen: set[tuple[str, str]] = field(default_factory=set, repr=False)

    def __post_init__(self) -> None:
        if self.display_limit is not None and self.display_limit < 0:
            raise ValueError(f"{self.name}: display limit must be >= 0, got {self.display_limit}")
        if self.extra_lines < 0:
            raise ValueError(f"{self.name}: extra lines must be >= 0, got {self.extra_lines}")

    def handle(self, line: LogicalLine, context: ParseContext) -> bool:
        if not line.text or not self.match_pattern.search(line.text):
            return False
        text = self.expand(line.text, line.index, context)
        reference = self.reference_extractor(text, line.index, context) or NO_REFERENCE
        message = self.message_formatter(self, reference, text)
        self.add(reference, message, file_context=context.file_context)
        return True

    def expand(self, text: str, index: int, context: ParseContext) -> str:
        """Append the configured number of follow-up lines to ``text``."""

        if self.extra_lines == 0:
            return text
        return "\n".join([text, *context.following(index, self.extra_lines)])

    def add(self, line_ref: str, message: str, *, file_context: str = "") -> bool:
        """Record a diagnostic unless the ``(line_ref, message)`` pair is known."""

        message = message.rstrip("\n")
        key = (line_ref, message)
        if key in self._seen:
            return False
        self._seen.add(key)
        diagnostic = Diagnostic(line_ref=line_ref, message=message, file_context=file_context)
        self.diagnostics.append(diagnostic)
        self.max_reference_width = max(self.max_reference_width, len(diagnostic.reference))
        return True

    @property
    def count(self) -> int:
        return len(self.diagnostics)

    def is_empty(self) -> bool:
        return not self.diagnostics


__all__ = [
    "MATCH_ALL",
    "Category",
    "MessageFormatter",
    "ReferenceExtractor",
    "default_message",
    "default_reference",
]
