# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""First-match-wins classification of compiler output into categories."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from pathlib import Path

from .categories import Category
from .config import DisplayLimits, ReportConfig
from .constants import CITATION_CATEGORY, REFERENCE_CATEGORY
from .context import LineHandler, ParseContext
from .merger import LineMerger
from .nesting import NestingTracker
from .reporting.formatters import RenderConfig, render_report
from .rules import build_handlers
from .severity import Severity
from .source import SourceText

LOGGER = logging.getLogger(__name__)


class ClassificationPipeline:
    """Feed logical lines through ordered handlers and keep what they collect.

    A pipeline is good for exactly one compiler run: categories and the file
    nesting stack accumulate state, so build a new one per invocation.
    """

    def __init__(
        self,
        handlers: Sequence[LineHandler],
        *,
        nesting: NestingTracker | None = None,
        source: SourceText | None = None,
    ) -> None:
        self._handlers = list(handlers)
        self._nesting = nesting
        self._source = source
        self._classified = False
        self.unclassified = 0

    @property
    def handlers(self) -> list[LineHandler]:
        return list(self._handlers)

    @property
    def categories(self) -> list[Category]:
        """Return the rendering categories in configuration order."""
        return [handler for handler in self._handlers if isinstance(handler, Category)]

    def category(self, name: str) -> Category:
        for category in self.categories:
            if category.name == name:
                return category
        raise KeyError(name)

    def classify(self, output: str | Sequence[str]) -> ClassificationPipeline:
        """Classify ``output`` once; later calls leave the collected results alone."""

        if self._classified:
            LOGGER.debug("pipeline already classified; ignoring new output")
            return self
        self._classified = True
        merger = LineMerger(output)
        context = ParseContext(lines=merger.lines, nesting=self._nesting, source=self._source)
        for logical in merger:
            if not logical.text:
                continue
            if not any(handler.handle(logical, context) for handler in self._handlers):
                self.unclassified += 1
                LOGGER.debug("unclassified line %d: %s", logical.index + 1, logical.text)
        LOGGER.debug(
            "classified %d physical lines: %d diagnostics, %d unclassified",
            len(merger.lines),
            self.total_diagnostics,
            self.unclassified,
        )
        return self

    @property
    def total_diagnostics(self) -> int:
        return sum(category.count for category in self.categories)

    def has_warnings_in_category(self, name: str) -> bool:
        return not self.category(name).is_empty()

    def has_citation_warnings(self) -> bool:
        return self.has_warnings_in_category(CITATION_CATEGORY)

    def has_reference_warnings(self) -> bool:
        return self.has_warnings_in_category(REFERENCE_CATEGORY)

    def has_errors(self) -> bool:
        """Return ``True`` when any error-severity category collected something."""
        return any(
            category.severity is Severity.ERROR and not category.is_empty() for category in self.categories
        )

    def render_all(
        self,
        config: RenderConfig | None = None,
        *,
        exclude: Collection[str] = (),
    ) -> str:
        """Render every non-empty category except those named in ``exclude``."""

        selected = [category for category in self.categories if category.name not in exclude]
        return render_report(selected, config or RenderConfig())


def build_pipeline(
    config: ReportConfig | None = None,
    *,
    source: Path | SourceText | None = None,
    limits: DisplayLimits | None = None,
) -> ClassificationPipeline:
    """Return a fresh pipeline wired with the default rule set.

    Raises:
        SourceUnavailableError: When ``source`` is a path that cannot be read.
    """

    config = config or ReportConfig()
    source_text = SourceText.load(source) if isinstance(source, Path) else source
    nesting = NestingTracker()
    handlers = build_handlers(limits or config.limits, nesting)
    return ClassificationPipeline(handlers, nesting=nesting, source=source_text)


def classify_output(
    output: str | Sequence[str],
    config: ReportConfig | None = None,
    *,
    source: Path | SourceText | None = None,
) -> ClassificationPipeline:
    """Build a pipeline and classify ``output`` with it."""

    return build_pipeline(config, source=source).classify(output)


__all__ = ["ClassificationPipeline", "build_pipeline", "classify_output"]
