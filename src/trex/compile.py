# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile / bibtex / recompile loop driving the classification pipeline."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .categories import Category
from .config import ProjectConfig, ReportConfig
from .constants import CITATION_CATEGORY, REFERENCE_CATEGORY
from .context import ParseContext
from .errors import CompileError
from .merger import LineMerger
from .pipeline import ClassificationPipeline, build_pipeline
from .reporting.formatters import RenderConfig, render_category
from .rules import bibtex_category
from .source import SourceText
from .subprocess_utils import combined_output, run_command

LOGGER = logging.getLogger(__name__)

Runner = Callable[..., subprocess.CompletedProcess[str]]
Emitter = Callable[[str], None]


@dataclass(slots=True)
class CompileOutcome:
    """What a :meth:`CompileSession.compile` call produced."""

    pipeline: ClassificationPipeline
    compiler_runs: int = 1
    bibtex: Category | None = None
    reports: list[str] = field(default_factory=list)


class CompileSession:
    """Run the compiler until citations and references settle.

    The first run usually leaves citations and cross references unresolved. In
    that case bibtex runs (when citations are missing) and the compiler runs
    twice more; only the last run's report counts.
    """

    def __init__(
        self,
        source: Path,
        *,
        project: ProjectConfig | None = None,
        report: ReportConfig | None = None,
        render: RenderConfig | None = None,
        runner: Runner = run_command,
        emit: Emitter | None = None,
    ) -> None:
        self.source = source
        self.project = project or ProjectConfig()
        self.report = report or ReportConfig()
        self.render = render or RenderConfig()
        self._runner = runner
        self._emit = emit or (lambda _text: None)
        self._source_text: SourceText | None = None

    @property
    def base(self) -> Path:
        return self.source.with_suffix("")

    @property
    def aux_file(self) -> Path:
        return self.base.with_suffix(".aux")

    @property
    def output_file(self) -> Path:
        return self.base.with_suffix(".pdf")

    def compiler_command(self) -> list[str]:
        command = [self.project.compiler]
        if self.project.synctex:
            command.append("-synctex=1")
        command.extend(["--interaction", self.project.interaction, str(self.source)])
        return command

    def bibtex_command(self) -> list[str]:
        return [self.project.bibtex, str(self.aux_file)]

    def _run(self, command: Sequence[str]) -> subprocess.CompletedProcess[str]:
        return self._runner(command)

    def _classify(self, output: str) -> ClassificationPipeline:
        if self._source_text is None:
            self._source_text = SourceText.load(self.source)
        return build_pipeline(self.report, source=self._source_text).classify(output)

    def _print(self, text: str, outcome: CompileOutcome | None = None) -> None:
        if not text:
            return
        if outcome is not None:
            outcome.reports.append(text)
        self._emit(text)

    def run_compiler(self) -> ClassificationPipeline:
        completed = self._run(self.compiler_command())
        LOGGER.debug("%s exited with %d", self.project.compiler, completed.returncode)
        return self._classify(combined_output(completed))

    def bibtex(self) -> Category:
        """Run bibtex on the aux file and print its warnings.

        The compiler runs first when no aux file exists yet.
        """

        if not self.aux_file.exists():
            LOGGER.debug("%s missing; compiling first", self.aux_file)
            self.run_compiler()
        completed = self._run(self.bibtex_command())
        category = bibtex_category()
        merger = LineMerger(combined_output(completed))
        context = ParseContext(lines=merger.lines)
        for logical in merger:
            category.handle(logical, context)
        self._print(render_category(category, self.render))
        return category

    def compile(self) -> CompileOutcome:
        """Compile the document, resolving citations and references when needed.

        Raises:
            CompileError: When the compiler fails on the intermediate rerun.
            SourceUnavailableError: When the source file cannot be read.
        """

        quiet = self.report.quiet
        pipeline = self.run_compiler()
        outcome = CompileOutcome(pipeline=pipeline)
        if not pipeline.has_citation_warnings() and not pipeline.has_reference_warnings():
            if not quiet:
                self._print(pipeline.render_all(self.render), outcome)
            return outcome

        if pipeline.has_citation_warnings():
            LOGGER.debug("unresolved citations; running bibtex")
            outcome.bibtex = self.bibtex()
            if not outcome.bibtex.is_empty() and not quiet:
                # bibtex itself failed: the remaining problems are not citation noise
                excluded = (CITATION_CATEGORY, REFERENCE_CATEGORY)
                self._print(pipeline.render_all(self.render, exclude=excluded), outcome)

        rerun = self._run(self.compiler_command())
        outcome.compiler_runs += 1
        if rerun.returncode != 0:
            self._print(pipeline.render_all(self.render), outcome)
            raise CompileError(self.project.compiler, rerun.returncode)

        outcome.pipeline = self.run_compiler()
        outcome.compiler_runs += 1
        LOGGER.debug("%s written after %d compiler runs", self.output_file, outcome.compiler_runs)
        if not quiet:
            self._print(outcome.pipeline.render_all(self.render), outcome)
        return outcome


__all__ = ["CompileOutcome", "CompileSession"]
