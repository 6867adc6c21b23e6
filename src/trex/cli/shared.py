# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared utilities for CLI commands (logging, errors, source resolution)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

import typer

from ..config import ReportConfig
from ..console import is_tty
from ..constants import TEX_SUFFIX
from ..logging import fail as core_fail
from ..logging import ok as core_ok
from ..logging import warn as core_warn
from ..reporting.formatters import RenderConfig

_DOCUMENT_CLASS = re.compile(r"\\documentclass.*?\{.*?\}")


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    use_emoji: bool
    use_color: bool = True

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout verbatim, without a trailing newline."""
        typer.echo(message, nl=False)


def build_cli_logger(*, emoji: bool, color: bool = True) -> CLILogger:
    """Return a ``CLILogger`` honouring the emoji and colour flags."""

    return CLILogger(use_emoji=emoji, use_color=color)


def resolve_source(candidate: Path | None, *, configured: Path | None, cwd: Path) -> Path:
    """Return the LaTeX document to work on.

    The explicit argument wins over the configured source; with neither, the
    single ``*.tex`` file in ``cwd`` declaring a ``\\documentclass`` is used.
    A missing ``.tex`` suffix is added when the bare path does not exist.

    Raises:
        CLIError: When no unambiguous, existing source can be found.
    """

    chosen = candidate or configured
    if chosen is None:
        documents = sorted(
            path
            for path in cwd.glob(f"*{TEX_SUFFIX}")
            if _DOCUMENT_CLASS.search(path.read_text(encoding="utf-8", errors="replace"))
        )
        if not documents:
            raise CLIError("Source file not set!")
        if len(documents) > 1:
            names = ", ".join(path.name for path in documents)
            raise CLIError(f"Several documents found ({names}); pass the source explicitly")
        chosen = documents[0]
    if not chosen.exists() and chosen.suffix != TEX_SUFFIX:
        chosen = chosen.with_name(chosen.name.rstrip(".") + TEX_SUFFIX)
    if not chosen.exists():
        raise CLIError(f"File doesn't exist: {chosen}")
    return chosen


def build_report_config(*, quiet: bool, verbose: bool, color: bool, emoji: bool) -> ReportConfig:
    """Translate the common output flags into a :class:`ReportConfig`."""

    return ReportConfig(quiet=quiet, verbose=verbose, color=color, emoji=emoji)


def build_render_config(config: ReportConfig) -> RenderConfig:
    """Return render settings, colouring only when stdout is a terminal."""

    return RenderConfig(color=config.color and is_tty())


def exit_with(logger: CLILogger, exc: Exception, *, exit_code: int = 1) -> typer.Exit:
    """Report ``exc`` as a failure line and return the matching exit."""

    logger.fail(str(exc))
    return typer.Exit(code=getattr(exc, "exit_code", exit_code))


__all__ = [
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "build_render_config",
    "build_report_config",
    "exit_with",
    "resolve_source",
]
