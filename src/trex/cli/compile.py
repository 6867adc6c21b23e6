# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``trex compile`` and ``trex bibtex``: run the toolchain and summarise it."""

from __future__ import annotations

from pathlib import Path

import typer

from ..compile import CompileSession
from ..config import ReportConfig
from ..config_loader import load_project_config
from ..errors import TrexError
from ..logging import enable_debug_logging
from .shared import (
    CLIError,
    CLILogger,
    build_cli_logger,
    build_render_config,
    build_report_config,
    exit_with,
    resolve_source,
)
from .typer_ext import SortedTyper

SOURCE_ARGUMENT = typer.Argument(None, metavar="[SOURCE]", help="LaTeX document (default: detected).")


def compile_command(
    source: Path | None = SOURCE_ARGUMENT,
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Output as little as possible (overrides --verbose)."),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="List low-priority warnings as well."),
    color: bool = typer.Option(True, "--color/--no-color", help="Colourise output on terminals."),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Prefix status lines with emoji."),
    debug: bool = typer.Option(False, "--debug", help="Log compiler commands and retries to stderr."),
) -> None:
    """Compile the document, rerunning bibtex and the compiler until references resolve."""

    if debug:
        enable_debug_logging()
    config = build_report_config(quiet=quiet, verbose=verbose, color=color, emoji=emoji)
    logger = build_cli_logger(emoji=emoji, color=color)
    try:
        session = _session(source, logger=logger, config=config)
        outcome = session.compile()
    except (CLIError, TrexError, FileNotFoundError) as exc:
        raise exit_with(logger, exc) from exc
    raise typer.Exit(code=1 if outcome.pipeline.has_errors() else 0)


def bibtex_command(
    source: Path | None = SOURCE_ARGUMENT,
    color: bool = typer.Option(True, "--color/--no-color", help="Colourise output on terminals."),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Prefix status lines with emoji."),
    debug: bool = typer.Option(False, "--debug", help="Log commands to stderr."),
) -> None:
    """Run bibtex on the document's aux file and list what it could not find."""

    if debug:
        enable_debug_logging()
    config = build_report_config(quiet=False, verbose=False, color=color, emoji=emoji)
    logger = build_cli_logger(emoji=emoji, color=color)
    try:
        session = _session(source, logger=logger, config=config)
        warnings = session.bibtex()
    except (CLIError, TrexError, FileNotFoundError) as exc:
        raise exit_with(logger, exc) from exc
    if warnings.is_empty():
        logger.ok("bibtex finished without warnings")
    raise typer.Exit(code=0 if warnings.is_empty() else 1)


def _session(source: Path | None, *, logger: CLILogger, config: ReportConfig) -> CompileSession:
    cwd = Path.cwd()
    project = load_project_config(cwd)
    path = resolve_source(source, configured=project.source, cwd=cwd)
    return CompileSession(
        path,
        project=project,
        report=config,
        render=build_render_config(config),
        emit=logger.echo,
    )


def register(app: SortedTyper) -> None:
    app.command("compile")(compile_command)
    app.command("bibtex")(bibtex_command)


__all__ = ["bibtex_command", "compile_command", "register"]
