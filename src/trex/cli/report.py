# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``trex report``: summarise an already captured compiler log."""

from __future__ import annotations

from pathlib import Path

import typer

from ..errors import TrexError
from ..logging import enable_debug_logging
from ..pipeline import build_pipeline
from .shared import (
    CLIError,
    build_cli_logger,
    build_render_config,
    build_report_config,
    exit_with,
)
from .typer_ext import SortedTyper

STDIN_MARKER = "-"


def report_command(
    log: Path = typer.Argument(..., metavar="LOG", help="Captured compiler output, or '-' for stdin."),
    source: Path | None = typer.Option(
        None,
        "--source",
        "-s",
        help="LaTeX source used to locate runaway arguments and duplicate labels.",
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Output as little as possible (overrides --verbose)."),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="List low-priority warnings as well."),
    color: bool = typer.Option(True, "--color/--no-color", help="Colourise output on terminals."),
    emoji: bool = typer.Option(True, "--emoji/--no-emoji", help="Prefix status lines with emoji."),
    debug: bool = typer.Option(False, "--debug", help="Log classification details to stderr."),
) -> None:
    """Print the categorised report of a compiler log; exit 1 when it contains errors."""

    if debug:
        enable_debug_logging()
    config = build_report_config(quiet=quiet, verbose=verbose, color=color, emoji=emoji)
    logger = build_cli_logger(emoji=emoji, color=color)
    try:
        output = _read_log(log)
        if not output.strip():
            logger.warn(f"{log} holds no compiler output")
        pipeline = build_pipeline(config, source=source).classify(output)
    except (CLIError, TrexError) as exc:
        raise exit_with(logger, exc) from exc

    logger.echo(pipeline.render_all(build_render_config(config)))
    raise typer.Exit(code=1 if pipeline.has_errors() else 0)


def _read_log(log: Path) -> str:
    if str(log) == STDIN_MARKER:
        return typer.get_text_stream("stdin").read()
    try:
        return log.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise CLIError(f"cannot read log {log}: {exc.strerror or exc}") from exc


def register(app: SortedTyper) -> None:
    app.command("report")(report_command)


__all__ = ["register", "report_command"]
