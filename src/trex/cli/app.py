# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the trex commands."""

from __future__ import annotations

import typer

from .. import __version__
from . import compile as compile_cmd
from . import report
from .typer_ext import create_typer

app = create_typer(
    name="trex",
    help="Compile LaTeX documents and turn the compiler output into a readable summary.",
    no_args_is_help=True,
)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"trex version {__version__}")
        raise typer.Exit(code=0)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_show_version,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Compile LaTeX documents and turn the compiler output into a readable summary."""

    del version


report.register(app)
compile_cmd.register(app)

__all__ = ["app"]
