# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the classification engine and its glue."""

from __future__ import annotations

from pathlib import Path


class TrexError(Exception):
    """Base class for failures that abort a trex command."""


class ConfigError(TrexError):
    """Raised when configuration input is invalid."""


class SourceUnavailableError(TrexError):
    """Raised when the LaTeX source needed for a line re-scan cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot read source {path}: {reason}")
        self.path = path


class CompileError(TrexError):
    """Raised when the compiler fails on the intermediate rerun that precedes the final run."""

    def __init__(self, command: str, returncode: int) -> None:
        super().__init__(f"{command} exited with status {returncode}; could not create PDF")
        self.returncode = returncode


__all__ = ["CompileError", "ConfigError", "SourceUnavailableError", "TrexError"]
