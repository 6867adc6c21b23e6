# SPDX-License-Identifier: MIT
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

LOGGER = logging.getLogger(__name__)


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = False,
    capture_output: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute *args* after normalising the executable path.

    Output is decoded leniently: TeX happily prints bytes that are not valid
    in the locale encoding.
    """

    normalized = _normalize_args(args)
    LOGGER.debug("running command=%s", shlex.join(normalized))
    return subprocess.run(
        normalized,
        cwd=str(cwd) if cwd is not None else None,
        env=dict(env) if env is not None else None,
        check=check,
        capture_output=capture_output,
        text=True,
        errors="replace",
    )


def combined_output(completed: subprocess.CompletedProcess[str]) -> str:
    """Return stdout followed by stderr of a captured run."""

    parts = [part.rstrip("\n") for part in (completed.stdout, completed.stderr) if part]
    return "\n".join(parts)


__all__ = ["combined_output", "run_command"]
