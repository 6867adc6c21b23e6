# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across trex modules."""

from __future__ import annotations

from typing import Final

# TeX hard-wraps its terminal output at this column (``max_print_line``).
TEX_WRAP_WIDTH: Final[int] = 79

UNDEFINED_PREFIX: Final[str] = "! Undefined"

NO_REFERENCE: Final[str] = "-"
NESTING_SEPARATOR: Final[str] = "|"
NESTING_SUFFIX: Final[str] = ": "

EXPANDED_LIMIT: Final[int] = 50
SUPPRESSED_LIMIT: Final[int] = 0
BIBTEX_LIMIT: Final[int] = 10

ROW_INDENT: Final[str] = "    "
ELLIPSIS: Final[str] = "..."

CITATION_CATEGORY: Final[str] = "Citation Undefined"
REFERENCE_CATEGORY: Final[str] = "Reference Warnings"

TEX_SUFFIX: Final[str] = ".tex"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "trex"
PROJECT_CONFIG_FILENAME: Final[str] = ".trex.toml"
