# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for report rendering and document compilation."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .constants import EXPANDED_LIMIT, SUPPRESSED_LIMIT
from .errors import ConfigError

InteractionMode = Literal["nonstopmode", "batchmode", "scrollmode", "errorstopmode"]


class DisplayLimits(BaseModel):
    """Row limits for the two classes of categories.

    "Interesting" categories (errors, citations, references) are shown unless
    the run is quiet; "uninteresting" ones (box badness, fonts, packages) are
    only listed when the run is verbose.
    """

    model_config = ConfigDict(frozen=True)

    interesting: int | None = Field(default=EXPANDED_LIMIT, ge=0)
    uninteresting: int | None = Field(default=SUPPRESSED_LIMIT, ge=0)


class ReportConfig(BaseModel):
    """Configuration for classifying and printing compiler output."""

    model_config = ConfigDict(validate_assignment=True)

    verbose: bool = False
    quiet: bool = False
    color: bool = True
    emoji: bool = True

    @property
    def effective_verbose(self) -> bool:
        """Return ``verbose`` unless ``quiet`` overrides it."""
        return self.verbose and not self.quiet

    @property
    def limits(self) -> DisplayLimits:
        """Return the display limits implied by the quiet/verbose flags."""
        return DisplayLimits(
            interesting=SUPPRESSED_LIMIT if self.quiet else EXPANDED_LIMIT,
            uninteresting=EXPANDED_LIMIT if self.effective_verbose else SUPPRESSED_LIMIT,
        )


class ProjectConfig(BaseModel):
    """Per-document settings read from ``[tool.trex]`` or ``.trex.toml``."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    source: Path | None = None
    compiler: str = "pdflatex"
    bibtex: str = "bibtex"
    interaction: InteractionMode = "nonstopmode"
    synctex: bool = True


__all__ = [
    "ConfigError",
    "DisplayLimits",
    "InteractionMode",
    "ProjectConfig",
    "ReportConfig",
]
