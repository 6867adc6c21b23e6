# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the trex package."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from .constants import NO_REFERENCE


@dataclass(frozen=True, slots=True)
class LogicalLine:
    """One unwrapped unit of compiler output.

    ``index`` points at the last physical line that contributed to ``text`` so
    that rules reading follow-up lines continue after the merged block.
    """

    text: str
    index: int


class Diagnostic(BaseModel):
    """A classified compiler message with its source line reference."""

    model_config = ConfigDict(frozen=True)

    line_ref: str = NO_REFERENCE
    message: str
    file_context: str = ""

    @property
    def key(self) -> tuple[str, str]:
        """Return the identity used for deduplication."""
        return self.line_ref, self.message

    @property
    def reference(self) -> str:
        """Return the reference as displayed, prefixed with the file context."""
        if self.line_ref == NO_REFERENCE:
            return NO_REFERENCE
        return f"{self.file_context}{self.line_ref}"
