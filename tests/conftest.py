# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

SAMPLE_LOG = """\
(./main.tex
LaTeX2e <2022-11-01>
(./chapter1.tex
LaTeX Warning: Reference `fig:x' on page 2 undefined on input line 7.

Underfull \\hbox (badness 10000) in paragraph at lines 10--12
)
LaTeX Warning: Citation `knuth84' on page 3 undefined on input line 12.

! Undefined control sequence.
l.20 \\foo

[3] )
"""


@pytest.fixture
def sample_log() -> str:
    """Return a short pdflatex log touching nesting, warnings and an error."""
    return SAMPLE_LOG
