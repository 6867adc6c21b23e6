# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Text formatters turning categories into the printed report."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.text import Text

from ..constants import ELLIPSIS, ROW_INDENT
from ..severity import severity_style
from ..sorting import sort_diagnostics

if TYPE_CHECKING:
    from ..categories import Category

_REFERENCE_STYLE = "yellow"


class RenderConfig(BaseModel):
    """Presentation switches for rendering; colour is opt-in."""

    model_config = ConfigDict(frozen=True)

    color: bool = False


def _to_string(text: Text, config: RenderConfig) -> str:
    if not config.color:
        return text.plain
    console = Console(
        color_system="standard",
        force_terminal=True,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )
    with console.capture() as capture:
        console.print(text, end="")
    return capture.get()


def render_category(category: Category, config: RenderConfig | None = None) -> str:
    """Render one category block, or ``""`` when it collected nothing.

    Rows are ordered naturally by reference and message. A display limit of
    ``0`` keeps only the header; a positive limit below the count adds an
    ellipsis row after the shown rows.
    """

    config = config or RenderConfig()
    if category.is_empty():
        return ""
    diagnostics = sort_diagnostics(category.diagnostics)
    count = len(diagnostics)
    limit = category.display_limit
    shown = diagnostics if limit is None else diagnostics[:limit]
    width = category.max_reference_width

    block = Text()
    block.append(category.name, style=severity_style(category.severity))
    block.append(f" [{count}]:\n")
    for diagnostic in shown:
        block.append(ROW_INDENT)
        block.append(diagnostic.reference.ljust(width), style=_REFERENCE_STYLE)
        block.append(f" {diagnostic.message.rstrip()}\n")
    if limit is not None and 0 < limit < count:
        block.append(f"{ROW_INDENT}{ELLIPSIS.ljust(width)} {ELLIPSIS}\n")
    return _to_string(block, config)


def render_report(categories: Iterable[Category], config: RenderConfig | None = None) -> str:
    """Concatenate the blocks of ``categories`` in their given order."""

    config = config or RenderConfig()
    return "".join(render_category(category, config) for category in categories)


__all__ = ["RenderConfig", "render_category", "render_report"]
