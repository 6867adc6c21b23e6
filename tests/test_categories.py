# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the generic category rule."""

from __future__ import annotations

import re

import pytest

from trex.categories import Category, default_message, default_reference
from trex.context import ParseContext
from trex.models import LogicalLine
from trex.nesting import NestingTracker


def _ctx(*lines: str) -> ParseContext:
    return ParseContext(lines=list(lines))


def test_default_reference_prefers_line_numbers() -> None:
    ctx = _ctx()
    assert default_reference("Overfull at lines 10--12", 0, ctx) == "10--12"
    assert default_reference("on input line 7.", 0, ctx) == "7"
    assert default_reference("l.42 \\foo", 0, ctx) == "42"
    assert default_reference("no number here", 0, ctx) == "-"


def test_default_message_uses_named_group_or_match() -> None:
    named = Category("Named", re.compile("x"), re.compile(r"Warning:\s*(?P<message>.*)"))
    plain = Category("Plain", re.compile("x"), re.compile(r"\d+ apples"))
    assert default_message(named, "-", "LaTeX Warning: hello") == "hello"
    assert default_message(plain, "-", "I have 3 apples today") == "3 apples"
    assert default_message(plain, "-", "no fruit") == "no fruit"


def test_handle_claims_matching_lines_only() -> None:
    category = Category("Float changes", re.compile("float specifier"))
    ctx = _ctx("float specifier changed", "something else")
    assert category.handle(LogicalLine("float specifier changed", 0), ctx) is True
    assert category.handle(LogicalLine("something else", 1), ctx) is False
    assert category.handle(LogicalLine("", 1), ctx) is False
    assert category.count == 1


def test_duplicates_are_dropped_by_reference_and_message() -> None:
    category = Category("Dupes", re.compile("x"))
    assert category.add("3", "msg") is True
    assert category.add("3", "msg\n") is False
    assert category.add("4", "msg") is True
    assert category.add("3", "other") is True
    assert category.count == 3


def test_max_reference_width_tracks_displayed_reference() -> None:
    category = Category("Width", re.compile("x"))
    category.add("7", "a", file_context="./chapter1.tex: ")
    category.add("-", "b", file_context="./chapter1.tex: ")
    assert [diag.reference for diag in category.diagnostics] == ["./chapter1.tex: 7", "-"]
    assert category.max_reference_width == len("./chapter1.tex: 7")


def test_extra_lines_are_appended_to_text() -> None:
    seen: list[str] = []

    def capture(category: Category, reference: str, text: str) -> str:
        seen.append(text)
        return text

    category = Category("Multi", re.compile("head"), extra_lines=2, message_formatter=capture)
    ctx = _ctx("head", "one", "two", "three")
    category.handle(LogicalLine("head", 0), ctx)
    assert seen == ["head\none\ntwo"]


def test_file_context_comes_from_nesting_state() -> None:
    tracker = NestingTracker()
    tracker.parse("(./main.tex (./sub.tex")
    category = Category("Ctx", re.compile("Warning"))
    ctx = ParseContext(lines=["Warning on input line 3"], nesting=tracker)
    category.handle(LogicalLine("Warning on input line 3", 0), ctx)
    assert category.diagnostics[0].reference == "./sub.tex: 3"


def test_empty_category_is_not_falsy() -> None:
    category = Category("Empty", re.compile("x"))
    assert category.is_empty()
    assert category


@pytest.mark.parametrize("kwargs", [{"display_limit": -1}, {"extra_lines": -2}])
def test_negative_settings_are_rejected(kwargs: dict[str, int]) -> None:
    with pytest.raises(ValueError):
        Category("Bad", re.compile("x"), **kwargs)
