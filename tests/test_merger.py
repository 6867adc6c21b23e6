# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for reassembling wrapped compiler output."""

from __future__ import annotations

from trex.merger import LineMerger, merge_lines, split_output


def test_full_width_line_joins_successor() -> None:
    wrapped = "x" * 79
    assert merge_lines([wrapped, "tail", "next"]) == [wrapped + "tail", "next"]


def test_chained_full_width_lines_merge_into_one() -> None:
    first, second = "a" * 79, "b" * 79
    assert merge_lines([first, second, "c"]) == [first + second + "c"]


def test_shorter_and_longer_lines_stay_separate() -> None:
    lines = ["y" * 78, "z" * 80, "end"]
    assert merge_lines(lines) == lines


def test_undefined_control_sequence_joins_context_line() -> None:
    merged = merge_lines(["! Undefined control sequence.", "l.5 \\foo", "after"])
    assert merged == ["! Undefined control sequence.l.5 \\foo", "after"]


def test_pending_text_is_flushed_at_end() -> None:
    wrapped = "w" * 79
    assert merge_lines(["start", wrapped]) == ["start", wrapped]


def test_logical_line_index_points_at_last_physical_line() -> None:
    merger = LineMerger(["q" * 79, "rest", "other"])
    logical = list(merger)
    assert [line.index for line in logical] == [1, 2]
    assert merger.lines == ["q" * 79, "rest", "other"]


def test_merger_can_be_iterated_twice() -> None:
    merger = LineMerger("one\ntwo\n")
    assert list(merger) == list(merger)


def test_split_output_accepts_strings_and_sequences() -> None:
    assert split_output("a\r\nb\n") == ["a", "b"]
    assert split_output(["a\n", "b"]) == ["a", "b"]
    assert merge_lines("") == []
