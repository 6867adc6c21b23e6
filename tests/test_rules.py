# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the individual message rules of a compiler run."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from trex.config import DisplayLimits
from trex.context import ParseContext
from trex.models import LogicalLine
from trex.nesting import NestingTracker
from trex.pipeline import ClassificationPipeline, build_pipeline
from trex.rules import HYPERREF_HINT, HYPERREF_URL, bibtex_category, build_categories, build_handlers
from trex.source import SourceText


def _classify(lines: Sequence[str], source: str | None = None) -> ClassificationPipeline:
    text = SourceText(source) if source is not None else None
    return build_pipeline(source=text).classify(list(lines))


def _rows(pipeline: ClassificationPipeline, name: str) -> list[tuple[str, str]]:
    return [(diag.reference, diag.message) for diag in pipeline.category(name).diagnostics]


def test_rule_order_is_stable() -> None:
    names = [handler.name for handler in build_handlers(DisplayLimits(), NestingTracker())]
    assert names == [
        "PDF Version mismatches",
        "Underfull lines",
        "Overfull lines",
        "Float changes",
        "Package Warning",
        "Font Shape Warnings",
        "Citation Undefined",
        "Reference Warnings",
        "Too Many XYZ Warning",
        "PDF Repeated Page Number",
        "Undefined Control Sequence",
        "LaTeX error",
        "Missing Parenthesis",
        "Runaway Argument",
        "File not Found",
        "Multiply defined Labels",
        "Other Errors",
        "File nesting",
        "Other Warnings",
    ]


def test_limits_follow_interest() -> None:
    limits = DisplayLimits(interesting=7, uninteresting=3)
    categories = {category.name: category for category in build_categories(limits)}
    assert categories["Citation Undefined"].display_limit == 7
    assert categories["Underfull lines"].display_limit == 3
    assert categories["Other Errors"].display_limit == 7


def test_citation_undefined() -> None:
    pipeline = _classify(["LaTeX Warning: Citation `foo' on page 3 undefined on input line 12."])
    assert _rows(pipeline, "Citation Undefined") == [("12", "foo (output page 3)")]
    assert pipeline.category("Other Warnings").is_empty()


def test_reference_warning() -> None:
    pipeline = _classify(["LaTeX Warning: Reference `fig:x' on page 2 undefined on input line 7."])
    assert _rows(pipeline, "Reference Warnings") == [("7", "`fig:x' on page 2 undefined")]


def test_underfull_and_overfull() -> None:
    pipeline = _classify(
        [
            "Underfull \\hbox (badness 10000) in paragraph at lines 10--12",
            "Overfull \\hbox (12.3pt too wide) in paragraph at lines 5--6",
        ]
    )
    assert _rows(pipeline, "Underfull lines") == [("10--12", "(badness 10000) in paragraph")]
    assert _rows(pipeline, "Overfull lines") == [("5--6", "hbox (12.3pt too wide) in paragraph")]


def test_float_and_package_warnings() -> None:
    pipeline = _classify(
        [
            "LaTeX Warning: `h' float specifier changed to `ht'.",
            "Package hyperref Warning: Token not allowed in a PDF string on input line 20.",
        ]
    )
    assert _rows(pipeline, "Float changes") == [("-", "float specifier changed to `ht'.")]
    assert _rows(pipeline, "Package Warning") == [
        ("20", "Package hyperref Warning: Token not allowed in a PDF string on input line 20.")
    ]


def test_pdf_version_mismatch() -> None:
    pipeline = _classify(
        [
            "pdfTeX warning: pdflatex (file ./fig.pdf): PDF inclusion: found PDF version <1.7>, "
            "but at most version <1.5> allowed"
        ]
    )
    assert _rows(pipeline, "PDF Version mismatches") == [("./fig.pdf", "found 1.7 instead of 1.5")]


def test_font_shape_joins_continuation_line() -> None:
    pipeline = _classify(
        [
            "LaTeX Font Warning: Font shape `OT1/cmr/bx/sc' undefined",
            "(Font)              using `OT1/cmr/bx/n' instead on input line 9.",
        ]
    )
    assert _rows(pipeline, "Font Shape Warnings") == [
        ("9", "`OT1/cmr/bx/sc' undefined, using `OT1/cmr/bx/n' instead")
    ]


def test_too_many_reads_following_context() -> None:
    pipeline = _classify(["! Too many }'s.", "l.14 \\end{document}}", ""])
    assert _rows(pipeline, "Too Many XYZ Warning") == [("14", "\\end{document}}")]
    assert pipeline.category("Other Errors").is_empty()


def test_repeated_page_number_hint() -> None:
    pipeline = _classify(
        [
            "pdfTeX warning (ext4): destination with the same identifier (name{page.1}) "
            "has been already used, duplicate ignored",
            "<to be read again> ",
            "                   \\relax ",
            "l.42 \\end{document}",
            "",
        ]
    )
    [(reference, message)] = _rows(pipeline, "PDF Repeated Page Number")
    assert reference == "42"
    assert message.startswith("near: \\end{document}.\n   ")
    assert HYPERREF_HINT in message
    assert message.endswith(f"see: {HYPERREF_URL}")


def test_undefined_control_sequence_uses_merged_context() -> None:
    pipeline = _classify(["! Undefined control sequence.", "l.20 \\foo", ""])
    assert _rows(pipeline, "Undefined Control Sequence") == [("20", "\\foo")]
    assert pipeline.has_errors()


def test_latex_error_scans_forward_for_line() -> None:
    pipeline = _classify(
        [
            "! LaTeX Error: File `foo.sty' not found.",
            "",
            "Type X to quit or <RETURN> to proceed,",
            "l.3 \\usepackage{foo}",
        ]
    )
    assert _rows(pipeline, "LaTeX error") == [("3", "LaTeX Error: File `foo.sty' not found.")]


def test_latex_error_scan_stops_at_next_error() -> None:
    pipeline = _classify(["! LaTeX Error: Something's wrong.", "! Emergency stop.", "l.9 x"])
    assert _rows(pipeline, "LaTeX error") == [("-", "LaTeX Error: Something's wrong.")]
    assert _rows(pipeline, "Other Errors") == [("9", "Emergency stop.")]


def test_runaway_argument() -> None:
    pipeline = _classify(["! Paragraph ended before \\@citex was complete.", "<to be read again> ", "l.8 "])
    assert _rows(pipeline, "Runaway Argument") == [("8", "Paragraph ended before \\@citex was complete.")]


def test_missing_parenthesis_locates_text_in_source() -> None:
    source = "\\section{A}\n\\textbf{Some text\n\nmore stuff}\n"
    pipeline = _classify(
        [
            "Runaway argument?",
            "{Some text \\par more \\ETC.",
            "! File ended while scanning use of \\textbf.",
        ],
        source=source,
    )
    assert _rows(pipeline, "Missing Parenthesis") == [("2", "File ended while scanning use of \\textbf.")]


def test_missing_parenthesis_without_source_has_no_reference() -> None:
    pipeline = _classify(["{Some text \\ETC.", "! File ended while scanning use of \\textbf."])
    assert _rows(pipeline, "Missing Parenthesis") == [("-", "File ended while scanning use of \\textbf.")]


def test_multiply_defined_label_lists_definitions() -> None:
    source = "a\nb\n\\label{sec:a}\nc\n\\label{sec:a}\n"
    pipeline = _classify(["LaTeX Warning: Label `sec:a' multiply defined."], source=source)
    assert _rows(pipeline, "Multiply defined Labels") == [("3,5", "sec:a")]


def test_file_not_found_warning() -> None:
    pipeline = _classify(["LaTeX Warning: File `img.png' not found on input line 4."])
    assert _rows(pipeline, "File not Found") == [("4", "`img.png' not found")]


def test_other_errors_and_other_warnings() -> None:
    pipeline = _classify(
        [
            "! Missing $ inserted.",
            "l.17 x^2",
            "LaTeX Warning: There were undefined references.",
        ]
    )
    assert _rows(pipeline, "Other Errors") == [("17", "Missing $ inserted.")]
    assert _rows(pipeline, "Other Warnings") == [("-", "There were undefined references.")]


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("I found no \\citation commands---while reading file main.aux", "I found no \\citation command"),
        ("I found no \\bibdata command---while reading file main.aux", "I found no \\bibdata command"),
    ],
)
def test_bibtex_category(line: str, expected: str) -> None:
    category = bibtex_category()
    assert category.display_limit == 10
    assert category.handle(LogicalLine(line, 0), ParseContext(lines=[line]))
    assert [(diag.reference, diag.message) for diag in category.diagnostics] == [("-", expected)]


def test_too_many_reference_ignores_later_warnings_in_lookahead() -> None:
    pipeline = _classify(
        [
            "! Too many }'s.",
            "l.14 \\end{document}}",
            "",
            "LaTeX Warning: Reference `x' on page 1 undefined on input line 99.",
        ]
    )
    assert _rows(pipeline, "Too Many XYZ Warning") == [("14", "\\end{document}}")]
    assert _rows(pipeline, "Reference Warnings") == [("99", "`x' on page 1 undefined")]


def test_repeated_page_reference_ignores_later_warnings_in_lookahead() -> None:
    pipeline = _classify(
        [
            "pdfTeX warning (ext4): destination with the same identifier (name{page.1}) "
            "has been already used, duplicate ignored",
            "l.42 \\end{document}",
            "",
            "LaTeX Warning: Reference `x' on page 1 undefined on input line 99.",
            "",
        ]
    )
    [(reference, message)] = _rows(pipeline, "PDF Repeated Page Number")
    assert reference == "42"
    assert message.startswith("near: \\end{document}.")
