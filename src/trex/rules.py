# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Category-specific strategies and the default ordered rule set.

Rules are evaluated in the order :func:`build_handlers` returns them and the
first rule that claims a line wins. Specific, rare messages therefore come
first; the generic ``! `` catch-all, the file nesting tracker and the generic
``LaTeX Warning:`` bucket come last.
"""

from __future__ import annotations

import math
import re
from typing import Final

from .categories import Category, default_message
from .config import DisplayLimits
from .constants import BIBTEX_LIMIT, NO_REFERENCE
from .context import LineHandler, ParseContext
from .nesting import NestingTracker
from .severity import Severity

HYPERREF_HINT: Final[str] = "try using plainpages=false or pdfpagelabels in hyperref"
HYPERREF_URL: Final[str] = "http://en.wikibooks.org/wiki/LaTeX/Hyperlinks#Problems_with_Links_and_Pages"

# TeX elides the tail of a runaway argument with this marker.
RUNAWAY_ELISION: Final[str] = "\\ETC."

_ERROR_LINE: Final[re.Pattern[str]] = re.compile(r"(?:lines? |l\.)(?P<line>[0-9\-]+)")
_CONTEXT_LINE: Final[re.Pattern[str]] = re.compile(r"^l\.(?P<line>[0-9]+)", re.MULTILINE)
_PDF_FILE: Final[re.Pattern[str]] = re.compile(r"file (?P<file>.*?)\):")
_PDF_VERSIONS: Final[re.Pattern[str]] = re.compile(r"found PDF version <(?P<found>.*?)>.*?<(?P<allowed>.*?)>")
_NEAR_SNIPPET: Final[re.Pattern[str]] = re.compile(r"^l\.[0-9]+ (?P<snippet>.*(?:\n.*)?)", re.MULTILINE)
_FONT_PREFIX: Final[re.Pattern[str]] = re.compile(r"\(Font\)\s+")
_FONT_SHAPE: Final[re.Pattern[str]] = re.compile(r"Font shape (?P<shape>.*?) on input")
_FONT_SHAPE_TAIL: Final[re.Pattern[str]] = re.compile(r"Font shape (?P<shape>.*)")
_CITATION: Final[re.Pattern[str]] = re.compile(
    r"Citation (?P<citation>[^ ]+).*on page (?P<page>[0-9]+) undefined",
)
_LABEL: Final[re.Pattern[str]] = re.compile(r"Label `(?P<label>.*?)' ")
_LEADING_INT: Final[re.Pattern[str]] = re.compile(r"\d+")
_QUOTES: Final[str] = "`'\""


# Reference extractors ---------------------------------------------------------


def error_block_reference(text: str, index: int, context: ParseContext) -> str:
    """Find the ``l.N`` of an error, scanning forward until the next ``!`` line."""

    if match := _ERROR_LINE.search(text):
        return match.group("line")
    for follow in context.following(index):
        if follow.startswith("!"):
            return NO_REFERENCE
        if match := _ERROR_LINE.search(follow):
            return match.group("line")
    return NO_REFERENCE


def context_line_reference(text: str, index: int, context: ParseContext) -> str:
    """Return N of the first ``l.N`` context line, ignoring later messages in the lookahead."""

    del index, context
    match = _CONTEXT_LINE.search(text)
    return match.group("line") if match else NO_REFERENCE


def pdf_file_reference(text: str, index: int, context: ParseContext) -> str:
    del index, context
    match = _PDF_FILE.search(text)
    return match.group("file") if match else NO_REFERENCE


def runaway_text_reference(text: str, index: int, context: ParseContext) -> str:
    """Locate the runaway argument TeX echoed before ``File ended`` in the source.

    The echoed text sits on the physical line before the error and ends with
    ``\\ETC.``; whitespace and ``\\par`` may stand for line breaks in the file.
    """

    del text
    if context.source is None or index < 1:
        return NO_REFERENCE
    fragment = context.lines[index - 1].strip().removesuffix(RUNAWAY_ELISION)
    if not fragment.strip():
        return NO_REFERENCE
    pattern = re.escape(fragment)
    pattern = pattern.replace(re.escape("\\par"), r"\s*")
    pattern = pattern.replace(re.escape(" "), r"\s*")
    numbers = context.source.find_lines(pattern)
    return ",".join(str(number) for number in numbers) or NO_REFERENCE


def label_definition_reference(text: str, index: int, context: ParseContext) -> str:
    """Return the source lines defining the multiply defined label."""

    del index
    label = _label_name(text)
    if context.source is None or label is None:
        return NO_REFERENCE
    numbers = context.source.lines_containing(f"\\label{{{label}}}")
    return ",".join(str(number) for number in numbers) or NO_REFERENCE


# Message formatters -----------------------------------------------------------


def pdf_version_message(category: Category, reference: str, text: str) -> str:
    match = _PDF_VERSIONS.search(text)
    if match is None:
        return default_message(category, reference, text)
    return f"found {match.group('found')} instead of {match.group('allowed')}"


def repeated_page_message(category: Category, reference: str, text: str) -> str:
    """Summarise a duplicate ``page.N`` anchor and point at the hyperref fix."""

    del category
    match = _NEAR_SNIPPET.search(text)
    if match is not None:
        snippet = re.sub(r"\s*\n\s*", "", match.group("snippet")).strip()
    else:
        snippet = text.splitlines()[0].strip()
    number = _leading_int(reference)
    if number == 0:
        prefix, indent = "\n", ""
    else:
        prefix, indent = "", " " * math.floor(math.log(number))
    return f"{prefix}near: {snippet}.\n{indent}{HYPERREF_HINT}\n   see: {HYPERREF_URL}"


def font_shape_message(category: Category, reference: str, text: str) -> str:
    del category, reference
    cleaned = _FONT_PREFIX.sub("", text, count=1)
    cleaned = cleaned.replace("\n", ", ", 1).replace(", Font shape", ",", 1)
    if match := _FONT_SHAPE.search(cleaned):
        return match.group("shape")
    if match := _FONT_SHAPE_TAIL.search(cleaned):
        return match.group("shape").strip().rstrip(".")
    return cleaned


def citation_message(category: Category, reference: str, text: str) -> str:
    match = _CITATION.search(text)
    if match is None:
        return default_message(category, reference, text)
    return f"{_strip_quotes(match.group('citation'))} (output page {match.group('page')})"


def label_message(category: Category, reference: str, text: str) -> str:
    label = _label_name(text)
    return label if label is not None else default_message(category, reference, text)


def _label_name(text: str) -> str | None:
    match = _LABEL.search(text)
    return match.group("label") if match else None


def _strip_quotes(name: str) -> str:
    if len(name) >= 2 and name[0] in _QUOTES and name[-1] in _QUOTES:
        return name[1:-1]
    return name


def _leading_int(reference: str) -> int:
    match = _LEADING_INT.match(reference)
    return int(match.group(0)) if match else 0


# Rule set ---------------------------------------------------------------------


def build_categories(limits: DisplayLimits) -> list[Category]:
    """Return fresh categories in priority order (without the nesting tracker)."""

    interesting = limits.interesting
    boring = limits.uninteresting
    return [
        Category(
            "PDF Version mismatches",
            re.compile(r"PDF version"),
            re.compile(r"found PDF .*"),
            boring,
            reference_extractor=pdf_file_reference,
            message_formatter=pdf_version_message,
        ),
        Category("Underfull lines", re.compile(r"Underfull"), re.compile(r"\(badness [0-9]+\) in \w+"), boring),
        Category("Overfull lines", re.compile(r"Overfull"), re.compile(r"\w+ \(.*?\) in \w+"), boring),
        Category(
            "Float changes",
            re.compile(r"Warning:.*?float specifier changed to"),
            re.compile(r"float specifier .*"),
            boring,
        ),
        Category("Package Warning", re.compile(r"Package .* Warning"), display_limit=boring),
        Category(
            "Font Shape Warnings",
            re.compile(r"Font Warning: Font shape "),
            display_limit=boring,
            extra_lines=1,
            message_formatter=font_shape_message,
        ),
        Category(
            "Citation Undefined",
            re.compile(r"Warning: Citation"),
            _CITATION,
            interesting,
            message_formatter=citation_message,
        ),
        Category(
            "Reference Warnings",
            re.compile(r"Warning: Reference"),
            re.compile(r"[^ ]+ on page [0-9]+ undefined"),
            interesting,
        ),
        Category(
            "Too Many XYZ Warning",
            re.compile(r"Too many "),
            re.compile(r"^l\.[0-9]+ (?P<message>.*)", re.MULTILINE),
            interesting,
            extra_lines=10,
            severity=Severity.ERROR,
            reference_extractor=context_line_reference,
        ),
        Category(
            "PDF Repeated Page Number",
            re.compile(r"destination with the same identifier \(name\{page\."),
            display_limit=boring,
            extra_lines=4,
            reference_extractor=context_line_reference,
            message_formatter=repeated_page_message,
        ),
        Category(
            "Undefined Control Sequence",
            re.compile(r"! Undefined control "),
            re.compile(r"\\.*"),
            interesting,
            severity=Severity.ERROR,
            reference_extractor=error_block_reference,
        ),
        Category(
            "LaTeX error",
            re.compile(r"! LaTeX Error"),
            re.compile(r"[^!\s].*"),
            interesting,
            severity=Severity.ERROR,
            reference_extractor=error_block_reference,
        ),
        Category(
            "Missing Parenthesis",
            re.compile(r"File ended "),
            re.compile(r"[^! ].*"),
            interesting,
            severity=Severity.ERROR,
            reference_extractor=runaway_text_reference,
        ),
        Category(
            "Runaway Argument",
            re.compile(r"! Paragraph ended before"),
            re.compile(r"[^! ].*"),
            interesting,
            severity=Severity.ERROR,
            reference_extractor=error_block_reference,
        ),
        Category("File not Found", re.compile(r"Warning: File"), re.compile(r"[^ ]+ not found"), interesting),
        Category(
            "Multiply defined Labels",
            re.compile(r"LaTeX Warning: Label.*? multiply"),
            display_limit=interesting,
            reference_extractor=label_definition_reference,
            message_formatter=label_message,
        ),
        Category(
            "Other Errors",
            re.compile(r"^! "),
            re.compile(r"[^!\s].*"),
            interesting,
            severity=Severity.ERROR,
            reference_extractor=error_block_reference,
        ),
    ]


def other_warnings(limits: DisplayLimits) -> Category:
    """Return the catch-all bucket for ``LaTeX Warning:`` lines nobody claimed."""

    return Category(
        "Other Warnings",
        re.compile(r"LaTeX Warning:"),
        re.compile(r"LaTeX Warning:\s*(?P<message>.*)"),
        limits.uninteresting,
    )


def build_handlers(limits: DisplayLimits, nesting: NestingTracker) -> list[LineHandler]:
    """Return every handler of a compiler run in priority order."""

    handlers: list[LineHandler] = [*build_categories(limits)]
    handlers.append(nesting)
    handlers.append(other_warnings(limits))
    return handlers


def bibtex_category(limit: int | None = BIBTEX_LIMIT) -> Category:
    """Return the category classifying ``bibtex`` output."""

    return Category(
        "Bibtex Warnings",
        re.compile(r"I found no"),
        re.compile(r"I f.*? command"),
        limit,
    )


__all__ = [
    "HYPERREF_HINT",
    "HYPERREF_URL",
    "bibtex_category",
    "build_categories",
    "build_handlers",
    "citation_message",
    "context_line_reference",
    "error_block_reference",
    "font_shape_message",
    "label_definition_reference",
    "label_message",
    "other_warnings",
    "pdf_file_reference",
    "pdf_version_message",
    "repeated_page_message",
    "runaway_text_reference",
]
