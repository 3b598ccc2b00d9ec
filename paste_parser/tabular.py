# -*- coding: utf-8 -*-
"""
Parser for spreadsheet text pasted from Excel, Google Sheets or a CSV file.

The first non-blank line is a header row. Columns are located by matching
header cells against synonym groups, so any column order works. Several sheets
may be pasted one after another; each new header row re-derives the layout.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass
from datetime import date

from academic_planner.models import AcademicItem, ClassInfo, new_item_id
from paste_parser.class_codes import ColorPalette, find_code_tokens, split_class_cell
from paste_parser.classifier import DEFAULT_TYPE, classify
from paste_parser.dates import extract_date_or_today, find_date
from paste_parser.models import ParseResult

logger = logging.getLogger(__name__)


CLASS_HEADERS = ("class", "course", "subject")
TITLE_HEADERS = ("title", "name", "assignment")
TYPE_HEADERS = ("type", "category")
DATE_HEADERS = ("due date", "due", "date")
TIME_HEADERS = ("time",)


def detect_delimiter(header_line: str) -> str:
    return "\t" if "\t" in header_line else ","


def looks_like_header(line: str) -> bool:
    """Generic header test shared with Smart Paste: mentions a date column next to a class or type column."""
    lowered = line.lower()
    return "date" in lowered and ("class" in lowered or "type" in lowered)


def _find_column(headers: list[str], synonyms: t.Sequence[str], claimed: set[int]) -> t.Optional[int]:
    """Index of the first unclaimed header naming one of ``synonyms``.

    An exact header match anywhere in the row beats a header that merely
    contains a synonym, so ``Date`` wins over ``Due Time`` for the date column.
    """
    for exact in (True, False):
        for synonym in synonyms:
            for index, header in enumerate(headers):
                if index in claimed or not header:
                    continue
                if (header == synonym) if exact else (synonym in header):
                    claimed.add(index)
                    return index
    return None


@dataclass(frozen=True)
class ColumnLayout:
    """Where each field lives in the rows of one pasted sheet."""
    delimiter: str
    class_col: int
    title_col: int
    date_col: int
    type_col: t.Optional[int] = None
    time_col: t.Optional[int] = None

    @classmethod
    def from_header(cls, header_line: str) -> "ColumnLayout":
        delimiter = detect_delimiter(header_line)
        headers = [h.strip().lower() for h in header_line.split(delimiter)]
        claimed: set[int] = set()

        class_col = _find_column(headers, CLASS_HEADERS, claimed)
        title_col = _find_column(headers, TITLE_HEADERS, claimed)
        type_col = _find_column(headers, TYPE_HEADERS, claimed)
        date_col = _find_column(headers, DATE_HEADERS, claimed)
        time_col = _find_column(headers, TIME_HEADERS, claimed)

        layout = cls(
            delimiter=delimiter,
            class_col=0 if class_col is None else class_col,
            title_col=1 if title_col is None else title_col,
            date_col=2 if date_col is None else date_col,
            type_col=type_col,
            time_col=time_col,
        )
        logger.info("Column layout for header %r: %s", header_line.strip(), layout)
        return layout

    def split(self, line: str) -> list[str]:
        return [cell.strip() for cell in line.split(self.delimiter)]


def _names_columns(line: str) -> int:
    """Number of column groups a line names, judged as if it were a header."""
    cells = [c.strip().lower() for c in line.split(detect_delimiter(line))]
    groups = (CLASS_HEADERS, TITLE_HEADERS, TYPE_HEADERS, DATE_HEADERS)
    return sum(
        1 for synonyms in groups
        if any(synonym in cell for cell in cells for synonym in synonyms)
    )


def _starts_new_block(line: str, seen_headers: set[str], after_blank: bool) -> bool:
    if line.lower() in seen_headers:
        return True
    if find_date(line) is not None:
        return False
    if looks_like_header(line):
        return True
    # A row mentioning a class code is data, however header-like its other cells are
    return after_blank and not find_code_tokens(line) and _names_columns(line) >= 2


def _cell(cells: list[str], index: t.Optional[int]) -> str:
    if index is None or index >= len(cells):
        return ""
    return cells[index]


def parse_spreadsheet(text: str, today: t.Optional[date] = None) -> ParseResult:
    """Parse delimited text with a header row into items and classes.

    :param text: Tab- or comma-separated text, one row per line.
    :param today: Date used when a row has no parseable due date.
    :return: Items in row order and the classes first seen in this text.
    """
    today = today or date.today()
    palette = ColorPalette()
    classes: dict[str, ClassInfo] = {}
    items: list[AcademicItem] = []

    layout: t.Optional[ColumnLayout] = None
    seen_headers: set[str] = set()
    after_blank = False

    for line_no, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line:
            after_blank = True
            continue

        if layout is None or _starts_new_block(line, seen_headers, after_blank):
            layout = ColumnLayout.from_header(raw)
            seen_headers.add(line.lower())
            after_blank = False
            continue
        after_blank = False

        cells = layout.split(raw)
        class_raw = _cell(cells, layout.class_col)
        title_raw = _cell(cells, layout.title_col)
        if not class_raw and not title_raw:
            logger.debug("Skipping line %d: no class and no title", line_no)
            continue

        code, name = split_class_cell(class_raw)
        if code and code not in classes:
            classes[code] = palette.new_class(code, name)

        type_raw = _cell(cells, layout.type_col)
        item_type = classify(type_raw) if type_raw else DEFAULT_TYPE

        items.append(
            AcademicItem(
                id=new_item_id(),
                title=title_raw or f"{item_type.capitalize()} {line_no}",
                class_code=code,
                class_name=classes[code].name if code else "",
                type=item_type,
                status="not-started",
                due_date=extract_date_or_today(_cell(cells, layout.date_col), today),
                time=_cell(cells, layout.time_col) or None,
            )
        )

    logger.info("Parsed %d item(s) across %d class(es)", len(items), len(classes))
    return ParseResult(items=items, classes=list(classes.values()))
