# -*- coding: utf-8 -*-
"""
Course code detection and resolution.

A course code is 2-6 letters followed, optionally after whitespace, by 2-4
digits ("MATH101", "CS 200", "ECON 330"). Codes are compared in normalized
form: uppercase with all whitespace removed.
"""
from __future__ import annotations

import logging
import re
import typing as t
from dataclasses import dataclass

from academic_planner.models import ClassInfo
from paste_parser.dates import MONTHS

logger = logging.getLogger(__name__)


CLASS_CODE_PATTERN = re.compile(r"\b([A-Za-z]{2,6})\s*(\d{2,4})\b")

# Letter runs that look like a code prefix but name a date or a piece of coursework.
NON_CODE_WORDS = frozenset(
    {
        "january", "february", "march", "april", "june", "july", "august",
        "sept", "september", "october", "november", "december",
        *MONTHS,
        "hw", "ps", "quiz", "exam", "test", "lab", "labs", "week", "wk", "unit",
        "day", "part", "page", "pages", "pg", "pp", "ch", "chap", "room", "rm",
        "due", "by", "at", "on", "no", "num", "essay", "paper", "set", "step",
    }
)

PALETTE: tuple[str, ...] = ("bg-chart-1", "bg-chart-2", "bg-chart-3", "bg-chart-4", "bg-chart-5")

CLASS_NAME_SEPARATOR = " - "


@dataclass(frozen=True)
class ResolvedClass:
    """Result of resolving a code token against the known classes."""
    code: str
    name: str
    is_new: bool


class ColorPalette:
    """Hands out palette colours round-robin, in the order classes are first seen."""

    def __init__(self, colors: t.Sequence[str] = PALETTE, start: int = 0) -> None:
        self._colors = tuple(colors)
        self._next = start

    def next_color(self) -> str:
        color = self._colors[self._next % len(self._colors)]
        self._next += 1
        return color

    def new_class(self, code: str, name: str) -> ClassInfo:
        return ClassInfo(code=code, name=name or code, color=self.next_color(), has_late_penalty=False)


def normalize_code(text: str) -> str:
    return re.sub(r"\s+", "", text).upper()


def find_code_tokens(text: str) -> list[t.Match[str]]:
    """All code-like tokens in ``text``, left to right."""
    return [
        m for m in CLASS_CODE_PATTERN.finditer(text)
        if m.group(1).lower() not in NON_CODE_WORDS
    ]


def resolve_class_code(
        text: str,
        known_classes: t.Iterable[ClassInfo] = (),
) -> t.Optional[ResolvedClass]:
    """Find the course code mentioned in ``text``.

    A token naming a known class wins over earlier unknown tokens. Without a
    known match the first token is returned as both code and name, flagged
    ``is_new`` so the caller can register it.

    :param text: A line of free text.
    :param known_classes: Classes already registered in the semester.
    :return: The resolved class, or None when the text has no code token.
    """
    tokens = find_code_tokens(text)
    if not tokens:
        return None

    known = {normalize_code(c.code): c for c in known_classes}
    for token in tokens:
        match = known.get(normalize_code(token.group(0)))
        if match is not None:
            return ResolvedClass(code=match.code, name=match.name, is_new=False)

    code = normalize_code(tokens[0].group(0))
    logger.debug("Unknown class code %s in %r", code, text)
    return ResolvedClass(code=code, name=code, is_new=True)


def split_class_cell(cell: str) -> tuple[str, str]:
    """Split a spreadsheet class cell into ``(code, name)``.

    ``"MATH101 - Calculus I"`` gives ``("MATH101", "Calculus I")``; a bare
    ``"cs 200"`` gives ``("CS200", "cs 200")``. An empty cell gives two empty
    strings.
    """
    raw = cell.strip()
    if not raw:
        return "", ""
    head, sep, tail = raw.partition(CLASS_NAME_SEPARATOR)
    if sep and head.strip():
        code = normalize_code(head)
        return code, tail.strip() or code
    code = normalize_code(raw)
    return code, raw


def strip_class_codes(text: str) -> str:
    """Remove every code-like token from ``text``."""
    for token in reversed(find_code_tokens(text)):
        text = text[:token.start()] + " " + text[token.end():]
    return text
