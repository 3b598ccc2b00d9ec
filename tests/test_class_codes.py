# -*- coding: utf-8 -*-
"""Tests for course code detection and resolution."""
from academic_planner.models import ClassInfo
from paste_parser.class_codes import (
    PALETTE,
    ColorPalette,
    normalize_code,
    resolve_class_code,
    split_class_cell,
    strip_class_codes,
)


KNOWN = [
    ClassInfo(code="ECON330", name="Econometrics", color="bg-chart-2"),
    ClassInfo(code="MATH101", name="Calculus I", color="bg-chart-1"),
]


def test_normalize_code() -> None:
    assert normalize_code("cs 200") == "CS200"
    assert normalize_code(" Math\t101 ") == "MATH101"


def test_known_class_returns_official_code_and_name() -> None:
    resolved = resolve_class_code("econ 330 problem set", KNOWN)
    assert resolved is not None
    assert (resolved.code, resolved.name, resolved.is_new) == ("ECON330", "Econometrics", False)


def test_unknown_code_is_returned_as_code_and_name() -> None:
    resolved = resolve_class_code("CS 200 project proposal", KNOWN)
    assert resolved is not None
    assert (resolved.code, resolved.name, resolved.is_new) == ("CS200", "CS200", True)


def test_known_code_wins_over_an_earlier_unknown_one() -> None:
    resolved = resolve_class_code("PHYS210 lab report for MATH101", KNOWN)
    assert resolved is not None
    assert resolved.code == "MATH101"


def test_dates_and_coursework_words_are_not_codes() -> None:
    """'Feb 15' and 'HW 10' have the shape of a code but are not courses."""
    resolved = resolve_class_code("Feb 15 - ECON330 - Quiz 1")
    assert resolved is not None
    assert resolved.code == "ECON330"
    assert resolve_class_code("HW 10 due Sept 12") is None
    assert resolve_class_code("Quiz 12") is None


def test_no_code_gives_none() -> None:
    assert resolve_class_code("Read the intro chapter") is None


def test_split_class_cell() -> None:
    assert split_class_cell("MATH101 - Calculus I") == ("MATH101", "Calculus I")
    assert split_class_cell("cs 200") == ("CS200", "cs 200")
    assert split_class_cell("  ") == ("", "")


def test_strip_class_codes() -> None:
    stripped = strip_class_codes("ECON330 - Quiz 1 (see MATH 101)")
    assert "ECON" not in stripped
    assert "MATH" not in stripped
    assert "Quiz 1" in stripped


def test_palette_is_round_robin() -> None:
    palette = ColorPalette()
    colors = [palette.next_color() for _ in range(len(PALETTE) + 1)]
    assert colors[:len(PALETTE)] == list(PALETTE)
    assert colors[-1] == PALETTE[0]

    cls = ColorPalette(start=2).new_class("BIO110", "")
    assert cls.color == PALETTE[2]
    assert cls.name == "BIO110"
    assert cls.has_late_penalty is False
