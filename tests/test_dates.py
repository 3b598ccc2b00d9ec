# -*- coding: utf-8 -*-
"""Tests for date extraction."""
from datetime import date

import pytest

from paste_parser.dates import extract_date, extract_date_or_today, find_date, strip_dates


TODAY = date(2026, 1, 10)


@pytest.mark.parametrize(
    "text",
    [
        "2/15/2026",
        "02-15-2026",
        "2026-02-15",
        "2026/02/15",
        "Feb 15, 2026",
        "February 15 2026",
        "feb 15th, 2026",
        "Due: FEB. 15, 2026 by noon",
    ],
)
def test_equivalent_formats_give_the_same_date(text: str) -> None:
    """Every supported spelling of the same day resolves identically."""
    assert extract_date(text, TODAY) == "2026-02-15"


def test_two_digit_year_is_in_the_2000s() -> None:
    assert extract_date("2/15/26", TODAY) == "2026-02-15"
    assert extract_date("12-1-99", TODAY) == "2099-12-01"


def test_three_digit_year_is_not_a_date() -> None:
    assert extract_date("2/15/202", TODAY) is None
    assert extract_date("due 2/15/202 or 2/16/2026", TODAY) == "2026-02-16"


def test_year_less_forms_use_the_current_year() -> None:
    """Month-day and M/D without a year take the year of ``today``."""
    today = date(2025, 9, 1)
    assert extract_date("Feb 15", today) == "2025-02-15"
    assert extract_date("quiz on 3/26", today) == "2025-03-26"
    # No rollover into next year
    assert extract_date("Jan 5", date(2025, 12, 20)) == "2025-01-05"


def test_ordinals_and_full_month_names() -> None:
    assert extract_date("March 3rd", TODAY) == "2026-03-03"
    assert extract_date("Sept 1st", TODAY) == "2026-09-01"
    assert extract_date("december 22nd 2026", TODAY) == "2026-12-22"


def test_rule_priority_prefers_month_names_with_year() -> None:
    """A month-name date with a year beats an earlier numeric date."""
    assert extract_date("moved from 3/1 to Feb 20, 2026", TODAY) == "2026-02-20"


def test_impossible_dates_are_skipped() -> None:
    """A match that is not a real calendar day does not end the search."""
    assert extract_date("2/30/2026", TODAY) is None
    assert extract_date("2/30/2026 or 3/1/2026", TODAY) == "2026-03-01"
    assert extract_date("13/40", TODAY) is None


def test_iso_dates_are_not_read_as_month_day() -> None:
    assert find_date("2026/11/05", TODAY) == date(2026, 11, 5)


def test_ranges_and_plain_numbers_are_not_dates() -> None:
    assert extract_date("Read chapters 3-4", TODAY) is None
    assert extract_date("Homework 12", TODAY) is None
    assert extract_date("", TODAY) is None


def test_fallback_to_today() -> None:
    assert extract_date_or_today("TBD", TODAY) == "2026-01-10"
    assert extract_date_or_today("4/1/2026", TODAY) == "2026-04-01"


def test_strip_dates_removes_every_date_token() -> None:
    stripped = strip_dates("Feb 15 - Quiz 1 (moved from 2/10/2026, was 2026-02-01)")
    assert "Feb" not in stripped
    assert "2/10" not in stripped
    assert "2026" not in stripped
    assert "Quiz 1" in stripped
