# -*- coding: utf-8 -*-
"""
Date extraction from free text and spreadsheet cells.

Dates are recognised by an ordered rule table. Each rule pairs a pattern with a
builder that turns a match into a calendar date; the first rule that yields a
real date wins. Only US month/day ordering is understood.
"""
from __future__ import annotations

import logging
import re
import typing as t
from dataclasses import dataclass
from datetime import date

logger = logging.getLogger(__name__)


MONTHS: dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

MONTH_PATTERN = (
    r"(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
ORDINAL = r"(?:st|nd|rd|th)?"


@dataclass(frozen=True)
class DateRule:
    """One entry of the rule table: a pattern and how to build a date from it."""
    name: str
    pattern: t.Pattern[str]
    build: t.Callable[[t.Match[str], date], t.Optional[date]]


def _safe_date(year: int, month: int, day: int) -> t.Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _month_number(token: str) -> int:
    return MONTHS[token.lower()[:3]]


def _month_day_year(m: t.Match[str], today: date) -> t.Optional[date]:
    return _safe_date(int(m.group(3)), _month_number(m.group(1)), int(m.group(2)))


def _month_day(m: t.Match[str], today: date) -> t.Optional[date]:
    return _safe_date(today.year, _month_number(m.group(1)), int(m.group(2)))


def _numeric_mdy(m: t.Match[str], today: date) -> t.Optional[date]:
    year = int(m.group(3))
    if year < 100:
        year += 2000
    return _safe_date(year, int(m.group(1)), int(m.group(2)))


def _numeric_md(m: t.Match[str], today: date) -> t.Optional[date]:
    return _safe_date(today.year, int(m.group(1)), int(m.group(2)))


def _iso(m: t.Match[str], today: date) -> t.Optional[date]:
    return _safe_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))


MONTH_DAY_YEAR = DateRule(
    name="month-day-year",
    pattern=re.compile(rf"\b{MONTH_PATTERN}\.?\s+(\d{{1,2}}){ORDINAL},?\s*(\d{{4}})\b", re.IGNORECASE),
    build=_month_day_year,
)
MONTH_DAY = DateRule(
    name="month-day",
    pattern=re.compile(rf"\b{MONTH_PATTERN}\.?\s+(\d{{1,2}}){ORDINAL}\b", re.IGNORECASE),
    build=_month_day,
)
NUMERIC_MDY = DateRule(
    name="numeric-m/d/y",
    pattern=re.compile(r"(?<![\d/\-])(\d{1,2})[/\-](\d{1,2})[/\-](\d{4}|\d{2})(?![\d/\-])"),
    build=_numeric_mdy,
)
NUMERIC_MD = DateRule(
    name="numeric-m/d",
    pattern=re.compile(r"(?<![\d/\-])(\d{1,2})/(\d{1,2})(?![\d/])"),
    build=_numeric_md,
)
ISO = DateRule(
    name="iso",
    pattern=re.compile(r"(?<!\d)(\d{4})[/\-](\d{1,2})[/\-](\d{1,2})(?!\d)"),
    build=_iso,
)

# Priority order: first rule producing a valid date wins.
DATE_RULES: tuple[DateRule, ...] = (MONTH_DAY_YEAR, MONTH_DAY, NUMERIC_MDY, NUMERIC_MD, ISO)

# Order used when erasing dates from a title: longer forms before their prefixes.
_STRIP_ORDER: tuple[DateRule, ...] = (ISO, NUMERIC_MDY, NUMERIC_MD, MONTH_DAY_YEAR, MONTH_DAY)


def find_date(
        text: str,
        today: t.Optional[date] = None,
        rules: t.Sequence[DateRule] = DATE_RULES,
) -> t.Optional[date]:
    """Return the first calendar date found in ``text``, or None.

    :param text: A line or cell of text.
    :param today: Reference date supplying the year for year-less forms.
    :param rules: Rule table to apply, in priority order.
    """
    if not text or not text.strip():
        return None
    today = today or date.today()
    for rule in rules:
        for match in rule.pattern.finditer(text):
            found = rule.build(match, today)
            if found is not None:
                logger.debug("Date rule %s matched %r -> %s", rule.name, match.group(0), found)
                return found
    return None


def extract_date(text: str, today: t.Optional[date] = None) -> t.Optional[str]:
    """ISO form of the first date in ``text``, or None when nothing matches."""
    found = find_date(text, today)
    return found.isoformat() if found else None


def extract_date_or_today(text: str, today: t.Optional[date] = None) -> str:
    today = today or date.today()
    return extract_date(text, today) or today.isoformat()


def strip_dates(text: str) -> str:
    """Remove every date-looking token from ``text``."""
    for rule in _STRIP_ORDER:
        text = rule.pattern.sub(" ", text)
    return text
