# -*- coding: utf-8 -*-
"""Keyword-based assignment type classification."""
from __future__ import annotations

import typing as t

from academic_planner.models import ItemType


# Checked top to bottom; the position of a type is also its review priority.
TYPE_KEYWORDS: tuple[tuple[ItemType, tuple[str, ...]], ...] = (
    ("exam", ("final exam", "final", "midterm", "exam", "test")),
    ("quiz", ("quiz", "assessment", "skill quiz")),
    ("project", ("project", "presentation", "paper", "report", "lab project")),
    ("assignment", ("assignment", "due", "submit", "submission")),
    ("homework", ("homework", "hw", "problem set", "ps", "exercises")),
    ("lecture", ("lecture", "class", "chapter", "ch.", "reading")),
)

DEFAULT_TYPE: ItemType = "assignment"

TYPE_PRIORITY: dict[str, int] = {item_type: rank for rank, (item_type, _) in enumerate(TYPE_KEYWORDS, 1)}


def classify(text: str) -> ItemType:
    """Map ``text`` to an item type; ``assignment`` when no keyword matches."""
    lowered = (text or "").lower()
    for item_type, keywords in TYPE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return item_type
    return DEFAULT_TYPE


def priority_of(item_type: str) -> int:
    """Review priority of a type: 1 for exams down to 6 for lectures."""
    return TYPE_PRIORITY.get(item_type, len(TYPE_PRIORITY) + 1)


def classify_with_priority(text: str) -> t.Tuple[ItemType, int]:
    item_type = classify(text)
    return item_type, priority_of(item_type)
