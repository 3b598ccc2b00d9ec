# -*- coding: utf-8 -*-
"""
Day-to-day updates to tracked items: progress, grades and the selected semester.

Each function takes the whole planner state and returns the next one, leaving
its input untouched, so callers load once, update, and save once.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import replace

from academic_planner.models import ITEM_STATUSES, AcademicItem, GradeCategory, ItemStatus
from storage.store import PlannerState

logger = logging.getLogger(__name__)


def short_id(item: AcademicItem, length: int = 8) -> str:
    """Abbreviated id for display: the start of the random part."""
    return item.id.rsplit("-", 1)[-1][:length]


def find_item(items: t.Sequence[AcademicItem], ref: str) -> AcademicItem:
    """Item whose id is ``ref``, or the only one whose id or short id starts with it.

    :raises KeyError: When nothing matches.
    :raises ValueError: When ``ref`` matches more than one item.
    """
    for item in items:
        if item.id == ref:
            return item
    matches = [i for i in items if ref and (i.id.startswith(ref) or short_id(i, 32).startswith(ref))]
    if not matches:
        raise KeyError(f"No item with id '{ref}'.")
    if len(matches) > 1:
        raise ValueError(f"'{ref}' matches {len(matches)} items; give more of the id.")
    return matches[0]


def _update_item(state: PlannerState, ref: str, **changes: t.Any) -> tuple[PlannerState, AcademicItem]:
    target = find_item(state.items, ref)
    updated = replace(target, **changes)
    items = [updated if i.id == target.id else i for i in state.items]
    return replace(state, items=items), updated


def set_status(state: PlannerState, ref: str, status: ItemStatus) -> tuple[PlannerState, AcademicItem]:
    """Move an item to ``status``.

    :raises ValueError: On an unknown status.
    """
    if status not in ITEM_STATUSES:
        raise ValueError(f"Unknown status: {status}")
    next_state, item = _update_item(state, ref, status=status)
    logger.info("Item %s is now %s", item.id, status)
    return next_state, item


def record_grade(
        state: PlannerState,
        ref: str,
        grade: t.Optional[float],
        days_late: int = 0,
        category: t.Optional[GradeCategory] = None,
        is_final: t.Optional[bool] = None,
) -> tuple[PlannerState, AcademicItem]:
    """Record the grade of an item, or clear it with ``grade=None``.

    A recorded grade marks the item completed. Late days are stored as given;
    the late penalty is applied when the class grade is computed.

    :param grade: Percentage score.
    :param days_late: Days the submission was late; zero means on time.
    :param category: Grading category, left unchanged when None.
    :param is_final: Whether the item is the final exam, left unchanged when None.
    :raises ValueError: On a negative grade or negative late days.
    """
    if grade is not None and grade < 0:
        raise ValueError("Grade cannot be negative.")
    if days_late < 0:
        raise ValueError("Days late cannot be negative.")

    target = find_item(state.items, ref)
    changes: dict[str, t.Any] = {
        "grade": grade,
        "is_late": days_late > 0,
        "days_late": days_late,
        "status": "completed" if grade is not None else target.status,
    }
    if category is not None:
        changes["grade_category"] = category
    if is_final is not None:
        changes["is_final"] = is_final

    next_state, item = _update_item(state, target.id, **changes)
    logger.info("Recorded grade %s for item %s", grade, item.id)
    return next_state, item


def switch_semester(state: PlannerState, semester_id: str) -> PlannerState:
    """Select another semester.

    :raises KeyError: When no semester has that id.
    """
    if not any(s.id == semester_id for s in state.semesters):
        raise KeyError(f"Unknown semester '{semester_id}'.")
    return replace(state, current_semester_id=semester_id)
