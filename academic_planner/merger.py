# -*- coding: utf-8 -*-
"""
Reconciles a freshly parsed batch with existing planner state.

Two modes:
- ``replace`` discards every item, class and semester and installs a new semester
  holding exactly the batch;
- ``add`` merges the batch into one existing semester, leaving the others alone.

Inputs are never modified. The result holds complete new collections so the
caller can swap them in with a single assignment.
"""
from __future__ import annotations

import logging
import typing as t
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, timedelta

from academic_planner.models import (
    DEFAULT_SEMESTER_NAME,
    AcademicItem,
    ClassInfo,
    Semester,
    default_grade_weights,
)
from paste_parser.errors import MergePreconditionError
from paste_parser.models import ParseResult

logger = logging.getLogger(__name__)


ImportMode = t.Literal["replace", "add"]
IMPORT_MODES: tuple[str, ...] = ("replace", "add")

SEMESTER_LENGTH = timedelta(days=120)


@dataclass
class MergeResult:
    """Next planner state produced by an import."""
    mode: ImportMode
    semester: Semester                      # the new or updated target semester
    items: list[AcademicItem] = field(default_factory=list)
    classes: list[ClassInfo] = field(default_factory=list)
    semesters: list[Semester] = field(default_factory=list)

    @property
    def current_semester_id(self) -> str:
        return self.semester.id


def _stamp(items: t.Iterable[AcademicItem], semester_id: str) -> list[AcademicItem]:
    return [replace(item, semester_id=semester_id) for item in items]


def new_semester(classes: t.Sequence[ClassInfo], today: t.Optional[date] = None) -> Semester:
    """A fresh semester starting today, with default weights for every class."""
    today = today or date.today()
    return Semester(
        id=f"semester-{uuid.uuid4().hex}",
        name=DEFAULT_SEMESTER_NAME,
        start_date=today.isoformat(),
        end_date=(today + SEMESTER_LENGTH).isoformat(),
        classes=[replace(c) for c in classes],
        grade_weights={c.code: default_grade_weights() for c in classes},
    )


def resolve_target_semester(
        semesters: t.Sequence[Semester],
        current_semester_id: t.Optional[str],
) -> Semester:
    """The semester an add-mode import goes into.

    :raises MergePreconditionError: When there is no semester at all.
    """
    if not semesters:
        raise MergePreconditionError("Cannot add to the current semester: no semester exists yet.")
    for semester in semesters:
        if semester.id == current_semester_id:
            return semester
    logger.warning("Semester %r not found, adding to %r instead", current_semester_id, semesters[0].id)
    return semesters[0]


def replace_all(batch: ParseResult, today: t.Optional[date] = None) -> MergeResult:
    semester = new_semester(batch.classes, today)
    items = _stamp(batch.items, semester.id)
    logger.info("Replacing planner state: %d item(s), %d class(es)", len(items), len(semester.classes))
    return MergeResult(
        mode="replace",
        semester=semester,
        items=items,
        classes=list(semester.classes),
        semesters=[semester],
    )


def add_to_semester(
        batch: ParseResult,
        existing_items: t.Sequence[AcademicItem],
        existing_semesters: t.Sequence[Semester],
        current_semester_id: t.Optional[str],
) -> MergeResult:
    target = resolve_target_semester(existing_semesters, current_semester_id)

    classes = [replace(c) for c in target.classes]
    weights = dict(target.grade_weights)
    known_codes = {c.code for c in classes}
    for cls in batch.classes:
        if cls.code in known_codes:
            continue
        classes.append(replace(cls))
        known_codes.add(cls.code)
        weights.setdefault(cls.code, default_grade_weights())

    updated = replace(target, classes=classes, grade_weights=weights)
    items = list(existing_items) + _stamp(batch.items, target.id)
    semesters = [updated if s.id == target.id else s for s in existing_semesters]

    logger.info(
        "Added %d item(s) and %d class(es) to semester %s",
        len(batch.items), len(classes) - len(target.classes), target.id,
    )
    return MergeResult(mode="add", semester=updated, items=items, classes=list(classes), semesters=semesters)


def merge_import(
        batch: ParseResult,
        mode: ImportMode,
        existing_items: t.Sequence[AcademicItem] = (),
        existing_semesters: t.Sequence[Semester] = (),
        current_semester_id: t.Optional[str] = None,
        today: t.Optional[date] = None,
) -> MergeResult:
    """Apply a parsed batch to the current planner state.

    :param batch: Items and classes from a parser.
    :param mode: ``replace`` or ``add``.
    :param existing_items: Every stored item, all semesters.
    :param existing_semesters: Every stored semester.
    :param current_semester_id: Selected semester, the add-mode target.
    :param today: Start date of a semester created in replace mode.
    :raises MergePreconditionError: In add mode when no semester exists.
    :raises ValueError: On an unknown mode.
    """
    if mode == "replace":
        return replace_all(batch, today)
    if mode == "add":
        return add_to_semester(batch, existing_items, existing_semesters, current_semester_id)
    raise ValueError(f"Unknown import mode: {mode!r}")
