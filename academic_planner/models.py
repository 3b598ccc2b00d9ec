# -*- coding: utf-8 -*-
"""
Data models for the academic planner.

This module contains the dataclasses used to represent tracked coursework,
classes and semesters, plus the few helpers every layer needs to build them.
"""
from __future__ import annotations

import typing as t
import uuid
from dataclasses import dataclass, field


ItemType = t.Literal["assignment", "homework", "quiz", "exam", "project", "lecture"]
ItemStatus = t.Literal["not-started", "in-progress", "completed"]
GradeCategory = t.Literal["exam", "final", "hw", "quiz", "project", "lab", "participation"]

ITEM_TYPES: tuple[str, ...] = ("assignment", "homework", "quiz", "exam", "project", "lecture")
ITEM_STATUSES: tuple[str, ...] = ("not-started", "in-progress", "completed")
GRADE_CATEGORIES: tuple[str, ...] = ("exam", "final", "hw", "quiz", "project", "lab", "participation")

DEFAULT_SEMESTER_ID = "my-semester"
DEFAULT_SEMESTER_NAME = "My Semester"


@dataclass
class AcademicItem:
    """One trackable unit of work (assignment, quiz, exam, ...)."""
    id: str
    title: str
    class_code: str
    class_name: str
    type: ItemType = "assignment"
    status: ItemStatus = "not-started"
    due_date: str = ""              # "YYYY-MM-DD"
    time: t.Optional[str] = None    # "11:59 PM", "In Class", ...
    description: t.Optional[str] = None
    location: t.Optional[str] = None
    # Grading metadata, only set once the item is graded
    grade: t.Optional[float] = None
    is_late: t.Optional[bool] = None
    days_late: t.Optional[int] = None
    is_final: t.Optional[bool] = None
    grade_category: t.Optional[GradeCategory] = None
    semester_id: t.Optional[str] = None


@dataclass
class ClassInfo:
    """A course, identified by its normalized code."""
    code: str
    name: str
    color: str
    has_late_penalty: bool = False
    kill_switch: t.Optional[str] = None


@dataclass
class GradeWeight:
    """Weight of one grading category within a class."""
    weight: float
    label: str


@dataclass
class Semester:
    """
    A date-bounded container of classes and their grade weighting.
    Items point back to it through ``AcademicItem.semester_id``.
    """
    id: str
    name: str
    start_date: str
    end_date: str
    classes: list[ClassInfo] = field(default_factory=list)
    grade_weights: dict[str, dict[str, GradeWeight]] = field(default_factory=dict)

    def class_codes(self) -> set[str]:
        return {c.code for c in self.classes}


def default_grade_weights() -> dict[str, GradeWeight]:
    """Weighting attached to every class the import pipeline introduces."""
    return {
        "exam": GradeWeight(weight=0.4, label="Exams"),
        "final": GradeWeight(weight=0.25, label="Final Exam"),
        "hw": GradeWeight(weight=0.15, label="Homework"),
        "quiz": GradeWeight(weight=0.1, label="Quizzes"),
        "project": GradeWeight(weight=0.1, label="Projects"),
    }


def empty_semester() -> Semester:
    """The semester a fresh store starts with."""
    return Semester(
        id=DEFAULT_SEMESTER_ID,
        name=DEFAULT_SEMESTER_NAME,
        start_date="2026-01-01",
        end_date="2026-12-31",
    )


def new_item_id(prefix: str = "imported") -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


def items_in_semester(items: t.Iterable[AcademicItem], semester: Semester) -> list[AcademicItem]:
    """Items belonging to ``semester``.

    Items carrying a semester id match on it; legacy items without one are
    matched by membership of their class code in the semester's classes.
    """
    codes = semester.class_codes()
    selected = []
    for item in items:
        if item.semester_id:
            if item.semester_id == semester.id:
                selected.append(item)
        elif item.class_code in codes:
            selected.append(item)
    return selected
