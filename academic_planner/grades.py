# -*- coding: utf-8 -*-
"""Grade arithmetic over graded items."""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

from academic_planner.models import AcademicItem, ClassInfo, GradeWeight


LATE_PENALTY_PER_DAY = 10.0

LETTER_GRADES: tuple[tuple[float, str], ...] = (
    (93, "A"), (90, "A-"),
    (87, "B+"), (83, "B"), (80, "B-"),
    (77, "C+"), (73, "C"), (70, "C-"),
    (67, "D+"), (63, "D"), (60, "D-"),
)


@dataclass
class CategoryScore:
    weight: float
    earned: float = 0.0
    possible: float = 0.0
    items: int = 0

    @property
    def percent(self) -> t.Optional[float]:
        return self.earned / self.possible * 100 if self.possible else None


@dataclass
class ClassGrade:
    """Current standing in one class."""
    class_code: str
    current_grade: t.Optional[float]        # None until something is graded
    breakdown: dict[str, CategoryScore] = field(default_factory=dict)
    has_final_warning: bool = False

    @property
    def letter(self) -> t.Optional[str]:
        return letter_grade(self.current_grade) if self.current_grade is not None else None


def late_penalty(grade: float, days_late: int, class_info: t.Optional[ClassInfo]) -> float:
    """Grade after the late deduction; classes without a late policy are untouched."""
    if class_info is None or not class_info.has_late_penalty or days_late <= 0:
        return grade
    return max(0.0, grade - days_late * LATE_PENALTY_PER_DAY)


def letter_grade(percent: float) -> str:
    for threshold, letter in LETTER_GRADES:
        if percent >= threshold:
            return letter
    return "F"


def class_grade(
        items: t.Iterable[AcademicItem],
        class_info: ClassInfo,
        weights: t.Optional[dict[str, GradeWeight]],
) -> ClassGrade:
    """Weighted average over the categories that have graded items.

    Items count only when they carry a grade category known to ``weights``.
    The final-exam warning fires for classes with a kill switch whose final is
    neither graded nor completed.
    """
    class_items = [i for i in items if i.class_code == class_info.code and i.grade_category]
    if not weights:
        return ClassGrade(class_code=class_info.code, current_grade=None)

    breakdown = {category: CategoryScore(weight=w.weight) for category, w in weights.items()}

    final_exam = next((i for i in class_items if i.is_final), None)
    has_final_warning = bool(
        class_info.kill_switch
        and final_exam is not None
        and final_exam.status != "completed"
        and final_exam.grade is None
    )

    for item in class_items:
        score = breakdown.get(item.grade_category)
        if score is None or item.grade is None:
            continue
        grade = item.grade
        if item.is_late and item.days_late:
            grade = late_penalty(grade, item.days_late, class_info)
        score.earned += grade
        score.possible += 100
        score.items += 1

    weighted = 0.0
    weight_used = 0.0
    for score in breakdown.values():
        if score.percent is not None:
            weighted += score.percent * score.weight
            weight_used += score.weight

    return ClassGrade(
        class_code=class_info.code,
        current_grade=weighted / weight_used if weight_used else None,
        breakdown=breakdown,
        has_final_warning=has_final_warning,
    )
