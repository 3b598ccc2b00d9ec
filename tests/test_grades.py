# -*- coding: utf-8 -*-
"""Tests for grade arithmetic."""
import pytest

from academic_planner.grades import class_grade, late_penalty, letter_grade
from academic_planner.models import AcademicItem, ClassInfo, default_grade_weights


def _graded(title: str, category: str, grade=None, **extra) -> AcademicItem:
    return AcademicItem(
        id=title,
        title=title,
        class_code="MATH101",
        class_name="Calculus I",
        due_date="2026-03-01",
        grade=grade,
        grade_category=category,
        **extra,
    )


MATH = ClassInfo(code="MATH101", name="Calculus I", color="bg-chart-1")


def test_weighted_average_over_graded_categories() -> None:
    items = [_graded("Midterm", "exam", 90.0), _graded("HW 1", "hw", 80.0), _graded("Quiz 1", "quiz")]
    grade = class_grade(items, MATH, default_grade_weights())

    # (90 * .4 + 80 * .15) / .55
    assert grade.current_grade == pytest.approx(87.2727, rel=1e-4)
    assert grade.letter == "B+"
    assert grade.breakdown["exam"].items == 1
    assert grade.breakdown["quiz"].percent is None


def test_no_graded_items() -> None:
    grade = class_grade([_graded("HW 1", "hw")], MATH, default_grade_weights())
    assert grade.current_grade is None
    assert grade.letter is None


def test_class_without_weights() -> None:
    assert class_grade([_graded("HW 1", "hw", 100.0)], MATH, None).current_grade is None


def test_other_classes_are_ignored() -> None:
    other = AcademicItem(
        id="x", title="Essay", class_code="HIST100", class_name="History",
        grade=10.0, grade_category="hw",
    )
    grade = class_grade([other, _graded("HW 1", "hw", 95.0)], MATH, default_grade_weights())
    assert grade.current_grade == pytest.approx(95.0)


def test_late_penalty_only_with_late_policy() -> None:
    strict = ClassInfo(code="MATH101", name="Calculus I", color="bg-chart-1", has_late_penalty=True)
    assert late_penalty(90.0, 2, strict) == 70.0
    assert late_penalty(30.0, 5, strict) == 0.0
    assert late_penalty(90.0, 2, MATH) == 90.0
    assert late_penalty(90.0, 2, None) == 90.0

    items = [_graded("HW 1", "hw", 90.0, is_late=True, days_late=1)]
    assert class_grade(items, strict, default_grade_weights()).current_grade == pytest.approx(80.0)


@pytest.mark.parametrize(
    "percent, letter",
    [(100, "A"), (93, "A"), (92.9, "A-"), (85, "B"), (71, "C-"), (60, "D-"), (59.9, "F")],
)
def test_letter_grade(percent: float, letter: str) -> None:
    assert letter_grade(percent) == letter


def test_final_exam_warning() -> None:
    strict = ClassInfo(code="MATH101", name="Calculus I", color="bg-chart-1", kill_switch="Must pass the final")
    pending = [_graded("Final", "final", is_final=True)]
    assert class_grade(pending, strict, default_grade_weights()).has_final_warning

    done = [_graded("Final", "final", 75.0, is_final=True)]
    assert not class_grade(done, strict, default_grade_weights()).has_final_warning
    assert not class_grade(pending, MATH, default_grade_weights()).has_final_warning
