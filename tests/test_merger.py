# -*- coding: utf-8 -*-
"""Tests for merging imported batches into planner state."""
import copy
from datetime import date

import pytest

from academic_planner.merger import merge_import
from academic_planner.models import AcademicItem, ClassInfo, GradeWeight, Semester, default_grade_weights
from paste_parser.errors import MergePreconditionError
from paste_parser.models import ParseResult


TODAY = date(2026, 1, 10)


def _item(item_id: str, code: str, semester_id=None, **extra) -> AcademicItem:
    return AcademicItem(
        id=item_id,
        title=f"Item {item_id}",
        class_code=code,
        class_name=code,
        type="homework",
        due_date="2026-02-01",
        semester_id=semester_id,
        **extra,
    )


@pytest.fixture
def existing() -> dict:
    """Two semesters; spring holds MATH101 with custom weights and graded items."""
    spring = Semester(
        id="spring",
        name="Spring 2026",
        start_date="2026-01-12",
        end_date="2026-05-15",
        classes=[ClassInfo(code="MATH101", name="Calculus I", color="bg-chart-3", has_late_penalty=True)],
        grade_weights={"MATH101": {"exam": GradeWeight(weight=0.6, label="Exams")}},
    )
    fall = Semester(id="fall", name="Fall 2025", start_date="2025-09-01", end_date="2025-12-20")
    items = [
        _item("a", "MATH101", "spring", grade=91.0, is_late=True, days_late=1, grade_category="hw"),
        _item("b", "HIST100", "fall"),
    ]
    return {"items": items, "semesters": [spring, fall]}


@pytest.fixture
def batch() -> ParseResult:
    return ParseResult(
        items=[_item("n1", "MATH101", "parser-semester"), _item("n2", "CS200")],
        classes=[
            ClassInfo(code="MATH101", name="Math (imported)", color="bg-chart-1"),
            ClassInfo(code="CS200", name="Intro CS", color="bg-chart-2"),
        ],
    )


def test_replace_installs_only_the_new_batch(existing: dict, batch: ParseResult) -> None:
    """Replace mode carries nothing over from the previous state."""
    result = merge_import(batch, "replace", existing["items"], existing["semesters"], "spring", today=TODAY)

    semester = result.semester
    assert result.mode == "replace"
    assert semester.id.startswith("semester-")
    assert semester.id not in {"spring", "fall"}
    assert (semester.start_date, semester.end_date) == ("2026-01-10", "2026-05-10")
    assert [c.code for c in semester.classes] == ["MATH101", "CS200"]
    assert semester.classes[0].name == "Math (imported)"
    assert semester.grade_weights == {"MATH101": default_grade_weights(), "CS200": default_grade_weights()}

    assert result.semesters == [semester]
    assert [i.id for i in result.items] == ["n1", "n2"]
    assert all(i.semester_id == semester.id for i in result.items)
    assert result.current_semester_id == semester.id


def test_add_keeps_every_existing_item(existing: dict, batch: ParseResult) -> None:
    result = merge_import(batch, "add", existing["items"], existing["semesters"], "spring")

    assert len(result.items) == len(existing["items"]) + len(batch.items)
    assert result.items[:2] == existing["items"]
    # Grading metadata survives untouched
    assert result.items[0].grade == 91.0
    assert result.items[0].days_late == 1


def test_add_stamps_the_target_semester(existing: dict, batch: ParseResult) -> None:
    result = merge_import(batch, "add", existing["items"], existing["semesters"], "spring")

    assert [i.semester_id for i in result.items[2:]] == ["spring", "spring"]
    assert result.current_semester_id == "spring"


def test_add_merges_classes_by_code(existing: dict, batch: ParseResult) -> None:
    """Existing classes win; new codes are appended in batch order with default weights."""
    result = merge_import(batch, "add", existing["items"], existing["semesters"], "spring")

    codes = [c.code for c in result.classes]
    assert codes == ["MATH101", "CS200"]
    assert len(codes) == len(set(codes))
    math = result.classes[0]
    assert (math.name, math.color, math.has_late_penalty) == ("Calculus I", "bg-chart-3", True)

    weights = result.semester.grade_weights
    assert weights["MATH101"] == {"exam": GradeWeight(weight=0.6, label="Exams")}
    assert weights["CS200"] == default_grade_weights()


def test_add_leaves_other_semesters_alone(existing: dict, batch: ParseResult) -> None:
    result = merge_import(batch, "add", existing["items"], existing["semesters"], "spring")

    assert [s.id for s in result.semesters] == ["spring", "fall"]
    assert result.semesters[1] is existing["semesters"][1]
    assert result.semesters[0] == result.semester


def test_add_falls_back_to_the_first_semester(existing: dict, batch: ParseResult) -> None:
    result = merge_import(batch, "add", existing["items"], existing["semesters"], "no-such-semester")
    assert result.semester.id == "spring"


def test_add_without_semesters_fails(batch: ParseResult) -> None:
    with pytest.raises(MergePreconditionError):
        merge_import(batch, "add", [], [], "spring")


def test_unknown_mode_fails(batch: ParseResult) -> None:
    with pytest.raises(ValueError):
        merge_import(batch, "merge")


def test_inputs_are_not_mutated(existing: dict, batch: ParseResult) -> None:
    before_existing = copy.deepcopy(existing)
    before_batch = copy.deepcopy(batch)

    merge_import(batch, "add", existing["items"], existing["semesters"], "spring")
    merge_import(batch, "replace", existing["items"], existing["semesters"], "spring")

    assert existing == before_existing
    assert batch == before_batch
