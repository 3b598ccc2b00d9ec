"""
Pydantic models for the persisted planner records.

The planner keeps its state as three JSON records. These models validate what
is read back and give the JSON its camelCase keys (``classCode``, ``dueDate``,
``semesterId``, ...), mirroring the dataclasses in ``academic_planner.models``.
"""
from __future__ import annotations

import typing as t
from dataclasses import asdict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from academic_planner.models import AcademicItem, ClassInfo, GradeWeight, Semester


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict[str, t.Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class AcademicItemRecord(_Record):
    """A stored item."""
    id: str
    title: str
    class_code: str = ""
    class_name: str = ""
    type: t.Literal["assignment", "homework", "quiz", "exam", "project", "lecture"] = "assignment"
    status: t.Literal["not-started", "in-progress", "completed"] = "not-started"
    due_date: str
    time: t.Optional[str] = None
    description: t.Optional[str] = None
    location: t.Optional[str] = None
    grade: t.Optional[float] = None
    is_late: t.Optional[bool] = None
    days_late: t.Optional[int] = None
    is_final: t.Optional[bool] = None
    grade_category: t.Optional[
        t.Literal["exam", "final", "hw", "quiz", "project", "lab", "participation"]
    ] = None
    semester_id: t.Optional[str] = None

    @classmethod
    def from_item(cls, item: AcademicItem) -> "AcademicItemRecord":
        return cls.model_validate(asdict(item))

    def to_item(self) -> AcademicItem:
        return AcademicItem(**self.model_dump())


class ClassInfoRecord(_Record):
    """A stored class."""
    code: str
    name: str
    color: str = "bg-chart-1"
    has_late_penalty: bool = False
    kill_switch: t.Optional[str] = None

    def to_class(self) -> ClassInfo:
        return ClassInfo(**self.model_dump())


class GradeWeightRecord(_Record):
    weight: float
    label: str


class SemesterRecord(_Record):
    """A stored semester with its classes and weights."""
    id: str
    name: str
    start_date: str
    end_date: str
    classes: list[ClassInfoRecord] = Field(default_factory=list)
    # Keys are class codes and grade categories, never camel-cased
    grade_weights: dict[str, dict[str, GradeWeightRecord]] = Field(default_factory=dict)

    @classmethod
    def from_semester(cls, semester: Semester) -> "SemesterRecord":
        return cls.model_validate(asdict(semester))

    def to_semester(self) -> Semester:
        return Semester(
            id=self.id,
            name=self.name,
            start_date=self.start_date,
            end_date=self.end_date,
            classes=[c.to_class() for c in self.classes],
            grade_weights={
                code: {cat: GradeWeight(weight=w.weight, label=w.label) for cat, w in categories.items()}
                for code, categories in self.grade_weights.items()
            },
        )
