"""
Data models produced by the paste parsers.

This module contains the dataclasses returned by the tabular parser and the
Smart Paste parser, before anything is merged into planner state.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

from academic_planner.models import AcademicItem, ClassInfo, ItemStatus, ItemType


# Where a candidate field value came from
Provenance = t.Literal["extracted", "default", "known-class", "new-class", "classified", "edited"]


@dataclass
class ParseResult:
    """
    A parsed batch ready for merging:
    - items in input order,
    - classes first seen in this batch, deduplicated by code.
    """
    items: list[AcademicItem] = field(default_factory=list)
    classes: list[ClassInfo] = field(default_factory=list)


@dataclass(frozen=True)
class Candidate:
    """
    One Smart Paste suggestion awaiting review.
    Never persisted as-is: the review step edits or removes candidates and
    ``commit_candidates`` turns the survivors into items.
    """
    title: str
    class_code: str = ""
    class_name: str = ""
    type: ItemType = "assignment"
    priority: int = 4
    due_date: str = ""                          # "YYYY-MM-DD"
    time: t.Optional[str] = None
    status: ItemStatus = "not-started"
    notes: tuple[str, ...] = ()                 # advisory annotations
    line_no: int = 0                            # 1-based line in the pasted text
    source_line: str = ""
    provenance: t.Mapping[str, Provenance] = field(default_factory=dict)


@dataclass
class SmartPasteResult:
    """Ranked candidates plus the classes they imply that are not yet known."""
    candidates: list[Candidate] = field(default_factory=list)
    classes: list[ClassInfo] = field(default_factory=list)
