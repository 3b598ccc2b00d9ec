# -*- coding: utf-8 -*-
"""
Smart Paste: best-effort parsing of unstructured text into assignment candidates.

Every non-blank line of a syllabus excerpt or ad hoc notes is run through the
date, class code and type heuristics independently. What is left of the line
after removing the recognised date and code tokens becomes the title.

The output is a list of candidates meant for human review. Nothing here touches
persisted state: ``commit_candidates`` turns reviewed candidates into a batch
the merger can apply.
"""
from __future__ import annotations

import logging
import re
import typing as t
from dataclasses import dataclass, replace
from datetime import date

from academic_planner.models import ITEM_STATUSES, ITEM_TYPES, AcademicItem, ClassInfo, new_item_id
from paste_parser.class_codes import ColorPalette, normalize_code, resolve_class_code, strip_class_codes
from paste_parser.classifier import classify_with_priority, priority_of
from paste_parser.dates import extract_date, strip_dates
from paste_parser.models import Candidate, ParseResult, SmartPasteResult
from paste_parser.tabular import looks_like_header

logger = logging.getLogger(__name__)


SEPARATOR_LINE = re.compile(r"[-=_\s]+")
TITLE_EDGES = re.compile(r"^[-|,.:\s]+|[-|,.:\s]+$")
MIN_TITLE_LENGTH = 3

EDITABLE_FIELDS = frozenset({"title", "class_code", "class_name", "type", "due_date", "time", "status"})


class AnnotationRule(t.Protocol):
    """Hook producing an advisory note for a candidate, or None."""

    def __call__(self, candidate: Candidate) -> t.Optional[str]:
        ...


@dataclass(frozen=True)
class ClassCodeAnnotation:
    """Attach ``note`` to every candidate of one class."""
    class_code: str
    note: str

    def __call__(self, candidate: Candidate) -> t.Optional[str]:
        if candidate.class_code and normalize_code(candidate.class_code) == normalize_code(self.class_code):
            return self.note
        return None


def is_skippable(line: str) -> bool:
    """Header rows and ``----``/``====`` separator lines carry no item."""
    return looks_like_header(line) or SEPARATOR_LINE.fullmatch(line) is not None


def clean_title(line: str) -> str:
    """What remains of ``line`` once dates and class codes are removed."""
    title = strip_class_codes(strip_dates(line))
    title = re.sub(r"\s+", " ", title)
    return TITLE_EDGES.sub("", title).strip()


def recover_title(line: str, item_type: str) -> tuple[str, bool]:
    """Title for ``line`` and whether it had to fall back to the type name."""
    title = clean_title(line)
    if len(title) < MIN_TITLE_LENGTH:
        return item_type.capitalize(), True
    return title, False


def _annotate(candidate: Candidate, rules: t.Sequence[AnnotationRule]) -> Candidate:
    notes = []
    for rule in rules:
        note = rule(candidate)
        if note:
            notes.append(note)
    if not notes:
        return candidate
    return replace(candidate, notes=tuple(notes))


def smart_paste(
        text: str,
        known_classes: t.Sequence[ClassInfo] = (),
        annotation_rules: t.Sequence[AnnotationRule] = (),
        today: t.Optional[date] = None,
) -> SmartPasteResult:
    """Turn free text into ranked candidates.

    :param text: Unstructured multi-line text.
    :param known_classes: Classes of the target semester, used to resolve codes.
    :param annotation_rules: Hooks adding advisory notes to candidates.
    :param today: Date used for lines without a recognisable date.
    :return: Candidates sorted exams first (input order within a type) and the
        classes the text mentions that are not known yet.
    """
    today = today or date.today()
    palette = ColorPalette(start=len(known_classes))
    new_classes: dict[str, ClassInfo] = {}
    candidates: list[Candidate] = []

    for line_no, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line:
            continue
        if is_skippable(line):
            logger.debug("Skipping header/separator line %d: %r", line_no, line)
            continue

        due_date = extract_date(line, today)
        resolved = resolve_class_code(line, known_classes)
        item_type, priority = classify_with_priority(line)
        title, fell_back = recover_title(line, item_type)
        if not title:
            continue

        provenance: dict[str, str] = {
            "title": "default" if fell_back else "extracted",
            "type": "classified",
            "due_date": "extracted" if due_date else "default",
        }
        class_code = class_name = ""
        if resolved is not None:
            class_code, class_name = resolved.code, resolved.name
            provenance["class_code"] = "new-class" if resolved.is_new else "known-class"
            if resolved.is_new and class_code not in new_classes:
                new_classes[class_code] = palette.new_class(class_code, class_name)
        else:
            provenance["class_code"] = "default"

        candidate = Candidate(
            title=title,
            class_code=class_code,
            class_name=class_name,
            type=item_type,
            priority=priority,
            due_date=due_date or today.isoformat(),
            line_no=line_no,
            source_line=line,
            provenance=provenance,
        )
        candidates.append(_annotate(candidate, annotation_rules))

    # list.sort is stable, so equal priorities keep input order
    candidates.sort(key=lambda c: c.priority)
    logger.info("Smart Paste produced %d candidate(s)", len(candidates))
    return SmartPasteResult(candidates=candidates, classes=list(new_classes.values()))


def edit_candidate(
        candidate: Candidate,
        known_classes: t.Sequence[ClassInfo] = (),
        annotation_rules: t.Sequence[AnnotationRule] = (),
        **changes: t.Any,
) -> Candidate:
    """Return a copy of ``candidate`` with reviewed field values applied.

    Changing the type re-derives the priority. Changing the class code looks up
    the class name among ``known_classes`` unless one is given, and recomputes
    the notes from ``annotation_rules``.

    :raises ValueError: On an unknown field, a blank title, an unknown type or
        status, or a due date that is not ``YYYY-MM-DD``.
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

    if "title" in changes:
        changes["title"] = (changes["title"] or "").strip()
        if not changes["title"]:
            raise ValueError("Title cannot be blank.")
    if "type" in changes:
        if changes["type"] not in ITEM_TYPES:
            raise ValueError(f"Unknown type: {changes['type']}")
        changes["priority"] = priority_of(changes["type"])
    if "status" in changes and changes["status"] not in ITEM_STATUSES:
        raise ValueError(f"Unknown status: {changes['status']}")
    if "due_date" in changes:
        changes["due_date"] = date.fromisoformat(changes["due_date"]).isoformat()
    if "class_code" in changes:
        code = normalize_code(changes["class_code"] or "")
        changes["class_code"] = code
        if "class_name" not in changes:
            known = {c.code: c.name for c in known_classes}
            changes["class_name"] = known.get(code, code)

    provenance = dict(candidate.provenance)
    for name in changes:
        if name in EDITABLE_FIELDS:
            provenance[name] = "edited"
    edited = replace(candidate, provenance=provenance, **changes)
    if "class_code" in changes:
        edited = _annotate(replace(edited, notes=()), annotation_rules)
    return edited


def remove_candidate(candidates: t.Sequence[Candidate], index: int) -> list[Candidate]:
    """Copy of ``candidates`` without the entry at ``index``."""
    if not 0 <= index < len(candidates):
        raise IndexError(f"No candidate at position {index}")
    return [c for i, c in enumerate(candidates) if i != index]


def commit_candidates(
        candidates: t.Sequence[Candidate],
        known_classes: t.Sequence[ClassInfo] = (),
        new_classes: t.Sequence[ClassInfo] = (),
) -> ParseResult:
    """Turn reviewed candidates into a batch of items and the classes they use.

    Candidates without a title or a due date are left out. Classes already
    known, and the new classes of the Smart Paste preview, are returned as they
    are; any other code becomes a new class. Classes are listed and coloured in
    the order their first line appears in the pasted text.
    """
    known = {c.code: c for c in known_classes}
    known.update((c.code, c) for c in new_classes)
    palette = ColorPalette(start=len(known))

    kept = [c for c in candidates if c.title and c.due_date]
    if len(kept) < len(candidates):
        logger.debug("Leaving out %d candidate(s) missing a title or date", len(candidates) - len(kept))

    classes: dict[str, ClassInfo] = {}
    for candidate in sorted(kept, key=lambda c: c.line_no):
        code = candidate.class_code
        if code and code not in classes:
            classes[code] = known.get(code) or palette.new_class(code, candidate.class_name or code)

    items = [
        AcademicItem(
            id=new_item_id(),
            title=candidate.title,
            class_code=candidate.class_code,
            class_name=classes[candidate.class_code].name if candidate.class_code else "",
            type=candidate.type,
            status=candidate.status,
            due_date=candidate.due_date,
            time=candidate.time,
        )
        for candidate in kept
    ]
    return ParseResult(items=items, classes=list(classes.values()))
