# -*- coding: utf-8 -*-
"""
Import service: validates pasted text, runs a parser and commits the merge.

This is the layer a user-facing surface calls. Parsing is pure; the only I/O
happens in ``import_batch``, which reads the stored state once and writes it
back in one go after a successful merge.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import replace
from datetime import date

from academic_planner.merger import ImportMode, MergeResult, merge_import
from academic_planner.models import ClassInfo
from paste_parser.errors import EmptyInputError, ZeroYieldError
from paste_parser.models import ParseResult, SmartPasteResult
from paste_parser.smart_paste import AnnotationRule, smart_paste
from paste_parser.tabular import parse_spreadsheet
from storage.store import JsonStore, PlannerState, load_state, save_state

logger = logging.getLogger(__name__)


def _require_text(text: t.Optional[str]) -> str:
    if not text or not text.strip():
        raise EmptyInputError()
    return text


def parse_table_text(text: t.Optional[str], today: t.Optional[date] = None) -> ParseResult:
    """Parse spreadsheet text, rejecting blank input and batches with no items.

    :raises EmptyInputError: When ``text`` is blank.
    :raises ZeroYieldError: When no row survives parsing.
    """
    batch = parse_spreadsheet(_require_text(text), today=today)
    if not batch.items:
        raise ZeroYieldError()
    return batch


def parse_free_text(
        text: t.Optional[str],
        known_classes: t.Sequence[ClassInfo] = (),
        annotation_rules: t.Sequence[AnnotationRule] = (),
        today: t.Optional[date] = None,
) -> SmartPasteResult:
    """Smart Paste with the same blank-input and zero-yield checks as the table path."""
    result = smart_paste(
        _require_text(text),
        known_classes=known_classes,
        annotation_rules=annotation_rules,
        today=today,
    )
    if not result.candidates:
        raise ZeroYieldError("No assignments found in the pasted text. Put one assignment per line.")
    return result


def apply_merge(
        state: PlannerState,
        batch: ParseResult,
        mode: ImportMode,
        today: t.Optional[date] = None,
) -> tuple[PlannerState, MergeResult]:
    """Next planner state after importing ``batch``; ``state`` is left untouched."""
    result = merge_import(
        batch,
        mode,
        existing_items=state.items,
        existing_semesters=state.semesters,
        current_semester_id=state.current_semester_id,
        today=today,
    )
    next_state = PlannerState(
        items=result.items,
        semesters=result.semesters,
        current_semester_id=result.current_semester_id,
    )
    return next_state, result


def import_batch(
        store: JsonStore,
        batch: ParseResult,
        mode: ImportMode,
        today: t.Optional[date] = None,
        semester_id: t.Optional[str] = None,
) -> MergeResult:
    """Merge ``batch`` into the stored state and persist the outcome.

    :param semester_id: Add-mode target; defaults to the stored current semester.
    Nothing is written when the merge fails.
    """
    state = load_state(store)
    if semester_id:
        state = replace(state, current_semester_id=semester_id)
    next_state, result = apply_merge(state, batch, mode, today)
    save_state(store, next_state)
    logger.info("Imported %d item(s) in %s mode", len(batch.items), mode)
    return result
