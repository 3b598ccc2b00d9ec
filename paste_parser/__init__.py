"""Parsers turning pasted spreadsheet or free text into planner records."""
from paste_parser.errors import EmptyInputError, MergePreconditionError, PlannerImportError, ZeroYieldError
from paste_parser.models import Candidate, ParseResult, SmartPasteResult
from paste_parser.smart_paste import commit_candidates, edit_candidate, remove_candidate, smart_paste
from paste_parser.tabular import parse_spreadsheet

__all__ = [
    "Candidate",
    "EmptyInputError",
    "MergePreconditionError",
    "ParseResult",
    "PlannerImportError",
    "SmartPasteResult",
    "ZeroYieldError",
    "commit_candidates",
    "edit_candidate",
    "parse_spreadsheet",
    "remove_candidate",
    "smart_paste",
]
