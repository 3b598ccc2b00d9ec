"""
Errors raised by the import pipeline.

Field-level problems (bad date, unknown type, missing class) never raise: the
parsers degrade them to defaults. These exceptions cover the batch-level
failures a caller has to report to the user.
"""
from __future__ import annotations


class PlannerImportError(Exception):
    """Base class for import failures."""


class EmptyInputError(PlannerImportError):
    """Pasted text is blank."""

    def __init__(self, message: str = "Please paste your spreadsheet data first.") -> None:
        super().__init__(message)


class ZeroYieldError(PlannerImportError):
    """Parsing ran but produced no usable records."""

    def __init__(
            self,
            message: str = (
                "No valid rows found. Make sure your data has a header row and at least "
                "one row of assignments. Use Tab or comma to separate columns."
            ),
    ) -> None:
        super().__init__(message)


class MergePreconditionError(PlannerImportError):
    """An add-mode merge has no semester to merge into."""


class UnsupportedSourceError(PlannerImportError):
    """The input source cannot be turned into text."""
