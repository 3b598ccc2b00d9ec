# -*- coding: utf-8 -*-
import json
import logging
import os
import tempfile
import typing as t
from dataclasses import dataclass, field
from pathlib import Path

from academic_planner.models import DEFAULT_SEMESTER_ID, AcademicItem, Semester, empty_semester
from storage.schemas import AcademicItemRecord, SemesterRecord

logger = logging.getLogger(__name__)


ITEMS_KEY = "academic-dashboard-items"
SEMESTERS_KEY = "academic-dashboard-semesters"
CURRENT_SEMESTER_KEY = "academic-dashboard-current-semester"


class JsonStore:
    """Key-value store kept in a single JSON file.

    Every write replaces the whole file, so readers never see a half-written
    record.
    """

    def __init__(self, path: t.Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, t.Any]:
        if not self.path.is_file():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _write_all(self, data: dict[str, t.Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            os.unlink(tmp_name)
            raise

    def get(self, key: str, default: t.Any = None) -> t.Any:
        """Returns the value stored under ``key``, or ``default``."""
        return self._read_all().get(key, default)

    def set(self, key: str, value: t.Any) -> None:
        """Stores ``value`` under ``key``."""
        self.set_many({key: value})

    def set_many(self, values: dict[str, t.Any]) -> None:
        """Stores several keys with a single file replacement."""
        data = self._read_all()
        data.update(values)
        self._write_all(data)
        logger.info("Wrote %s to %s", ", ".join(sorted(values)), self.path)


@dataclass
class PlannerState:
    """Everything the planner persists."""
    items: list[AcademicItem] = field(default_factory=list)
    semesters: list[Semester] = field(default_factory=lambda: [empty_semester()])
    current_semester_id: str = DEFAULT_SEMESTER_ID

    @property
    def current_semester(self) -> t.Optional[Semester]:
        for semester in self.semesters:
            if semester.id == self.current_semester_id:
                return semester
        return None


def load_state(store: JsonStore) -> PlannerState:
    """Reads the three planner records, falling back to a fresh state for missing ones.

    :raises pydantic.ValidationError: When a stored record is malformed.
    """
    raw_items = store.get(ITEMS_KEY)
    raw_semesters = store.get(SEMESTERS_KEY)
    current = store.get(CURRENT_SEMESTER_KEY)

    state = PlannerState()
    if raw_items is not None:
        state.items = [AcademicItemRecord.model_validate(i).to_item() for i in raw_items]
    if raw_semesters is not None:
        state.semesters = [SemesterRecord.model_validate(s).to_semester() for s in raw_semesters]
    if current:
        state.current_semester_id = current
    return state


def save_state(store: JsonStore, state: PlannerState) -> None:
    """Writes all three planner records at once."""
    store.set_many({
        ITEMS_KEY: [AcademicItemRecord.from_item(i).to_json() for i in state.items],
        SEMESTERS_KEY: [SemesterRecord.from_semester(s).to_json() for s in state.semesters],
        CURRENT_SEMESTER_KEY: state.current_semester_id,
    })
