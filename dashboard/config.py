"""Runtime settings for the planner CLI, read from the environment."""
from __future__ import annotations

import os
import typing as t
from dataclasses import dataclass
from pathlib import Path


DEFAULT_STORE_PATH = Path("~/.academic_planner/store.json")
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    store_path: Path
    log_level: str = DEFAULT_LOG_LEVEL
    annotations_path: t.Optional[Path] = None   # None means the packaged rules


def load_settings() -> Settings:
    """Build settings from ``PLANNER_STORE``, ``PLANNER_LOG_LEVEL`` and ``PLANNER_ANNOTATIONS``."""
    annotations = os.getenv("PLANNER_ANNOTATIONS")
    return Settings(
        store_path=Path(os.getenv("PLANNER_STORE") or DEFAULT_STORE_PATH).expanduser(),
        log_level=(os.getenv("PLANNER_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        annotations_path=Path(annotations).expanduser() if annotations else None,
    )
