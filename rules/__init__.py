"""Utility functions for loading annotation rule files."""
from pathlib import Path
import json
import typing as t

from paste_parser.smart_paste import ClassCodeAnnotation

DEFAULT_RULES_FILE = Path(__file__).resolve().parent / "annotations.json"


def load_annotation_rules(rules_file: t.Optional[t.Union[str, Path]] = None) -> list[ClassCodeAnnotation]:
    """
    Load Smart Paste annotation rules from a JSON file.

    The file holds a list of objects with ``class_code`` and ``note`` keys.

    Args:
        rules_file: Path to the rule file. Defaults to the rules shipped
                    next to this module.

    Returns:
        One ClassCodeAnnotation per entry, in file order.

    Raises:
        FileNotFoundError: If the rule file doesn't exist.
        ValueError: If an entry lacks ``class_code`` or ``note``.
    """
    rule_path = Path(rules_file) if rules_file is not None else DEFAULT_RULES_FILE

    if not rule_path.exists():
        raise FileNotFoundError(f"Rule file not found: {rule_path}")

    with open(rule_path, 'r', encoding='utf-8') as f:
        entries = json.load(f)

    rules = []
    for entry in entries:
        if not entry.get("class_code") or not entry.get("note"):
            raise ValueError(f"Annotation rule needs class_code and note: {entry!r}")
        rules.append(ClassCodeAnnotation(class_code=entry["class_code"], note=entry["note"]))
    return rules
