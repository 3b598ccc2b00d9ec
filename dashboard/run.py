# -*- coding: utf-8 -*-
import re
import typing as t
from dataclasses import replace
from pathlib import Path

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from academic_planner.grades import class_grade
from academic_planner.importer import import_batch, parse_free_text, parse_table_text
from academic_planner.merger import IMPORT_MODES, MergeResult
from academic_planner.models import GRADE_CATEGORIES, ITEM_STATUSES, AcademicItem, items_in_semester
from academic_planner.tracker import record_grade, set_status, short_id, switch_semester
from dashboard.config import Settings, load_settings
from dashboard.utils import configure_logging, console, fail, read_source, truncate
from paste_parser.errors import PlannerImportError
from paste_parser.models import Candidate
from paste_parser.smart_paste import EDITABLE_FIELDS, commit_candidates, edit_candidate, remove_candidate
from rules import load_annotation_rules
from storage.store import JsonStore, PlannerState, load_state, save_state


TYPE_ICONS = {
    "exam": "📝", "quiz": "❓", "project": "🛠", "assignment": "📄", "homework": "📚", "lecture": "🎓",
}

# --set values look like "3:due_date=2026-02-01"
EDIT_PATTERN = re.compile(r"(\d+):(\w+)=(.*)")


def _store(ctx: click.Context) -> JsonStore:
    settings: Settings = ctx.obj
    return JsonStore(settings.store_path)


def _load(ctx: click.Context) -> PlannerState:
    try:
        return load_state(_store(ctx))
    except ValidationError as e:
        fail(f"Stored planner data is invalid: {e}")


def _semester_or_fail(state: PlannerState, semester_id: t.Optional[str]):
    wanted = semester_id or state.current_semester_id
    for semester in state.semesters:
        if semester.id == wanted:
            return semester
    fail(f"Unknown semester '{wanted}'.")


def _parse_edit(raw: str) -> tuple[int, str, str]:
    """Split a ``--set`` value such as ``3:due_date=2026-02-01``."""
    match = EDIT_PATTERN.fullmatch(raw.strip())
    if match is None:
        fail(f"Expected N:field=value, got '{raw}'.")
    return int(match.group(1)), match.group(2), match.group(3).strip()


def items_table(items: t.Sequence[AcademicItem], title: str) -> Table:
    """Table of items sorted by due date."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("", width=3)
    table.add_column("ID", style="dim")
    table.add_column("Class", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Type")
    table.add_column("Due", style="yellow")
    table.add_column("Time")
    table.add_column("Status")
    for item in sorted(items, key=lambda i: i.due_date):
        table.add_row(
            TYPE_ICONS.get(item.type, ""),
            short_id(item),
            item.class_code or "—",
            truncate(item.title),
            item.type,
            item.due_date,
            item.time or "—",
            item.status,
        )
    return table


def candidates_table(candidates: t.Sequence[Candidate], numbers: t.Optional[t.Sequence[int]] = None) -> Table:
    """Review table of Smart Paste candidates in ranked order.

    ``numbers`` labels the rows; it defaults to 1..N.
    """
    numbers = numbers or range(1, len(candidates) + 1)
    table = Table(title="🔎 Smart Paste candidates", show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", width=3)
    table.add_column("Type")
    table.add_column("Class", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Due", style="yellow")
    table.add_column("Notes", style="red")
    for number, candidate in zip(numbers, candidates):
        due = candidate.due_date
        if candidate.provenance.get("due_date") == "default":
            due += " *"
        class_code = candidate.class_code or "—"
        if candidate.provenance.get("class_code") == "new-class":
            class_code += " (new)"
        table.add_row(
            str(number),
            f"{TYPE_ICONS.get(candidate.type, '')} {candidate.type}",
            class_code,
            truncate(candidate.title),
            due,
            "; ".join(candidate.notes) or "",
        )
    return table


def _print_merge(result: MergeResult, imported: int) -> None:
    stats = Text()
    stats.append("Imported items: ", style="white")
    stats.append(f"{imported}", style="bold green")
    stats.append("\nSemester: ", style="white")
    stats.append(f"{result.semester.name} ({result.semester.id})", style="bold")
    stats.append("\nClasses: ", style="white")
    stats.append(", ".join(c.code for c in result.classes) or "—", style="bold green")
    stats.append("\nTotal items: ", style="white")
    stats.append(f"{len(result.items)}", style="bold green")
    console.print(Panel(stats, title=f"✅ Import complete ({result.mode})", border_style="green"))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Planner data file (default: $PLANNER_STORE or ~/.academic_planner/store.json).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, store_path: t.Optional[str], verbose: bool) -> None:
    """Personal academic planner: import assignments from pasted text and review them."""
    settings = load_settings()
    if store_path:
        settings = replace(settings, store_path=Path(store_path).expanduser())
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@main.command("import")
@click.argument("source", default="-")
@click.option(
    "--mode",
    type=click.Choice(IMPORT_MODES),
    default="add",
    show_default=True,
    help="'replace' discards every semester, class and item first.",
)
@click.option("--semester", "semester_id", default=None, help="Semester to add to (default: current).")
@click.pass_context
def import_command(ctx: click.Context, source: str, mode: str, semester_id: t.Optional[str]) -> None:
    """Import a spreadsheet pasted as tab- or comma-separated text.

    SOURCE: a .txt/.csv/.tsv/.pdf file, a URL, or '-' for stdin.
    """
    state = _load(ctx)
    if mode == "add" and semester_id:
        _semester_or_fail(state, semester_id)

    try:
        batch = parse_table_text(read_source(source))
        result = import_batch(_store(ctx), batch, mode, semester_id=semester_id)
    except (PlannerImportError, FileNotFoundError) as e:
        fail(str(e))

    console.print(items_table(batch.items, "📅 Imported items"))
    _print_merge(result, len(batch.items))


@main.command("smart-paste")
@click.argument("source", default="-")
@click.option("--commit", is_flag=True, help="Import the candidates after showing them.")
@click.option(
    "--set",
    "edits",
    multiple=True,
    metavar="N:FIELD=VALUE",
    help=(
        "Correct candidate number N before importing, e.g. 3:due_date=2026-02-01. "
        f"Fields: {', '.join(sorted(EDITABLE_FIELDS))}. Repeatable."
    ),
)
@click.option(
    "--drop",
    "drop",
    type=int,
    multiple=True,
    help="Leave out candidate number N (as numbered in the table). Repeatable.",
)
@click.option("--mode", type=click.Choice(IMPORT_MODES), default="add", show_default=True)
@click.option("--semester", "semester_id", default=None, help="Semester to add to (default: current).")
@click.option(
    "--rules",
    "rules_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Annotation rule file (default: $PLANNER_ANNOTATIONS or the packaged rules).",
)
@click.pass_context
def smart_paste_command(
        ctx: click.Context,
        source: str,
        commit: bool,
        edits: tuple[str, ...],
        drop: tuple[int, ...],
        mode: str,
        semester_id: t.Optional[str],
        rules_path: t.Optional[str],
) -> None:
    """Find assignments in unstructured text such as a syllabus excerpt.

    SOURCE: a text or PDF file, a URL, or '-' for stdin. Dates that could not be
    found default to today and are marked with '*'. Candidate numbers stay the
    same across --set and --drop.
    """
    settings: Settings = ctx.obj
    state = _load(ctx)
    target = _semester_or_fail(state, semester_id) if mode == "add" else None
    known = target.classes if target is not None else []

    try:
        rules = load_annotation_rules(rules_path or settings.annotations_path)
        result = parse_free_text(read_source(source), known_classes=known, annotation_rules=rules)
    except (PlannerImportError, FileNotFoundError, ValueError) as e:
        fail(str(e))

    candidates = list(result.candidates)
    for raw in edits:
        number, field, value = _parse_edit(raw)
        if not 1 <= number <= len(candidates):
            fail(f"There is no candidate {number}.")
        try:
            candidates[number - 1] = edit_candidate(candidates[number - 1], known, rules, **{field: value})
        except ValueError as e:
            fail(f"Candidate {number}: {e}")

    numbers = list(range(1, len(candidates) + 1))
    for number in sorted(set(drop), reverse=True):
        try:
            candidates = remove_candidate(candidates, number - 1)
        except IndexError:
            fail(f"There is no candidate {number}.")
        del numbers[number - 1]

    console.print(candidates_table(candidates, numbers))
    if not commit:
        console.print(
            "[dim]Review the list, then run again with --commit "
            "(--set N:field=value to correct a row, --drop N to skip one).[/dim]"
        )
        return

    batch = commit_candidates(candidates, known_classes=known, new_classes=result.classes)
    if not batch.items:
        fail("Every candidate was dropped; nothing to import.")
    try:
        merged = import_batch(_store(ctx), batch, mode, semester_id=target.id if target else None)
    except PlannerImportError as e:
        fail(str(e))
    _print_merge(merged, len(batch.items))


@main.command("show")
@click.option("--semester", "semester_id", default=None, help="Semester to show (default: current).")
@click.pass_context
def show_command(ctx: click.Context, semester_id: t.Optional[str]) -> None:
    """List the items of a semester by due date."""
    state = _load(ctx)
    semester = _semester_or_fail(state, semester_id)
    items = items_in_semester(state.items, semester)
    if not items:
        console.print("📚 No items found.")
        return
    console.print(items_table(items, f"📚 {semester.name}"))
    console.print(f"Total: {len(items)} item(s)")


@main.command("grades")
@click.option("--semester", "semester_id", default=None, help="Semester to grade (default: current).")
@click.pass_context
def grades_command(ctx: click.Context, semester_id: t.Optional[str]) -> None:
    """Show the current weighted grade of every class."""
    state = _load(ctx)
    semester = _semester_or_fail(state, semester_id)
    items = items_in_semester(state.items, semester)

    table = Table(title=f"🎓 Grades: {semester.name}", show_header=True, header_style="bold magenta")
    table.add_column("Class", style="cyan")
    table.add_column("Name")
    table.add_column("Grade", justify="right")
    table.add_column("Letter", justify="center")
    for class_info in semester.classes:
        grade = class_grade(items, class_info, semester.grade_weights.get(class_info.code))
        table.add_row(
            class_info.code,
            truncate(class_info.name, 30),
            f"{grade.current_grade:.1f}%" if grade.current_grade is not None else "—",
            grade.letter or "—",
        )
        if grade.has_final_warning:
            console.print(f"[bold red]⚠ {class_info.code}:[/bold red] {class_info.kill_switch}")
    console.print(table)


@main.command("semesters")
@click.pass_context
def semesters_command(ctx: click.Context) -> None:
    """List semesters; the current one is marked with '*'."""
    state = _load(ctx)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("", width=2)
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Dates", style="yellow")
    table.add_column("Classes", justify="right")
    for semester in state.semesters:
        table.add_row(
            "*" if semester.id == state.current_semester_id else "",
            semester.id,
            semester.name,
            f"{semester.start_date} → {semester.end_date}",
            str(len(semester.classes)),
        )
    console.print(table)


@main.command("status")
@click.argument("item_ref")
@click.argument("status", type=click.Choice(ITEM_STATUSES))
@click.pass_context
def status_command(ctx: click.Context, item_ref: str, status: str) -> None:
    """Set the status of an item.

    ITEM_REF: the item id, or the start of the ID shown by 'show'.
    """
    state = _load(ctx)
    try:
        next_state, item = set_status(state, item_ref, status)
    except (KeyError, ValueError) as e:
        fail(e.args[0])
    save_state(_store(ctx), next_state)
    console.print(f"✅ [bold]{item.title}[/bold] is now {status}.")


@main.command("grade")
@click.argument("item_ref")
@click.argument("grade", type=float, required=False)
@click.option("--days-late", type=click.IntRange(min=0), default=0, show_default=True)
@click.option("--category", type=click.Choice(GRADE_CATEGORIES), default=None, help="Grading category of the item.")
@click.option("--final/--not-final", "is_final", default=None, help="Mark the item as the final exam.")
@click.option("--clear", is_flag=True, help="Remove the recorded grade.")
@click.pass_context
def grade_command(
        ctx: click.Context,
        item_ref: str,
        grade: t.Optional[float],
        days_late: int,
        category: t.Optional[str],
        is_final: t.Optional[bool],
        clear: bool,
) -> None:
    """Record the grade of an item and mark it completed.

    ITEM_REF: the item id, or the start of the ID shown by 'show'.
    GRADE: percentage score.
    """
    if grade is None and not clear:
        fail("Give a GRADE, or --clear to remove one.")
    state = _load(ctx)
    try:
        next_state, item = record_grade(
            state,
            item_ref,
            None if clear else grade,
            days_late=days_late,
            category=category,
            is_final=is_final,
        )
    except (KeyError, ValueError) as e:
        fail(e.args[0])
    save_state(_store(ctx), next_state)
    if item.grade is None:
        console.print(f"✅ Cleared the grade of [bold]{item.title}[/bold].")
    else:
        late = f", {item.days_late} day(s) late" if item.is_late else ""
        console.print(f"✅ [bold]{item.title}[/bold]: {item.grade:g}%{late}.")


@main.command("use")
@click.argument("semester_id")
@click.pass_context
def use_command(ctx: click.Context, semester_id: str) -> None:
    """Make SEMESTER_ID the current semester."""
    state = _load(ctx)
    try:
        next_state = switch_semester(state, semester_id)
    except KeyError as e:
        fail(e.args[0])
    save_state(_store(ctx), next_state)
    console.print(f"📚 Current semester: [bold]{next_state.current_semester.name}[/bold] ({semester_id})")


if __name__ == "__main__":
    main()
