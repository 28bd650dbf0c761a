"""Duplicate detection command: copies, sync conflicts, content and field duplicates."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.markup import escape

from ..analysis.conflicts import (
    ObsidianCopy,
    SyncConflictFile,
    find_obsidian_copies,
    find_sync_conflict_files,
)
from ..analysis.duplicates import (
    DEFAULT_SIMILARITY_THRESHOLD,
    ContentDuplicate,
    Duplicate,
    MatchType,
    find_content_duplicates,
    find_duplicates,
)
from ..vault.loader import DEFAULT_IGNORE_PATTERNS
from .common import dump_json, emit_rich, load_notes, write_text

DUPLICATE_TYPES = ("all", "obsidian", "sync-conflicts", "content")


def run_duplicates(
    vault_path: Path,
    *,
    dup_type: str = "all",
    field_name: str | None = None,
    similarity: float = DEFAULT_SIMILARITY_THRESHOLD,
    fmt: str = "text",
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> int:
    """Report duplicate files of the requested kind."""
    console = Console(stderr=True)

    notes = load_notes(vault_path, ignore_patterns, console=console)

    report: dict[str, list] = {}
    if dup_type in ("all", "obsidian"):
        report["obsidian_copies"] = find_obsidian_copies(notes)
    if dup_type in ("all", "sync-conflicts"):
        report["sync_conflicts"] = find_sync_conflict_files(notes)
    if dup_type in ("all", "content"):
        report["content_duplicates"] = find_content_duplicates(notes, MatchType.EXACT)
        report["similar_content"] = find_content_duplicates(notes, MatchType.SIMILARITY, similarity)
    if field_name:
        report["field_duplicates"] = find_duplicates(notes, field_name)

    if fmt == "json":
        payload = {key: [item.to_dict() for item in items] for key, items in report.items()}
        write_text(dump_json(payload), None, console=console)
    else:
        emit_rich(lambda c: _print_report(report, field_name=field_name, console=c), None, console=console)
    return 0


def _print_report(report: dict[str, list], *, field_name: str | None, console: Console) -> None:
    console.print("[bold]Duplicate Analysis[/bold]")
    console.print()

    total = sum(len(items) for items in report.values())
    if total == 0:
        console.print("No duplicate files found. Your vault is clean!", style="green")
        return

    if "obsidian_copies" in report:
        _print_copies(report["obsidian_copies"], console=console)
    if "sync_conflicts" in report:
        _print_conflicts(report["sync_conflicts"], console=console)
    if "content_duplicates" in report:
        _print_content(report["content_duplicates"], title="Content duplicates (identical bodies)", console=console)
    if "similar_content" in report:
        _print_content(report["similar_content"], title="Similar content", console=console)
    if "field_duplicates" in report:
        _print_field_duplicates(report["field_duplicates"], field_name=field_name or "", console=console)


def _print_copies(copies: list[ObsidianCopy], *, console: Console) -> None:
    if not copies:
        console.print("No Obsidian copy files found.")
        console.print()
        return

    console.print(f"[bold]Found {len(copies)} Obsidian copy files[/bold]")
    current = None
    for copy in copies:
        if copy.original_file != current:
            current = copy.original_file
            console.print(f"Original: {escape(copy.original_file)}")
        console.print(f"  └─ Copy {copy.copy_number}: {escape(copy.copy_file)}")
    console.print()


def _print_conflicts(conflicts: list[SyncConflictFile], *, console: Console) -> None:
    if not conflicts:
        console.print("No sync conflict files found.")
        console.print()
        return

    console.print(f"[bold]Found {len(conflicts)} sync conflict files[/bold]")
    by_vendor: dict[str, list[SyncConflictFile]] = {}
    for conflict in conflicts:
        by_vendor.setdefault(conflict.conflict_type, []).append(conflict)

    for vendor in sorted(by_vendor):
        group = by_vendor[vendor]
        console.print(f"{vendor.title()} conflicts ({len(group)}):")
        current = None
        for conflict in group:
            if conflict.original_file != current:
                current = conflict.original_file
                console.print(f"  Original: {escape(conflict.original_file)}")
            console.print(f"    └─ Conflict: {escape(conflict.conflict_file)}")
    console.print()


def _print_content(groups: list[ContentDuplicate], *, title: str, console: Console) -> None:
    if not groups:
        console.print(f"{title}: none found.")
        console.print()
        return

    console.print(f"[bold]{title}: {len(groups)} groups[/bold]")
    for i, group in enumerate(groups, start=1):
        console.print(f"Group {i} ({group.size} chars, {group.count} files):")
        for path in group.files:
            console.print(f"  - {escape(path)}")
    console.print()


def _print_field_duplicates(groups: list[Duplicate], *, field_name: str, console: Console) -> None:
    if not groups:
        console.print(f"No duplicate values for field '{escape(field_name)}'.")
        console.print()
        return

    console.print(f"[bold]Duplicate '{escape(field_name)}' values: {len(groups)} groups[/bold]")
    for group in groups:
        console.print(f"{escape(str(group.value))} ({group.count} files):")
        for path in group.files:
            console.print(f"  - {escape(path)}")
    console.print()
