"""Sync-conflict artifacts and Obsidian numbered copies."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Iterable

from ..models import NoteRecord

# Checked in order; the first matching pattern decides the vendor.
# Group 1 is the original file's path without ".md".
SYNC_CONFLICT_PATTERNS = (
    ("syncthing", re.compile(r"^(.+)\.sync-conflict-\d{8}-\d{6}-[A-Z0-9]{8}\.md$")),
    ("dropbox", re.compile(r"^(.+) \(.*'s conflicted copy \d{4}-\d{2}-\d{2}\)\.md$")),
    ("onedrive", re.compile(r"^(.+)-[^-]+-OneDrive\.md$")),
    ("google-drive", re.compile(r"^(.+) \(\d+\)\.md$")),
    ("icloud", re.compile(r"^(.+) \d+\.md$")),
)

OBSIDIAN_COPY_PATTERN = re.compile(r"^(.+) (\d+)$")


@dataclass(frozen=True)
class SyncConflictFile:
    original_file: str
    conflict_file: str
    conflict_type: str
    pattern: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ObsidianCopy:
    original_file: str
    copy_file: str
    copy_number: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def find_sync_conflict_files(notes: Iterable[NoteRecord]) -> list[SyncConflictFile]:
    """Files named like a sync tool's conflict copy of another note in the vault."""
    notes = list(notes)
    known = {n.relative_path for n in notes}
    conflicts = []

    for note in notes:
        for vendor, pattern in SYNC_CONFLICT_PATTERNS:
            match = pattern.match(note.relative_path)
            if match is None:
                continue
            original = match.group(1) + ".md"
            if original in known:
                conflicts.append(
                    SyncConflictFile(
                        original_file=original,
                        conflict_file=note.relative_path,
                        conflict_type=vendor,
                        pattern=pattern.pattern,
                    )
                )
            break

    conflicts.sort(key=lambda c: c.original_file)
    return conflicts


def find_obsidian_copies(notes: Iterable[NoteRecord]) -> list[ObsidianCopy]:
    """Files like ``Note 1.md`` next to an existing ``Note.md``."""
    notes = list(notes)
    known = {n.relative_path for n in notes}
    copies = []

    for note in notes:
        stem = note.relative_path.removesuffix(".md")
        match = OBSIDIAN_COPY_PATTERN.match(stem)
        if match is None:
            continue
        original = match.group(1) + ".md"
        if original in known:
            copies.append(
                ObsidianCopy(
                    original_file=original,
                    copy_file=note.relative_path,
                    copy_number=int(match.group(2)),
                )
            )

    copies.sort(key=lambda c: (c.original_file, c.copy_number))
    return copies
