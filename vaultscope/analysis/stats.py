"""Vault-wide statistics and per-field analysis."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from ..models import FieldValue, NoteRecord, ValueKind, to_jsonable
from ..vault.resolve import LinkParser, resolve_links
from .links import find_orphaned_files
from .timeutil import as_aware

MAX_FIELD_EXAMPLES = 5


@dataclass
class VaultStats:
    total_files: int = 0
    files_with_frontmatter: int = 0
    files_without_frontmatter: int = 0
    total_size: int = 0
    average_file_size: float = 0.0
    total_links: int = 0
    total_headings: int = 0
    tag_distribution: dict[str, int] = field(default_factory=dict)
    field_presence: dict[str, int] = field(default_factory=dict)
    type_distribution: dict[str, dict[str, int]] = field(default_factory=dict)
    orphaned_files: list[str] = field(default_factory=list)
    # Filled in by callers; never computed here.
    duplicate_count: int = 0
    broken_links_count: int = 0
    last_modified: datetime | None = None
    oldest_file: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "files_with_frontmatter": self.files_with_frontmatter,
            "files_without_frontmatter": self.files_without_frontmatter,
            "total_size": self.total_size,
            "average_file_size": self.average_file_size,
            "total_links": self.total_links,
            "total_headings": self.total_headings,
            "tag_distribution": dict(self.tag_distribution),
            "field_presence": dict(self.field_presence),
            "type_distribution": {k: dict(v) for k, v in self.type_distribution.items()},
            "orphaned_files": list(self.orphaned_files),
            "duplicate_count": self.duplicate_count,
            "broken_links_count": self.broken_links_count,
            "last_modified": self.last_modified.isoformat() if self.last_modified else None,
            "oldest_file": self.oldest_file.isoformat() if self.oldest_file else None,
        }


@dataclass
class FieldAnalysis:
    field_name: str
    total_files: int = 0  # files that have the field
    missing_count: int = 0
    unique_values: int = 0
    value_distribution: dict[str, int] = field(default_factory=dict)
    type_distribution: dict[str, int] = field(default_factory=dict)
    predominant_type: str = ""
    examples: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "field_name": self.field_name,
            "total_files": self.total_files,
            "missing_count": self.missing_count,
            "unique_values": self.unique_values,
            "value_distribution": dict(self.value_distribution),
            "type_distribution": dict(self.type_distribution),
            "predominant_type": self.predominant_type,
            "examples": [to_jsonable(e) for e in self.examples],
        }


def extract_tags(value: FieldValue) -> list[str]:
    """Tags from a ``tags`` value: list of strings, comma-separated string, or one string."""
    if value.kind is ValueKind.ARRAY:
        return value.strings()
    if value.kind is ValueKind.STRING:
        if "," in value.value:
            return [t.strip() for t in value.value.split(",")]
        return [value.value]
    return []


def generate_stats(notes: Iterable[NoteRecord], link_parser: LinkParser | None = None) -> VaultStats:
    """Aggregate counts and distributions over all notes.

    When ``link_parser`` is given, links are resolved once per note before
    they are counted.
    """
    notes = list(notes)
    stats = VaultStats(total_files=len(notes))
    if not notes:
        return stats

    if link_parser is not None:
        notes = resolve_links(notes, link_parser)

    tags: Counter[str] = Counter()
    presence: Counter[str] = Counter()
    types: dict[str, Counter[str]] = {}

    for note in notes:
        stats.total_size += note.raw_size

        modified = as_aware(note.modified_at)
        if stats.last_modified is None or modified > stats.last_modified:
            stats.last_modified = modified
        if stats.oldest_file is None or modified < stats.oldest_file:
            stats.oldest_file = modified

        if note.frontmatter:
            stats.files_with_frontmatter += 1
            for name, value in note.frontmatter.items():
                presence[name] += 1
                if name == "tags":
                    tags.update(extract_tags(value))
                types.setdefault(name, Counter())[value.kind.value] += 1
        else:
            stats.files_without_frontmatter += 1

        stats.total_links += len(note.links)
        stats.total_headings += len(note.headings)

    stats.average_file_size = stats.total_size / len(notes)
    stats.tag_distribution = dict(tags)
    stats.field_presence = dict(presence)
    stats.type_distribution = {name: dict(counts) for name, counts in types.items()}
    stats.orphaned_files = [n.path for n in find_orphaned_files(notes)]

    return stats


def analyze_field(notes: Iterable[NoteRecord], field_name: str) -> FieldAnalysis:
    """Distribution of values and types for a single frontmatter field."""
    analysis = FieldAnalysis(field_name=field_name)
    values: Counter[str] = Counter()
    kinds: Counter[str] = Counter()
    seen: set[str] = set()

    for note in notes:
        value = note.get(field_name)
        if value is None:
            analysis.missing_count += 1
            continue

        analysis.total_files += 1
        key = value.display()
        values[key] += 1
        kinds[value.kind.value] += 1

        if key not in seen and len(analysis.examples) < MAX_FIELD_EXAMPLES:
            analysis.examples.append(value.to_python())
            seen.add(key)

    analysis.value_distribution = dict(values)
    analysis.type_distribution = dict(kinds)
    analysis.unique_values = len(values)
    if kinds:
        analysis.predominant_type = sorted(kinds.items(), key=lambda kv: (-kv[1], kv[0]))[0][0]

    return analysis
