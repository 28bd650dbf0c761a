"""Duplicate detection by frontmatter field value and by body content."""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Hashable, Iterable

from ..models import FieldValue, NoteRecord, ValueKind, to_jsonable

DEFAULT_SIMILARITY_THRESHOLD = 0.8


class MatchType(str, Enum):
    EXACT = "exact"
    SIMILARITY = "similarity"


@dataclass
class Duplicate:
    field: str
    value: Any  # first-seen original value, for display
    files: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.files)

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "value": to_jsonable(self.value),
            "files": list(self.files),
            "count": self.count,
        }


@dataclass
class ContentDuplicate:
    hash: str
    files: list[str] = field(default_factory=list)
    size: int = 0  # body length of the first file in the group

    @property
    def count(self) -> int:
        return len(self.files)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["count"] = self.count
        return data


def normalize_value(value: FieldValue) -> Hashable:
    """Comparison key for a field value.

    Strings are trimmed and lowercased; arrays become the sorted, comma-joined
    list of their normalized string elements; other values compare as-is.
    """
    if value.kind is ValueKind.STRING:
        return (ValueKind.STRING, value.value.strip().lower())
    if value.kind is ValueKind.ARRAY:
        items = sorted(s.strip().lower() for s in value.strings())
        return (ValueKind.STRING, ",".join(items))
    if value.kind is ValueKind.OBJECT:
        return (ValueKind.OBJECT, repr(value.value))
    return (value.kind, value.value)


def find_duplicates(notes: Iterable[NoteRecord], field_name: str) -> list[Duplicate]:
    """Group notes sharing the same normalized value for ``field_name``."""
    groups: dict[Hashable, Duplicate] = {}
    for note in notes:
        value = note.get(field_name)
        if value is None:
            continue
        key = normalize_value(value)
        if key not in groups:
            groups[key] = Duplicate(field=field_name, value=value.to_python())
        groups[key].files.append(note.path)

    duplicates = [d for d in groups.values() if d.count > 1]
    # stable: equal counts keep first-seen order
    duplicates.sort(key=lambda d: -d.count)
    return duplicates


def find_content_duplicates(
    notes: Iterable[NoteRecord],
    match_type: MatchType | str = MatchType.EXACT,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> list[ContentDuplicate]:
    """Find notes whose bodies are identical (EXACT) or near-identical (SIMILARITY)."""
    try:
        match_type = MatchType(match_type)
    except ValueError:
        return []

    notes = list(notes)
    if match_type is MatchType.EXACT:
        return _exact_content_duplicates(notes)
    return _similar_content_duplicates(notes, threshold)


def _exact_content_duplicates(notes: list[NoteRecord]) -> list[ContentDuplicate]:
    groups: dict[str, ContentDuplicate] = {}
    for note in notes:
        # Frontmatter is not part of the hash.
        digest = hashlib.md5(note.body.encode("utf-8")).hexdigest()
        if digest not in groups:
            groups[digest] = ContentDuplicate(hash=digest, size=len(note.body))
        groups[digest].files.append(note.path)

    duplicates = [d for d in groups.values() if d.count > 1]
    duplicates.sort(key=lambda d: -d.count)
    return duplicates


def _similar_content_duplicates(notes: list[NoteRecord], threshold: float) -> list[ContentDuplicate]:
    """Anchor-centric grouping: each note collects the later notes similar to it.

    A note can therefore appear in several groups; groups are not merged.
    """
    token_sets = [set(n.body.lower().split()) for n in notes]
    duplicates = []

    for i, anchor in enumerate(notes):
        files = [anchor.path]
        for j in range(i + 1, len(notes)):
            if jaccard_similarity(token_sets[i], token_sets[j]) > threshold:
                files.append(notes[j].path)

        if len(files) > 1:
            duplicates.append(ContentDuplicate(hash=f"similar_{i}", files=files, size=len(anchor.body)))

    return duplicates


def jaccard_similarity(a: set[str], b: set[str]) -> float:
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    intersection = len(a & b)
    return intersection / (len(a) + len(b) - intersection)


def text_similarity(text1: str, text2: str) -> float:
    """Jaccard similarity of the lowercase whitespace-token sets of two texts."""
    return jaccard_similarity(set(text1.lower().split()), set(text2.lower().split()))
