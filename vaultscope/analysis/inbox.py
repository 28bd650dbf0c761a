"""Find INBOX-style sections that still need processing."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Sequence

from ..models import NoteRecord

DEFAULT_INBOX_HEADINGS = ("INBOX",)
SORT_KEYS = ("size", "count", "urgency")

URGENT_KEYWORDS = ("urgent", "asap", "deadline", "emergency", "critical", "priority", "due")
PROCESS_KEYWORDS = ("todo", "pending", "waiting", "review", "process")
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}|\d{1,2}/\d{1,2}/\d{4}")
NUMBERED_ITEM_PATTERN = re.compile(r"^\d+\.")

URGENCY_RANK = {"High": 3, "Medium": 2, "Low": 1}


@dataclass
class InboxSection:
    file: str
    heading: str
    line_number: int  # 1-based line of the heading in the body
    item_count: int = 0
    content_size: int = 0
    urgency_level: str = "Low"
    action_suggestions: list[str] = field(default_factory=list)
    content: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class InboxAnalysis:
    total_sections: int = 0
    total_items: int = 0
    total_size: int = 0
    inbox_sections: list[InboxSection] = field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def heading_patterns(headings: Sequence[str]) -> list[re.Pattern[str]]:
    """One case-insensitive "heading starts with label" pattern per label."""
    return [re.compile(r"^#+ ?%s(\s|$)" % re.escape(h), re.IGNORECASE) for h in headings]


def count_items(content: str) -> int:
    """List items (bullets, checkboxes, numbered); else non-blank lines."""
    lines = content.split("\n")
    items = 0
    for line in lines:
        trimmed = line.strip()
        if trimmed.startswith(("-", "*", "+")) or NUMBERED_ITEM_PATTERN.match(trimmed):
            # skip bare bullets
            if len(trimmed) > 3:
                items += 1

    if items == 0:
        items = sum(1 for line in lines if line.strip())
    return items


def assess_urgency(content: str, heading: str) -> str:
    content_lower = content.lower()
    heading_lower = heading.lower()

    if any(k in content_lower or k in heading_lower for k in URGENT_KEYWORDS):
        return "High"
    if any(k in heading_lower for k in PROCESS_KEYWORDS):
        return "Medium"
    if DATE_PATTERN.search(content):
        return "Medium"
    return "Low"


def action_suggestions(content: str, item_count: int) -> list[str]:
    content_lower = content.lower()
    suggestions = []

    if item_count > 10:
        suggestions.append("Break down into smaller tasks")
    if item_count > 5:
        suggestions.append("Prioritize by urgency")
    if "link" in content_lower or "url" in content_lower:
        suggestions.append("Process links into bookmarks or reference notes")
    if "note" in content_lower or "idea" in content_lower:
        suggestions.append("Convert to permanent notes")
    if "book" in content_lower or "article" in content_lower:
        suggestions.append("Add to reading list")

    if not suggestions:
        suggestions.append("Review and organize content")
    return suggestions


def _close_section(section: InboxSection, lines: list[str], min_items: int) -> InboxSection | None:
    content = "".join(line + "\n" for line in lines)
    item_count = count_items(content)
    if item_count < min_items:
        return None

    section.content = content
    section.item_count = item_count
    section.content_size = len(content)
    section.urgency_level = assess_urgency(content, section.heading)
    section.action_suggestions = action_suggestions(content, item_count)
    return section


def find_inbox_sections(
    note: NoteRecord, patterns: Sequence[re.Pattern[str]], min_items: int = 1
) -> list[InboxSection]:
    """Sections of one note's body opened by a matching heading.

    A section runs until the next heading of any level or the end of the body.
    """
    sections = []
    current: InboxSection | None = None
    collected: list[str] = []

    def close() -> None:
        if current is not None:
            done = _close_section(current, collected, min_items)
            if done is not None:
                sections.append(done)

    for index, line in enumerate(note.body.split("\n")):
        if any(p.match(line) for p in patterns):
            close()
            current = InboxSection(file=note.path, heading=line.strip(), line_number=index + 1)
            collected = []
            continue

        if current is None:
            continue

        if line.strip().startswith("#"):
            close()
            current = None
        else:
            collected.append(line)

    close()
    return sections


def sort_sections(sections: list[InboxSection], sort_by: str) -> None:
    """Sort in place, largest first; ties keep scan order. Unknown keys sort by size."""
    if sort_by == "count":
        sections.sort(key=lambda s: -s.item_count)
    elif sort_by == "urgency":
        sections.sort(key=lambda s: -URGENCY_RANK.get(s.urgency_level, 0))
    else:
        sections.sort(key=lambda s: -s.content_size)


def analyze_inbox(
    notes: Iterable[NoteRecord],
    headings: Sequence[str] | None = None,
    sort_by: str = "size",
    min_items: int = 1,
) -> InboxAnalysis:
    patterns = heading_patterns(headings or DEFAULT_INBOX_HEADINGS)
    analysis = InboxAnalysis()

    for note in notes:
        analysis.inbox_sections.extend(find_inbox_sections(note, patterns, min_items))

    sort_sections(analysis.inbox_sections, sort_by)

    analysis.total_sections = len(analysis.inbox_sections)
    analysis.total_items = sum(s.item_count for s in analysis.inbox_sections)
    analysis.total_size = sum(s.content_size for s in analysis.inbox_sections)

    if not analysis.inbox_sections:
        analysis.summary = "No INBOX sections found - vault appears well-organized!"
    else:
        analysis.summary = "Found %d INBOX sections with %d items (%d chars) requiring attention" % (
            analysis.total_sections,
            analysis.total_items,
            analysis.total_size,
        )

    return analysis
