"""Link resolution phase.

Link parsing happens before analysis: a ``LinkParser`` produces the outbound
links for a note and ``resolve_links`` returns new, fully populated records.
The analysis functions only ever read finished records.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable

from ..models import Link, LinkKind, NoteRecord
from .parser import extract_links, is_external

logger = logging.getLogger(__name__)


@runtime_checkable
class LinkParser(Protocol):
    """Capability that computes the outbound links of a note."""

    def parse_links(self, note: NoteRecord) -> list[Link]: ...


class MarkdownLinkParser:
    """Default parser: re-extract links from the note body."""

    def parse_links(self, note: NoteRecord) -> list[Link]:
        return extract_links(note.body)


def resolve_links(notes: Iterable[NoteRecord], parser: LinkParser) -> list[NoteRecord]:
    """Return copies of ``notes`` with ``links`` populated by ``parser``.

    The parser is called exactly once per note. Inputs are not mutated.
    """
    resolved = []
    for note in notes:
        links = tuple(parser.parse_links(note))
        resolved.append(note if links == note.links else replace(note, links=links))
    return resolved


def count_broken_links(notes: Iterable[NoteRecord], vault_path: Path | None = None) -> int:
    """Count links whose target does not resolve to a note in ``notes``.

    Wiki and embed targets also resolve by basename, the way Obsidian does.
    External URLs are never broken. Non-markdown targets (images, PDFs)
    count as resolved when they exist under ``vault_path``.
    """
    notes = list(notes)
    known: set[str] = set()
    by_name: set[str] = set()
    for note in notes:
        rel = note.relative_path
        known.add(rel.lower())
        known.add(rel[:-3].lower() if rel.endswith(".md") else rel.lower())
        by_name.add(note.name.lower())

    asset_names = _asset_names(vault_path) if vault_path is not None else set()

    broken = 0
    for note in notes:
        base_dir = note.relative_path.rsplit("/", 1)[0] if "/" in note.relative_path else ""
        for link in note.links:
            if _resolves(link, known, by_name, asset_names, base_dir, vault_path):
                continue
            broken += 1
            logger.debug("Broken link in %s -> %s", note.relative_path, link.target)
    return broken


def _resolves(
    link: Link,
    known: set[str],
    by_name: set[str],
    asset_names: set[str],
    base_dir: str,
    vault_path: Path | None,
) -> bool:
    target = link.target.strip()
    if not target or is_external(target):
        return True

    lowered = target.lower().lstrip("/")
    candidates = {lowered}
    if base_dir and link.kind is LinkKind.MARKDOWN:
        candidates.add(f"{base_dir.lower()}/{lowered}")
    if any(c in known for c in candidates):
        return True

    if link.kind in (LinkKind.WIKI, LinkKind.EMBED):
        stem = lowered.rsplit("/", 1)[-1]
        if stem.endswith(".md"):
            stem = stem[:-3]
        if stem in by_name:
            return True

    suffix = Path(target).suffix.lower()
    if vault_path is not None and suffix and suffix != ".md":
        if (vault_path / target).exists():
            return True
        if base_dir and (vault_path / base_dir / target).exists():
            return True
        if link.kind in (LinkKind.WIKI, LinkKind.EMBED):
            return Path(target).name.lower() in asset_names

    return False


def _asset_names(vault_path: Path) -> set[str]:
    """Lowercased basenames of every non-markdown file under ``vault_path``."""
    return {p.name.lower() for p in vault_path.rglob("*") if p.is_file() and p.suffix.lower() != ".md"}
