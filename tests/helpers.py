"""Builders shared by the test modules."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

from vaultscope.models import Heading, Link, NoteRecord
from vaultscope.vault.parser import extract_headings, extract_links

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_note(
    path: str,
    body: str = "",
    *,
    frontmatter: dict | None = None,
    links: list[Link] | None = None,
    headings: list[Heading] | None = None,
    modified_at: datetime | None = None,
    days_ago: float | None = None,
) -> NoteRecord:
    """Build a note record; links and headings default to what the body contains."""
    if days_ago is not None:
        modified_at = NOW - timedelta(days=days_ago)
    return NoteRecord.create(
        path,
        frontmatter=frontmatter,
        body=body,
        links=extract_links(body) if links is None else links,
        headings=extract_headings(body) if headings is None else headings,
        modified_at=modified_at or NOW,
    )


def write_note(vault: Path, relative: str, lines: list[str], *, mtime: datetime | None = None) -> Path:
    path = vault / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines), encoding="utf-8")
    if mtime is not None:
        ts = mtime.timestamp()
        os.utime(path, (ts, ts))
    return path
