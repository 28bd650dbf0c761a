"""Vault loading: scan a directory into read-only note records."""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable

import frontmatter
import yaml

from ..models import NoteRecord
from .parser import extract_headings, extract_links

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_PATTERNS = (".obsidian/*", "*.tmp")


@dataclass
class Vault:
    """Container for all loaded vault notes."""

    path: Path
    notes: list[NoteRecord] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)  # (relative path, error)

    # Lookup table built after loading
    _by_path: dict[str, NoteRecord] = field(default_factory=dict)

    def __post_init__(self):
        self._build_lookups()

    def _build_lookups(self):
        self._by_path = {note.relative_path: note for note in self.notes}

    def get(self, relative_path: str) -> NoteRecord | None:
        """Get a note by relative path, with or without the .md extension."""
        note = self._by_path.get(relative_path)
        if note is None and not relative_path.endswith(".md"):
            note = self._by_path.get(relative_path + ".md")
        return note

    def __len__(self) -> int:
        return len(self.notes)


def is_ignored(relative_path: str, patterns: Iterable[str]) -> bool:
    """Check a vault-relative POSIX path against fnmatch-style ignore patterns."""
    name = relative_path.rsplit("/", 1)[-1]
    for pattern in patterns:
        if fnmatch.fnmatch(relative_path, pattern) or fnmatch.fnmatch(name, pattern):
            return True
    return False


def load_note(path: Path, vault_path: Path) -> NoteRecord:
    """Load a single markdown file and parse its frontmatter."""
    relative = path.relative_to(vault_path).as_posix()
    raw = path.read_bytes()
    text = raw.decode("utf-8", errors="replace")

    try:
        post = frontmatter.loads(text)
        metadata = dict(post.metadata)
        body = post.content
    except yaml.YAMLError as e:
        logger.warning("Invalid frontmatter in %s: %s", relative, e)
        metadata = {}
        body = text

    stat = path.stat()
    modified = datetime.fromtimestamp(stat.st_mtime).astimezone()

    return NoteRecord.create(
        relative,
        relative_path=relative,
        frontmatter=metadata,
        body=body,
        links=extract_links(body),
        headings=extract_headings(body),
        modified_at=modified,
        raw_size=len(raw),
    )


def load_vault(vault_path: Path, ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS) -> Vault:
    """Load all markdown files from the vault.

    Args:
        vault_path: Path to the vault directory
        ignore_patterns: fnmatch patterns matched against vault-relative paths

    Returns:
        Vault with notes sorted by relative path
    """
    patterns = tuple(ignore_patterns)
    vault = Vault(path=vault_path)

    for md_file in sorted(vault_path.rglob("*.md")):
        rel_parts = md_file.relative_to(vault_path).parts
        # Skip hidden files and directories
        if any(part.startswith(".") for part in rel_parts):
            continue

        relative = "/".join(rel_parts)
        if is_ignored(relative, patterns):
            logger.debug("Ignoring %s", relative)
            continue

        try:
            vault.notes.append(load_note(md_file, vault_path))
        except OSError as e:
            # Log error but continue loading
            logger.warning("Failed to load %s: %s", relative, e)
            vault.failed.append((relative, str(e)))

    vault.notes.sort(key=lambda n: n.relative_path)
    vault._build_lookups()
    logger.debug("Loaded %d notes from %s", len(vault.notes), vault_path)

    return vault
