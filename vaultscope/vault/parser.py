"""Markdown parsing utilities for links and headings."""

from __future__ import annotations

import re
from urllib.parse import unquote

from ..models import Heading, Link, LinkKind

# Match [[target]], [[target|display]], [[target#section]], [[target#section|display]]
# with an optional leading ! for embeds.
WIKILINK_PATTERN = re.compile(r"(!?)\[\[([^\]|#]*)(?:#[^\]|]*)?(?:\|([^\]]+))?\]\]")

# [text](target) or [text](<target with spaces>), not preceded by ! (images are embeds)
MARKDOWN_LINK_PATTERN = re.compile(r"(!?)\[([^\]]*)\]\(\s*(<[^>]+>|[^)\s]+)(?:\s+\"[^\"]*\")?\s*\)")

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")

FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")

URL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def _strip_code_blocks(content: str) -> list[str]:
    """Return body lines with fenced code blocks blanked out (line numbers kept)."""
    lines = content.split("\n")
    in_fence = False
    out = []
    for line in lines:
        if FENCE_PATTERN.match(line):
            in_fence = not in_fence
            out.append("")
            continue
        out.append("" if in_fence else line)
    return out


def is_external(target: str) -> bool:
    """True for URLs such as https://..., mailto:..."""
    return bool(URL_PATTERN.match(target))


def extract_links(content: str) -> list[Link]:
    """Extract wiki, embed, and markdown links from content in document order.

    Duplicates are kept: each occurrence is one outbound link.
    """
    result: list[Link] = []
    for line in _strip_code_blocks(content):
        if "[" not in line:
            continue

        found: list[tuple[int, Link]] = []
        wiki_spans = []
        for m in WIKILINK_PATTERN.finditer(line):
            target = m.group(2).strip()
            if not target:
                continue
            kind = LinkKind.EMBED if m.group(1) else LinkKind.WIKI
            display = (m.group(3) or target).strip()
            found.append((m.start(), Link(kind=kind, target=target, display_text=display)))
            wiki_spans.append((m.start(), m.end()))

        for m in MARKDOWN_LINK_PATTERN.finditer(line):
            if any(start <= m.start() < end for start, end in wiki_spans):
                continue
            raw = m.group(3)
            if raw.startswith("<") and raw.endswith(">"):
                raw = raw[1:-1]
            target = raw.split("#", 1)[0] if not is_external(raw) else raw
            if not target:
                # same-document fragment link
                continue
            if not is_external(target):
                target = unquote(target)
            kind = LinkKind.EMBED if m.group(1) else LinkKind.MARKDOWN
            found.append((m.start(), Link(kind=kind, target=target, display_text=m.group(2))))

        found.sort(key=lambda item: item[0])
        result.extend(link for _, link in found)
    return result


def extract_headings(content: str) -> list[Heading]:
    """Extract ATX headings outside fenced code blocks."""
    headings = []
    for idx, line in enumerate(_strip_code_blocks(content), start=1):
        m = HEADING_PATTERN.match(line)
        if m:
            headings.append(Heading(level=len(m.group(1)), text=m.group(2), line=idx))
    return headings
