"""INBOX triage command."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from rich.console import Console
from rich.markup import escape

from ..analysis.inbox import DEFAULT_INBOX_HEADINGS, InboxAnalysis, analyze_inbox
from ..vault.loader import DEFAULT_IGNORE_PATTERNS
from .common import dump_json, emit_rich, load_notes, write_text

URGENCY_STYLES = {"High": "bold red", "Medium": "yellow", "Low": "dim"}


def run_inbox(
    vault_path: Path,
    *,
    fmt: str = "text",
    headings: Sequence[str] = DEFAULT_INBOX_HEADINGS,
    sort_by: str = "size",
    min_items: int = 1,
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> int:
    """List INBOX sections that still hold unprocessed items, biggest first."""
    console = Console(stderr=True)

    notes = load_notes(vault_path, ignore_patterns, console=console)
    analysis = analyze_inbox(notes, headings=list(headings), sort_by=sort_by, min_items=min_items)

    if fmt == "json":
        write_text(dump_json(analysis.to_dict()), None, console=console)
    else:
        emit_rich(lambda c: _print_inbox(analysis, console=c), None, console=console)
    return 0


def _print_inbox(analysis: InboxAnalysis, *, console: Console) -> None:
    console.print("[bold]INBOX Triage Analysis[/bold]")
    console.print()
    console.print(analysis.summary)
    console.print()
    if not analysis.inbox_sections:
        return

    first = analysis.inbox_sections[0]
    console.print(
        f"Start with: {escape(first.file)} ({first.item_count} items, {first.content_size} chars)",
        style="bold",
    )
    console.print()

    for section in analysis.inbox_sections:
        console.print(f"[cyan]{escape(section.file)}[/cyan]:{section.line_number}")
        console.print(f"   Heading: {escape(section.heading)}")
        console.print(
            f"   Items: {section.item_count} | Size: {section.content_size} chars | "
            f"Urgency: [{URGENCY_STYLES.get(section.urgency_level, 'default')}]{section.urgency_level}[/]"
        )
        if section.action_suggestions:
            console.print(f"   Suggestions: {escape(', '.join(section.action_suggestions))}")
        console.print()
