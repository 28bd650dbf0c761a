"""Helpers shared by the analyze commands."""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any, Callable, Iterable

from rich.console import Console
from rich.markup import escape

from ..models import NoteRecord
from ..vault.loader import DEFAULT_IGNORE_PATTERNS, load_vault


def stdout_console() -> Console:
    # soft_wrap keeps long paths on one line when output is piped
    return Console(highlight=False, soft_wrap=True)


def load_notes(
    vault_path: Path,
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
    *,
    console: Console,
) -> list[NoteRecord]:
    """Load the vault and report files that could not be read."""
    vault = load_vault(vault_path, ignore_patterns)
    if vault.failed:
        console.print(f"Warning: {len(vault.failed)} files could not be read:", style="yellow")
        for relative, error in vault.failed:
            console.print(f"  {escape(relative)}: {escape(error)}", style="yellow")
    return vault.notes


def dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


def write_text(text: str, out: Path | None, *, console: Console) -> None:
    """Write to ``out`` when given, else stdout."""
    if out:
        out.write_text(text, encoding="utf-8")
        console.print(f"Wrote output to {escape(str(out))}", style="green")
    else:
        print(text, end="" if text.endswith("\n") else "\n")


def bullet_list(console: Console, title: str, items: Iterable[str], *, style: str | None = None) -> None:
    items = list(items)
    if not items:
        return
    console.print(f"[bold]{title}[/bold]")
    for item in items:
        console.print(f"  - {escape(item)}", style=style)
    console.print()


def emit_rich(render: Callable[[Console], None], out: Path | None, *, console: Console) -> None:
    """Run ``render`` against stdout, or record it as plain text into ``out``."""
    if out:
        target = Console(record=True, file=io.StringIO(), highlight=False, soft_wrap=True)
        render(target)
        out.write_text(target.export_text(), encoding="utf-8")
        console.print(f"Wrote output to {escape(str(out))}", style="green")
    else:
        render(stdout_console())
