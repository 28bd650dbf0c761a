"""Vault statistics and single-field analysis commands."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..analysis.stats import FieldAnalysis, VaultStats, analyze_field, generate_stats
from ..vault.loader import DEFAULT_IGNORE_PATTERNS
from .common import dump_json, emit_rich, load_notes, write_text

TOP_TAGS = 20
TOP_VALUES = 20


def run_stats(
    vault_path: Path,
    *,
    fmt: str = "text",
    out: Path | None = None,
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> int:
    """Print file, frontmatter, tag and link counts for the vault."""
    console = Console(stderr=True)

    notes = load_notes(vault_path, ignore_patterns, console=console)
    stats = generate_stats(notes)

    if fmt == "json":
        write_text(dump_json(stats.to_dict()), out, console=console)
    else:
        emit_rich(lambda c: _print_stats(stats, console=c), out, console=console)
    return 0


def run_field(
    vault_path: Path,
    field_name: str,
    *,
    fmt: str = "text",
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> int:
    """Show how one frontmatter field is used across the vault."""
    console = Console(stderr=True)

    notes = load_notes(vault_path, ignore_patterns, console=console)
    analysis = analyze_field(notes, field_name)

    if fmt == "json":
        write_text(dump_json(analysis.to_dict()), None, console=console)
    else:
        emit_rich(lambda c: _print_field(analysis, console=c), None, console=console)
    return 0


def _ranked(counts: dict[str, int]) -> list[tuple[str, int]]:
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


def _print_stats(stats: VaultStats, *, console: Console) -> None:
    console.print("[bold]Vault Statistics[/bold]")
    console.print()
    console.print("[bold]Files[/bold]")
    console.print(f"  Total files: {stats.total_files}")
    console.print(f"  Files with frontmatter: {stats.files_with_frontmatter}")
    console.print(f"  Files without frontmatter: {stats.files_without_frontmatter}")
    console.print(f"  Orphaned files: {len(stats.orphaned_files)}")
    console.print()
    console.print("[bold]Content[/bold]")
    console.print(f"  Total size: {stats.total_size} bytes")
    console.print(f"  Average file size: {stats.average_file_size:.1f} bytes")
    console.print(f"  Total links: {stats.total_links}")
    console.print(f"  Total headings: {stats.total_headings}")
    if stats.last_modified and stats.oldest_file:
        console.print(f"  Last modified: {stats.last_modified:%Y-%m-%d %H:%M}")
        console.print(f"  Oldest file: {stats.oldest_file:%Y-%m-%d %H:%M}")
    console.print()

    if stats.field_presence:
        t = Table(title="Frontmatter fields", show_header=True, header_style="bold")
        t.add_column("Field", style="cyan", no_wrap=True)
        t.add_column("Files", justify="right")
        t.add_column("%", justify="right")
        t.add_column("Types")
        for name, count in _ranked(stats.field_presence):
            types = ", ".join(f"{k}:{v}" for k, v in _ranked(stats.type_distribution.get(name, {})))
            t.add_row(escape(name), str(count), f"{count / stats.total_files * 100:.1f}", types)
        console.print(t)
        console.print()

    if stats.tag_distribution:
        t = Table(title="Top tags", show_header=True, header_style="bold")
        t.add_column("Tag", style="cyan", no_wrap=True)
        t.add_column("Files", justify="right")
        for tag, count in _ranked(stats.tag_distribution)[:TOP_TAGS]:
            t.add_row(escape(f"#{tag}"), str(count))
        console.print(t)


def _print_field(analysis: FieldAnalysis, *, console: Console) -> None:
    console.print(f"[bold]Field Analysis: {escape(analysis.field_name)}[/bold]")
    console.print()
    console.print(f"  Present in: {analysis.total_files} files")
    console.print(f"  Missing from: {analysis.missing_count} files")
    console.print(f"  Unique values: {analysis.unique_values}")
    if analysis.predominant_type:
        console.print(f"  Predominant type: {analysis.predominant_type}")
    console.print()

    if analysis.type_distribution:
        t = Table(title="Value types", show_header=True, header_style="bold")
        t.add_column("Type", style="cyan")
        t.add_column("Files", justify="right")
        for kind, count in _ranked(analysis.type_distribution):
            t.add_row(kind, str(count))
        console.print(t)
        console.print()

    if analysis.value_distribution:
        t = Table(title="Most common values", show_header=True, header_style="bold")
        t.add_column("Value", style="cyan")
        t.add_column("Files", justify="right")
        for value, count in _ranked(analysis.value_distribution)[:TOP_VALUES]:
            t.add_row(escape(value), str(count))
        console.print(t)
