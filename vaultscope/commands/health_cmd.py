"""Vault health command."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from rich.console import Console

from ..analysis.duplicates import MatchType, find_content_duplicates
from ..analysis.health import HealthLevel, HealthScore, get_health_score
from ..analysis.stats import generate_stats
from ..vault.loader import DEFAULT_IGNORE_PATTERNS
from ..vault.resolve import count_broken_links
from .common import bullet_list, dump_json, emit_rich, load_notes, write_text

LEVEL_STYLES = {
    HealthLevel.EXCELLENT: "bold green",
    HealthLevel.GOOD: "green",
    HealthLevel.FAIR: "yellow",
    HealthLevel.POOR: "red",
    HealthLevel.CRITICAL: "bold red",
}


def run_health(
    vault_path: Path,
    *,
    fmt: str = "text",
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> int:
    """Score the vault and list what drags the score down."""
    console = Console(stderr=True)

    notes = load_notes(vault_path, ignore_patterns, console=console)
    stats = generate_stats(notes)
    stats.broken_links_count = count_broken_links(notes, vault_path)
    stats.duplicate_count = len(find_content_duplicates(notes, MatchType.EXACT))
    health = get_health_score(stats)

    if fmt == "json":
        write_text(dump_json(health.to_dict()), None, console=console)
    else:
        emit_rich(lambda c: _print_health(health, console=c), None, console=console)
    return 0


def _print_health(health: HealthScore, *, console: Console) -> None:
    console.print("[bold]Vault Health Report[/bold]")
    console.print()
    console.print(f"Health Level: {health.level.value}", style=LEVEL_STYLES[health.level])
    console.print(f"Score: {health.score:.1f}/100")
    console.print()

    if health.issues:
        bullet_list(console, "Issues Found", health.issues, style="yellow")
        bullet_list(console, "Suggestions", health.suggestions)
    else:
        console.print("No issues found. Great job!", style="green")
