"""Writing activity trends command."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..analysis.trends import DEFAULT_GRANULARITY, DEFAULT_TIMESPAN, TrendsAnalysis, analyze_trends
from ..vault.loader import DEFAULT_IGNORE_PATTERNS
from .common import dump_json, emit_rich, load_notes, write_text

TIMELINE_PERIODS = 12
MIN_TAG_COUNT = 3


def run_trends(
    vault_path: Path,
    *,
    fmt: str = "text",
    timespan: str = DEFAULT_TIMESPAN,
    granularity: str = DEFAULT_GRANULARITY,
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> int:
    """Show when notes were written: peaks, streaks, timeline and tag trends."""
    console = Console(stderr=True)

    notes = load_notes(vault_path, ignore_patterns, console=console)
    analysis = analyze_trends(notes, timespan=timespan, granularity=granularity)

    if fmt == "json":
        write_text(dump_json(analysis.to_dict()), None, console=console)
    else:
        emit_rich(lambda c: _print_trends(analysis, console=c), None, console=console)
    return 0


def _print_trends(analysis: TrendsAnalysis, *, console: Console) -> None:
    console.print("[bold]Vault Growth Trends Analysis[/bold]")
    console.print()
    if analysis.start_date is None or analysis.end_date is None:
        console.print("No notes to analyze.")
        return

    g = analysis.granularity
    console.print(f"Time Period: {analysis.start_date:%Y-%m-%d} to {analysis.end_date:%Y-%m-%d}")
    console.print(f"Total Duration: {analysis.total_duration}")
    console.print()
    console.print("[bold]Growth Statistics[/bold]")
    console.print(f"  Files modified: {analysis.total_files_created}")
    if analysis.peak_period:
        console.print(f"  Peak period: {analysis.peak_period} ({analysis.peak_files} files)")
    console.print(f"  Average files per {g}: {analysis.avg_files_per_period:.1f}")
    console.print(f"  Growth rate: {analysis.growth_rate:.1f}% per {g}")
    console.print()
    console.print("[bold]Activity Patterns[/bold]")
    console.print(f"  Most active day: {analysis.most_active_day or '-'}")
    console.print(f"  Most active month: {analysis.most_active_month or '-'}")
    console.print(f"  Writing streak: {analysis.writing_streak} days")
    console.print(
        f"  Days with activity: {analysis.active_days}/{analysis.total_days} ({analysis.activity_percentage:.1f}%)"
    )
    console.print()

    if analysis.timeline:
        t = Table(title=f"Timeline (last {TIMELINE_PERIODS} periods)", show_header=True, header_style="bold")
        t.add_column("Period", style="cyan")
        t.add_column("Files", justify="right")
        for point in analysis.timeline[:TIMELINE_PERIODS]:
            t.add_row(point.period, str(point.count))
        console.print(t)
        console.print()

    trending = sorted(
        ((tag, trend) for tag, trend in analysis.tag_trends.items() if trend.count >= MIN_TAG_COUNT),
        key=lambda item: (-item[1].count, item[0]),
    )
    if trending:
        console.print("[bold]Trending Tags[/bold]")
        for tag, trend in trending:
            console.print(f"  #{escape(tag)}: {trend.count} files ({trend.growth_rate:.1f}% of modified files)")
