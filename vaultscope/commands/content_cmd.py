"""Content quality command."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..analysis.quality import ContentAnalysis, FileQualityScore, analyze_content_quality
from ..vault.loader import DEFAULT_IGNORE_PATTERNS
from .common import bullet_list, dump_json, emit_rich, load_notes, write_text

WORST_FILES = 5

FACTORS = (
    ("Read", "readability_score"),
    ("Link", "link_density_score"),
    ("Comp", "completeness_score"),
    ("Atom", "atomicity_score"),
    ("Rec", "recency_score"),
)


def run_content(
    vault_path: Path,
    *,
    fmt: str = "text",
    include_scores: bool = False,
    min_score: float = 0.0,
    verbose: bool = False,
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> int:
    """Score every note on readability, linking, completeness, atomicity and recency.

    ``min_score`` is on the 0-100 display scale and filters the per-file listing.
    """
    console = Console(stderr=True)

    notes = load_notes(vault_path, ignore_patterns, console=console)
    analysis = analyze_content_quality(notes)
    shown = [s for s in analysis.file_scores if s.score * 100 >= min_score]

    if fmt == "json":
        write_text(dump_json(analysis.to_dict()), None, console=console)
    elif fmt == "csv":
        write_text(scores_to_csv(shown), None, console=console)
    elif fmt == "table":
        emit_rich(lambda c: c.print(_scores_table(shown, verbose=verbose)), None, console=console)
    else:

        def render(c: Console) -> None:
            _print_summary(analysis, console=c)
            if include_scores:
                _print_scores(shown, min_score=min_score, verbose=verbose, console=c)

        emit_rich(render, None, console=console)
    return 0


def worst_files(scores: list[FileQualityScore], n: int = WORST_FILES) -> list[FileQualityScore]:
    return sorted(scores, key=lambda s: (s.score, s.path))[:n]


def scores_to_csv(scores: list[FileQualityScore]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(
        ["path", "score", "readability", "link_density", "completeness", "atomicity", "recency", "suggested_fixes"]
    )
    for s in scores:
        writer.writerow(
            [s.path, f"{s.score * 100:.1f}"]
            + [f"{getattr(s, attr) * 100:.0f}" for _, attr in FACTORS]
            + ["; ".join(s.suggested_fixes)]
        )
    return buf.getvalue()


def _print_summary(analysis: ContentAnalysis, *, console: Console) -> None:
    dist = analysis.score_distribution
    console.print("[bold]Zettelkasten Content Quality Analysis[/bold]")
    console.print()
    console.print(f"Overall Quality Score: {analysis.overall_score * 100:.1f}/100")
    console.print()
    console.print("[bold]Distribution[/bold]")
    console.print(f"  Excellent (90-100): {dist.get('excellent', 0)} files")
    console.print(f"  Good (75-89): {dist.get('good', 0)} files")
    console.print(f"  Fair (60-74): {dist.get('fair', 0)} files")
    console.print(f"  Poor (40-59): {dist.get('poor', 0)} files")
    console.print(f"  Critical (0-39): {dist.get('critical', 0)} files")
    console.print()
    console.print("[bold]Content Metrics[/bold]")
    console.print(f"  Average content length: {analysis.avg_content_length:.0f} characters")
    console.print(f"  Average word count: {analysis.avg_word_count:.0f} words")
    console.print(f"  Files with frontmatter: {analysis.files_with_frontmatter}")
    console.print(f"  Files with headings: {analysis.files_with_headings}")
    console.print(f"  Files with links: {analysis.files_with_links}")
    console.print()

    worst = worst_files(analysis.file_scores)
    if worst:
        console.print("[bold]Files Needing Attention (lowest scores)[/bold]")
        for i, s in enumerate(worst, start=1):
            console.print(f"  {i}. {s.score * 100:.1f}  {escape(s.path)}")
            if s.suggested_fixes:
                console.print(f"      → {escape(s.suggested_fixes[0])}", style="dim")
        console.print()

    bullet_list(console, "Quality Issues Found", analysis.quality_issues, style="yellow")
    bullet_list(console, "Improvement Suggestions", analysis.suggestions)


def _scores_table(scores: list[FileQualityScore], *, verbose: bool) -> Table:
    t = Table(title="File quality scores", show_header=True, header_style="bold")
    t.add_column("Score", justify="right")
    t.add_column("File", style="cyan")
    for label, _ in FACTORS:
        t.add_column(label, justify="right")
    if verbose:
        t.add_column("Improvements")

    for s in scores:
        row = [f"{s.score * 100:.1f}", escape(s.path)]
        row += [f"{getattr(s, attr) * 100:.0f}" for _, attr in FACTORS]
        if verbose:
            row.append(escape("; ".join(s.suggested_fixes)))
        t.add_row(*row)
    return t


def _print_scores(scores: list[FileQualityScore], *, min_score: float, verbose: bool, console: Console) -> None:
    console.print(f"[bold]Individual File Scores (showing files >= {min_score:.1f})[/bold]")
    if verbose:
        console.print(_scores_table(scores, verbose=True))
        console.print("Read=Readability, Link=Link Density, Comp=Completeness, Atom=Atomicity, Rec=Recency")
        return

    for s in scores:
        console.print(f"{s.score * 100:.1f}  {escape(s.path)}")
        if s.suggested_fixes:
            console.print(f"     → {escape('; '.join(s.suggested_fixes))}", style="dim")
