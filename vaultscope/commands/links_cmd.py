"""Link structure command."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from ..analysis.links import LinkAnalysis, analyze_links
from ..vault.loader import DEFAULT_IGNORE_PATTERNS
from ..vault.resolve import count_broken_links
from .common import bullet_list, dump_json, emit_rich, load_notes, write_text

TOP_CENTRAL = 10
MAX_CHILDREN = 5


def run_links(
    vault_path: Path,
    *,
    fmt: str = "text",
    show_graph: bool = False,
    depth: int = 3,
    min_connections: int = 1,
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> int:
    """Summarize outbound/inbound links, orphans and the most central notes."""
    console = Console(stderr=True)

    notes = load_notes(vault_path, ignore_patterns, console=console)
    analysis = analyze_links(notes)
    analysis.broken_links = count_broken_links(notes, vault_path)

    if fmt == "json":
        write_text(dump_json(analysis.to_dict()), None, console=console)
        return 0

    def render(c: Console) -> None:
        _print_links(analysis, console=c)
        if show_graph:
            _print_graph(analysis.link_graph, depth=depth, min_connections=min_connections, console=c)

    emit_rich(render, None, console=console)
    return 0


def _print_links(analysis: LinkAnalysis, *, console: Console) -> None:
    console.print("[bold]Link Structure Analysis[/bold]")
    console.print()
    console.print("[bold]Overview[/bold]")
    console.print(f"  Total files: {analysis.total_files}")
    console.print(f"  Files with outbound links: {analysis.files_with_outbound_links}")
    console.print(f"  Files with inbound links: {analysis.files_with_inbound_links}")
    console.print(f"  Orphaned files: {len(analysis.orphaned_files)}")
    console.print(f"  Total links: {analysis.total_links}")
    console.print(f"  Broken links: {analysis.broken_links}")
    console.print()
    console.print("[bold]Connectivity[/bold]")
    console.print(f"  Average outbound links per file: {analysis.avg_outbound_links:.1f}")
    console.print(f"  Average inbound links per file: {analysis.avg_inbound_links:.1f}")
    if analysis.most_connected_file:
        console.print(
            f"  Most connected file: {escape(analysis.most_connected_file)} ({analysis.max_connections} connections)"
        )
    console.print(f"  Link density: {analysis.link_density:.3f}")
    console.print()

    bullet_list(console, "Orphaned Files", analysis.orphaned_files)

    if analysis.central_files:
        t = Table(title="Most central files", show_header=True, header_style="bold")
        t.add_column("#", justify="right")
        t.add_column("File", style="cyan")
        t.add_column("Score", justify="right")
        for i, central in enumerate(analysis.central_files[:TOP_CENTRAL], start=1):
            t.add_row(str(i), escape(central.path), f"{central.centrality_score:.3f}")
        console.print(t)
        console.print()


def build_graph_tree(graph: dict[str, list[str]], *, depth: int, min_connections: int) -> Tree | None:
    """Outbound-link tree rooted at every note with enough links, each note shown once."""
    root = Tree("Link graph")
    visited: set[str] = set()

    def add(parent: Tree, name: str, level: int) -> None:
        targets = graph.get(name, [])
        node = parent.add(f"{escape(name)} ({len(targets)} connections)")
        visited.add(name)
        if level + 1 >= depth:
            return
        for target in targets[:MAX_CHILDREN]:
            if target in visited or len(graph.get(target, [])) < min_connections:
                node.add(escape(target))
            else:
                add(node, target, level + 1)
        if len(targets) > MAX_CHILDREN:
            node.add(f"... ({len(targets) - MAX_CHILDREN} more)")

    for name in sorted(graph):
        if name not in visited and len(graph[name]) >= min_connections:
            add(root, name, 0)

    return root if root.children else None


def _print_graph(graph: dict[str, list[str]], *, depth: int, min_connections: int, console: Console) -> None:
    tree = build_graph_tree(graph, depth=max(depth, 1), min_connections=min_connections)
    if tree is None:
        console.print("No files meet the minimum connection criteria.")
        return
    console.print(tree)
