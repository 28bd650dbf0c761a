"""Link graph analysis: orphans, centrality, density."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable

from ..models import Link, LinkKind, NoteRecord
from ..vault.resolve import LinkParser, resolve_links

INBOUND_WEIGHT = 0.7
OUTBOUND_WEIGHT = 0.3


@dataclass
class LinkGraph:
    """Directed multigraph of note links keyed by relative path.

    Targets are kept as written (after ``.md`` normalization), so a target
    that matches no note still shows up as a node with inbound edges.
    """

    nodes: set[str] = field(default_factory=set)
    edges: dict[str, list[str]] = field(default_factory=dict)  # src -> dsts (one per link)
    reverse_edges: dict[str, list[str]] = field(default_factory=dict)  # dst -> srcs

    def add_node(self, name: str) -> None:
        self.nodes.add(name)

    def add_edge(self, src: str, dst: str) -> None:
        self.nodes.add(src)
        self.nodes.add(dst)
        self.edges.setdefault(src, []).append(dst)
        self.reverse_edges.setdefault(dst, []).append(src)

    def out_degree(self, name: str) -> int:
        return len(self.edges.get(name, []))

    def in_degree(self, name: str) -> int:
        return len(self.reverse_edges.get(name, []))


@dataclass(frozen=True)
class CentralFile:
    path: str
    centrality_score: float


@dataclass
class LinkAnalysis:
    total_files: int = 0
    files_with_outbound_links: int = 0
    files_with_inbound_links: int = 0
    orphaned_files: list[str] = field(default_factory=list)
    total_links: int = 0
    broken_links: int = 0
    avg_outbound_links: float = 0.0
    avg_inbound_links: float = 0.0
    most_connected_file: str = ""
    max_connections: int = 0
    link_density: float = 0.0
    link_graph: dict[str, list[str]] = field(default_factory=dict)
    central_files: list[CentralFile] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def normalize_target(link: Link) -> str:
    """Wiki and embed targets may omit the .md extension."""
    target = link.target
    if link.kind in (LinkKind.WIKI, LinkKind.EMBED) and not target.endswith(".md"):
        target = target + ".md"
    return target


def find_orphaned_files(notes: Iterable[NoteRecord]) -> list[NoteRecord]:
    """Notes that no *other* note links to (self-links do not count)."""
    notes = list(notes)
    referenced: set[str] = set()
    for note in notes:
        for link in note.links:
            target = normalize_target(link)
            if target != note.path and target != note.relative_path:
                referenced.add(target)

    return [n for n in notes if n.path not in referenced and n.relative_path not in referenced]


def analyze_links(notes: Iterable[NoteRecord], link_parser: LinkParser | None = None) -> LinkAnalysis:
    """Comprehensive link structure analysis."""
    notes = list(notes)
    if link_parser is not None:
        notes = resolve_links(notes, link_parser)

    analysis = LinkAnalysis(total_files=len(notes))
    if not notes:
        return analysis

    graph = LinkGraph()
    for note in notes:
        graph.add_node(note.relative_path)
        if not note.links:
            continue
        analysis.files_with_outbound_links += 1
        for link in note.links:
            graph.add_edge(note.relative_path, normalize_target(link))

    n = len(notes)
    analysis.total_links = sum(len(v) for v in graph.edges.values())
    # Distinct targets with any inbound edge, whether or not they are notes.
    analysis.files_with_inbound_links = len(graph.reverse_edges)
    analysis.avg_outbound_links = analysis.total_links / n
    analysis.avg_inbound_links = analysis.files_with_inbound_links / n
    analysis.link_density = analysis.total_links / (n * n)
    analysis.link_graph = {src: list(dsts) for src, dsts in graph.edges.items()}

    connections = sorted(
        (
            (graph.in_degree(note.relative_path) + graph.out_degree(note.relative_path), note.relative_path)
            for note in notes
        ),
        key=lambda item: (-item[0], item[1]),
    )
    if connections and connections[0][0] > 0:
        analysis.max_connections, analysis.most_connected_file = connections[0]

    analysis.orphaned_files = [n.relative_path for n in find_orphaned_files(notes)]
    analysis.central_files = centrality_scores(notes, graph)

    return analysis


def centrality_scores(notes: Iterable[NoteRecord], graph: LinkGraph) -> list[CentralFile]:
    """Weighted in/out degree per note; only positive scores, highest first."""
    rows = []
    for note in notes:
        score = (
            graph.in_degree(note.relative_path) * INBOUND_WEIGHT
            + graph.out_degree(note.relative_path) * OUTBOUND_WEIGHT
        )
        if score > 0:
            rows.append(CentralFile(path=note.relative_path, centrality_score=score))

    rows.sort(key=lambda c: (-c.centrality_score, c.path))
    return rows
