import pytest

from tests.helpers import make_note

from vaultscope.analysis.links import analyze_links, find_orphaned_files, normalize_target
from vaultscope.models import Link, LinkKind


def _notes():
    return [
        make_note("hub.md", "[[a]] [[b]] [[c]]"),
        make_note("a.md", "[[hub]]"),
        make_note("b.md", "[[hub]] [x](missing.md)"),
        make_note("c.md", ""),
        make_note("self.md", "[[self]]"),
    ]


def test_normalize_target() -> None:
    assert normalize_target(Link(LinkKind.WIKI, "a")) == "a.md"
    assert normalize_target(Link(LinkKind.EMBED, "a.md")) == "a.md"
    assert normalize_target(Link(LinkKind.MARKDOWN, "a")) == "a"


def test_self_links_do_not_rescue_orphans() -> None:
    orphans = find_orphaned_files(_notes())

    assert [n.path for n in orphans] == ["self.md"]


def test_analyze_links_counts() -> None:
    analysis = analyze_links(_notes())

    assert analysis.total_files == 5
    assert analysis.total_links == 7
    assert analysis.files_with_outbound_links == 4
    # hub, a, b, c, self and missing.md receive links
    assert analysis.files_with_inbound_links == 6
    assert analysis.avg_outbound_links == pytest.approx(7 / 5)
    assert analysis.link_density == pytest.approx(7 / 25)
    assert analysis.link_graph["hub.md"] == ["a.md", "b.md", "c.md"]
    assert analysis.orphaned_files == ["self.md"]


def test_most_connected_file() -> None:
    analysis = analyze_links(_notes())

    assert analysis.most_connected_file == "hub.md"
    assert analysis.max_connections == 5


def test_central_files_are_positive_and_sorted() -> None:
    central = analyze_links(_notes()).central_files

    scores = [c.centrality_score for c in central]
    assert all(score > 0 for score in scores)
    assert scores == sorted(scores, reverse=True)
    assert central[0].path == "hub.md"
    assert central[0].centrality_score == pytest.approx(2 * 0.7 + 3 * 0.3)
    # a and self tie on score; path order decides
    assert [c.path for c in central] == ["hub.md", "b.md", "a.md", "self.md", "c.md"]


def test_unlinked_vault_has_no_most_connected_file() -> None:
    analysis = analyze_links([make_note("a.md"), make_note("b.md")])

    assert analysis.most_connected_file == ""
    assert analysis.max_connections == 0
    assert analysis.central_files == []
    assert analysis.orphaned_files == ["a.md", "b.md"]


def test_empty_vault() -> None:
    analysis = analyze_links([])

    assert analysis.total_files == 0
    assert analysis.link_density == 0.0
