import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from vaultscope.cli import cli
from vaultscope.commands.content_cmd import run_content, scores_to_csv
from vaultscope.commands.duplicates_cmd import run_duplicates
from vaultscope.commands.health_cmd import run_health
from vaultscope.commands.inbox_cmd import run_inbox
from vaultscope.commands.links_cmd import build_graph_tree, run_links
from vaultscope.commands.stats_cmd import run_field, run_stats
from vaultscope.commands.trends_cmd import run_trends

SYNC_CONFLICT = "alpha.sync-conflict-20230101-120000-ABCDEFGH.md"


def _json(capsys: pytest.CaptureFixture[str]) -> dict:
    return json.loads(capsys.readouterr().out)


def test_stats_json(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_stats(sample_vault, fmt="json") == 0
    data = _json(capsys)

    assert data["total_files"] == 6
    assert data["files_with_frontmatter"] == 4
    assert data["files_without_frontmatter"] == 2
    assert data["total_links"] == 6
    assert data["tag_distribution"] == {"hub": 1, "meta": 1, "topic": 1}
    assert data["orphaned_files"] == [SYNC_CONFLICT, "beta 1.md", "lonely.md"]


def test_stats_text_and_output_file(sample_vault: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "stats.txt"

    assert run_stats(sample_vault, out=out) == 0

    text = out.read_text(encoding="utf-8")
    assert "Vault Statistics" in text
    assert "Total files: 6" in text
    assert capsys.readouterr().out == ""


def test_stats_ignore_patterns(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run_stats(sample_vault, fmt="json", ignore_patterns=["beta*", "*sync-conflict*"])

    assert _json(capsys)["total_files"] == 3


def test_field_text(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_field(sample_vault, "title") == 0
    out = capsys.readouterr().out

    assert "Field Analysis: title" in out
    assert "Present in: 4 files" in out
    assert "Missing from: 2 files" in out


def test_duplicates_json(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_duplicates(sample_vault, fmt="json", field_name="title") == 0
    data = _json(capsys)

    assert data["obsidian_copies"] == [{"original_file": "beta.md", "copy_file": "beta 1.md", "copy_number": 1}]
    assert [(c["original_file"], c["conflict_type"]) for c in data["sync_conflicts"]] == [
        ("alpha.md", "syncthing"),
        ("beta.md", "icloud"),
    ]
    assert [g["files"] for g in data["content_duplicates"]] == [["beta 1.md", "beta.md"]]
    assert data["field_duplicates"][0]["value"] == "Beta"
    assert data["field_duplicates"][0]["count"] == 2


def test_duplicates_type_filter(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run_duplicates(sample_vault, dup_type="obsidian", fmt="json")

    assert list(_json(capsys)) == ["obsidian_copies"]


def test_duplicates_text(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run_duplicates(sample_vault, dup_type="obsidian")
    out = capsys.readouterr().out

    assert "Duplicate Analysis" in out
    assert "Found 1 Obsidian copy files" in out
    assert "Copy 1: beta 1.md" in out


def test_duplicates_clean_vault(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "only.md").write_text("alone", encoding="utf-8")

    run_duplicates(tmp_path)

    assert "No duplicate files found. Your vault is clean!" in capsys.readouterr().out


def test_health_json(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_health(sample_vault, fmt="json") == 0
    data = _json(capsys)

    # 100 - 2/6*30 - 3/6*20 - 1/6*25 - 5
    assert data["score"] == pytest.approx(100 - 10 - 10 - 25 / 6 - 5)
    assert data["level"] == "fair"
    assert data["issues"] == [
        "2 files missing frontmatter",
        "3 orphaned files",
        "1 broken links",
        "1 duplicate entries",
    ]


def test_health_text_clean(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "a.md").write_text("---\ntitle: A\n---\n[[b]]", encoding="utf-8")
    (tmp_path / "b.md").write_text("---\ntitle: B\n---\n[[a]]", encoding="utf-8")

    run_health(tmp_path)
    out = capsys.readouterr().out

    assert "Health Level: excellent" in out
    assert "Score: 100.0/100" in out
    assert "No issues found. Great job!" in out


def test_links_json(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_links(sample_vault, fmt="json") == 0
    data = _json(capsys)

    assert data["total_files"] == 6
    assert data["total_links"] == 6
    assert data["broken_links"] == 1
    # alpha and index both have 4 connections; the smaller path wins
    assert data["most_connected_file"] == "alpha.md"
    assert data["max_connections"] == 4
    assert [c["path"] for c in data["central_files"][:2]] == ["alpha.md", "index.md"]
    assert data["link_graph"]["index.md"] == ["alpha.md", "beta.md", "missing.md"]


def test_links_text_with_graph(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run_links(sample_vault, show_graph=True, depth=2)
    out = capsys.readouterr().out

    assert "Link Structure Analysis" in out
    assert "Broken links: 1" in out
    assert "Link graph" in out
    assert "index.md (3 connections)" in out


def test_build_graph_tree() -> None:
    graph = {"a.md": ["b.md", "c.md"], "b.md": ["a.md"]}

    tree = build_graph_tree(graph, depth=3, min_connections=1)

    assert tree is not None
    (a,) = tree.children
    assert a.label == "a.md (2 connections)"
    b, c = a.children
    assert b.label == "b.md (1 connections)"
    assert [child.label for child in b.children] == ["a.md"]
    assert c.label == "c.md"


def test_build_graph_tree_respects_depth_and_minimum() -> None:
    graph = {"a.md": ["b.md"], "b.md": ["c.md"]}

    shallow = build_graph_tree(graph, depth=1, min_connections=1)
    assert shallow is not None
    assert all(not node.children for node in shallow.children)

    assert build_graph_tree(graph, depth=3, min_connections=5) is None


def test_content_json(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_content(sample_vault, fmt="json") == 0
    data = _json(capsys)

    assert len(data["file_scores"]) == 6
    assert 0.0 <= data["overall_score"] <= 1.0
    assert sum(data["score_distribution"].values()) == 6


def test_content_csv_and_min_score(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run_content(sample_vault, fmt="csv", min_score=101)
    lines = capsys.readouterr().out.strip().split("\n")

    assert lines == ["path,score,readability,link_density,completeness,atomicity,recency,suggested_fixes"]


def test_content_text(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run_content(sample_vault, include_scores=True)
    out = capsys.readouterr().out

    assert "Zettelkasten Content Quality Analysis" in out
    assert "Overall Quality Score:" in out
    assert "Individual File Scores" in out
    assert "lonely.md" in out


def test_scores_to_csv_quotes_fields() -> None:
    from vaultscope.analysis.quality import FileQualityScore

    score = FileQualityScore("a, b.md", 0.5, 0.1, 0.2, 0.3, 0.4, 1.0, ["one", "two"])

    assert scores_to_csv([score]).split("\n")[1] == '"a, b.md",50.0,10,20,30,40,100,one; two'


def test_trends_json(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_trends(sample_vault, fmt="json", timespan="1w", granularity="day") == 0
    data = _json(capsys)

    assert data["granularity"] == "day"
    assert data["total_files_created"] == 6
    assert data["writing_streak"] >= 1


def test_trends_text_empty_vault(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run_trends(tmp_path)
    out = capsys.readouterr().out

    assert "Vault Growth Trends Analysis" in out
    assert "No notes to analyze." in out


def test_inbox_json(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_inbox(sample_vault, fmt="json") == 0
    data = _json(capsys)

    assert data["total_sections"] == 1
    (section,) = data["inbox_sections"]
    assert section["file"] == "alpha.md"
    assert section["item_count"] == 2
    assert section["urgency_level"] == "High"
    assert "Convert to permanent notes" in section["action_suggestions"]


def test_inbox_text(sample_vault: Path, capsys: pytest.CaptureFixture[str]) -> None:
    run_inbox(sample_vault)
    out = capsys.readouterr().out

    assert "INBOX Triage Analysis" in out
    assert "Start with: alpha.md (2 items" in out
    assert "Urgency: High" in out


# -----------------------------------------------------------------------------
# CLI wiring
# -----------------------------------------------------------------------------


def test_cli_stats_json(sample_vault: Path) -> None:
    result = CliRunner().invoke(cli, ["analyze", "stats", str(sample_vault), "--format", "json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["total_files"] == 6


def test_cli_missing_vault_is_a_usage_error(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["analyze", "health", str(tmp_path / "nope")])

    assert result.exit_code == 2
    assert "does not exist" in result.output


def test_cli_missing_config_file(sample_vault: Path, tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli, ["--config", str(tmp_path / "missing.toml"), "analyze", "stats", str(sample_vault)]
    )

    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_cli_reads_vault_config(sample_vault: Path) -> None:
    (sample_vault / ".vaultscope.toml").write_text('[vault]\nignore_patterns = ["lonely.md"]\n', encoding="utf-8")

    result = CliRunner().invoke(cli, ["analyze", "stats", str(sample_vault), "-f", "json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["total_files"] == 5


def test_cli_rejects_unknown_format(sample_vault: Path) -> None:
    result = CliRunner().invoke(cli, ["analyze", "links", str(sample_vault), "--format", "xml"])

    assert result.exit_code == 2
