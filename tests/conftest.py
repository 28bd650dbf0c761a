"""Pytest configuration and fixtures."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from tests.helpers import NOW, write_note


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def sample_vault(tmp_path: Path) -> Path:
    """Small vault with links, an orphan, an inbox, a copy and a sync conflict."""
    vault = tmp_path / "vault"
    vault.mkdir()

    write_note(
        vault,
        "index.md",
        [
            "---",
            "title: Index",
            "tags: [hub, meta]",
            "---",
            "",
            "# Index",
            "",
            "See [[alpha]] and [[beta]] and [missing](missing.md).",
            "",
        ],
    )
    write_note(
        vault,
        "alpha.md",
        [
            "---",
            "title: Alpha",
            "tags: [topic]",
            "---",
            "",
            "# Alpha",
            "",
            "Back to [[index]].",
            "",
            "## INBOX",
            "- read the urgent article",
            "- capture idea about links",
            "",
            "## Done",
            "nothing here",
        ],
    )
    write_note(
        vault,
        "beta.md",
        [
            "---",
            "title: Beta",
            "---",
            "",
            "Beta body mentions [[alpha]].",
        ],
    )
    write_note(vault, "lonely.md", ["No frontmatter and no links here."])
    write_note(vault, "beta 1.md", ["---", "title: Beta", "---", "", "Beta body mentions [[alpha]]."])
    write_note(vault, "alpha.sync-conflict-20230101-120000-ABCDEFGH.md", ["conflicted copy"])
    write_note(vault, ".obsidian/workspace.md", ["ignored"])
    return vault
