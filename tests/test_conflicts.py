from tests.helpers import make_note

from vaultscope.analysis.conflicts import find_obsidian_copies, find_sync_conflict_files


def test_obsidian_copy_requires_existing_original() -> None:
    notes = [
        make_note("Note.md"),
        make_note("Note 1.md"),
        make_note("Note 2.md"),
        make_note("Orphan 3.md"),
        make_note("dir/Plan 10.md"),
        make_note("dir/Plan.md"),
    ]

    copies = find_obsidian_copies(notes)

    assert [(c.original_file, c.copy_file, c.copy_number) for c in copies] == [
        ("Note.md", "Note 1.md", 1),
        ("Note.md", "Note 2.md", 2),
        ("dir/Plan.md", "dir/Plan 10.md", 10),
    ]


def test_syncthing_conflict() -> None:
    notes = [
        make_note("report.md"),
        make_note("report.sync-conflict-20240101-101010-ABC1234X.md"),
    ]

    conflicts = find_sync_conflict_files(notes)

    assert len(conflicts) == 1
    assert conflicts[0].original_file == "report.md"
    assert conflicts[0].conflict_type == "syncthing"
    assert conflicts[0].to_dict()["conflict_file"] == "report.sync-conflict-20240101-101010-ABC1234X.md"


def test_vendor_patterns() -> None:
    notes = [
        make_note("a.md"),
        make_note("a (Jane's conflicted copy 2024-01-02).md"),
        make_note("b.md"),
        make_note("b-LAPTOP-OneDrive.md"),
        make_note("c.md"),
        make_note("c (1).md"),
    ]

    conflicts = find_sync_conflict_files(notes)

    assert [(c.original_file, c.conflict_type) for c in conflicts] == [
        ("a.md", "dropbox"),
        ("b.md", "onedrive"),
        ("c.md", "google-drive"),
    ]


def test_first_matching_pattern_wins_even_without_original() -> None:
    # "x 2.md" fits the iCloud pattern but there is no "x.md"
    notes = [make_note("x 2.md"), make_note("y.md")]

    assert find_sync_conflict_files(notes) == []


def test_no_conflicts_in_clean_vault() -> None:
    notes = [make_note("a.md"), make_note("b.md")]

    assert find_sync_conflict_files(notes) == []
    assert find_obsidian_copies(notes) == []
