import pytest

from tests.helpers import make_note

from vaultscope.analysis import inbox


def _body(*lines: str) -> str:
    return "\n".join(lines)


def test_heading_patterns_match_any_level_case_insensitive() -> None:
    (pattern,) = inbox.heading_patterns(["INBOX"])

    assert pattern.match("## Inbox")
    assert pattern.match("#inbox")
    assert pattern.match("### INBOX for later")
    assert not pattern.match("## Inboxes")
    assert not pattern.match("Inbox")


def test_count_items() -> None:
    assert inbox.count_items("- one\n* two\n+ three\n1. four\n- \n") == 4
    assert inbox.count_items("free text\n\nmore text\n") == 2
    assert inbox.count_items("") == 0


@pytest.mark.parametrize(
    ("content", "heading", "expected"),
    [
        ("- pay bill ASAP", "## Inbox", "High"),
        ("- something", "## Inbox urgent", "High"),
        ("- something", "## Inbox to review", "Medium"),
        ("- meeting 2024-01-05", "## Inbox", "Medium"),
        ("- meeting 1/5/2024", "## Inbox", "Medium"),
        ("- something", "## Inbox", "Low"),
    ],
)
def test_assess_urgency(content: str, heading: str, expected: str) -> None:
    assert inbox.assess_urgency(content, heading) == expected


def test_action_suggestions() -> None:
    assert inbox.action_suggestions("plain", 1) == ["Review and organize content"]
    assert inbox.action_suggestions("an idea and a book link", 12) == [
        "Break down into smaller tasks",
        "Prioritize by urgency",
        "Process links into bookmarks or reference notes",
        "Convert to permanent notes",
        "Add to reading list",
    ]


def test_sections_end_at_next_heading() -> None:
    note = make_note(
        "a.md",
        _body("# Title", "intro", "## Inbox", "- first item", "- second item", "### Later", "- not inbox"),
    )

    (section,) = inbox.find_inbox_sections(note, inbox.heading_patterns(["INBOX"]))

    assert section.file == "a.md"
    assert section.heading == "## Inbox"
    assert section.line_number == 3
    assert section.item_count == 2
    assert section.content == "- first item\n- second item\n"
    assert section.content_size == len(section.content)


def test_section_runs_to_end_of_body_and_respects_min_items() -> None:
    note = make_note("a.md", _body("## INBOX", "- one", "- two", "- three"))
    patterns = inbox.heading_patterns(["INBOX"])

    assert inbox.find_inbox_sections(note, patterns, min_items=3)[0].item_count == 3
    assert inbox.find_inbox_sections(note, patterns, min_items=4) == []


def test_analyze_inbox_sorting_and_summary() -> None:
    notes = [
        make_note("small.md", _body("## Inbox", "- urgent thing to do")),
        make_note("big.md", _body("## Inbox", "- first longer item", "- second longer item", "- third item here")),
        make_note("clean.md", _body("# Nothing", "text")),
    ]

    by_size = inbox.analyze_inbox(notes)
    by_urgency = inbox.analyze_inbox(notes, sort_by="urgency")

    assert [s.file for s in by_size.inbox_sections] == ["big.md", "small.md"]
    assert [s.file for s in by_urgency.inbox_sections] == ["small.md", "big.md"]
    assert by_size.total_sections == 2
    assert by_size.total_items == 4
    assert by_size.summary == "Found 2 INBOX sections with 4 items (%d chars) requiring attention" % by_size.total_size


def test_analyze_inbox_custom_headings() -> None:
    notes = [make_note("a.md", _body("## Capture", "- thing one", "## Inbox", "- thing two"))]

    analysis = inbox.analyze_inbox(notes, headings=["Capture"])

    assert [s.heading for s in analysis.inbox_sections] == ["## Capture"]


def test_analyze_inbox_nothing_found() -> None:
    analysis = inbox.analyze_inbox([make_note("a.md", "# Title\ntext")])

    assert analysis.total_sections == 0
    assert analysis.summary == "No INBOX sections found - vault appears well-organized!"
