from datetime import date, datetime

import pytest

from vaultscope.models import FieldValue, NoteRecord, ValueKind, to_jsonable


def test_field_value_classification() -> None:
    assert FieldValue.from_raw("x").kind is ValueKind.STRING
    assert FieldValue.from_raw(3).kind is ValueKind.NUMBER
    assert FieldValue.from_raw(2.5).kind is ValueKind.NUMBER
    assert FieldValue.from_raw(True).kind is ValueKind.BOOLEAN
    assert FieldValue.from_raw(None).kind is ValueKind.NULL
    assert FieldValue.from_raw(date(2024, 1, 2)).kind is ValueKind.DATE
    assert FieldValue.from_raw(datetime(2024, 1, 2, 3, 4)).kind is ValueKind.DATE
    assert FieldValue.from_raw({"a": 1}).kind is ValueKind.OBJECT


def test_field_value_array_is_classified_recursively() -> None:
    value = FieldValue.from_raw(["a", 1, None])

    assert value.kind is ValueKind.ARRAY
    assert [item.kind for item in value.value] == [ValueKind.STRING, ValueKind.NUMBER, ValueKind.NULL]
    assert value.strings() == ["a"]
    assert value.to_python() == ["a", 1, None]
    assert value.display() == "[a 1 null]"


def test_field_value_display() -> None:
    assert FieldValue.from_raw(False).display() == "false"
    assert FieldValue.from_raw(date(2024, 1, 2)).display() == "2024-01-02"
    assert FieldValue.from_raw(None).display() == "null"


def test_note_record_create_converts_frontmatter() -> None:
    note = NoteRecord.create("notes/Idea.md", frontmatter={"title": "Idea", "n": 1}, body="héllo")

    assert note.relative_path == "notes/Idea.md"
    assert note.name == "Idea"
    assert note.get("title") == FieldValue(ValueKind.STRING, "Idea")
    assert note.get("missing") is None
    assert note.raw_size == len("héllo".encode("utf-8"))
    assert note.modified_at.tzinfo is not None


def test_note_record_frontmatter_is_read_only() -> None:
    note = NoteRecord.create("a.md", frontmatter={"title": "A"})

    with pytest.raises(TypeError):
        note.frontmatter["title"] = FieldValue.from_raw("B")  # type: ignore[index]
    with pytest.raises(TypeError):
        NoteRecord("b.md", "b.md").frontmatter["x"] = FieldValue.from_raw(1)  # type: ignore[index]
    assert note.get("title") == FieldValue(ValueKind.STRING, "A")


def test_to_jsonable_handles_dates_and_nesting() -> None:
    assert to_jsonable([date(2024, 1, 2), {"k": (1, 2)}]) == ["2024-01-02", {"k": [1, 2]}]
