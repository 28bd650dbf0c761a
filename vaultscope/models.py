"""Data models for vault notes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ValueKind(str, Enum):
    """Coarse type of a frontmatter value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    DATE = "date"
    NULL = "null"
    OBJECT = "object"


class LinkKind(str, Enum):
    WIKI = "wiki"
    MARKDOWN = "markdown"
    EMBED = "embed"


@dataclass(frozen=True)
class FieldValue:
    """A frontmatter value classified once at ingestion.

    ``value`` holds the Python object as parsed from YAML. For arrays it is a
    tuple of ``FieldValue`` items so the whole structure stays immutable.
    """

    kind: ValueKind
    value: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> "FieldValue":
        if isinstance(raw, FieldValue):
            return raw
        if raw is None:
            return cls(ValueKind.NULL, None)
        # bool is a subclass of int, so it has to be checked first
        if isinstance(raw, bool):
            return cls(ValueKind.BOOLEAN, raw)
        if isinstance(raw, (int, float)):
            return cls(ValueKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(ValueKind.STRING, raw)
        if isinstance(raw, (list, tuple)):
            return cls(ValueKind.ARRAY, tuple(cls.from_raw(item) for item in raw))
        if isinstance(raw, (date, datetime)):
            return cls(ValueKind.DATE, raw)
        return cls(ValueKind.OBJECT, raw)

    @property
    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def strings(self) -> list[str]:
        """String elements of an array value (non-strings are skipped)."""
        if self.kind is not ValueKind.ARRAY:
            return []
        return [item.value for item in self.value if item.kind is ValueKind.STRING]

    def to_python(self) -> Any:
        """Plain Python representation (lists instead of tuples)."""
        if self.kind is ValueKind.ARRAY:
            return [item.to_python() for item in self.value]
        return self.value

    def display(self) -> str:
        """Stable string form used as a distribution key."""
        if self.kind is ValueKind.ARRAY:
            return "[" + " ".join(item.display() for item in self.value) + "]"
        if self.kind is ValueKind.NULL:
            return "null"
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is ValueKind.DATE:
            return self.value.isoformat()
        return str(self.value)


@dataclass(frozen=True)
class Link:
    kind: LinkKind
    target: str  # path-like, may lack .md for wiki/embed links
    display_text: str = ""


@dataclass(frozen=True)
class Heading:
    level: int  # 1..6
    text: str
    line: int  # 1-based line in the body


@dataclass(frozen=True)
class NoteRecord:
    """Read-only view of one Markdown file in the vault."""

    path: str  # unique key
    relative_path: str
    frontmatter: Mapping[str, FieldValue] = field(default_factory=lambda: MappingProxyType({}))
    body: str = ""
    links: tuple[Link, ...] = ()
    headings: tuple[Heading, ...] = ()
    modified_at: datetime = field(default_factory=lambda: datetime.now().astimezone())
    raw_size: int = 0

    @classmethod
    def create(
        cls,
        path: str,
        *,
        relative_path: str | None = None,
        frontmatter: Mapping[str, Any] | None = None,
        body: str = "",
        links: list[Link] | tuple[Link, ...] = (),
        headings: list[Heading] | tuple[Heading, ...] = (),
        modified_at: datetime | None = None,
        raw_size: int | None = None,
    ) -> "NoteRecord":
        """Build a record from raw (untyped) frontmatter values."""
        fm = {str(k): FieldValue.from_raw(v) for k, v in (frontmatter or {}).items()}
        return cls(
            path=path,
            relative_path=relative_path if relative_path is not None else path,
            frontmatter=MappingProxyType(fm),
            body=body,
            links=tuple(links),
            headings=tuple(headings),
            modified_at=modified_at or datetime.now().astimezone(),
            raw_size=raw_size if raw_size is not None else len(body.encode("utf-8")),
        )

    @property
    def name(self) -> str:
        """Filename without directory or .md extension."""
        stem = self.relative_path.rsplit("/", 1)[-1]
        return stem[:-3] if stem.endswith(".md") else stem

    def get(self, field_name: str) -> FieldValue | None:
        return self.frontmatter.get(field_name)


def to_jsonable(value: Any) -> Any:
    """Plain frontmatter values made safe for ``json.dumps``."""
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)
