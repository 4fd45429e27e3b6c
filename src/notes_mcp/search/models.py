"""Data models for the search index."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from notes_mcp.search.tokenizer import tokenize


def as_utc(value: datetime | None) -> datetime | None:
    """Naive datetimes are taken as UTC so every comparison is tz-aware."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class Note:
    """A parsed note as handed over by the document supplier."""

    id: str
    title: str = ""
    path: str = ""
    body: str = ""
    tags: list[str] = field(default_factory=list)
    aliases: list[str] = field(default_factory=list)
    type: str = ""
    frontmatter: dict[str, Any] = field(default_factory=dict)
    modified_at: datetime | None = None


def flatten_frontmatter(frontmatter: Mapping[str, Any]) -> list[str]:
    """Collect the searchable values of a frontmatter mapping.

    Strings are kept as-is, lists contribute their string items and every
    other value (numbers, dates, nested mappings) is ignored.
    """
    values: list[str] = []
    for value in frontmatter.values():
        if isinstance(value, str):
            values.append(value)
        elif isinstance(value, list):
            values.extend(item for item in value if isinstance(item, str))
    return values


def build_searchable_text(note: Note) -> str:
    """Combine title, body, aliases, type and frontmatter values."""
    parts = [note.title, note.body, *note.aliases]
    if note.type:
        parts.append(note.type)
    parts.extend(flatten_frontmatter(note.frontmatter))
    return " ".join(parts)


@dataclass
class SearchDocument:
    """One indexed note with its precomputed searchable text."""

    id: str
    title: str
    path: str
    body: str
    searchable_text: str
    tags: list[str]
    modified_at: datetime | None
    tokens: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.tokens = frozenset(tokenize(self.searchable_text))

    @classmethod
    def from_note(cls, note: Note) -> "SearchDocument":
        # Tags are deduplicated but keep their authored order and case
        tags = list(dict.fromkeys(note.tags))
        return cls(
            id=note.id,
            title=note.title,
            path=note.path,
            body=note.body,
            searchable_text=build_searchable_text(note),
            tags=tags,
            modified_at=as_utc(note.modified_at),
        )


@dataclass
class SearchQuery:
    """A search request with optional filters."""

    query: str = ""
    tags: list[str] = field(default_factory=list)  # AND semantics
    path_prefix: str | None = None
    date_from: datetime | None = None  # Inclusive
    date_to: datetime | None = None  # Inclusive
    limit: int = 0  # 0 or negative means unlimited

    def __post_init__(self) -> None:
        self.date_from = as_utc(self.date_from)
        self.date_to = as_utc(self.date_to)


@dataclass
class SearchResult:
    """A ranked search hit."""

    id: str
    title: str
    path: str
    score: float
    tags: list[str]
    modified_at: datetime | None
    snippet: str

    def to_dict(self) -> dict:
        """Render the result for the MCP transport."""
        return {
            "id": self.id,
            "title": self.title,
            "path": self.path,
            "score": round(self.score, 4),
            "tags": list(self.tags),
            "modified_at": self.modified_at.isoformat() if self.modified_at else None,
            "snippet": self.snippet,
        }
