"""Positional document store with a tag index."""

from collections.abc import Iterable, Iterator

from notes_mcp.search.models import SearchDocument


class DocumentStore:
    """
    Documents addressed by id and by corpus position.

    Positions are contiguous (0..len-1) and line up with the lexical
    scorer built from `texts()`. The tag index maps every tag to the
    positions of the documents that currently carry it.

    Not thread-safe on its own: SearchIndex serialises access.
    """

    def __init__(self) -> None:
        self._docs: list[SearchDocument] = []
        self._positions: dict[str, int] = {}
        self._tag_index: dict[str, set[int]] = {}

    def __len__(self) -> int:
        return len(self._docs)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._positions

    def __iter__(self) -> Iterator[SearchDocument]:
        return iter(self._docs)

    def __getitem__(self, position: int) -> SearchDocument:
        return self._docs[position]

    def get(self, doc_id: str) -> SearchDocument | None:
        position = self._positions.get(doc_id)
        return self._docs[position] if position is not None else None

    def texts(self) -> list[str]:
        """Searchable text of every document, in position order."""
        return [doc.searchable_text for doc in self._docs]

    def put(self, doc: SearchDocument) -> None:
        """Insert a document, replacing any entry with the same id in place."""
        position = self._positions.get(doc.id)
        if position is None:
            position = len(self._docs)
            self._docs.append(doc)
            self._positions[doc.id] = position
        else:
            self._untag(position)
            self._docs[position] = doc
        for tag in doc.tags:
            self._tag_index.setdefault(tag, set()).add(position)

    def replace_all(self, docs: Iterable[SearchDocument]) -> None:
        """Drop every document and load docs instead."""
        self._docs = []
        self._positions = {}
        self._tag_index = {}
        for doc in docs:
            self.put(doc)

    def remove(self, doc_id: str) -> bool:
        """Remove a document; returns False if the id is unknown."""
        position = self._positions.get(doc_id)
        if position is None:
            return False
        del self._docs[position]
        # Later positions shift down by one, so rebuild both maps
        self._positions = {doc.id: i for i, doc in enumerate(self._docs)}
        self._tag_index = {}
        for i, doc in enumerate(self._docs):
            for tag in doc.tags:
                self._tag_index.setdefault(tag, set()).add(i)
        return True

    def _untag(self, position: int) -> None:
        for tag in self._docs[position].tags:
            bucket = self._tag_index.get(tag)
            if bucket is None:
                continue
            bucket.discard(position)
            if not bucket:
                del self._tag_index[tag]

    # Tag queries

    def positions_with_tags(self, tags: Iterable[str]) -> set[int]:
        """Positions of documents carrying every one of tags."""
        result: set[int] | None = None
        for tag in tags:
            bucket = self._tag_index.get(tag, set())
            result = set(bucket) if result is None else result & bucket
            if not result:
                return set()
        return set(range(len(self._docs))) if result is None else result

    def tag_counts(self) -> dict[str, int]:
        """Number of documents per tag, sorted by tag name."""
        return {tag: len(self._tag_index[tag]) for tag in sorted(self._tag_index)}
