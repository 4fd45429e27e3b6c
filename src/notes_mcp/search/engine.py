"""In-memory search index combining BM25, exact-phrase and fuzzy scoring."""

import logging
import time
from collections.abc import Callable, Iterable, Sequence

from notes_mcp.search.fuzzy import fuzzy_bonus
from notes_mcp.search.lexical import BM25Scorer, LexicalScorer
from notes_mcp.search.locks import ReadWriteLock
from notes_mcp.search.models import Note, SearchDocument, SearchQuery, SearchResult
from notes_mcp.search.snippet import extract_snippet
from notes_mcp.search.store import DocumentStore
from notes_mcp.search.tokenizer import tokenize

logger = logging.getLogger(__name__)

# A single exact phrase occurrence must outweigh any amount of repeated terms
TITLE_MATCH_BONUS = 20.0
BODY_MATCH_BONUS = 10.0


def exact_match_bonus(doc: SearchDocument, phrase: str) -> float:
    """Bonus for the whole query phrase appearing in the title and/or body."""
    phrase = phrase.lower()
    bonus = 0.0
    if phrase in doc.title.lower():
        bonus += TITLE_MATCH_BONUS
    if phrase in doc.body.lower():
        bonus += BODY_MATCH_BONUS
    return bonus


class SearchIndex:
    """
    Searchable in-memory index of notes.

    Every mutation rebuilds the lexical scorer from the whole corpus, so
    bulk loads should go through index_all() rather than repeated
    index_document() calls.

    Thread Safety:
        Mutations hold the exclusive side of a reader/writer lock; search
        and the read accessors hold the shared side, so any number of
        searches run concurrently between updates.
    """

    def __init__(self, scorer_factory: Callable[[Sequence[str]], LexicalScorer] = BM25Scorer):
        """
        Initialize an empty index.

        Args:
            scorer_factory: Builds the lexical scorer from the searchable
                texts of the corpus, in position order.
        """
        self._scorer_factory = scorer_factory
        self._store = DocumentStore()
        self._scorer: LexicalScorer = scorer_factory([])
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._store)

    def __contains__(self, doc_id: object) -> bool:
        with self._lock.read_locked():
            return doc_id in self._store

    # Mutations

    def index_document(self, note: Note) -> None:
        """Add a note, or replace the indexed version of it."""
        doc = SearchDocument.from_note(note)
        with self._lock.write_locked():
            self._store.put(doc)
            self._rebuild()

    def index_all(self, notes: Iterable[Note]) -> int:
        """
        Replace the whole index with notes.

        Returns the number of documents indexed.
        """
        docs = [SearchDocument.from_note(note) for note in notes]
        with self._lock.write_locked():
            self._store.replace_all(docs)
            self._rebuild()
            return len(self._store)

    def remove_document(self, doc_id: str) -> bool:
        """Remove a note; returns False (and does nothing) if it is not indexed."""
        with self._lock.write_locked():
            if not self._store.remove(doc_id):
                return False
            self._rebuild()
            return True

    def _rebuild(self) -> None:
        start = time.perf_counter()
        self._scorer = self._scorer_factory(self._store.texts())
        logger.debug(
            "Lexical index rebuilt: %d documents in %.1fms",
            len(self._store),
            (time.perf_counter() - start) * 1000,
        )

    # Queries

    def get_document(self, doc_id: str) -> SearchDocument | None:
        with self._lock.read_locked():
            return self._store.get(doc_id)

    def get_all_tags(self) -> list[str]:
        """All tags carried by at least one indexed document, sorted."""
        with self._lock.read_locked():
            return list(self._store.tag_counts())

    def tag_counts(self) -> dict[str, int]:
        """Number of indexed documents per tag, sorted by tag."""
        with self._lock.read_locked():
            return self._store.tag_counts()

    def search(self, query: SearchQuery) -> list[SearchResult]:
        """
        Search the index.

        An empty query lists every document passing the filters, in index
        order, with a score of 0 and no snippet. Otherwise each candidate
        is scored as BM25 + exact phrase bonus + fuzzy bonus; candidates
        without any signal are dropped and the rest sorted by descending
        score (ties by id).

        Args:
            query: Query text and filters

        Returns:
            At most query.limit results when the limit is positive.
        """
        with self._lock.read_locked():
            candidates = self._filter_candidates(query)
            if not candidates:
                return []

            text = query.query.strip()
            if not text:
                results = [self._result(self._store[pos], 0.0, "") for pos in candidates]
            else:
                results = self._rank(candidates, text)

        if query.limit > 0:
            results = results[: query.limit]
        return results

    def _filter_candidates(self, query: SearchQuery) -> list[int]:
        if query.tags:
            positions = self._store.positions_with_tags(query.tags)
        else:
            positions = set(range(len(self._store)))

        candidates = []
        for pos in sorted(positions):
            doc = self._store[pos]
            if query.path_prefix and not doc.path.startswith(query.path_prefix):
                continue
            if query.date_from is not None or query.date_to is not None:
                if doc.modified_at is None:
                    continue
                if query.date_from is not None and doc.modified_at < query.date_from:
                    continue
                if query.date_to is not None and doc.modified_at > query.date_to:
                    continue
            candidates.append(pos)
        return candidates

    def _rank(self, candidates: list[int], text: str) -> list[SearchResult]:
        # Queries like "C" have no tokens and can only match as a phrase
        query_tokens = tokenize(text)
        lexical_scores = self._scorer.score_many(candidates, text)

        results = []
        for pos, lexical_score in zip(candidates, lexical_scores):
            doc = self._store[pos]
            score = lexical_score + exact_match_bonus(doc, text) + fuzzy_bonus(query_tokens, doc.tokens)
            if score <= 0:
                continue
            snippet = extract_snippet(doc.body if doc.body.strip() else doc.searchable_text, query_tokens)
            results.append(self._result(doc, score, snippet))

        results.sort(key=lambda r: (-r.score, r.id))
        return results

    @staticmethod
    def _result(doc: SearchDocument, score: float, snippet: str) -> SearchResult:
        return SearchResult(
            id=doc.id,
            title=doc.title,
            path=doc.path,
            score=score,
            tags=list(doc.tags),
            modified_at=doc.modified_at,
            snippet=snippet,
        )
