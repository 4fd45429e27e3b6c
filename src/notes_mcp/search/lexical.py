"""Lexical relevance scoring.

The index never updates its statistics incrementally: a scorer is built
from the whole corpus and replaced whenever the corpus changes.
"""

import math
from collections.abc import Sequence
from typing import Protocol

from rank_bm25 import BM25Okapi

from notes_mcp.search.tokenizer import tokenize

BM25_K1 = 1.2
BM25_B = 0.75


class LexicalScorer(Protocol):
    """Scores documents, addressed by corpus position, against a query."""

    def score(self, position: int, query: str) -> float: ...

    def score_many(self, positions: Sequence[int], query: str) -> list[float]: ...


class _PositiveIdfBM25(BM25Okapi):
    """BM25Okapi with the Lucene idf, which never goes negative.

    The stock Okapi idf turns negative for terms present in more than half
    of the corpus, which would make small vaults score matches below zero.
    """

    def _calc_idf(self, nd):
        for word, freq in nd.items():
            self.idf[word] = math.log(1 + (self.corpus_size - freq + 0.5) / (freq + 0.5))


class BM25Scorer:
    """BM25 scorer over a tokenized snapshot of the corpus."""

    def __init__(self, texts: Sequence[str], k1: float = BM25_K1, b: float = BM25_B):
        corpus = [tokenize(text) for text in texts]
        self.k1 = k1
        self.b = b
        self._size = len(corpus)
        # rank_bm25 divides by the corpus size and the average length
        if any(corpus):
            self._bm25: BM25Okapi | None = _PositiveIdfBM25(corpus, k1=k1, b=b)
        else:
            self._bm25 = None

    def __len__(self) -> int:
        return self._size

    def score(self, position: int, query: str) -> float:
        """BM25 score of the document at position; 0.0 when no term matches."""
        return self.score_many([position], query)[0]

    def score_many(self, positions: Sequence[int], query: str) -> list[float]:
        """BM25 scores of the documents at positions, in the same order.

        rank_bm25 copies the document length table on every call, so a
        whole candidate set must be scored in one call.
        """
        tokens = tokenize(query)
        if self._bm25 is None or not tokens or not positions:
            return [0.0] * len(positions)
        return [float(s) for s in self._bm25.get_batch_scores(tokens, list(positions))]
