"""Tests for BM25 scoring."""

import pytest

from notes_mcp.search.lexical import BM25Scorer


class TestBM25Scorer:
    def test_matching_document_scores_positive(self):
        scorer = BM25Scorer(["Go programming language", "Cooking pasta at home"])
        assert scorer.score(0, "programming") > 0

    def test_non_matching_document_scores_zero(self):
        scorer = BM25Scorer(["Go programming language", "Cooking pasta at home"])
        assert scorer.score(1, "programming") == 0

    def test_term_in_every_document_is_still_positive(self):
        scorer = BM25Scorer(["alpha beta", "alpha gamma"])
        assert scorer.score(0, "alpha") > 0
        assert scorer.score(1, "alpha") > 0

    def test_rare_terms_weigh_more(self):
        scorer = BM25Scorer(["alpha beta", "alpha gamma", "alpha delta"])
        assert scorer.score(0, "beta") > scorer.score(0, "alpha")

    def test_term_frequency_raises_score(self):
        scorer = BM25Scorer(["python python python other", "python other words here"])
        assert scorer.score(0, "python") > scorer.score(1, "python")

    def test_query_is_tokenized(self):
        scorer = BM25Scorer(["Go programming language"])
        assert scorer.score(0, "PROGRAMMING!") == pytest.approx(scorer.score(0, "programming"))

    def test_multiple_terms_add_up(self):
        scorer = BM25Scorer(["go programming language", "go cooking", "pasta recipes"])
        assert scorer.score(0, "go programming") > scorer.score(0, "go")

    def test_empty_corpus(self):
        scorer = BM25Scorer([])
        assert len(scorer) == 0
        assert scorer.score(0, "anything") == 0

    def test_corpus_without_tokens(self):
        scorer = BM25Scorer(["", "a ! ?"])
        assert len(scorer) == 2
        assert scorer.score(1, "anything") == 0

    def test_query_without_tokens(self):
        scorer = BM25Scorer(["Go programming language"])
        assert scorer.score(0, "a ?") == 0

    def test_custom_parameters(self):
        scorer = BM25Scorer(["go programming"], k1=2.0, b=0.5)
        assert scorer.k1 == 2.0
        assert scorer.b == 0.5
        assert scorer.score(0, "go") > 0


class TestBM25ScorerBatch:
    def test_score_many_matches_single_scores(self):
        scorer = BM25Scorer(["go programming language", "go cooking", "pasta recipes"])

        scores = scorer.score_many([2, 0, 1], "go programming")

        expected = [scorer.score(position, "go programming") for position in (2, 0, 1)]
        assert scores == pytest.approx(expected)
        assert scores[0] == 0
        assert scores[1] > scores[2] > 0

    def test_score_many_without_signal(self):
        assert BM25Scorer([]).score_many([], "go") == []
        assert BM25Scorer(["", "a"]).score_many([0, 1], "go") == [0.0, 0.0]
        assert BM25Scorer(["go programming"]).score_many([0], "a ?") == [0.0]
