"""Tests for snippet extraction and highlighting."""

import pytest

from notes_mcp.search.snippet import extract_snippet, highlight_matches


class TestHighlightMatches:
    def test_single_match(self):
        assert highlight_matches("Python programming", ["python"]) == "[[Python]] programming"

    def test_multiple_terms(self):
        result = highlight_matches("Go programming is fun", ["go", "programming"])
        assert result == "[[Go]] [[programming]] is fun"

    def test_every_occurrence(self):
        result = highlight_matches("go here, go there", ["go"])
        assert result == "[[go]] here, [[go]] there"

    def test_substring_matches(self):
        result = highlight_matches("Programming programmer programs", ["program"])
        assert result == "[[Program]]ming [[program]]mer [[program]]s"

    def test_overlapping_matches_merge(self):
        assert highlight_matches("programming", ["program", "gram"]) == "[[program]]ming"

    def test_touching_matches_merge(self):
        assert highlight_matches("foobar", ["foo", "bar"]) == "[[foobar]]"

    def test_preserves_original_case(self):
        result = highlight_matches("UPPERCASE and lowercase", ["uppercase"])
        assert result == "[[UPPERCASE]] and lowercase"

    def test_no_match_unchanged(self):
        assert highlight_matches("nothing to see", ["python"]) == "nothing to see"

    def test_no_tokens_unchanged(self):
        assert highlight_matches("nothing to see", []) == "nothing to see"

    @pytest.mark.parametrize(
        ("text", "tokens"),
        [
            ("aaa aaa", ["aa"]),
            ("programming programs", ["program", "programming", "gram"]),
            ("the theme then", ["the", "he", "them"]),
        ],
    )
    def test_markers_are_balanced(self, text: str, tokens: list[str]):
        result = highlight_matches(text, tokens)
        assert result.count("[[") == result.count("]]")
        assert result.replace("[[", "").replace("]]", "") == text


class TestExtractSnippet:
    def test_short_text_is_returned_whole(self):
        assert extract_snippet("keyword here", ["keyword"]) == "[[keyword]] here"

    def test_no_tokens_shows_leading_text(self):
        assert extract_snippet("some text", []) == "some text"

        long_text = " ".join(f"word{i}" for i in range(60))
        snippet = extract_snippet(long_text, [])
        assert snippet.startswith("word0 ")
        assert snippet.endswith("...")
        assert "[[" not in snippet

    def test_empty_text(self):
        assert extract_snippet("", ["keyword"]) == ""

    def test_long_text_gets_ellipses(self):
        text = (
            "This is a very long piece of content that contains many words and sentences. "
            "The important keyword appears somewhere in the middle of this text. "
            "We want to extract a snippet that shows the context around this keyword."
        )
        snippet = extract_snippet(text, ["keyword"])
        assert snippet.startswith("...")
        assert snippet.endswith("...")
        assert "[[keyword]]" in snippet

    def test_match_at_start_has_no_leading_ellipsis(self):
        text = "keyword " + " ".join(["filler"] * 50)
        snippet = extract_snippet(text, ["keyword"])
        assert snippet.startswith("[[keyword]]")
        assert snippet.endswith("...")

    def test_window_snaps_to_word_boundaries(self):
        words = [f"alpha{i}" for i in range(40)] + ["needle"] + [f"omega{i}" for i in range(40)]
        text = " ".join(words)

        snippet = extract_snippet(text, ["needle"])

        assert snippet.startswith("...")
        assert snippet.endswith("...")
        inner = snippet[3:-3].replace("[[", "").replace("]]", "")
        assert "needle" in inner.split()
        assert all(word in words for word in inner.split())

    def test_window_is_bounded(self):
        text = " ".join(["filler"] * 100) + " needle " + " ".join(["filler"] * 100)
        snippet = extract_snippet(text, ["needle"])
        # 60 before + match + 80 after, plus markers and ellipses
        assert len(snippet) <= 60 + len("needle") + 80 + 4 + 6

    def test_no_match_shows_leading_text(self):
        text = " ".join(f"word{i}" for i in range(60))
        snippet = extract_snippet(text, ["zzz"])
        assert snippet.startswith("word0 ")
        assert snippet.endswith("...")
        assert "[[" not in snippet

    def test_case_insensitive_match(self):
        text = "This contains UPPERCASE and lowercase versions of Python."
        assert "[[Python]]" in extract_snippet(text, ["python"])

    def test_highlights_all_tokens_in_window(self):
        snippet = extract_snippet("Go programming with Go modules", ["go", "modules"])
        assert snippet == "[[Go]] programming with [[Go]] [[modules]]"
