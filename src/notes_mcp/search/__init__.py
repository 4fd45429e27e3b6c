"""
Search module for notes-mcp.

In-memory ranked search over notes: BM25 relevance, exact phrase boosting,
fuzzy matching for misspelled terms and highlighted snippets.
"""

from notes_mcp.search.engine import SearchIndex
from notes_mcp.search.fuzzy import levenshtein_distance
from notes_mcp.search.lexical import BM25Scorer, LexicalScorer
from notes_mcp.search.models import Note, SearchDocument, SearchQuery, SearchResult
from notes_mcp.search.snippet import extract_snippet, highlight_matches
from notes_mcp.search.tokenizer import tokenize

__all__ = [
    "BM25Scorer",
    "LexicalScorer",
    "Note",
    "SearchDocument",
    "SearchIndex",
    "SearchQuery",
    "SearchResult",
    "extract_snippet",
    "highlight_matches",
    "levenshtein_distance",
    "tokenize",
]
