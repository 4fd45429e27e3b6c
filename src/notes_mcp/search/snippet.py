"""Snippet extraction and match highlighting for search results."""

import re
from collections.abc import Sequence

# Characters of context kept around the first match
SNIPPET_CONTEXT_BEFORE = 60
SNIPPET_CONTEXT_AFTER = 80

HIGHLIGHT_START = "[["
HIGHLIGHT_END = "]]"
ELLIPSIS = "..."

_WHITESPACE = re.compile(r"\s")
_BOUNDARY = re.compile(r"[\s.!?]")


def _token_pattern(query_tokens: Sequence[str]) -> re.Pattern[str] | None:
    tokens = sorted({t for t in query_tokens if t}, key=len, reverse=True)
    if not tokens:
        return None
    return re.compile("|".join(re.escape(t) for t in tokens), re.IGNORECASE)


def extract_snippet(text: str, query_tokens: Sequence[str]) -> str:
    """
    Extract a highlighted excerpt of text around the first query match.

    The window covers SNIPPET_CONTEXT_BEFORE characters before the first
    case-insensitive occurrence of any token and SNIPPET_CONTEXT_AFTER
    characters after it, trimmed to word boundaries. Ellipses mark the
    sides where text was cut.

    Args:
        text: Raw, original-case text to excerpt
        query_tokens: Lowercase query tokens

    Returns:
        The excerpt with matches wrapped in [[ ]], or "" when there is
        nothing to excerpt.
    """
    if not text:
        return ""

    pattern = _token_pattern(query_tokens)
    match = pattern.search(text) if pattern is not None else None
    if match is None:
        # Matched on fuzzy terms, metadata or a token-less phrase: show the opening text
        match_start = match_end = 0
    else:
        match_start, match_end = match.start(), match.end()

    start = max(match_start - SNIPPET_CONTEXT_BEFORE, 0)
    end = min(match_end + SNIPPET_CONTEXT_AFTER, len(text))

    if start > 0 and not text[start - 1].isspace():
        boundary = _WHITESPACE.search(text, start, match_start)
        if boundary:
            start = boundary.end()

    if end < len(text) and not _BOUNDARY.match(text, end):
        last_boundary = None
        for last_boundary in _BOUNDARY.finditer(text, match_end, end):
            pass
        if last_boundary is not None:
            end = last_boundary.start()

    snippet = highlight_matches(text[start:end].strip(), query_tokens)

    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(text):
        snippet = snippet + ELLIPSIS
    return snippet


def highlight_matches(snippet: str, query_tokens: Sequence[str]) -> str:
    """Wrap every occurrence of the query tokens with highlight markers.

    Matching is case-insensitive and substring based. Overlapping or
    touching occurrences collapse into a single span, and the snippet's
    own casing is kept inside the markers.
    """
    spans: list[tuple[int, int]] = []
    for token in query_tokens:
        if not token:
            continue
        for match in re.finditer(re.escape(token), snippet, re.IGNORECASE):
            spans.append((match.start(), match.end()))

    if not spans:
        return snippet

    spans.sort()
    merged: list[list[int]] = [list(spans[0])]
    for start, end in spans[1:]:
        current = merged[-1]
        if start <= current[1]:
            current[1] = max(current[1], end)
        else:
            merged.append([start, end])

    parts: list[str] = []
    last_end = 0
    for start, end in merged:
        parts.append(snippet[last_end:start])
        parts.append(f"{HIGHLIGHT_START}{snippet[start:end]}{HIGHLIGHT_END}")
        last_end = end
    parts.append(snippet[last_end:])
    return "".join(parts)
