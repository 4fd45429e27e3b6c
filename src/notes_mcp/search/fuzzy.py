"""Fuzzy token matching for typo-tolerant scoring.

A query token that does not occur in a document can still earn partial
credit when the document contains a token within a small edit distance:

- No fuzzy matching for very short tokens (1-2 chars)
- Max edit distance of 1 for tokens up to 6 chars
- Max edit distance of 2 for longer tokens
"""

from collections.abc import Iterable, Sequence

MIN_FUZZY_TOKEN_LENGTH = 3
FUZZY_MATCH_WEIGHT = 1.0


def levenshtein_distance(s1: str, s2: str, max_distance: int | None = None) -> int:
    """Calculate the Levenshtein (edit) distance between two strings.

    Args:
        s1: First string.
        s2: Second string.
        max_distance: If provided, return max_distance+1 as soon as the
            distance is guaranteed to exceed this threshold.

    Returns:
        The minimum number of single-character insertions, deletions and
        substitutions needed to change s1 into s2.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("", "x")
        1
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    # Shorter string as columns, only two rows kept
    if len(s1) > len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)

    if max_distance is not None and n - m > max_distance:
        return max_distance + 1

    prev_row = list(range(m + 1))
    curr_row = [0] * (m + 1)

    for j in range(1, n + 1):
        curr_row[0] = j
        row_min = j
        for i in range(1, m + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            curr_row[i] = min(
                prev_row[i] + 1,  # deletion
                curr_row[i - 1] + 1,  # insertion
                prev_row[i - 1] + cost,  # substitution
            )
            row_min = min(row_min, curr_row[i])

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        prev_row, curr_row = curr_row, prev_row

    return prev_row[m]


def max_edit_distance(token_length: int) -> int:
    """Maximum edit distance tolerated for a token of the given length."""
    if token_length < MIN_FUZZY_TOKEN_LENGTH:
        return 0
    if token_length <= 6:
        return 1
    return 2


def closest_distance(token: str, vocabulary: Iterable[str]) -> int | None:
    """Smallest edit distance between token and any vocabulary entry.

    Only distances within max_edit_distance(len(token)) are considered;
    None is returned when nothing is close enough.
    """
    limit = max_edit_distance(len(token))
    if limit == 0:
        return None

    best: int | None = None
    for candidate in vocabulary:
        if abs(len(candidate) - len(token)) > limit:
            continue
        distance = levenshtein_distance(token, candidate, limit)
        if distance <= limit and (best is None or distance < best):
            best = distance
            if best == 0:
                break
    return best


def fuzzy_bonus(query_tokens: Sequence[str], document_tokens: frozenset[str]) -> float:
    """Partial credit for query tokens that only match approximately.

    Tokens that occur exactly in the document earn nothing here; they are
    already rewarded by the lexical score.
    """
    bonus = 0.0
    for token in query_tokens:
        if token in document_tokens:
            continue
        distance = closest_distance(token, document_tokens)
        if distance is not None:
            bonus += FUZZY_MATCH_WEIGHT * (1.0 - distance / len(token))
    return bonus
