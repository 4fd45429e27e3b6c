"""Tokenizer shared by indexing, scoring and highlighting."""

# Punctuation and whitespace variants that separate words
_SEPARATORS = str.maketrans({ch: " " for ch in ".,!?;:()[]{}\"'\n\t\r"})

MIN_TOKEN_LENGTH = 2


def tokenize(text: str) -> list[str]:
    """Split text into lowercase word tokens.

    Punctuation is treated as a separator and tokens shorter than
    MIN_TOKEN_LENGTH characters are dropped.
    """
    words = text.lower().translate(_SEPARATORS).split()
    return [word for word in words if len(word) >= MIN_TOKEN_LENGTH]
