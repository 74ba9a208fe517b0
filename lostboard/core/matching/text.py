"""
Tokenization and term-frequency vectors for item text.

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, Optional

# Anything outside ASCII letters, digits and whitespace becomes a space.
NON_TOKEN_CHARS = re.compile(r"[^a-z0-9\s]")

TermVector = Counter


def tokenize(text: Optional[str]) -> list[str]:
    """
    Split free text into lowercase ASCII alphanumeric tokens.

    Process:
    1. Treat ``None``/empty input as the empty string
    2. Lowercase
    3. Replace every character that is not a-z, 0-9 or whitespace with a space
    4. Split on whitespace runs, dropping empty strings

    Non-ASCII letters are not kept as letters; they split words instead.

    Examples:
        "Black Leather Wallet" → ["black", "leather", "wallet"]
        "Café, 100% sure!" → ["caf", "100", "sure"]

    Args:
        text: The text to tokenize

    Returns:
        List of tokens in input order
    """
    if not text:
        return []
    cleaned = NON_TOKEN_CHARS.sub(" ", text.lower())
    return cleaned.split()


def term_vector(tokens: Iterable[str]) -> TermVector:
    """Count occurrences of each distinct token. Empty input gives an empty vector."""
    return Counter(tokens)
