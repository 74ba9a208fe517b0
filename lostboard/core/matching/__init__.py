"""
Lost/found matching domain logic.

This module handles:
- Text tokenization and term-frequency vectors
- Cosine similarity between item texts
- Ranking opposite-type candidates with category and date bonuses
- Typed item records and date parsing at the boundary

All logic is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

from .errors import DateParseError, InvalidItemError, MatchingError
from .models import Item, ItemType, MatchResult, coerce_item_date, parse_item_date
from .ranker import (
    CATEGORY_BONUS,
    DATE_BONUS,
    DATE_WINDOW_DAYS,
    MATCH_THRESHOLD,
    rank_matches,
    score_candidate,
)
from .similarity import cosine_similarity, text_similarity
from .text import term_vector, tokenize

__all__ = [
    "CATEGORY_BONUS",
    "DATE_BONUS",
    "DATE_WINDOW_DAYS",
    "DateParseError",
    "InvalidItemError",
    "Item",
    "ItemType",
    "MATCH_THRESHOLD",
    "MatchResult",
    "MatchingError",
    "coerce_item_date",
    "cosine_similarity",
    "parse_item_date",
    "rank_matches",
    "score_candidate",
    "term_vector",
    "text_similarity",
    "tokenize",
]
