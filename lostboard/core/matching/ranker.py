"""
Ranking of lost/found candidates against a seed item.

The composite score is the bag-of-words cosine similarity of the two items'
text plus two fixed heuristic bonuses:

- same category (exact, case-sensitive string match): +0.15
- reported dates at most 7 days apart: +0.10

Bonuses are additive, so a composite score can exceed 1.0. Only candidates
of the opposite type whose composite score is strictly above 0.15 are
returned, best first.

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, Optional

from .models import Item, MatchResult
from .similarity import text_similarity

logger = logging.getLogger(__name__)

CATEGORY_BONUS = 0.15
DATE_BONUS = 0.10
DATE_WINDOW_DAYS = 7
MATCH_THRESHOLD = 0.15


def match_blob(item: Item) -> str:
    """Concatenate the text fields that take part in matching."""
    return " ".join(
        [item.title or "", item.description or "", item.category or "", item.location or ""]
    )


def within_date_window(
    a: Optional[dt.date], b: Optional[dt.date], days: int = DATE_WINDOW_DAYS
) -> bool:
    """True when both dates are known and at most ``days`` calendar days apart."""
    if not isinstance(a, dt.date) or not isinstance(b, dt.date):
        return False
    if isinstance(a, dt.datetime):
        a = a.date()
    if isinstance(b, dt.datetime):
        b = b.date()
    return abs((a - b).days) <= days


def score_candidate(seed: Item, candidate: Item) -> float:
    score = text_similarity(match_blob(seed), match_blob(candidate))
    if seed.category == candidate.category:
        score += CATEGORY_BONUS
    if within_date_window(seed.date, candidate.date):
        score += DATE_BONUS
    return score


def rank_matches(seed: Item, pool: Iterable[Item]) -> list[MatchResult]:
    """
    Rank the opposite-type items of ``pool`` against ``seed``.

    Candidates of the seed's own type never match. The result holds every
    candidate whose composite score is strictly greater than
    MATCH_THRESHOLD, sorted by descending score; the sort is stable, so
    equal scores keep their pool order. Truncation to a top-N is left to
    the caller.

    Args:
        seed: The item matches are sought for
        pool: Candidate items; not mutated

    Returns:
        List of MatchResult, best first
    """
    results: list[MatchResult] = []
    considered = 0
    for candidate in pool:
        if candidate.type == seed.type:
            continue
        considered += 1
        score = score_candidate(seed, candidate)
        if score > MATCH_THRESHOLD:
            results.append(MatchResult(item_id=candidate.id, score=score))
    ranked = sorted(results, key=lambda result: result.score, reverse=True)
    logger.debug(
        "Ranked %s item %s: %d of %d candidate(s) above %.2f",
        seed.type.value,
        seed.id,
        len(ranked),
        considered,
        MATCH_THRESHOLD,
    )
    return ranked
