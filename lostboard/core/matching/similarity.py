"""
Cosine similarity over term-frequency vectors.

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional

from .text import term_vector, tokenize


def magnitude(vector: Mapping[str, int]) -> float:
    return math.sqrt(sum(count * count for count in vector.values()))


def cosine_similarity(vec_a: Mapping[str, int], vec_b: Mapping[str, int]) -> float:
    """
    Cosine of the angle between two term-frequency vectors.

    Returns 0.0 when either vector is empty, so comparing against blank
    text never divides by zero. The result is clamped to [0, 1].
    """
    if len(vec_a) > len(vec_b):
        vec_a, vec_b = vec_b, vec_a
    dot = sum(count * vec_b[token] for token, count in vec_a.items() if token in vec_b)
    mag_a = magnitude(vec_a)
    mag_b = magnitude(vec_b)
    if not mag_a or not mag_b:
        return 0.0
    return max(0.0, min(1.0, dot / (mag_a * mag_b)))


def text_similarity(a: Optional[str], b: Optional[str]) -> float:
    """
    Bag-of-words cosine similarity between two texts.

    Examples:
        ("black wallet", "black wallet") → 1.0
        ("black wallet", "red umbrella") → 0.0
        ("black wallet", "") → 0.0
    """
    return cosine_similarity(term_vector(tokenize(a)), term_vector(tokenize(b)))
