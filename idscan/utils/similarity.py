"""
Edit-distance string similarity.
"""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def levenshtein(a: str, b: str) -> int:
    """Levenshtein distance with unit insert/delete/substitute cost."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Case-insensitive similarity in [0, 1].

    1 - levenshtein / length of the longer string. Two empty strings are
    identical (1.0).
    """
    a = a.lower()
    b = b.lower()
    if not a and not b:
        return 1.0
    return Levenshtein.normalized_similarity(a, b)
