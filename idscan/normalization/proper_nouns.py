"""
Transliterated proper-noun detection.

Regional names and places (Velusamy, Chinnasamy, Kodambakkam, Azhagu) look
like spelling mistakes to a dictionary-based corrector. The guard flags them
so neither spelling correction nor normalization overwrites them.
"""

from __future__ import annotations

import re
from typing import FrozenSet, Iterable

# Endings typical of South and North Indian personal and place names
NAME_SUFFIXES = (
    "puram", "nagar", "ammal", "swamy", "samy", "palayam", "pettai", "kottai",
    "patti", "halli", "palli", "pally", "appan", "appa", "amma", "murthy",
    "moorthy", "selvi", "devi", "lakshmi", "priya", "abad", "pur", "raj",
    "vel", "esh", "ini", "an", "am",
)

# Letter clusters common in transliteration but rare in OCR'd English words
TRANSLITERATION_CLUSTERS = ("th", "zh", "dh", "bh", "kh")

_DOUBLED_CONSONANT = re.compile(r"([b-df-hj-np-tv-z])\1")
_DOUBLED_VOWEL = re.compile(r"([aeiou])\1")
_INTERNAL_CAPITAL = re.compile(r"^[A-Z][a-z]+[A-Z][a-z]+")
_EDGE_PUNCT = ".,;:!?'\"()[]{}-"

# Everyday and document words that match the patterns above but are never
# names worth protecting.
COMMON_WORDS: FrozenSet[str] = frozenset({
    "the", "this", "that", "than", "then", "them", "they", "there", "these",
    "those", "their", "with", "without", "through", "three", "both", "other",
    "father", "mother", "brother", "birth", "date", "year", "male", "female",
    "address", "government", "india", "indian", "authority", "unique",
    "identification", "number", "mobile", "phone", "street", "road",
    "district", "village", "permanent", "account", "income", "department",
    "signature", "issue", "issued", "card", "post", "city", "state", "town",
    "enrolment", "enrollment", "download", "help", "free", "north", "south",
    "east", "west", "main", "cross", "near", "husband", "daughter", "wife",
    "son", "care", "name", "all", "will", "well", "call", "good", "book",
    "look", "see", "need", "feel", "keep", "week", "office", "occupation",
})


class ProperNounGuard:
    """
    Heuristic detector for transliterated regional proper nouns.

    Args:
        exclusions: extra lowercase words never treated as proper nouns,
            typically the garbled forms known to a correction table
    """

    def __init__(self, exclusions: Iterable[str] = ()):
        self._exclusions = set(COMMON_WORDS)
        self.exclude(exclusions)

    def exclude(self, words: Iterable[str]) -> None:
        """Register words that must never be flagged."""
        self._exclusions.update(w.lower() for w in words)

    def might_be_transliterated_word(self, token: str) -> bool:
        word = token.strip(_EDGE_PUNCT)
        if len(word) < 3 or not word.isalpha():
            return False

        lower = word.lower()
        if lower in self._exclusions:
            return False

        if any(lower.endswith(suffix) for suffix in NAME_SUFFIXES):
            return True
        if any(cluster in lower for cluster in TRANSLITERATION_CLUSTERS):
            return True
        if _DOUBLED_CONSONANT.search(lower) or _DOUBLED_VOWEL.search(lower):
            return True
        return bool(_INTERNAL_CAPITAL.match(word))

    __call__ = might_be_transliterated_word
