"""
OCR text normalization and correction.

- TextNormalizer: whitespace, line-break and known-misspelling canonicalization
- SpellCorrector: static table of garbled tokens
- ProperNounGuard: protects transliterated regional names from correction
- PostProcessor: the full raw -> enhanced text pipeline
"""

from .proper_nouns import ProperNounGuard
from .spell_corrector import SpellCorrector, DEFAULT_CORRECTIONS
from .text_normalizer import (
    TextNormalizer,
    correct_aadhaar_candidate,
    correct_pan_candidate,
)
from .pipeline import PostProcessor, reconcile_proper_nouns

__all__ = [
    "ProperNounGuard",
    "SpellCorrector",
    "DEFAULT_CORRECTIONS",
    "TextNormalizer",
    "correct_aadhaar_candidate",
    "correct_pan_candidate",
    "PostProcessor",
    "reconcile_proper_nouns",
]
