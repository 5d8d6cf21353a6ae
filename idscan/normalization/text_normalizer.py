"""
Conservative OCR text normalization.

Only rewrites sequences it can classify with confidence: whitespace runs,
missing spaces after labels, words and ID numbers broken across lines,
known misspellings of "Aadhaar" and "Tamil Nadu", and look-alike letters
inside digit runs. Everything else is left exactly as recognized.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List, Tuple

# Known OCR renderings of "Aadhaar"
AADHAAR_VARIANTS = (
    "aadhar", "adhaar", "adhar", "aadhhar", "aadahar", "aadhaaar",
    "aadnaar", "aadbaar", "aadhoar", "aadhaar",
)

# Fixed substring replacements (applied before the regex table)
SUBSTRING_CORRECTIONS: List[Tuple[str, str]] = [
    ("Tamil Fads", "Tamil Nadu"),
    ("Tamil Nads", "Tamil Nadu"),
    ("Tamil Nadn", "Tamil Nadu"),
    ("Tamil Nadii", "Tamil Nadu"),
    ("Tamil Wadu", "Tamil Nadu"),
    ("TamilNadu", "Tamil Nadu"),
    ("Tamilnadu", "Tamil Nadu"),
]

REGEX_CORRECTIONS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"\bTam[il1I]{1,2}\s*Na[dc][uoa]\b"), "Tamil Nadu"),
]

_AADHAAR_WORD = re.compile(
    r"\b(?:" + "|".join(AADHAAR_VARIANTS) + r")\b", re.IGNORECASE
)

_SPACE_RUN = re.compile(r" {3,}")
_LABEL_COLON = re.compile(r"(?<=[A-Za-z]):(?=[A-Za-z0-9])")
_HYPHEN_BREAK = re.compile(r"([A-Za-z])-[ \t]*\n[ \t]*([a-z])")
_SPLIT_DIGITS = re.compile(
    r"(?<![\d/\-])((?:\d{4} ){0,2}\d{1,4})[ \t]*\n[ \t]*(\d{1,4}(?: \d{4}){0,2})(?!\d)"
)

# Look-alike letters inside digit runs
_DIGIT_LOOKALIKES = {"l": "1", "I": "1", "O": "0", "S": "5"}
_BETWEEN_DIGITS = re.compile(r"(?<=\d)[lIOS](?=\d)")

# 12-character grouped ID with possible letter confusions
_ID_LOOKALIKES = {"O": "0", "o": "0", "D": "0", "I": "1", "l": "1", "S": "5", "B": "8"}
_GROUPED_ID = re.compile(
    r"(?<![A-Za-z0-9])([0-9OoDIlSB]{4})([ -]?)([0-9OoDIlSB]{4})([ -]?)([0-9OoDIlSB]{4})(?![A-Za-z0-9])"
)

# PAN: positions 0-4 letters, 5-8 digits, 9 letter
PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
_PAN_TOKEN = re.compile(r"(?<![A-Za-z0-9])[A-Z0-9]{10}(?![A-Za-z0-9])")
_TO_LETTER = {"0": "O", "1": "I", "8": "B", "5": "S", "2": "Z", "6": "G"}
_TO_DIGIT = {"O": "0", "D": "0", "Q": "0", "I": "1", "L": "1", "B": "8", "S": "5", "Z": "2", "G": "6"}


def correct_aadhaar_candidate(candidate: str) -> str:
    """Replace look-alike letters in a grouped 12-digit ID with digits."""
    return "".join(_ID_LOOKALIKES.get(ch, ch) for ch in candidate)


def correct_pan_candidate(token: str) -> str:
    """
    Fix letter/digit confusions in a 10-character PAN candidate.

    Each position is coerced to its expected class. Returns the token
    unchanged if it is already valid or some position cannot be coerced.
    """
    token = token.upper()
    if len(token) != 10 or PAN_PATTERN.match(token):
        return token

    chars = []
    for idx, ch in enumerate(token):
        if 5 <= idx <= 8:
            ch = ch if ch.isdigit() else _TO_DIGIT.get(ch, ch)
        else:
            ch = ch if ch.isalpha() else _TO_LETTER.get(ch, ch)
        chars.append(ch)

    fixed = "".join(chars)
    return fixed if PAN_PATTERN.match(fixed) else token


class TextNormalizer:
    """Conservative canonicalization of raw OCR text."""

    def __init__(
        self,
        substring_corrections: List[Tuple[str, str]] = None,
        regex_corrections: List[Tuple[re.Pattern, str]] = None,
    ):
        self.substring_corrections = list(
            SUBSTRING_CORRECTIONS if substring_corrections is None else substring_corrections
        )
        self.regex_corrections = list(
            REGEX_CORRECTIONS if regex_corrections is None else regex_corrections
        )

    def known_variants(self) -> FrozenSet[str]:
        """Lowercase garbled words this normalizer rewrites."""
        words = set(AADHAAR_VARIANTS)
        for wrong, _ in self.substring_corrections:
            words.update(w.lower() for w in wrong.split())
        return frozenset(words)

    def rewritten_words(self, text: str) -> FrozenSet[str]:
        """Lowercase words of `text` that the regex table rewrites."""
        words = set()
        for pattern, replacement in self.regex_corrections:
            for match in pattern.finditer(text or ""):
                if match.group(0) != replacement:
                    words.update(w.lower() for w in match.group(0).split())
        return frozenset(words)

    def normalize(self, text: str) -> str:
        if not text:
            return ""

        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = _SPACE_RUN.sub(" ", text)
        text = _LABEL_COLON.sub(": ", text)

        text = _HYPHEN_BREAK.sub(r"\1\2", text)
        text = _SPLIT_DIGITS.sub(self._join_split_id, text)

        text = _AADHAAR_WORD.sub(self._canonical_aadhaar, text)
        for wrong, right in self.substring_corrections:
            text = text.replace(wrong, right)
        for pattern, replacement in self.regex_corrections:
            text = pattern.sub(replacement, text)

        return "\n".join(line.rstrip() for line in text.split("\n"))

    def correct_ocr_errors(self, text: str) -> str:
        """
        Digit-context corrections.

        Letters are only replaced when they sit between two digits, or
        inside a run recognized as a grouped 12-digit ID. Free text is
        never touched.
        """
        if not text:
            return ""

        text = _GROUPED_ID.sub(self._fix_grouped_id, text)

        # Repeat so adjacent look-alikes ("1lI2") resolve left to right
        previous = None
        while previous != text:
            previous = text
            text = _BETWEEN_DIGITS.sub(lambda m: _DIGIT_LOOKALIKES[m.group(0)], text)
        return text

    def correct_pan_numbers(self, text: str) -> str:
        """Apply the positional PAN corrector to every 10-character token."""
        if not text:
            return ""
        return _PAN_TOKEN.sub(lambda m: correct_pan_candidate(m.group(0)), text)

    @staticmethod
    def _canonical_aadhaar(match: re.Match) -> str:
        return "AADHAAR" if match.group(0).isupper() else "Aadhaar"

    @staticmethod
    def _join_split_id(match: re.Match) -> str:
        head, tail = match.group(1), match.group(2)
        digits = (head + tail).replace(" ", "")
        if len(digits) != 12:
            return match.group(0)
        return f"{digits[:4]} {digits[4:8]} {digits[8:]}"

    @staticmethod
    def _fix_grouped_id(match: re.Match) -> str:
        candidate = match.group(0)
        compact = candidate.replace(" ", "").replace("-", "")
        if compact.isdigit() or sum(ch.isdigit() for ch in compact) < 8:
            return candidate
        return correct_aadhaar_candidate(candidate)
