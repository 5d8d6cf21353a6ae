"""
Dictionary-based OCR spelling correction.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional

from .proper_nouns import ProperNounGuard

# Garbled token (lowercase) -> canonical form (lowercase).
# Covers card jargon, place names, surnames and common function words.
DEFAULT_CORRECTIONS: Dict[str, str] = {
    # Document jargon
    "goverment": "government",
    "govemment": "government",
    "governmert": "government",
    "govarnment": "government",
    "lndia": "india",
    "indla": "india",
    "adress": "address",
    "addres": "address",
    "adddress": "address",
    "addrcss": "address",
    "narne": "name",
    "narme": "name",
    "narnme": "name",
    "birtn": "birth",
    "blrth": "birth",
    "bith": "birth",
    "fernale": "female",
    "femaie": "female",
    "famale": "female",
    "maie": "male",
    "gander": "gender",
    "gendor": "gender",
    "mobiie": "mobile",
    "moblle": "mobile",
    "mobil": "mobile",
    "authorlty": "authority",
    "autority": "authority",
    "ldentification": "identification",
    "identlfication": "identification",
    "unlque": "unique",
    "uniqe": "unique",
    "departrnent": "department",
    "departmant": "department",
    "incorne": "income",
    "perrnanent": "permanent",
    "acount": "account",
    "accaunt": "account",
    "signatura": "signature",
    "fathers": "father's",
    # Address words
    "dlstrict": "district",
    "distrlct": "district",
    "distict": "district",
    "vlllage": "village",
    "vilage": "village",
    "viliage": "village",
    "stret": "street",
    "streel": "street",
    "sireet": "street",
    "raod": "road",
    "colany": "colony",
    "colong": "colony",
    # Place names
    "chennal": "chennai",
    "chenna": "chennai",
    "madural": "madurai",
    "coimbatere": "coimbatore",
    "colmbatore": "coimbatore",
    "tirunelvell": "tirunelveli",
    "salern": "salem",
    "trichv": "trichy",
    "bangalure": "bangalore",
    "hyderabed": "hyderabad",
    "mumbal": "mumbai",
    "kolkatta": "kolkata",
    "tamll": "tamil",
    "talil": "tamil",
    # Surnames
    "kurnar": "kumar",
    "kumer": "kumar",
    "kumor": "kumar",
    "sharrna": "sharma",
    "shanna": "sharma",
    "slngh": "singh",
    "singn": "singh",
    "reddv": "reddy",
    "yadaw": "yadav",
    "guptha": "gupta",
    # Function words
    "tlie": "the",
    "thls": "this",
    "wlth": "with",
    "frorn": "from",
    "witli": "with",
    "wiht": "with",
}

_TOKEN_SPLIT = re.compile(r"([^A-Za-z0-9']+)")


class SpellCorrector:
    """
    Replaces known OCR-garbled tokens with their canonical spelling.

    Tokens are skipped when they are separators, contain digits, are shorter
    than 4 characters, are flagged as proper nouns by the guard, or are fully
    uppercase (abbreviations such as UIDAI or PAN). The correction table is
    injected so it can grow without touching extraction code.
    """

    min_length = 4

    def __init__(
        self,
        corrections: Optional[Mapping[str, str]] = None,
        guard: Optional[ProperNounGuard] = None,
    ):
        self._corrections: Dict[str, str] = {}
        self.guard = guard or ProperNounGuard()
        self.extend(DEFAULT_CORRECTIONS if corrections is None else corrections)

    def extend(self, corrections: Mapping[str, str]) -> None:
        """Add entries to the table; garbled keys become guard exclusions."""
        for wrong, right in corrections.items():
            self._corrections[wrong.lower()] = right.lower()
        self.guard.exclude(corrections.keys())

    def lookup(self, token: str) -> Optional[str]:
        """Canonical form of a lowercase token, or None."""
        return self._corrections.get(token.lower())

    def correct_token(self, token: str) -> str:
        if len(token) < self.min_length:
            return token
        if any(ch.isdigit() for ch in token):
            return token
        if not any(ch.isalpha() for ch in token) or token.isupper():
            return token
        if self.guard.might_be_transliterated_word(token):
            return token

        canonical = self.lookup(token)
        if canonical is None:
            return token
        if token[0].isupper():
            return canonical[0].upper() + canonical[1:]
        return canonical

    def correct(self, text: str) -> str:
        if not text:
            return text
        parts = _TOKEN_SPLIT.split(text)
        # Even indices are tokens, odd indices the separators between them
        for idx in range(0, len(parts), 2):
            if parts[idx]:
                parts[idx] = self.correct_token(parts[idx])
        return "".join(parts)
