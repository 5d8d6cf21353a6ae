"""
Person-name extraction from raw OCR text.

Aadhaar cascade (first validated candidate wins):
1. Line before the first relationship line (S/O, D/O, C/O, W/O)
2. Text before the indicator on the relationship line itself
3. A letters-only line of 1-4 words among the first five lines
4. Whole-text regexes: name followed by an indicator on the same or a
   following line, or a name printed twice before the indicator
5. Any capitalized bigram/trigram
6. First line made of 2-3 alphabetic words

PAN cascade runs after dropping header lines from the top of the card:
"Name" label over an uppercase line, inline "Name:" label, first
capitalized phrase, name before a relationship indicator.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional

from ..logger import get_logger
from ..models import CardType, NAME_NOT_FOUND
from . import patterns as p
from .cascade import CascadeMatch, Rule, first_match

logger = get_logger(__name__)

MAX_NAME_WORDS = 5
MAX_UPPERCASE_RATIO = 0.3
_DIGIT = re.compile(r"\d")
_SPACES = re.compile(r"\s+")


def _lines(text: str) -> List[str]:
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def _title_word(word: str) -> str:
    if len(word) == 1:
        return word.upper()
    return word[0].upper() + word[1:].lower()


def clean_name(candidate: str) -> str:
    """
    Normalize a raw name candidate.

    Drops the relationship indicator and anything after it, leading
    honorifics and every character other than letters, spaces, hyphens and
    periods, then title-cases each word (single letters stay uppercase).
    """
    match = p.RELATIONSHIP.search(candidate)
    if match:
        candidate = candidate[:match.start()]

    previous = None
    while previous != candidate:
        previous = candidate
        candidate = p.HONORIFIC.sub("", candidate.strip(), count=1)

    candidate = p.NAME_DISALLOWED_CHARS.sub("", candidate)
    candidate = _SPACES.sub(" ", candidate).strip(" .-")
    return " ".join(_title_word(word) for word in candidate.split(" ") if word)


def uppercase_ratio(text: str) -> float:
    letters = [ch for ch in text if ch.isalpha()]
    if not letters:
        return 0.0
    return sum(ch.isupper() for ch in letters) / len(letters)


def _has_header_keyword(name: str) -> bool:
    if name.lower() in p.HEADER_KEYWORDS:
        return True
    return any(word.strip(".-").lower() in p.HEADER_KEYWORDS for word in name.split())


# --- Aadhaar rules -----------------------------------------------------------

def _relationship_anchor(lines: List[str]):
    for idx, line in enumerate(lines):
        match = p.RELATIONSHIP.search(line)
        if match:
            return idx, match
    return None


def _line_before_relationship(text: str) -> Iterator[str]:
    lines = _lines(text)
    anchor = _relationship_anchor(lines)
    if anchor is None:
        return
    idx, _ = anchor
    if idx > 0:
        previous = lines[idx - 1]
        if not _DIGIT.search(previous) and not p.RELATIONSHIP.search(previous):
            yield previous


def _prefix_of_relationship_line(text: str) -> Iterator[str]:
    lines = _lines(text)
    anchor = _relationship_anchor(lines)
    if anchor is None:
        return
    idx, match = anchor
    prefix = lines[idx][:match.start()].strip(" ,:-")
    if len(prefix) > 2:
        yield prefix


def _leading_name_lines(text: str) -> Iterator[str]:
    for line in _lines(text)[:5]:
        if p.NAME_LINE.match(line) and 3 <= len(line) <= 25:
            yield line


def _name_before_relationship(text: str) -> Iterator[str]:
    for pattern in (
        p.NAME_BEFORE_RELATIONSHIP_SAME_LINE,
        p.NAME_BEFORE_RELATIONSHIP_NEXT_LINE,
        p.REPEATED_NAME_BEFORE_RELATIONSHIP,
    ):
        for match in pattern.finditer(text):
            yield match.group(1)


def _capitalized_bigrams(text: str) -> Iterator[str]:
    for match in p.CAPITALIZED_BIGRAM.finditer(text):
        yield match.group(1)


def _short_alpha_lines(text: str) -> Iterator[str]:
    for line in _lines(text):
        if p.TWO_OR_THREE_WORDS.match(line):
            yield line


AADHAAR_NAME_RULES: List[Rule] = [
    Rule("aadhaar/line-before-relationship", _line_before_relationship, strict=False),
    Rule("aadhaar/relationship-line-prefix", _prefix_of_relationship_line, strict=False),
    Rule("aadhaar/leading-lines", _leading_name_lines),
    Rule("aadhaar/name-before-relationship", _name_before_relationship, strict=False),
    Rule("aadhaar/capitalized-bigram", _capitalized_bigrams),
    Rule("aadhaar/short-alpha-line", _short_alpha_lines),
]


# --- PAN rules ---------------------------------------------------------------

def strip_pan_headers(text: str) -> str:
    """Drop header lines (department/government banners) from the first 3 lines."""
    kept = [
        line for idx, line in enumerate(_lines(text))
        if not (idx < 3 and any(pattern.search(line) for pattern in p.PAN_HEADER_LINES))
    ]
    return "\n".join(kept)


def _pan_label_above_name(text: str) -> Iterator[str]:
    lines = _lines(text)
    for idx, line in enumerate(lines[:-1]):
        if p.PAN_NAME_LABEL_LINE.match(line) and p.PAN_UPPERCASE_LINE.match(lines[idx + 1]):
            yield lines[idx + 1]


def _pan_inline_label(text: str) -> Iterator[str]:
    for match in p.PAN_NAME_INLINE.finditer(text):
        yield match.group(1)


def _pan_capitalized_phrase(text: str) -> Iterator[str]:
    for match in p.CAPITALIZED_PHRASE.finditer(text):
        yield match.group(1)


PAN_NAME_RULES: List[Rule] = [
    Rule("pan/label-above-name", lambda text: _pan_label_above_name(strip_pan_headers(text))),
    Rule("pan/inline-label", lambda text: _pan_inline_label(strip_pan_headers(text))),
    Rule("pan/capitalized-phrase", lambda text: _pan_capitalized_phrase(strip_pan_headers(text))),
    Rule("pan/name-before-relationship", lambda text: _name_before_relationship(strip_pan_headers(text))),
]


class NameExtractor:
    """
    Extracts the card holder's name.

    Stateless: every call is a pure function of (text, card type), and the
    winning rule is returned explicitly by `match` for callers that need it.
    """

    def __init__(
        self,
        aadhaar_rules: Optional[List[Rule]] = None,
        pan_rules: Optional[List[Rule]] = None,
    ):
        self.aadhaar_rules = list(AADHAAR_NAME_RULES if aadhaar_rules is None else aadhaar_rules)
        self.pan_rules = list(PAN_NAME_RULES if pan_rules is None else pan_rules)

    def extract(self, raw_text: str, card_type: CardType | str) -> str:
        """Best-guess name, or NAME_NOT_FOUND. Never raises."""
        try:
            found = self.match(raw_text, card_type)
        except Exception as e:
            logger.warning(f"Name extraction failed: {e}")
            return NAME_NOT_FOUND
        return found.value if found else NAME_NOT_FOUND

    def match(self, raw_text: str, card_type: CardType | str) -> Optional[CascadeMatch]:
        if not raw_text or not raw_text.strip():
            return None
        if CardType.from_value(card_type) is CardType.PAN:
            return first_match(self.pan_rules, raw_text, self._accept_pan, logger)
        return first_match(self.aadhaar_rules, raw_text, self._accept_aadhaar, logger)

    @staticmethod
    def _accept_aadhaar(candidate: str, rule: Rule) -> Optional[str]:
        if rule.strict and uppercase_ratio(candidate) > MAX_UPPERCASE_RATIO:
            return None
        name = clean_name(candidate)
        if len(name) < 3 or len(name.split()) > MAX_NAME_WORDS:
            return None
        if _has_header_keyword(name):
            return None
        return name

    @staticmethod
    def _accept_pan(candidate: str, rule: Rule) -> Optional[str]:
        if p.PAN_EXCLUDE.search(candidate):
            return None
        name = clean_name(candidate)
        if len(name) < 3 or len(name.split()) > MAX_NAME_WORDS:
            return None
        if _has_header_keyword(name):
            return None
        return name
