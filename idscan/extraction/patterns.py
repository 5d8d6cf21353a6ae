"""
Named regular-expression tables, grouped by field and card type.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, List

from ..models import CardType

# Card numbers
CARD_NUMBER_PATTERNS: Dict[CardType, re.Pattern] = {
    CardType.PAN: re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]"),
    CardType.AADHAAR: re.compile(r"(?<!\d)\d{4}[ -]?\d{4}[ -]?\d{4}(?!\d)"),
}

# Relationship indicators: S/O, D/O, C/O, W/O with OCR variants
# (0 for O, 5 or $ for S) and the spelled-out forms.
RELATIONSHIP = re.compile(
    r"(?:(?<![A-Za-z0-9])[SDCW5$]\s?[/\\|]\s?[O0](?![A-Za-z0-9])"
    r"|\b(?:son|daughter|wife|care)\s+of\b)",
    re.IGNORECASE,
)

# Names
HONORIFIC = re.compile(r"^(?:mr|mrs|ms|dr|shri|smt|sri|kumari|km)\b\.?\s*", re.IGNORECASE)
NAME_DISALLOWED_CHARS = re.compile(r"[^A-Za-z\s.\-]")
NAME_LINE = re.compile(r"^[A-Za-z]+(?: [A-Za-z]+){0,3}$")
CAPITALIZED_BIGRAM = re.compile(r"\b([A-Z][a-z]+[ \t]+[A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)?)\b")
CAPITALIZED_PHRASE = re.compile(r"\b([A-Z][A-Za-z]+[ \t]+[A-Z][A-Za-z]+(?:[ \t]+[A-Z][A-Za-z]+)?)\b")
TWO_OR_THREE_WORDS = re.compile(r"^[A-Za-z]+(?:\s+[A-Za-z]+){1,2}$")

NAME_BEFORE_RELATIONSHIP_SAME_LINE = re.compile(
    r"([A-Za-z][A-Za-z .]{2,40}?)[ \t,]+(?=" + RELATIONSHIP.pattern + ")",
    re.IGNORECASE,
)
NAME_BEFORE_RELATIONSHIP_NEXT_LINE = re.compile(
    r"^[ \t]*([A-Za-z][A-Za-z .]{2,40}?)[ \t]*\n(?:[ \t]*\n)*[ \t]*(?=" + RELATIONSHIP.pattern + ")",
    re.IGNORECASE | re.MULTILINE,
)
REPEATED_NAME_BEFORE_RELATIONSHIP = re.compile(
    r"\b([A-Z][A-Za-z]+(?:[ \t]+[A-Z][A-Za-z]+){0,2})\s+\1\s*(?=" + RELATIONSHIP.pattern + ")",
    re.IGNORECASE,
)

HEADER_KEYWORDS: FrozenSet[str] = frozenset({
    "government", "govt", "india", "authority", "aadhaar", "aadhar", "uidai",
    "department", "income", "tax", "unique", "identification", "permanent",
    "account", "number", "card", "election", "commission", "signature",
    "enrolment", "enrollment", "dob", "birth", "male", "female", "address",
    "mobile", "issue", "date", "year", "help", "www", "download", "vid",
})

PAN_HEADER_LINES: List[re.Pattern] = [
    re.compile(r"income\s*tax", re.IGNORECASE),
    re.compile(r"govt\.?\s*of\s*india|government\s*of\s*india", re.IGNORECASE),
    re.compile(r"uidai|unique\s+identification", re.IGNORECASE),
    re.compile(r"election\s*commission", re.IGNORECASE),
]

PAN_EXCLUDE = re.compile(
    r"\b(?:income|tax|department|govt|government|india|permanent|account|"
    r"signature|father|father's|date\s*of\s*birth|card|number)\b",
    re.IGNORECASE,
)
PAN_NAME_LABEL_LINE = re.compile(r"^(?!.*father)[^A-Za-z]*name\s*[:.\-/]?\s*$", re.IGNORECASE)
PAN_UPPERCASE_LINE = re.compile(r"^[A-Z][A-Z .]{2,}$")
PAN_NAME_INLINE = re.compile(r"(?<!father's )(?<!fathers )\bname\s*[:.]\s*([A-Za-z][A-Za-z .]{2,})", re.IGNORECASE)

# Dates of birth
MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}
DOB_LABELLED = re.compile(
    r"(?:D\.?O\.?B\.?|Date\s*of\s*Birth|Year\s*of\s*Birth)\s*[:\-]?\s*"
    r"(\d{1,2})\s?[/\-]\s?(\d{1,2})\s?[/\-]\s?(\d{4})",
    re.IGNORECASE,
)
DOB_BARE = re.compile(r"(?<!\d)(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})(?!\d)")
DOB_TEXTUAL = re.compile(
    r"(?<!\d)(\d{1,2})\s+(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?,?\s+(\d{4})(?!\d)",
    re.IGNORECASE,
)

# Address
PIN_CODE = re.compile(r"(?<!\d)\d{3}\s?\d{3}(?!\d)")
ADDRESS_LABELLED = re.compile(
    r"Address\s*[:\-]?\s*(.*?(?<!\d)\d{3}\s?\d{3}(?!\d))",
    re.IGNORECASE | re.DOTALL,
)
ADDRESS_KEYWORD = re.compile(
    r"^[^\n]*\b(?:street|st|road|rd|nagar|district|dist|village|vill|"
    r"post|po|taluk|tehsil|mandal|colony|lane|layout|sector|ward|house|"
    r"hno|door|near|opp|main|cross|block|town|city)\b"
    r".*?(?<!\d)\d{3}\s?\d{3}(?!\d)",
    re.IGNORECASE | re.DOTALL | re.MULTILINE,
)
ADDRESS_LABEL_PREFIX = re.compile(r"^\s*address\s*[:\-]?\s*", re.IGNORECASE)
ID_NUMBER_LINE = re.compile(r"(?<!\d)\d{4}\s?\d{4}\s?\d{4}(?!\d)")
DOB_LINE = re.compile(r"\b(?:dob|date\s*of\s*birth|year\s*of\s*birth)\b|\d{1,2}[/\-]\d{1,2}[/\-]\d{4}", re.IGNORECASE)

# Mobile
# An optional "+91 " country code may precede the number
MOBILE_STANDALONE = re.compile(r"(?:(?<=\+91[ -])|(?<!\d)(?<!\d[ -]))\d{10}(?![ -]?\d)")
MOBILE_LABELLED = re.compile(
    r"(?:Mobile|Mob|Phone|Ph|Contact)(?:\s*No\.?)?\s*[:\-]?\s*(?:\+91[ -]?)?([\d][\d \-]{8,16}\d)",
    re.IGNORECASE,
)
