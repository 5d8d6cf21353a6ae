"""
Structured field extraction.

- NameExtractor: ordered name cascades for Aadhaar and PAN
- FieldExtractor: number, name, DOB, address and mobile from raw + enhanced text
"""

from .cascade import Rule, CascadeMatch, first_match
from .name_extractor import NameExtractor, clean_name, uppercase_ratio
from .field_extractor import FieldExtractor, format_address

__all__ = [
    "Rule",
    "CascadeMatch",
    "first_match",
    "NameExtractor",
    "clean_name",
    "uppercase_ratio",
    "FieldExtractor",
    "format_address",
]
