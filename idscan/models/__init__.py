"""
Data models for the identity-card extraction application.

These models are plain dataclasses, easily serializable to JSON and CSV.
"""

from .result import (
    CardType,
    ExtractionResult,
    NAME_NOT_FOUND,
    ERROR_SENTINEL,
    CSV_HEADERS,
    number_not_found,
    is_sentinel,
)
from .document import DocumentInput
from .result_set import ResultSet
from .processing_stats import BatchStats

__all__ = [
    # Result models
    "CardType",
    "ExtractionResult",
    "NAME_NOT_FOUND",
    "ERROR_SENTINEL",
    "CSV_HEADERS",
    "number_not_found",
    "is_sentinel",

    # Inputs and collections
    "DocumentInput",
    "ResultSet",

    # Processing stats
    "BatchStats",
]
