"""
Ordered collection of finalized extraction results.
"""

from __future__ import annotations

import threading
from typing import Iterator, List, Optional

from .result import CardType, ExtractionResult


class ResultSet:
    """
    Working list of extraction results (thread-safe).

    Aadhaar results are deduplicated by number: adding a record whose
    number matches an existing Aadhaar entry replaces that entry in place,
    since it is a re-scan of the same card.
    """

    def __init__(self, results: Optional[List[ExtractionResult]] = None):
        self._results: List[ExtractionResult] = list(results or [])
        self._lock = threading.Lock()

    def add(self, result: ExtractionResult) -> bool:
        """
        Insert a result.

        Returns:
            True if an existing record was replaced, False if appended
        """
        with self._lock:
            if result.card_type is CardType.AADHAAR and result.has_number:
                for idx, existing in enumerate(self._results):
                    if existing.card_type is CardType.AADHAAR and existing.number == result.number:
                        self._results[idx] = result
                        return True
            self._results.append(result)
            return False

    def remove(self, index: int) -> ExtractionResult:
        """Remove and return the result at `index`."""
        with self._lock:
            return self._results.pop(index)

    def filter(self, card_type: Optional[CardType | str] = None) -> List[ExtractionResult]:
        """Results of one card type, or all of them when card_type is None."""
        with self._lock:
            if card_type is None:
                return list(self._results)
            wanted = CardType.from_value(card_type)
            return [r for r in self._results if r.card_type is wanted]

    @property
    def results(self) -> List[ExtractionResult]:
        return self.filter()

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def __iter__(self) -> Iterator[ExtractionResult]:
        return iter(self.results)

    def __getitem__(self, index: int) -> ExtractionResult:
        with self._lock:
            return self._results[index]
