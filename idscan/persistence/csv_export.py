"""
CSV export of extraction results.

Every field is double-quoted. The PAN column repeats the number for PAN
cards and is empty for Aadhaar cards.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..exceptions import DataPersistenceError
from ..logger import get_logger
from ..models import CSV_HEADERS, CardType, ExtractionResult

logger = get_logger(__name__)

ALL_CARDS = "ALL"


def _card_filter(card_filter: Optional[str]) -> Optional[CardType]:
    if card_filter is None or str(card_filter).strip().upper() == ALL_CARDS:
        return None
    return CardType.from_value(card_filter)


def default_csv_name(card_filter: Optional[str] = ALL_CARDS) -> str:
    """all_extracted_data.csv, aadhaar_extracted_data.csv or pan_extracted_data.csv"""
    wanted = _card_filter(card_filter)
    prefix = "all" if wanted is None else wanted.document_type
    return f"{prefix}_extracted_data.csv"


def filter_results(
    results: Iterable[ExtractionResult],
    card_filter: Optional[str] = ALL_CARDS,
) -> List[ExtractionResult]:
    wanted = _card_filter(card_filter)
    return [r for r in results if wanted is None or r.card_type is wanted]


def results_to_csv(
    results: Iterable[ExtractionResult],
    card_filter: Optional[str] = ALL_CARDS,
) -> str:
    """
    Render results as CSV text.

    Args:
        results: Extraction results in display order
        card_filter: "ALL", "AADHAAR" (or "AADHAR") or "PAN"

    Returns:
        CSV content including the header row
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for result in filter_results(results, card_filter):
        writer.writerow(result.to_csv_row())
    return buffer.getvalue()


def write_results_csv(
    results: Iterable[ExtractionResult],
    destination: Union[str, Path],
    card_filter: Optional[str] = ALL_CARDS,
) -> Path:
    """
    Write results to a CSV file.

    When `destination` is a directory the file gets its default name
    for the filter.

    Returns:
        Path to the written file
    """
    path = Path(destination)
    if path.is_dir():
        path = path / default_csv_name(card_filter)

    selected = filter_results(results, card_filter)
    content = results_to_csv(selected)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8", newline="")
    except OSError as e:
        raise DataPersistenceError(
            f"Could not write CSV: {e}", file_path=str(path), operation="save"
        ) from e

    logger.info(f"CSV written to {path} ({len(selected)} row(s))")
    return path
