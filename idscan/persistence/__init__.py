"""
Persistence: CSV export and extraction history.
"""

from .csv_export import (
    ALL_CARDS,
    default_csv_name,
    filter_results,
    results_to_csv,
    write_results_csv,
)
from .history_store import HistoryStore, HISTORY_CSV_HEADERS, DEFAULT_HISTORY_FILE

__all__ = [
    "ALL_CARDS",
    "default_csv_name",
    "filter_results",
    "results_to_csv",
    "write_results_csv",
    "HistoryStore",
    "HISTORY_CSV_HEADERS",
    "DEFAULT_HISTORY_FILE",
]
