"""
Extraction history.

A JSON file holding every finalized record with the time it was added,
newest last. Mirrors what the user sees on the history screen: records
can be listed, deleted one at a time, cleared, and exported as CSV.
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from ..exceptions import DataPersistenceError
from ..logger import get_logger
from ..models import CSV_HEADERS, ExtractionResult

logger = get_logger(__name__)

HISTORY_CSV_HEADERS = CSV_HEADERS + ["Timestamp"]
DEFAULT_HISTORY_FILE = "extraction_history.json"


class HistoryStore:
    """
    JSON file-based history storage.

    Usage:
        store = HistoryStore(Path("output/extraction_history.json"))
        store.extend(result_set)
        print(store.to_csv())
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> List[dict[str, Any]]:
        """All history records, oldest first. A missing file is an empty history."""
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DataPersistenceError(
                f"Could not read history: {e}", file_path=str(self.path), operation="load"
            ) from e
        if not isinstance(data, list):
            raise DataPersistenceError(
                "History file is not a list of records", file_path=str(self.path), operation="load"
            )
        return data

    def _save(self, records: List[dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(records, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            raise DataPersistenceError(
                f"Could not write history: {e}", file_path=str(self.path), operation="save"
            ) from e

    def append(self, result: ExtractionResult, timestamp: Optional[str] = None) -> dict[str, Any]:
        """Add one record and return it."""
        record = result.to_history_record(timestamp)
        records = self.load()
        records.append(record)
        self._save(records)
        return record

    def extend(self, results: Iterable[ExtractionResult], timestamp: Optional[str] = None) -> int:
        """Add several records with a shared timestamp. Returns how many were added."""
        new_records = [r.to_history_record(timestamp) for r in results]
        if new_records:
            self._save(self.load() + new_records)
            logger.info(f"Added {len(new_records)} record(s) to history")
        return len(new_records)

    def delete(self, index: int) -> dict[str, Any]:
        """
        Remove one record.

        Raises:
            IndexError: When no record exists at `index`
        """
        records = self.load()
        removed = records.pop(index)
        self._save(records)
        return removed

    def clear(self) -> None:
        if self.path.exists():
            try:
                self.path.unlink()
            except OSError as e:
                raise DataPersistenceError(
                    f"Could not clear history: {e}", file_path=str(self.path), operation="save"
                ) from e
        logger.info("History cleared")

    def __len__(self) -> int:
        return len(self.load())

    def to_csv(self) -> str:
        """History as CSV, every field quoted, with a trailing Timestamp column."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(HISTORY_CSV_HEADERS)
        for record in self.load():
            number = record.get("number", "")
            document_type = record.get("documentType", "")
            writer.writerow([
                record.get("fileName", ""),
                document_type.upper(),
                number,
                record.get("name", ""),
                record.get("dob", ""),
                record.get("address", ""),
                record.get("mobile", ""),
                number if document_type == "pan" else "",
                record.get("timestamp", ""),
            ])
        return buffer.getvalue()
