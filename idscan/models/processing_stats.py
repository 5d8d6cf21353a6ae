"""
Batch processing statistics.

Tracks counts and status text for one batch run.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Any


@dataclass
class BatchStats:
    """
    Outcome counters for a batch.

    `notifications` collects user-facing messages for skipped or failed
    documents so nothing submitted disappears silently.
    """

    total_documents: int = 0
    completed: int = 0
    failed: int = 0  # recognition errors, recorded with sentinels
    skipped: int = 0  # undecodable images
    replaced: int = 0  # Aadhaar re-scans that replaced an earlier record

    # Status
    status: str = "pending"  # pending, processing, completed, timed_out, failed
    timed_out: bool = False
    error_message: str = ""

    # Timestamps
    started_at: str = ""
    completed_at: str = ""
    duration_sec: float = 0.0

    notifications: List[str] = field(default_factory=list)

    def start(self, total_documents: int) -> None:
        self.total_documents = total_documents
        self.status = "processing"
        self.started_at = datetime.now().isoformat(timespec="seconds")

    def finish(self, status: str, duration_sec: float) -> None:
        self.status = status
        self.duration_sec = duration_sec
        self.completed_at = datetime.now().isoformat(timespec="seconds")

    def notify(self, message: str) -> None:
        self.notifications.append(message)

    @property
    def processed(self) -> int:
        """Documents that reached a final state (completed, failed or skipped)."""
        return self.completed + self.failed + self.skipped

    @property
    def status_text(self) -> str:
        """Progress line shown to the user."""
        text = f"Processed {self.processed}/{self.total_documents} document(s)"
        if self.failed:
            text += f", {self.failed} failed"
        if self.skipped:
            text += f", {self.skipped} skipped"
        if self.timed_out:
            text += " (timed out)"
        return text

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["processed"] = self.processed
        return data
