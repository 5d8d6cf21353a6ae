"""
Extraction result models.

Represents one structured record per processed identity document.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Any

from ..exceptions import ConfigurationError


class CardType(str, Enum):
    """Supported identity document types."""

    AADHAAR = "AADHAAR"
    PAN = "PAN"

    @classmethod
    def from_value(cls, value: "CardType | str") -> "CardType":
        """Parse a card type, accepting the legacy 'AADHAR' spelling."""
        if isinstance(value, CardType):
            return value
        key = str(value).strip().upper()
        if key == "AADHAR":
            key = "AADHAAR"
        try:
            return cls(key)
        except ValueError:
            raise ConfigurationError(f"Unknown card type: {value!r}", config_key="card_type")

    @property
    def document_type(self) -> str:
        """Lowercase mirror used by the persisted history."""
        return self.value.lower()


NAME_NOT_FOUND = "Name Not Found"
ERROR_SENTINEL = "Error"

CSV_HEADERS = ["File Name", "Card Type", "Number", "Name", "DOB", "Address", "Mobile", "PAN"]


def number_not_found(card_type: CardType) -> str:
    return f"{card_type.value} Number not found"


def is_sentinel(value: Optional[str]) -> bool:
    """True for empty values and the placeholders written when extraction fails."""
    if not value or not value.strip():
        return True
    if value in (NAME_NOT_FOUND, ERROR_SENTINEL):
        return True
    return value.endswith(" Number not found")


@dataclass(frozen=True)
class ExtractionResult:
    """
    Structured fields extracted from one OCR pass over one document.

    Immutable: reconciliation and corrections build a new record with
    `with_updates` instead of mutating this one. `number` and `name` are
    never empty; missing values are replaced with their sentinel.
    `address` and `mobile` only exist for Aadhaar cards.
    """

    file_name: str = ""
    card_type: CardType = CardType.AADHAAR
    number: str = ""
    name: str = ""
    dob: Optional[str] = None
    address: Optional[str] = None
    mobile: Optional[str] = None
    source_reference: Optional[str] = None

    # Failure marker for recognition errors (None = extraction ran)
    error: Optional[str] = None

    def __post_init__(self):
        card_type = CardType.from_value(self.card_type)
        object.__setattr__(self, "card_type", card_type)

        number = (self.number or "").strip()
        object.__setattr__(self, "number", number or number_not_found(card_type))

        name = (self.name or "").strip()
        object.__setattr__(self, "name", name or NAME_NOT_FOUND)

        if card_type is CardType.PAN:
            object.__setattr__(self, "address", None)
            object.__setattr__(self, "mobile", None)

    @classmethod
    def failed(
        cls,
        file_name: str,
        card_type: CardType | str,
        message: str,
        source_reference: Optional[str] = None,
    ) -> "ExtractionResult":
        """Record for a document whose recognition failed."""
        return cls(
            file_name=file_name,
            card_type=card_type,
            number=ERROR_SENTINEL,
            name=ERROR_SENTINEL,
            source_reference=source_reference,
            error=message,
        )

    @property
    def is_failed(self) -> bool:
        return self.error is not None

    @property
    def has_number(self) -> bool:
        return not is_sentinel(self.number)

    def with_updates(self, **changes: Any) -> "ExtractionResult":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["card_type"] = self.card_type.value
        return data

    def to_csv_row(self) -> list[str]:
        """Row matching CSV_HEADERS."""
        return [
            self.file_name,
            self.card_type.value,
            self.number,
            self.name,
            self.dob or "",
            self.address or "",
            self.mobile or "",
            self.number if self.card_type is CardType.PAN else "",
        ]

    def to_history_record(self, timestamp: Optional[str] = None) -> dict[str, Any]:
        """Entry appended to the persisted extraction history."""
        record: dict[str, Any] = {
            "documentType": self.card_type.document_type,
            "fileName": self.file_name,
            "name": self.name,
            "number": self.number,
            "timestamp": timestamp or datetime.now().isoformat(timespec="seconds"),
        }
        for key, value in (("dob", self.dob), ("address", self.address), ("mobile", self.mobile)):
            if value:
                record[key] = value
        return record
