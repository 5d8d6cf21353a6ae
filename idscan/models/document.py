"""
Document input model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..utils.pdf_utils import is_pdf
from .result import CardType


@dataclass
class DocumentInput:
    """
    One submitted document.

    Either `image_bytes` (sent through OCR, or read from the text layer
    when they hold a PDF) or `text` (already recognized OCR output, used
    as-is) must be set.
    """

    file_name: str
    card_type: CardType
    image_bytes: bytes = b""
    text: Optional[str] = None
    source_reference: Optional[str] = None

    def __post_init__(self):
        self.card_type = CardType.from_value(self.card_type)
        self.file_name = self.file_name.strip()

    @property
    def has_text(self) -> bool:
        return self.text is not None

    @property
    def is_pdf(self) -> bool:
        return not self.has_text and is_pdf(self.image_bytes, self.file_name)
