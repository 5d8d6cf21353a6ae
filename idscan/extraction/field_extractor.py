"""
Structured field extraction for Aadhaar and PAN cards.

Every field is an ordered regex cascade run against the raw OCR text, the
enhanced (post-processed) text, or both. Extraction is a pure function of
(raw text, enhanced text, card type): no state is kept between calls.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, TypeVar

from ..config import ExtractionConfig, get_config
from ..logger import get_logger
from ..models import CardType, ExtractionResult, ERROR_SENTINEL, NAME_NOT_FOUND, number_not_found
from ..normalization import PostProcessor
from . import patterns as p
from .name_extractor import NameExtractor

logger = get_logger(__name__)

T = TypeVar("T")

_ADDRESS_SPLIT = re.compile(r"[,\n]")
_MOBILE_SEPARATORS = re.compile(r"[ \-]")


def _lines(text: str) -> List[str]:
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def _unique_sources(*texts: str) -> List[str]:
    """Non-empty texts in order, without repeats."""
    seen: List[str] = []
    for text in texts:
        if text and text.strip() and text not in seen:
            seen.append(text)
    return seen


def format_address(captured: str) -> str:
    """Drop the label, split on commas and line breaks, join with ', '."""
    captured = p.ADDRESS_LABEL_PREFIX.sub("", captured)
    segments = [seg.strip(" .;:-") for seg in _ADDRESS_SPLIT.split(captured)]
    return ", ".join(seg for seg in segments if seg)


def _valid_date(day: int, month: int, year: int) -> bool:
    return 1 <= day <= 31 and 1 <= month <= 12 and 1900 <= year <= 2100


class FieldExtractor:
    """
    Orchestrates number, name, DOB, address and mobile extraction.

    Usage:
        extractor = FieldExtractor()
        result = extractor.process_text(ocr_text, CardType.AADHAAR, file_name="card.jpg")
    """

    def __init__(
        self,
        name_extractor: Optional[NameExtractor] = None,
        post_processor: Optional[PostProcessor] = None,
        config: Optional[ExtractionConfig] = None,
    ):
        self.config = config or get_config().extraction
        self.name_extractor = name_extractor or NameExtractor()
        self.post_processor = post_processor or PostProcessor(config=self.config)

    def process_text(
        self,
        raw_text: str,
        card_type: CardType | str,
        file_name: str = "",
        source_reference: Optional[str] = None,
    ) -> ExtractionResult:
        """Post-process raw OCR text, then extract."""
        try:
            enhanced = self.post_processor.enhance(raw_text or "")
        except Exception as e:
            logger.warning(f"Post-processing failed for {file_name or 'document'}: {e}")
            enhanced = raw_text or ""
        return self.extract(
            raw_text, enhanced, card_type,
            file_name=file_name, source_reference=source_reference,
        )

    def extract(
        self,
        raw_text: str,
        enhanced_text: str,
        card_type: CardType | str,
        file_name: str = "",
        source_reference: Optional[str] = None,
    ) -> ExtractionResult:
        """
        Extract all fields for one document.

        Never raises: a failing field gets its error sentinel (number/name)
        or stays absent (optional fields) and the message lands in `error`.
        """
        card_type = CardType.from_value(card_type)
        raw_text = raw_text or ""
        enhanced_text = enhanced_text or ""
        errors: List[str] = []

        number = self._safe(
            "number", errors, ERROR_SENTINEL,
            lambda: self.extract_number(raw_text, enhanced_text, card_type) or number_not_found(card_type),
        )
        name = self._safe(
            "name", errors, ERROR_SENTINEL,
            lambda: self.extract_name(raw_text, enhanced_text, card_type),
        )
        dob = self._safe("dob", errors, None, lambda: self.extract_dob(raw_text, enhanced_text))

        address = mobile = None
        if card_type is CardType.AADHAAR:
            address = self._safe(
                "address", errors, None, lambda: self.extract_address(raw_text, enhanced_text)
            )
            mobile = self._safe(
                "mobile", errors, None, lambda: self.extract_mobile(raw_text, enhanced_text)
            )

        return ExtractionResult(
            file_name=file_name,
            card_type=card_type,
            number=number,
            name=name,
            dob=dob,
            address=address,
            mobile=mobile,
            source_reference=source_reference,
            error="; ".join(errors) if errors else None,
        )

    @staticmethod
    def _safe(field_name: str, errors: List[str], fallback: T, func: Callable[[], T]) -> T:
        try:
            return func()
        except Exception as e:
            logger.warning(f"Failed to extract {field_name}: {e}")
            errors.append(f"{field_name}: {e}")
            return fallback

    # --- Number ---------------------------------------------------------------

    def extract_number(self, raw_text: str, enhanced_text: str, card_type: CardType) -> Optional[str]:
        pattern = p.CARD_NUMBER_PATTERNS[card_type]
        sources = _unique_sources(raw_text, enhanced_text)
        if card_type is CardType.PAN:
            normalizer = self.post_processor.normalizer
            sources = _unique_sources(
                raw_text, normalizer.correct_pan_numbers(raw_text),
                enhanced_text, normalizer.correct_pan_numbers(enhanced_text),
            )

        for text in sources:
            match = pattern.search(text)
            if match:
                return match.group(0)
        return None

    # --- Name -----------------------------------------------------------------

    def extract_name(self, raw_text: str, enhanced_text: str, card_type: CardType) -> str:
        for text in _unique_sources(raw_text, enhanced_text):
            found = self.name_extractor.match(text, card_type)
            if found:
                return found.value
        return NAME_NOT_FOUND

    # --- Date of birth --------------------------------------------------------

    def extract_dob(self, raw_text: str, enhanced_text: str) -> Optional[str]:
        """First labelled, then bare numeric, then textual-month date as DD/MM/YYYY."""
        sources = _unique_sources(raw_text, enhanced_text)

        for pattern in (p.DOB_LABELLED, p.DOB_BARE):
            for text in sources:
                for match in pattern.finditer(text):
                    day, month, year = (int(g) for g in match.groups())
                    if _valid_date(day, month, year):
                        return f"{day:02d}/{month:02d}/{year}"

        for text in sources:
            for match in p.DOB_TEXTUAL.finditer(text):
                day, year = int(match.group(1)), int(match.group(3))
                month = p.MONTHS[match.group(2)[:3].lower()]
                if _valid_date(day, month, year):
                    return f"{day:02d}/{month:02d}/{year}"
        return None

    # --- Address --------------------------------------------------------------

    def extract_address(self, raw_text: str, enhanced_text: str) -> Optional[str]:
        sources = _unique_sources(enhanced_text, raw_text)

        for finder in (self._labelled_address, self._keyword_address, self._relationship_address):
            for text in sources:
                captured = finder(text)
                if captured:
                    address = format_address(captured)
                    if address:
                        return address

        for text in sources:
            captured = self._middle_third(text)
            if captured:
                return format_address(captured)
        return None

    @staticmethod
    def _labelled_address(text: str) -> Optional[str]:
        match = p.ADDRESS_LABELLED.search(text)
        return match.group(1) if match else None

    @staticmethod
    def _keyword_address(text: str) -> Optional[str]:
        match = p.ADDRESS_KEYWORD.search(text)
        return match.group(0) if match else None

    @staticmethod
    def _relationship_address(text: str) -> Optional[str]:
        """From the S/O..W/O line through the first line with a PIN code."""
        lines = _lines(text)
        start = next((i for i, ln in enumerate(lines) if p.RELATIONSHIP.search(ln)), None)
        if start is None:
            return None

        collected: List[str] = []
        for line in lines[start:]:
            if p.ID_NUMBER_LINE.search(line) or p.DOB_LINE.search(line):
                continue
            pin = p.PIN_CODE.search(line)
            if pin:
                collected.append(line[:pin.end()])
                return "\n".join(collected)
            collected.append(line)
        return None

    @staticmethod
    def _middle_third(text: str) -> Optional[str]:
        lines = _lines(text)
        if not lines:
            return None
        start = len(lines) // 3
        end = max(start + 1, (2 * len(lines)) // 3)
        return "\n".join(lines[start:end])

    # --- Mobile ---------------------------------------------------------------

    def extract_mobile(self, raw_text: str, enhanced_text: str) -> Optional[str]:
        limit = self.config.mobile_scan_limit
        sources = [text[:limit] for text in _unique_sources(raw_text, enhanced_text)]

        for text in sources:
            masked = self._mask_id_numbers(text)
            match = p.MOBILE_STANDALONE.search(masked)
            if match:
                return match.group(0)

        for text in sources:
            for match in p.MOBILE_LABELLED.finditer(text):
                digits = _MOBILE_SEPARATORS.sub("", match.group(1))
                if len(digits) == 10 and digits.isdigit():
                    return digits
        return None

    @staticmethod
    def _mask_id_numbers(text: str) -> str:
        """Blank out 12-digit ID numbers so their digits never read as a mobile."""
        pattern = p.CARD_NUMBER_PATTERNS[CardType.AADHAAR]
        return pattern.sub(lambda m: "#" * len(m.group(0)), text)

