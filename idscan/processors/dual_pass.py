"""
Dual-pass extraction and reconciliation.

Aadhaar cards are recognized twice: once on the identity region (the
name/relationship/address block cropped from the detected content box)
and once on the whole card. The two passes run concurrently with their
own engine instances and are merged field by field with fixed precedence.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional, Tuple

from ..config import Config, get_config
from ..exceptions import OCRError
from ..logger import get_logger
from ..models import CardType, DocumentInput, ExtractionResult, is_sentinel
from ..extraction import FieldExtractor
from ..utils.image_utils import decode_image, encode_png, identity_region
from ..utils.pdf_utils import read_pdf_text
from ..utils.timing import timed_operation
from .ocr_engine import EngineFactory, tesseract_factory

logger = get_logger(__name__)

REGION_PASS = "region"
FULL_PASS = "full"

# field -> (preferred pass, fallback pass)
MERGE_PRECEDENCE: Dict[str, Tuple[str, str]] = {
    "number": (FULL_PASS, REGION_PASS),
    "name": (REGION_PASS, FULL_PASS),
    "dob": (FULL_PASS, REGION_PASS),
    "address": (REGION_PASS, FULL_PASS),
    "mobile": (REGION_PASS, FULL_PASS),
}


def _pick(preferred: Optional[str], fallback: Optional[str]) -> Optional[str]:
    """First non-empty value; the preferred one when both are placeholders."""
    if not is_sentinel(preferred):
        return preferred
    if not is_sentinel(fallback):
        return fallback
    return preferred or fallback


class DualPassReconciler:
    """
    Produces one final record per document.

    Usage:
        reconciler = DualPassReconciler(tesseract_factory())
        result = reconciler.run(DocumentInput("card.jpg", CardType.AADHAAR, image_bytes=data))
    """

    def __init__(
        self,
        engine_factory: Optional[EngineFactory] = None,
        extractor: Optional[FieldExtractor] = None,
        config: Optional[Config] = None,
    ):
        self.config = config or get_config()
        self.engine_factory = engine_factory or tesseract_factory(self.config.ocr)
        self.extractor = extractor or FieldExtractor(config=self.config.extraction)

    def run(self, document: DocumentInput) -> ExtractionResult:
        """
        Extract one document.

        Raises:
            ImageDecodeError: The image bytes could not be decoded, or a
                PDF has no readable text layer
            EngineInitializationError: No OCR engine could be created
        """
        if document.has_text:
            return self.extractor.process_text(
                document.text,
                document.card_type,
                file_name=document.file_name,
                source_reference=document.source_reference,
            )

        if document.is_pdf:
            logger.debug(f"Reading PDF text layer for {document.file_name}")
            return self.extractor.process_text(
                read_pdf_text(document.image_bytes, document.file_name),
                document.card_type,
                file_name=document.file_name,
                source_reference=document.source_reference,
            )

        image = decode_image(document.image_bytes, document.file_name)

        if document.card_type is CardType.PAN or not self.config.batch.dual_pass:
            return self._run_pass(FULL_PASS, encode_png(image), document)

        region = self.config.region
        cropped = identity_region(
            image,
            region.as_tuple(),
            threshold=region.brightness_threshold,
            margin=region.content_margin,
        )
        inputs = {REGION_PASS: encode_png(cropped), FULL_PASS: encode_png(image)}

        workers = max(1, self.config.batch.pass_workers)
        if workers == 1:
            results = {label: self._run_pass(label, data, document) for label, data in inputs.items()}
        else:
            with ThreadPoolExecutor(max_workers=min(workers, len(inputs))) as executor:
                futures = {
                    label: executor.submit(self._run_pass, label, data, document)
                    for label, data in inputs.items()
                }
                results = {label: future.result() for label, future in futures.items()}

        return self.merge(results[REGION_PASS], results[FULL_PASS])

    def _run_pass(self, label: str, image_bytes: bytes, document: DocumentInput) -> ExtractionResult:
        with timed_operation(f"{label} pass {document.file_name}", logger):
            with self.engine_factory() as engine:
                try:
                    raw_text = engine.recognize(image_bytes, document.file_name)
                except OCRError as e:
                    if not e.recoverable:
                        raise
                    logger.warning(f"{label} pass failed for {document.file_name}: {e.message}")
                    return ExtractionResult.failed(
                        document.file_name,
                        document.card_type,
                        e.message,
                        source_reference=document.source_reference,
                    )

        if self.config.dump_raw_ocr:
            logger.debug(f"Raw OCR ({label}) {document.file_name}:\n{raw_text}")

        return self.extractor.process_text(
            raw_text,
            document.card_type,
            file_name=document.file_name,
            source_reference=document.source_reference,
        )

    @staticmethod
    def merge(region: ExtractionResult, full: ExtractionResult) -> ExtractionResult:
        """
        Merge the region-pass and full-pass records into a new one.

        Neither input is modified. The merged record carries an error only
        when both passes failed.
        """
        passes = {REGION_PASS: region, FULL_PASS: full}
        merged = {
            field_name: _pick(
                getattr(passes[first], field_name),
                getattr(passes[second], field_name),
            )
            for field_name, (first, second) in MERGE_PRECEDENCE.items()
        }

        error = None
        if region.is_failed and full.is_failed:
            error = "; ".join(dict.fromkeys(e for e in (region.error, full.error) if e))

        return full.with_updates(
            file_name=full.file_name or region.file_name,
            source_reference=full.source_reference or region.source_reference,
            error=error,
            **merged,
        )
