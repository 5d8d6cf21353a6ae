"""
Processors for the OCR and batch stages.

- OCREngine / TesseractEngine: raw text recognition (scoped resources)
- DualPassReconciler: region and full-card passes merged per field
- BatchProcessor: bounded worker pool with a batch watchdog
"""

from .base import BaseProcessor, ProcessingContext
from .ocr_engine import OCREngine, TesseractEngine, CallableEngine, EngineFactory, tesseract_factory
from .dual_pass import DualPassReconciler, MERGE_PRECEDENCE, REGION_PASS, FULL_PASS
from .batch_processor import BatchProcessor, process_documents

__all__ = [
    "BaseProcessor",
    "ProcessingContext",
    "OCREngine",
    "TesseractEngine",
    "CallableEngine",
    "EngineFactory",
    "tesseract_factory",
    "DualPassReconciler",
    "MERGE_PRECEDENCE",
    "REGION_PASS",
    "FULL_PASS",
    "BatchProcessor",
    "process_documents",
]
