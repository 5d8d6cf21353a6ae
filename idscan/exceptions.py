"""
Custom exceptions for the identity-card extraction application.

All application-specific exceptions inherit from IdScanError.
"""

from __future__ import annotations

from typing import Optional, Any


class IdScanError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (for debugging)
        recoverable: Whether the batch can continue after this error
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(IdScanError):
    """
    Invalid or missing configuration.

    Examples:
        - Unknown card type requested
        - Invalid value for configuration option
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details=details, recoverable=False)


class OCRError(IdScanError):
    """
    Text recognition failed for a single image.

    Recoverable: the document is recorded with error sentinels and the
    batch continues.
    """

    def __init__(
        self,
        message: str,
        file_name: Optional[str] = None,
        languages: Optional[str] = None
    ):
        details = {}
        if file_name:
            details["file_name"] = file_name
        if languages:
            details["languages"] = languages
        super().__init__(message, details=details, recoverable=True)


class EngineInitializationError(OCRError):
    """The OCR engine could not be created at all. Fatal for the batch."""

    def __init__(self, message: str, engine: Optional[str] = None):
        super().__init__(message)
        if engine:
            self.details["engine"] = engine
        self.recoverable = False


class TesseractNotFoundError(EngineInitializationError):
    """Tesseract OCR is not installed or not accessible."""

    def __init__(self, tesseract_path: Optional[str] = None):
        message = (
            "Tesseract OCR not found. Please install Tesseract:\n"
            "  - Windows: https://github.com/UB-Mannheim/tesseract/wiki\n"
            "  - macOS: brew install tesseract\n"
            "  - Ubuntu: sudo apt install tesseract-ocr"
        )
        super().__init__(message, engine="tesseract")
        if tesseract_path:
            self.details["tesseract_path_tried"] = tesseract_path


class ImageDecodeError(IdScanError):
    """
    Image bytes could not be decoded.

    Examples:
        - Truncated upload
        - Unsupported file format
    """

    def __init__(self, message: str, file_name: Optional[str] = None):
        details = {"file_name": file_name} if file_name else None
        super().__init__(message, details=details, recoverable=True)


class BatchTimeoutError(IdScanError):
    """The batch watchdog expired before every document finished."""

    def __init__(
        self,
        timeout_sec: float,
        items_processed: int = 0,
        items_total: int = 0
    ):
        message = (
            f"Batch timed out after {timeout_sec:g}s "
            f"({items_processed}/{items_total} documents completed)"
        )
        details = {
            "timeout_sec": timeout_sec,
            "items_processed": items_processed,
            "items_total": items_total,
        }
        super().__init__(message, details=details, recoverable=True)
        self.items_processed = items_processed
        self.items_total = items_total


class DataPersistenceError(IdScanError):
    """
    Failed to save or load data.

    Examples:
        - File write permission denied
        - Corrupt history line
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: Optional[str] = None  # "save" or "load"
    ):
        details = {}
        if file_path:
            details["file_path"] = file_path
        if operation:
            details["operation"] = operation
        super().__init__(message, details=details, recoverable=False)
