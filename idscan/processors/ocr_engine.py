"""
OCR engines.

An engine turns encoded image bytes into raw text. Engines hold native
resources and are used as context managers: every recognition pass
creates its own engine and releases it on exit.
"""

from __future__ import annotations

import io
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

import pytesseract
from PIL import Image

from ..config import OCRConfig, get_config
from ..exceptions import OCRError, TesseractNotFoundError
from ..logger import get_logger

logger = get_logger(__name__)


class OCREngine(ABC):
    """Text recognizer for one pass."""

    name: str = "engine"

    @abstractmethod
    def recognize(self, image_bytes: bytes, file_name: str = "") -> str:
        """
        Recognize text in an encoded image.

        Raises:
            OCRError: When recognition fails
        """

    def close(self) -> None:
        """Release engine resources."""

    def __enter__(self) -> "OCREngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TesseractEngine(OCREngine):
    """Tesseract-backed engine (pytesseract)."""

    name = "tesseract"

    def __init__(self, config: Optional[OCRConfig] = None):
        self.config = config or get_config().ocr
        self._initialize()

    def _initialize(self) -> None:
        tesseract_path = self.config.tesseract_path
        if not tesseract_path and os.name == "nt":
            default_path = r"C:\Program Files\Tesseract-OCR\tesseract.exe"
            if Path(default_path).exists():
                tesseract_path = default_path
        if tesseract_path:
            pytesseract.pytesseract.tesseract_cmd = tesseract_path

        try:
            version = pytesseract.get_tesseract_version()
        except Exception as e:
            logger.error(f"Tesseract not available: {e}")
            raise TesseractNotFoundError(tesseract_path or None) from e
        logger.debug(f"Tesseract {version} ready (languages: {self.config.languages})")

    def recognize(self, image_bytes: bytes, file_name: str = "") -> str:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                return pytesseract.image_to_string(
                    image,
                    lang=self.config.languages,
                    config=self.config.tesseract_config,
                )
        except Exception as e:
            raise OCRError(
                f"Text recognition failed: {e}",
                file_name=file_name or None,
                languages=self.config.languages,
            ) from e


class CallableEngine(OCREngine):
    """
    Wraps a plain function as an engine.

    Used for alternative recognizers and for tests.
    """

    name = "callable"

    def __init__(self, func: Callable[[bytes], str]):
        self._func = func

    def recognize(self, image_bytes: bytes, file_name: str = "") -> str:
        try:
            return self._func(image_bytes)
        except OCRError:
            raise
        except Exception as e:
            raise OCRError(f"Text recognition failed: {e}", file_name=file_name or None) from e


EngineFactory = Callable[[], OCREngine]


def tesseract_factory(config: Optional[OCRConfig] = None) -> EngineFactory:
    """Factory creating a fresh Tesseract engine per pass."""
    ocr_config = config or get_config().ocr
    return lambda: TesseractEngine(ocr_config)
