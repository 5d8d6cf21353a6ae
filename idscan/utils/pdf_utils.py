"""
PDF text-layer reading.

Card PDFs exported from e-Aadhaar or NSDL downloads carry a text layer, so
their text is read directly instead of being sent through OCR.
"""

from __future__ import annotations

from io import BytesIO
from typing import Optional

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from ..exceptions import ImageDecodeError

PDF_MAGIC = b"%PDF-"


def is_pdf(data: bytes, file_name: Optional[str] = None) -> bool:
    """True for PDF bytes or a file named *.pdf."""
    if data[:1024].lstrip().startswith(PDF_MAGIC):
        return True
    return bool(file_name) and file_name.lower().endswith(".pdf")


def read_pdf_text(data: bytes, file_name: Optional[str] = None) -> str:
    """
    Text of every page, one page per block, in page order.

    Raises:
        ImageDecodeError: the PDF is unreadable or has no text layer
            (a scanned PDF)
    """
    try:
        reader = PdfReader(BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PyPdfError, ValueError) as e:
        raise ImageDecodeError(f"Unreadable PDF: {e}", file_name=file_name) from e

    text = "\n".join(page.strip() for page in pages if page.strip())
    if not text:
        raise ImageDecodeError("PDF has no text layer", file_name=file_name)
    return text
