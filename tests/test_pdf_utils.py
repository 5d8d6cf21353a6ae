import pytest

from idscan.exceptions import ImageDecodeError
from idscan.utils import is_pdf, read_pdf_text

from conftest import make_text_pdf


def test_detects_pdf_by_content_or_name():
    assert is_pdf(make_text_pdf(["Ravi Kumar"]))
    assert is_pdf(b"not inspected", "scan.PDF")
    assert not is_pdf(b"\x89PNG\r\n\x1a\n", "front.png")


def test_reads_text_layer():
    text = read_pdf_text(make_text_pdf(["Ravi Kumar", "S/O Murugan", "1234 5678 9012"]))
    assert "Ravi Kumar" in text
    assert "S/O Murugan" in text
    assert "1234 5678 9012" in text


def test_scanned_pdf_without_text_layer():
    with pytest.raises(ImageDecodeError) as excinfo:
        read_pdf_text(make_text_pdf([]), "scan.pdf")
    assert excinfo.value.details["file_name"] == "scan.pdf"


def test_truncated_pdf():
    with pytest.raises(ImageDecodeError):
        read_pdf_text(b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog")
