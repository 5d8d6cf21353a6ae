import os

# Keep test runs from writing log files
os.environ["LOG_TO_FILE"] = "0"

import cv2
import numpy as np
import pytest

from idscan.config import Config, reset_config
from idscan.processors import CallableEngine

ENV_KEYS = (
    "DEBUG", "DUMP_RAW_OCR", "BATCH_MAX_WORKERS", "BATCH_TIMEOUT_SEC", "DUAL_PASS",
    "PASS_WORKERS", "SIMILARITY_THRESHOLD", "MOBILE_SCAN_LIMIT", "OCR_LANGUAGES",
    "REGION_BRIGHTNESS_THRESHOLD",
)

AADHAAR_TEXT = """Government of India
Ravi Kumar
S/O Murugan
DOB: 15/08/1990
Male
Address: 12, Gandhi Street, T Nagar,
Chennai, Tamil Nadu 600 028
Mobile: 98765 43210
1234 5678 9012
"""

PAN_TEXT = """INCOME TAX DEPARTMENT
GOVT. OF INDIA
Name
RAHUL SHARMA
Father's Name
SURESH SHARMA
Date of Birth
01/02/1990
Permanent Account Number
ABCDE1234F
"""


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    monkeypatch.setenv("LOG_TO_FILE", "0")
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config():
    return Config()


def make_card_image(width=200, height=100):
    """White card with a dark block of content."""
    image = np.full((height, width), 255, dtype=np.uint8)
    cv2.rectangle(image, (10, 10), (width - 11, height - 11), 0, thickness=-1)
    return image


@pytest.fixture
def card_png():
    ok, data = cv2.imencode(".png", make_card_image())
    assert ok
    return data.tobytes()


def image_width(image_bytes):
    image = cv2.imdecode(np.frombuffer(image_bytes, dtype=np.uint8), cv2.IMREAD_GRAYSCALE)
    return image.shape[1]


@pytest.fixture
def pass_engine_factory():
    """
    Factory for engines that answer differently for the cropped region
    (narrow image) and the full card (wide image).
    """
    def build(region_text, full_text):
        def recognize(image_bytes):
            return full_text if image_width(image_bytes) >= 150 else region_text
        return lambda: CallableEngine(recognize)
    return build


def make_text_pdf(lines):
    """Single-page PDF whose text layer holds `lines`, one per text line."""
    content = ["BT", "/F1 12 Tf", "72 720 Td"]
    for idx, line in enumerate(lines):
        escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        if idx:
            content.append("0 -14 Td")
        content.append(f"({escaped}) Tj")
    content.append("ET")
    stream = "\n".join(content).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
    ]

    pdf = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(pdf))
        pdf += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(pdf)
    pdf += b"xref\n0 %d\n" % (len(objects) + 1)
    pdf += b"0000000000 65535 f \n"
    for offset in offsets:
        pdf += b"%010d 00000 n \n" % offset
    pdf += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    pdf += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(pdf)
