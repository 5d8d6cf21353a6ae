"""
Utility functions for the identity-card extraction application.
"""

from .similarity import levenshtein, similarity

from .image_utils import (
    Box,
    decode_image,
    encode_png,
    to_grayscale,
    content_bounding_box,
    region_within,
    crop_box,
    identity_region,
)

from .pdf_utils import is_pdf, read_pdf_text

from .timing import (
    format_duration,
    timed_operation,
    Timer,
)

__all__ = [
    # String similarity
    "levenshtein",
    "similarity",

    # Image utilities
    "Box",
    "decode_image",
    "encode_png",
    "to_grayscale",
    "content_bounding_box",
    "region_within",
    "crop_box",
    "identity_region",

    # PDF text layer
    "is_pdf",
    "read_pdf_text",

    # Timing utilities
    "format_duration",
    "timed_operation",
    "Timer",
]
