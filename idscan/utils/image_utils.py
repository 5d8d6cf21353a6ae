"""
Image utility functions.

Decoding, encoding and the pure geometric transforms used to cut the
identity region out of a scanned card.
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

import cv2
import numpy as np

from ..exceptions import ImageDecodeError


class Box(NamedTuple):
    """Pixel rectangle: top-left corner plus size."""
    x: int
    y: int
    w: int
    h: int


def decode_image(data: bytes, file_name: Optional[str] = None) -> np.ndarray:
    """
    Decode image bytes to a grayscale array.

    Raises:
        ImageDecodeError: if the bytes are empty or not a supported image
    """
    if not data:
        raise ImageDecodeError("Empty image data", file_name=file_name)

    buffer = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buffer, cv2.IMREAD_GRAYSCALE)
    if img is None:
        raise ImageDecodeError("Unsupported or corrupt image", file_name=file_name)
    return img


def encode_png(image: np.ndarray) -> bytes:
    """Encode an array as PNG bytes."""
    success, data = cv2.imencode(".png", image)
    if not success:
        raise ImageDecodeError("Failed to encode image as PNG")
    return data.tobytes()


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Return a single-channel view of a gray, BGR or BGRA image."""
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def content_bounding_box(
    image: np.ndarray,
    threshold: int = 128,
    margin: float = 0.05
) -> Box:
    """
    Bounding box of the document content.

    Every pixel darker than `threshold` counts as content. The tight box
    around those pixels is grown by `margin` (fraction of its own width and
    height) on each side and clamped to the image. An image with no content
    pixels yields the full frame.
    """
    gray = to_grayscale(image)
    img_h, img_w = gray.shape[:2]

    ys, xs = np.nonzero(gray < threshold)
    if xs.size == 0:
        return Box(0, 0, img_w, img_h)

    x1, x2 = int(xs.min()), int(xs.max()) + 1
    y1, y2 = int(ys.min()), int(ys.max()) + 1

    pad_x = int(round((x2 - x1) * margin))
    pad_y = int(round((y2 - y1) * margin))

    x1 = max(0, x1 - pad_x)
    y1 = max(0, y1 - pad_y)
    x2 = min(img_w, x2 + pad_x)
    y2 = min(img_h, y2 + pad_y)

    return Box(x1, y1, x2 - x1, y2 - y1)


def region_within(box: Box, window: Tuple[float, float, float, float]) -> Box:
    """
    Percentage window inside a box.

    Args:
        box: Reference box (usually the content box)
        window: (left, top, width, height) as fractions of the box size

    Returns:
        Window in absolute pixel coordinates, at least 1x1 and inside box
    """
    left, top, width, height = window

    x = box.x + int(round(box.w * left))
    y = box.y + int(round(box.h * top))
    w = max(1, int(round(box.w * width)))
    h = max(1, int(round(box.h * height)))

    # Clamp to the reference box
    x = min(x, box.x + box.w - 1)
    y = min(y, box.y + box.h - 1)
    w = min(w, box.x + box.w - x)
    h = min(h, box.y + box.h - y)

    return Box(x, y, w, h)


def crop_box(image: np.ndarray, box: Box) -> np.ndarray:
    """Crop image to box (pixel coordinates)."""
    return image[box.y:box.y + box.h, box.x:box.x + box.w]


def identity_region(
    image: np.ndarray,
    window: Tuple[float, float, float, float],
    threshold: int = 128,
    margin: float = 0.05
) -> np.ndarray:
    """
    Crop the name/relationship/address block of a card.

    Detects the content box first so the window is relative to the card,
    not to the scan's absolute resolution or surrounding whitespace.
    """
    content = content_bounding_box(image, threshold=threshold, margin=margin)
    return crop_box(image, region_within(content, window))
