import numpy as np
import pytest

from idscan.exceptions import ImageDecodeError
from idscan.utils.image_utils import (
    Box,
    content_bounding_box,
    crop_box,
    decode_image,
    encode_png,
    identity_region,
    region_within,
)


def test_blank_image_content_box_is_full_frame():
    image = np.full((100, 200), 255, dtype=np.uint8)
    assert content_bounding_box(image) == Box(0, 0, 200, 100)


def test_content_box_grows_by_margin():
    image = np.full((100, 200), 255, dtype=np.uint8)
    image[20:80, 50:150] = 0
    assert content_bounding_box(image, threshold=128, margin=0.05) == Box(45, 17, 110, 66)


def test_content_box_is_clamped_to_image():
    image = np.zeros((50, 50), dtype=np.uint8)
    assert content_bounding_box(image, margin=0.5) == Box(0, 0, 50, 50)


def test_content_box_accepts_colour_images():
    image = np.full((100, 200, 3), 255, dtype=np.uint8)
    image[20:80, 50:150] = 0
    assert content_bounding_box(image, margin=0.0) == Box(50, 20, 100, 60)


def test_region_within_default_window():
    assert region_within(Box(0, 0, 200, 100), (0.05, 0.08, 0.40, 0.40)) == Box(10, 8, 80, 40)


def test_region_within_offsets_by_box_origin():
    assert region_within(Box(45, 17, 110, 66), (0.0, 0.0, 0.5, 0.5)) == Box(45, 17, 55, 33)


def test_region_within_never_leaves_box():
    region = region_within(Box(0, 0, 100, 100), (0.9, 0.9, 0.5, 0.5))
    assert region == Box(90, 90, 10, 10)


def test_identity_region_shape():
    image = np.full((100, 200), 255, dtype=np.uint8)
    image[20:80, 50:150] = 0
    cropped = identity_region(image, (0.0, 0.0, 0.5, 0.5), threshold=128, margin=0.05)
    assert cropped.shape == (33, 55)


def test_crop_box():
    image = np.arange(100, dtype=np.uint8).reshape(10, 10)
    assert crop_box(image, Box(2, 3, 4, 5)).shape == (5, 4)


def test_png_round_trip():
    image = np.full((30, 40), 200, dtype=np.uint8)
    decoded = decode_image(encode_png(image), "card.png")
    assert decoded.shape == (30, 40)
    assert int(decoded[0, 0]) == 200


@pytest.mark.parametrize("data", [b"", b"not an image"])
def test_decode_rejects_bad_bytes(data):
    with pytest.raises(ImageDecodeError) as excinfo:
        decode_image(data, "bad.jpg")
    assert excinfo.value.recoverable
    assert excinfo.value.details["file_name"] == "bad.jpg"
