from __future__ import annotations

# ruff: noqa: S101
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from solar_backend.errors import InvalidBufferError
from solar_backend.raster.color_mapper import RGBAPixelBuffer
from solar_backend.raster.encoder import encode_png


def test_encode_png_preserves_pixels() -> None:
    pixels = np.array([
        [[255, 0, 0, 255], [0, 255, 0, 128]],
        [[0, 0, 255, 0], [10, 20, 30, 40]],
        [[1, 2, 3, 4], [200, 201, 202, 203]],
    ], dtype=np.uint8)
    png = encode_png(RGBAPixelBuffer(width=2, height=3, data=pixels.tobytes()))

    assert png.startswith(b"\x89PNG\r\n\x1a\n")
    with Image.open(BytesIO(png)) as img:
        assert img.mode == "RGBA"
        assert img.size == (2, 3)
        np.testing.assert_array_equal(np.asarray(img), pixels)


@pytest.mark.parametrize("width, height, length", [
    (2, 2, 15),
    (2, 2, 17),
    (0, 2, 0),
    (3, 1, 16),
])
def test_encode_png_rejects_mismatched_buffers(width, height, length) -> None:
    with pytest.raises(InvalidBufferError):
        encode_png(RGBAPixelBuffer(width=width, height=height, data=bytes(length)))
