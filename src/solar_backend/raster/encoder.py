# solar_backend/raster/encoder.py
from io import BytesIO

import numpy as np
from PIL import Image

from solar_backend.errors import InvalidBufferError
from solar_backend.raster.color_mapper import RGBAPixelBuffer

PNG_MIMETYPE = "image/png"


def encode_png(buffer: RGBAPixelBuffer) -> bytes:
    expected = 4 * buffer.width * buffer.height
    if buffer.width <= 0 or buffer.height <= 0 or len(buffer.data) != expected:
        raise InvalidBufferError(
            f"RGBA buffer holds {len(buffer.data)} bytes, expected {expected} "
            f"for {buffer.width}x{buffer.height}"
        )

    pixels = np.frombuffer(buffer.data, dtype=np.uint8).reshape(buffer.height, buffer.width, 4)
    out = BytesIO()
    Image.fromarray(pixels).save(out, format="PNG", optimize=True)
    return out.getvalue()
