# solar_backend/utils/image_processing.py
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from solar_backend.errors import DecodeError
from solar_backend.raster.color_mapper import colorize, mode_for_layer_type
from solar_backend.raster.decoder import decode_geotiff
from solar_backend.raster.encoder import PNG_MIMETYPE, encode_png

TIFF_CONTENT_TYPES = ("image/tiff", "image/geotiff")


@dataclass(frozen=True)
class ProcessedImage:
    content: bytes
    mimetype: str
    passthrough: bool = False
    bounds: Optional[Tuple[float, float, float, float]] = None


def is_tiff_content_type(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    return content_type.split(";")[0].strip().lower() in TIFF_CONTENT_TYPES


def render_geotiff(data: bytes, layer_type: str) -> ProcessedImage:
    """
    Decode a GeoTIFF, colour it for the requested layer type and encode it as PNG.

    DecodeError and UnsupportedFormatError propagate to the caller.
    """
    image = decode_geotiff(data)
    mode = mode_for_layer_type(layer_type)
    rgba = colorize(image, mode)
    png = encode_png(rgba)
    logging.info(f"Rendered {layer_type or 'default'} layer as {mode.value} mode, {len(png)} bytes")
    return ProcessedImage(content=png, mimetype=PNG_MIMETYPE, bounds=image.bounds)


def process_geotiff_bytes(data: bytes, layer_type: str, content_type: Optional[str] = None) -> ProcessedImage:
    """
    Render a fetched layer for display.

    Content that is declared as something other than TIFF, or that turns out not
    to be decodable, is handed back untouched with its original content type.
    """
    if content_type and not is_tiff_content_type(content_type) and not content_type.startswith("application/octet-stream"):
        logging.info(f"Passing through {content_type} content unmodified.")
        return ProcessedImage(content=data, mimetype=content_type, passthrough=True)

    try:
        return render_geotiff(data, layer_type)
    except DecodeError as e:
        logging.warning(f"Could not decode {layer_type or 'default'} layer, passing bytes through: {e}")
        return ProcessedImage(content=data, mimetype=content_type or "application/octet-stream", passthrough=True)
