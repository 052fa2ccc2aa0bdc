# solar_backend/raster/decoder.py
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from rasterio.errors import RasterioError
from rasterio.io import MemoryFile
from pyproj import Transformer

from solar_backend.errors import DecodeError, UnsupportedFormatError

SUPPORTED_BAND_COUNTS = (1, 3)

# Little- and big-endian TIFF, plus BigTIFF.
TIFF_SIGNATURES = (b"II*\x00", b"MM\x00*", b"II+\x00", b"MM\x00+")


@dataclass(frozen=True)
class RasterImage:
    """
    A decoded raster. Each band is a flat, read-only array of
    width * height samples in row-major order, in the source dtype.

    `bounds` is (lat_min, lat_max, lon_min, lon_max) in EPSG:4326 when the
    source carries a CRS, otherwise None.
    """
    width: int
    height: int
    bands: Tuple[np.ndarray, ...]
    bounds: Optional[Tuple[float, float, float, float]] = None

    @property
    def band_count(self) -> int:
        return len(self.bands)

    @property
    def dtype(self) -> str:
        return self.bands[0].dtype.name


def looks_like_tiff(data: bytes) -> bool:
    return bool(data) and data[:4] in TIFF_SIGNATURES


def geographic_bounds(src) -> Optional[Tuple[float, float, float, float]]:
    """Return the dataset footprint as (lat_min, lat_max, lon_min, lon_max)."""
    if src.crs is None:
        logging.warning("GeoTIFF has no CRS information.")
        return None

    bounds = src.bounds
    if src.crs.to_epsg() == 4326:
        lon_min, lat_min = bounds.left, bounds.bottom
        lon_max, lat_max = bounds.right, bounds.top
    else:
        transformer = Transformer.from_crs(src.crs, "EPSG:4326", always_xy=True)
        lon_min, lat_min = transformer.transform(bounds.left, bounds.bottom)
        lon_max, lat_max = transformer.transform(bounds.right, bounds.top)

    return (float(lat_min), float(lat_max), float(lon_min), float(lon_max))


def decode_geotiff(data: bytes) -> RasterImage:
    """
    Parse GeoTIFF bytes into a RasterImage.

    Raises DecodeError when the bytes are not a readable raster and
    UnsupportedFormatError when the band count is not 1 or 3.
    """
    if not data:
        raise DecodeError("Empty raster payload")
    if not looks_like_tiff(data):
        raise DecodeError("Payload is not a TIFF stream")

    try:
        with MemoryFile(data) as memfile:
            with memfile.open() as src:
                if src.count not in SUPPORTED_BAND_COUNTS:
                    raise UnsupportedFormatError(src.count)

                width, height = src.width, src.height
                img = src.read()
                bounds = geographic_bounds(src)
    except RasterioError as e:
        raise DecodeError(f"Could not read raster: {e}") from e

    bands = []
    for band in img:
        flat = np.ascontiguousarray(band).reshape(width * height)
        flat.setflags(write=False)
        bands.append(flat)

    logging.info(f"Decoded raster: {width}x{height}, {len(bands)} band(s), dtype {img.dtype}")
    return RasterImage(width=width, height=height, bands=tuple(bands), bounds=bounds)
