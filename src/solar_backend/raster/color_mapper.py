# solar_backend/raster/color_mapper.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

from solar_backend.raster.decoder import RasterImage
from solar_backend.raster.normalizer import normalize_band


class VisualizationMode(Enum):
    TRUECOLOR = "truecolor"
    MASK = "mask"
    HEAT_RAMP = "heat_ramp"


LAYER_TYPE_MODES = {
    "rgb": VisualizationMode.TRUECOLOR,
    "mask": VisualizationMode.MASK,
    "flux": VisualizationMode.HEAT_RAMP,
}

MASK_THRESHOLD = 0.5
MASK_ROOF_RGBA = (255, 255, 255, 180)
MASK_EMPTY_RGBA = (0, 0, 0, 0)

HEAT_GAMMA = 0.5
HEAT_ALPHA_SCALE = 200
HEAT_ALPHA_FLOOR = 55

# blue -> cyan -> green -> yellow -> red, one segment per quarter of the intensity range
HEAT_STOPS = np.array([
    [0, 0, 255],
    [0, 255, 255],
    [0, 255, 0],
    [255, 255, 0],
    [255, 0, 0],
], dtype=np.float64)


@dataclass(frozen=True)
class RGBAPixelBuffer:
    """Row-major R,G,B,A bytes, 4 * width * height long."""
    width: int
    height: int
    data: bytes

    def as_array(self) -> np.ndarray:
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, 4)


def mode_for_layer_type(layer_type: str) -> VisualizationMode:
    """rgb / mask / flux select their own mode; anything else renders as true colour."""
    return LAYER_TYPE_MODES.get((layer_type or "").lower(), VisualizationMode.TRUECOLOR)


def _to_bytes(values: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def _finite_unit(normalized: np.ndarray) -> np.ndarray:
    values = np.array(normalized, dtype=np.float64)
    values[~np.isfinite(values)] = 0.0
    return np.clip(values, 0.0, 1.0)


def heat_ramp(normalized: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map normalized flux to colour.

    A gamma of 0.5 lifts low and mid values before the value is run through
    four linear segments (blue, cyan, green, yellow, red). Alpha grows with
    intensity from 55 to 255 so that weak flux stays faintly visible.

    Returns an (N, 3) uint8 RGB array and an (N,) uint8 alpha array.
    """
    intensity = np.power(_finite_unit(normalized), HEAT_GAMMA)

    scaled = intensity * (len(HEAT_STOPS) - 1)
    segment = np.minimum(scaled.astype(np.int64), len(HEAT_STOPS) - 2)
    fraction = (scaled - segment)[:, np.newaxis]

    start = HEAT_STOPS[segment]
    end = HEAT_STOPS[segment + 1]
    rgb = start + (end - start) * fraction

    alpha = intensity * HEAT_ALPHA_SCALE + HEAT_ALPHA_FLOOR
    return _to_bytes(rgb), _to_bytes(alpha)


def mask_pixels(normalized: np.ndarray) -> np.ndarray:
    """Strictly above the threshold is roof; returns an (N, 4) uint8 array."""
    roof = _finite_unit(normalized) > MASK_THRESHOLD
    return np.where(roof[:, np.newaxis],
                    np.array(MASK_ROOF_RGBA, dtype=np.uint8),
                    np.array(MASK_EMPTY_RGBA, dtype=np.uint8))


def _truecolor_channel(band: np.ndarray) -> np.ndarray:
    if band.dtype == np.uint8:
        return band.copy()
    return _to_bytes(normalize_band(band) * 255.0)


def colorize(image: RasterImage, mode: VisualizationMode) -> RGBAPixelBuffer:
    pixel_count = image.width * image.height
    rgba = np.zeros((pixel_count, 4), dtype=np.uint8)

    if mode is VisualizationMode.TRUECOLOR:
        channels = [_truecolor_channel(band) for band in image.bands]
        if len(channels) == 1:
            channels = channels * 3
        for i, channel in enumerate(channels[:3]):
            rgba[:, i] = channel
        rgba[:, 3] = 255
    else:
        if image.band_count > 1:
            logging.warning(f"{mode.value} visualisation of a {image.band_count}-band raster uses band 1 only.")
        normalized = normalize_band(image.bands[0])
        if mode is VisualizationMode.MASK:
            rgba[:] = mask_pixels(normalized)
        else:
            rgb, alpha = heat_ramp(normalized)
            rgba[:, :3] = rgb
            rgba[:, 3] = alpha

    return RGBAPixelBuffer(width=image.width, height=image.height, data=rgba.tobytes())
