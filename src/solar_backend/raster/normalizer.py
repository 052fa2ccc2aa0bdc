# solar_backend/raster/normalizer.py
from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class BandStats:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


def band_stats(band: np.ndarray) -> BandStats:
    """
    Min/max over the finite samples of a band. A constant band gets
    max = min + 1 so the span is never zero; a band with no finite
    samples is treated as the range [0, 1].
    """
    values = np.asarray(band, dtype=np.float64)
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return BandStats(0.0, 1.0)

    band_min = float(finite.min())
    band_max = float(finite.max())
    if band_max == band_min:
        band_max = band_min + 1.0
    return BandStats(band_min, band_max)


def normalize_band(band: np.ndarray, stats: Optional[BandStats] = None) -> np.ndarray:
    """Map samples into [0, 1] as float64. Non-finite samples become 0."""
    if stats is None:
        stats = band_stats(band)

    values = np.asarray(band, dtype=np.float64)
    with np.errstate(invalid="ignore", over="ignore"):
        normalized = (values - stats.min) / stats.span
    normalized[~np.isfinite(normalized)] = 0.0
    return np.clip(normalized, 0.0, 1.0)
