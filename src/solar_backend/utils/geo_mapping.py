# solar_backend/utils/geo_mapping.py
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from solar_backend.errors import EmptyInputError

# Rough conversion used for on-screen sizing; longitude shrinks with cos(latitude).
METERS_PER_DEGREE = 111000.0

# Padding is max(span * ratio, floor) on each side of each axis.
BOUNDS_PADDING_RATIO = 0.5
BOUNDS_MIN_PADDING_DEG = 0.0001

# Panel sizes were tuned on a 400x300 canvas and scale with the canvas from there.
REFERENCE_CANVAS = (400, 300)
PANEL_WIDTH_PX_RANGE = (8, 40)
PANEL_HEIGHT_PX_RANGE = (6, 30)

OPTIMAL_AZIMUTH = 180.0
OPTIMAL_PITCH = 30.0
AZIMUTH_RANGE = 180.0
PITCH_RANGE = 60.0
MAX_PENALTY = 0.4
MIN_EFFICIENCY = 0.6

MIN_ZOOM = 15
MAX_ZOOM = 21


class Orientation(Enum):
    LANDSCAPE = "LANDSCAPE"
    PORTRAIT = "PORTRAIT"

    @classmethod
    def parse(cls, value) -> "Orientation":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.LANDSCAPE


@dataclass(frozen=True)
class PanelFootprint:
    center_lat: float
    center_lng: float
    yearly_energy: float = 0.0
    orientation: Orientation = Orientation.LANDSCAPE
    segment_index: Optional[int] = None


@dataclass(frozen=True)
class GeoBounds:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float
    center_lat: float
    center_lng: float

    @property
    def lat_span(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lng_span(self) -> float:
        return self.max_lng - self.min_lng

    def to_dict(self):
        return {
            "minLat": self.min_lat,
            "maxLat": self.max_lat,
            "minLng": self.min_lng,
            "maxLng": self.max_lng,
            "centerLat": self.center_lat,
            "centerLng": self.center_lng,
        }


def compute_bounds(panels: Sequence[PanelFootprint]) -> GeoBounds:
    """
    Bounding box around all panel centres, padded on every side by half the
    span of that axis or BOUNDS_MIN_PADDING_DEG, whichever is larger. The
    centre is taken from the unpadded extremes.
    """
    if not panels:
        raise EmptyInputError("Cannot compute bounds without panels")

    lats = [p.center_lat for p in panels]
    lngs = [p.center_lng for p in panels]
    min_lat, max_lat = min(lats), max(lats)
    min_lng, max_lng = min(lngs), max(lngs)

    lat_padding = max((max_lat - min_lat) * BOUNDS_PADDING_RATIO, BOUNDS_MIN_PADDING_DEG)
    lng_padding = max((max_lng - min_lng) * BOUNDS_PADDING_RATIO, BOUNDS_MIN_PADDING_DEG)

    return GeoBounds(
        min_lat=min_lat - lat_padding,
        max_lat=max_lat + lat_padding,
        min_lng=min_lng - lng_padding,
        max_lng=max_lng + lng_padding,
        center_lat=(min_lat + max_lat) / 2,
        center_lng=(min_lng + max_lng) / 2,
    )


def to_pixel(lat: float, lng: float, bounds: Optional[GeoBounds],
             canvas_width: float, canvas_height: float) -> Optional[Tuple[float, float]]:
    """Canvas (x, y) for a coordinate; north is up. Returns None without bounds."""
    if bounds is None:
        return None

    normalized_x = (lng - bounds.min_lng) / bounds.lng_span
    # Row 0 is the top of the canvas, latitude grows northwards.
    normalized_y = (bounds.max_lat - lat) / bounds.lat_span
    return normalized_x * canvas_width, normalized_y * canvas_height


def _clamp(value, bounds_range):
    low, high = bounds_range
    return max(low, min(high, value))


def panel_size_on_canvas(bounds: GeoBounds, canvas_width: float, canvas_height: float,
                         real_width_meters: float, real_height_meters: float) -> Tuple[float, float]:
    """On-screen (width, height) in pixels for a panel of the given real size."""
    meters_per_degree_lat = METERS_PER_DEGREE
    meters_per_degree_lng = METERS_PER_DEGREE * math.cos(math.radians(bounds.center_lat))

    width_px = (real_width_meters / meters_per_degree_lng) * (canvas_width / bounds.lng_span)
    height_px = (real_height_meters / meters_per_degree_lat) * (canvas_height / bounds.lat_span)

    ref_width, ref_height = REFERENCE_CANVAS
    scale = min(canvas_width / ref_width, canvas_height / ref_height)

    return (_clamp(width_px * scale, PANEL_WIDTH_PX_RANGE),
            _clamp(height_px * scale, PANEL_HEIGHT_PX_RANGE))


def panel_efficiency(azimuth_degrees: float, pitch_degrees: float) -> float:
    """
    Rough orientation score in [0.6, 1.0], for colouring only.

    Averages a penalty for facing away from due south over 180 degrees and a
    penalty for leaving a 30 degree pitch over 60 degrees; each term bottoms
    out at 0.6. This is a display heuristic, not an irradiance model.
    """
    azimuth_diff = abs((azimuth_degrees or 0.0) - OPTIMAL_AZIMUTH)
    pitch_diff = abs((pitch_degrees or 0.0) - OPTIMAL_PITCH)

    azimuth_term = max(MIN_EFFICIENCY, 1 - (azimuth_diff / AZIMUTH_RANGE) * MAX_PENALTY)
    pitch_term = max(MIN_EFFICIENCY, 1 - (pitch_diff / PITCH_RANGE) * MAX_PENALTY)
    return (azimuth_term + pitch_term) / 2


def optimal_zoom(bounds: GeoBounds) -> int:
    """Static-map zoom level that fits the bounds, within [15, 21]."""
    lat_zoom = math.floor(math.log2(360 / bounds.lat_span)) - 1
    lng_zoom = math.floor(math.log2(360 / bounds.lng_span)) - 1
    return max(MIN_ZOOM, min(MAX_ZOOM, min(lat_zoom, lng_zoom)))


def energy_color(relative_energy: float) -> str:
    if relative_energy > 0.8:
        return "#10b981"
    if relative_energy > 0.6:
        return "#3b82f6"
    if relative_energy > 0.4:
        return "#f59e0b"
    if relative_energy > 0.2:
        return "#ef4444"
    return "#6b7280"


def efficiency_color(efficiency: float) -> str:
    if efficiency > 0.9:
        return "#10b981"
    if efficiency > 0.8:
        return "#3b82f6"
    if efficiency > 0.7:
        return "#f59e0b"
    return "#ef4444"
