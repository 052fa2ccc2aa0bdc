# solar_backend/panel_layout/coordinate_strategy.py
from typing import List, Sequence

from solar_backend.errors import EmptyInputError
from solar_backend.utils.geo_mapping import (
    GeoBounds, Orientation, PanelFootprint, compute_bounds, energy_color,
    panel_size_on_canvas, to_pixel,
)

from .base_strategy import PlacementStrategy
from .records import PanelPlacement

PANEL_WIDTH_METERS = 1.65
PANEL_HEIGHT_METERS = 0.99
# yearlyEnergyDcKwh treated as a full-strength panel when colouring
REFERENCE_PANEL_ENERGY_KWH = 800.0


class CoordinatePlacement(PlacementStrategy):
    """Draws each panel at the coordinates the provider reported for it."""

    name = "coordinates"

    def __init__(self, panels: Sequence[PanelFootprint]):
        if not panels:
            raise EmptyInputError("Coordinate placement needs at least one panel")
        self.panels = list(panels)
        # Bounds cover every panel so the frame stays put as the selection changes.
        self.bounds: GeoBounds = compute_bounds(self.panels)

    def place(self, panel_count: int, canvas_width: float, canvas_height: float) -> List[PanelPlacement]:
        if panel_count <= 0:
            return []

        ranked = sorted(self.panels, key=lambda p: p.yearly_energy, reverse=True)[:panel_count]
        width, height = panel_size_on_canvas(self.bounds, canvas_width, canvas_height,
                                             PANEL_WIDTH_METERS, PANEL_HEIGHT_METERS)

        placements = []
        for panel in ranked:
            x, y = to_pixel(panel.center_lat, panel.center_lng, self.bounds, canvas_width, canvas_height)
            relative = min(panel.yearly_energy / REFERENCE_PANEL_ENERGY_KWH, 1.0)
            if panel.orientation is Orientation.PORTRAIT:
                w, h = height, width
            else:
                w, h = width, height
            placements.append(PanelPlacement(
                x=x, y=y, width=w, height=h,
                orientation=panel.orientation,
                color=energy_color(relative),
                efficiency=relative,
            ))
        return placements
