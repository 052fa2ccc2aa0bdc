# solar_backend/panel_layout/configuration_strategy.py
import math
from typing import List, Optional, Sequence

from solar_backend.errors import EmptyInputError
from solar_backend.utils.geo_mapping import Orientation, efficiency_color, panel_efficiency

from .base_strategy import PlacementStrategy
from .records import PanelConfig, PanelPlacement, RoofSegmentSummary

MAX_COLUMNS = 6
MIN_CELL_WIDTH = 8
MIN_CELL_HEIGHT = 6
CELL_GAP = 2
QUADRANT_MARGIN = 15


def select_best_config(configs: Sequence[PanelConfig], panel_count: int) -> Optional[PanelConfig]:
    """
    The smallest configuration that holds `panel_count` panels, or the largest
    one available when none is big enough.
    """
    usable = [c for c in configs if c.panels_count > 0]
    if not usable:
        return None

    large_enough = [c for c in usable if c.panels_count >= panel_count]
    if large_enough:
        return min(large_enough, key=lambda c: c.panels_count)
    return max(usable, key=lambda c: c.panels_count)


class ConfigurationPlacement(PlacementStrategy):
    """
    Picks one of the provider's precomputed layouts and fills its roof
    segments, best oriented first, each as a small grid in its own quarter
    of the canvas.
    """

    name = "configurations"

    def __init__(self, panel_configs: Sequence[PanelConfig]):
        if not any(c.panels_count > 0 for c in panel_configs):
            raise EmptyInputError("No usable panel configuration")
        self.panel_configs = list(panel_configs)

    def place(self, panel_count: int, canvas_width: float, canvas_height: float) -> List[PanelPlacement]:
        if panel_count <= 0:
            return []

        config = select_best_config(self.panel_configs, panel_count)
        segments = sorted(
            config.roof_segment_summaries,
            key=lambda s: panel_efficiency(s.azimuth_degrees, s.pitch_degrees),
            reverse=True,
        )

        placements = []
        for segment in segments:
            remaining = panel_count - len(placements)
            if remaining <= 0:
                break
            count = min(segment.panels_count, remaining)
            if count > 0:
                placements.extend(self._place_on_segment(segment, count, canvas_width, canvas_height,
                                                         offset=len(placements)))
        return placements

    def _place_on_segment(self, segment: RoofSegmentSummary, count: int,
                          canvas_width: float, canvas_height: float, offset: int) -> List[PanelPlacement]:
        cols = min(math.ceil(math.sqrt(count)), MAX_COLUMNS)
        rows = math.ceil(count / cols)

        quadrant = (segment.segment_index if segment.segment_index is not None else offset) % 4
        segment_width = canvas_width / 2 - 20
        segment_height = canvas_height / 2 - 20
        origin_x = (quadrant % 2) * (canvas_width / 2) + QUADRANT_MARGIN
        origin_y = (quadrant // 2) * (canvas_height / 2) + QUADRANT_MARGIN

        cell_width = max((segment_width - 10) / cols, MIN_CELL_WIDTH)
        cell_height = max((segment_height - 10) / rows, MIN_CELL_HEIGHT)

        efficiency = panel_efficiency(segment.azimuth_degrees, segment.pitch_degrees)
        color = efficiency_color(efficiency)

        placements = []
        for i in range(count):
            row, col = divmod(i, cols)
            left = origin_x + col * (cell_width + CELL_GAP)
            top = origin_y + row * (cell_height + CELL_GAP)
            placements.append(PanelPlacement(
                x=left + cell_width / 2,
                y=top + cell_height / 2,
                width=cell_width,
                height=cell_height,
                orientation=Orientation.LANDSCAPE,
                color=color,
                efficiency=efficiency,
            ))
        return placements
