# solar_backend/panel_layout/grid_strategy.py
import math
from typing import List

from solar_backend.utils.geo_mapping import Orientation

from .base_strategy import PlacementStrategy
from .records import PanelPlacement

PADDING = 30
MAX_COLUMNS = 10
MIN_CELL_WIDTH = 12
MIN_CELL_HEIGHT = 9
CELL_GAP = 2
DEFAULT_COLOR = "#3b82f6"


class GridPlacement(PlacementStrategy):
    """Centred grid used when the provider gave no panel geometry at all."""

    name = "grid"

    def place(self, panel_count: int, canvas_width: float, canvas_height: float) -> List[PanelPlacement]:
        if panel_count <= 0:
            return []

        available_width = canvas_width - PADDING * 2
        available_height = canvas_height - PADDING * 2
        aspect = available_width / available_height if available_height > 0 else 1.0

        cols = max(1, min(math.ceil(math.sqrt(panel_count * aspect)), MAX_COLUMNS))
        rows = math.ceil(panel_count / cols)

        cell_width = max((available_width - cols * CELL_GAP) / cols, MIN_CELL_WIDTH)
        cell_height = max((available_height - rows * CELL_GAP) / rows, MIN_CELL_HEIGHT)

        start_x = PADDING + (available_width - (cols * cell_width + (cols - 1) * CELL_GAP)) / 2
        start_y = PADDING + (available_height - (rows * cell_height + (rows - 1) * CELL_GAP)) / 2

        placements = []
        for i in range(panel_count):
            row, col = divmod(i, cols)
            left = start_x + col * (cell_width + CELL_GAP)
            top = start_y + row * (cell_height + CELL_GAP)
            placements.append(PanelPlacement(
                x=left + cell_width / 2,
                y=top + cell_height / 2,
                width=cell_width,
                height=cell_height,
                orientation=Orientation.LANDSCAPE,
                color=DEFAULT_COLOR,
                efficiency=None,
            ))
        return placements
