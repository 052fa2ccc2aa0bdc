# solar_backend/panel_layout/base_strategy.py
from abc import ABC, abstractmethod
from typing import List

from .records import PanelPlacement


class PlacementStrategy(ABC):
    """
    Abstract Base Class for the ways panels can be laid out on the canvas.
    """

    name = "base"

    @abstractmethod
    def place(self, panel_count: int, canvas_width: float, canvas_height: float) -> List[PanelPlacement]:
        """
        Lays out up to `panel_count` panels.

        Args:
            panel_count (int): How many panels the user selected.
            canvas_width (float): Canvas width in pixels.
            canvas_height (float): Canvas height in pixels.

        Returns:
            List[PanelPlacement]: The panels to draw, best first.
        """
        pass
