# solar_backend/panel_layout/strategy_factory.py
import logging
from typing import Any, Dict, Optional

from .base_strategy import PlacementStrategy
from .configuration_strategy import ConfigurationPlacement
from .coordinate_strategy import CoordinatePlacement
from .grid_strategy import GridPlacement
from .records import configs_from_insights, panels_from_insights

STRATEGY_NAMES = (CoordinatePlacement.name, ConfigurationPlacement.name, GridPlacement.name)


def choose_strategy(solar_potential: Dict[str, Any], name: Optional[str] = None) -> PlacementStrategy:
    """
    Builds the placement strategy for a buildingInsights payload.

    Without a name, exact coordinates win over precomputed configurations,
    which win over the plain grid. Asking for a strategy the data cannot
    support raises EmptyInputError.
    """
    if name is not None and name not in STRATEGY_NAMES:
        raise ValueError(f"Unknown placement strategy: '{name}'. Available: {list(STRATEGY_NAMES)}")

    if name == GridPlacement.name:
        return GridPlacement()

    panels = panels_from_insights(solar_potential)
    if name == CoordinatePlacement.name or (name is None and panels):
        return CoordinatePlacement(panels)

    configs = configs_from_insights(solar_potential)
    if name == ConfigurationPlacement.name or (name is None and any(c.panels_count > 0 for c in configs)):
        return ConfigurationPlacement(configs)

    logging.info("No panel geometry available, falling back to grid placement.")
    return GridPlacement()
