from __future__ import annotations

# ruff: noqa: S101
import pytest

from solar_backend.errors import EmptyInputError
from solar_backend.panel_layout.configuration_strategy import ConfigurationPlacement, select_best_config
from solar_backend.panel_layout.coordinate_strategy import CoordinatePlacement
from solar_backend.panel_layout.grid_strategy import GridPlacement
from solar_backend.panel_layout.records import (
    PanelConfig,
    configs_from_insights,
    panels_from_insights,
)
from solar_backend.panel_layout.strategy_factory import choose_strategy
from solar_backend.utils.geo_mapping import Orientation, compute_bounds


def test_panels_from_insights(insights_payload) -> None:
    panels = panels_from_insights(insights_payload)

    assert len(panels) == 4
    assert panels[1].orientation is Orientation.PORTRAIT
    assert panels[3].orientation is Orientation.LANDSCAPE
    assert panels[0].yearly_energy == 420.0
    assert panels[2].segment_index == 1


def test_panels_without_centre_are_skipped() -> None:
    payload = {"solarPanels": [{"yearlyEnergyDcKwh": 1.0}, {"center": {"latitude": 1, "longitude": 2}}]}
    panels = panels_from_insights(payload)
    assert [(p.center_lat, p.center_lng) for p in panels] == [(1.0, 2.0)]


def test_configs_from_insights(insights_payload) -> None:
    configs = configs_from_insights(insights_payload["solarPotential"])
    assert [c.panels_count for c in configs] == [2, 4]
    assert configs[1].roof_segment_summaries[1].azimuth_degrees == 355.0


def test_coordinate_placement_takes_highest_energy_first(insights_payload) -> None:
    strategy = CoordinatePlacement(panels_from_insights(insights_payload))
    placements = strategy.place(2, 400, 300)

    assert len(placements) == 2
    best, second = placements
    assert best.orientation is Orientation.PORTRAIT
    assert best.color == "#10b981"
    assert best.efficiency == 1.0
    assert second.color == "#3b82f6"
    assert second.efficiency == pytest.approx(610 / 800)
    # portrait panels are drawn rotated
    assert (best.width, best.height) == (second.height, second.width)


def test_coordinate_placement_positions_inside_canvas(insights_payload) -> None:
    panels = panels_from_insights(insights_payload)
    strategy = CoordinatePlacement(panels)
    placements = strategy.place(10, 640, 480)

    assert len(placements) == len(panels)
    for p in placements:
        assert 0 < p.x < 640
        assert 0 < p.y < 480
    assert strategy.bounds == compute_bounds(panels)


def test_coordinate_placement_north_is_up(insights_payload) -> None:
    placements = CoordinatePlacement(panels_from_insights(insights_payload)).place(4, 400, 300)
    by_energy = {round(p.efficiency * 800): p for p in placements if p.efficiency < 1}
    # the 150 kWh panel is the southernmost, the 610 kWh one sits north of the 420 kWh one
    assert by_energy[150].y > by_energy[420].y > by_energy[610].y


def test_coordinate_placement_needs_panels() -> None:
    with pytest.raises(EmptyInputError):
        CoordinatePlacement([])


@pytest.mark.parametrize("count, expected", [(1, 2), (2, 2), (3, 4), (4, 4), (50, 4)])
def test_select_best_config(count, expected) -> None:
    configs = [PanelConfig(panels_count=4), PanelConfig(panels_count=0), PanelConfig(panels_count=2)]
    assert select_best_config(configs, count).panels_count == expected


def test_select_best_config_without_usable_configs() -> None:
    assert select_best_config([PanelConfig(panels_count=0)], 3) is None


def test_configuration_placement_fills_best_segment_first(insights_payload) -> None:
    strategy = ConfigurationPlacement(configs_from_insights(insights_payload))
    placements = strategy.place(3, 400, 300)

    assert len(placements) == 3
    south, south_2, north = placements
    assert south.color == south_2.color == "#10b981"
    assert north.color == "#f59e0b"
    assert south.efficiency > north.efficiency
    # segment 0 is drawn in the top-left quarter, segment 1 in the top-right one
    assert south.x < 200 and south.y < 150
    assert north.x > 200 and north.y < 150


def test_configuration_placement_caps_at_config_size(insights_payload) -> None:
    strategy = ConfigurationPlacement(configs_from_insights(insights_payload))
    assert len(strategy.place(40, 400, 300)) == 4


def test_configuration_placement_needs_a_usable_config() -> None:
    with pytest.raises(EmptyInputError):
        ConfigurationPlacement([PanelConfig(panels_count=0)])


def test_grid_placement_is_centred() -> None:
    placements = GridPlacement().place(6, 400, 300)

    assert len(placements) == 6
    xs = [p.x for p in placements]
    ys = [p.y for p in placements]
    assert (min(xs) + max(xs)) / 2 == pytest.approx(200)
    assert (min(ys) + max(ys)) / 2 == pytest.approx(150)
    assert all(p.efficiency is None for p in placements)


@pytest.mark.parametrize("strategy", [
    GridPlacement(),
    ConfigurationPlacement([PanelConfig(panels_count=3)]),
])
def test_zero_panels_gives_no_placements(strategy) -> None:
    assert strategy.place(0, 400, 300) == []


def test_choose_strategy_prefers_coordinates(insights_payload) -> None:
    assert isinstance(choose_strategy(insights_payload["solarPotential"]), CoordinatePlacement)


def test_choose_strategy_falls_back_to_configurations(insights_payload) -> None:
    potential = dict(insights_payload["solarPotential"], solarPanels=[])
    assert isinstance(choose_strategy(potential), ConfigurationPlacement)


def test_choose_strategy_falls_back_to_grid() -> None:
    assert isinstance(choose_strategy({"maxArrayPanelsCount": 12}), GridPlacement)


def test_choose_strategy_by_name(insights_payload) -> None:
    potential = insights_payload["solarPotential"]
    assert isinstance(choose_strategy(potential, "configurations"), ConfigurationPlacement)
    assert isinstance(choose_strategy(potential, "grid"), GridPlacement)
    with pytest.raises(ValueError):
        choose_strategy(potential, "spiral")
    with pytest.raises(EmptyInputError):
        choose_strategy({}, "coordinates")


def test_segment_indices_are_coerced_to_int() -> None:
    payload = {
        "solarPanels": [{"center": {"latitude": 1, "longitude": 2}, "segmentIndex": "2"}],
        "solarPanelConfigs": [{"panelsCount": 1, "roofSegmentSummaries": [{"segmentIndex": "3", "panelsCount": 1}]}],
    }

    assert panels_from_insights(payload)[0].segment_index == 2
    assert configs_from_insights(payload)[0].roof_segment_summaries[0].segment_index == 3
