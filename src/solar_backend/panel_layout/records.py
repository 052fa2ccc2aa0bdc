# solar_backend/panel_layout/records.py
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from solar_backend.utils.geo_mapping import Orientation, PanelFootprint


@dataclass(frozen=True)
class RoofSegmentSummary:
    segment_index: Optional[int]
    panels_count: int
    azimuth_degrees: float
    pitch_degrees: float
    yearly_energy_dc_kwh: float = 0.0


@dataclass(frozen=True)
class PanelConfig:
    panels_count: int
    yearly_energy_dc_kwh: float = 0.0
    roof_segment_summaries: Tuple[RoofSegmentSummary, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PanelPlacement:
    """A panel to draw; x and y are its centre in canvas pixels."""
    x: float
    y: float
    width: float
    height: float
    orientation: Orientation
    color: str
    efficiency: Optional[float]

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "orientation": self.orientation.value,
            "color": self.color,
            "efficiency": self.efficiency,
        }


def _solar_potential(payload: Dict[str, Any]) -> Dict[str, Any]:
    # Accept either a full buildingInsights response or its solarPotential member.
    return payload.get("solarPotential", payload) if payload else {}


def _segment_index(value) -> Optional[int]:
    return int(value) if value is not None else None


def panels_from_insights(payload: Dict[str, Any]) -> List[PanelFootprint]:
    panels = []
    for raw in _solar_potential(payload).get("solarPanels") or []:
        center = raw.get("center") or {}
        if "latitude" not in center or "longitude" not in center:
            logging.warning("Skipping solar panel record without a centre.")
            continue
        panels.append(PanelFootprint(
            center_lat=float(center["latitude"]),
            center_lng=float(center["longitude"]),
            yearly_energy=max(float(raw.get("yearlyEnergyDcKwh") or 0.0), 0.0),
            orientation=Orientation.parse(raw.get("orientation", "LANDSCAPE")),
            segment_index=_segment_index(raw.get("segmentIndex")),
        ))
    return panels


def configs_from_insights(payload: Dict[str, Any]) -> List[PanelConfig]:
    configs = []
    for raw in _solar_potential(payload).get("solarPanelConfigs") or []:
        summaries = tuple(
            RoofSegmentSummary(
                segment_index=_segment_index(s.get("segmentIndex")),
                panels_count=int(s.get("panelsCount") or 0),
                azimuth_degrees=float(s.get("azimuthDegrees") or 0.0),
                pitch_degrees=float(s.get("pitchDegrees") or 0.0),
                yearly_energy_dc_kwh=float(s.get("yearlyEnergyDcKwh") or 0.0),
            )
            for s in raw.get("roofSegmentSummaries") or []
        )
        configs.append(PanelConfig(
            panels_count=int(raw.get("panelsCount") or 0),
            yearly_energy_dc_kwh=float(raw.get("yearlyEnergyDcKwh") or 0.0),
            roof_segment_summaries=summaries,
        ))
    return configs
