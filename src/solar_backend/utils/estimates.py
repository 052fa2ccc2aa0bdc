# solar_backend/utils/estimates.py
from dataclasses import asdict, dataclass

# kWh generated per year per square metre of panel
YIELD_KWH_PER_M2 = 150
# kg CO2 avoided per kWh generated
CO2_KG_PER_KWH = 0.4


@dataclass(frozen=True)
class LiveEstimate:
    panel_count: int
    generation_kwh: float
    panel_area_m2: int
    co2_offset_kg: float
    coverage_pct: float

    def to_dict(self):
        return asdict(self)


def estimate_for_selection(max_array_area_m2: float, selected_panels: int, max_panels: int) -> LiveEstimate:
    """Scale the whole-array figures down to the number of panels selected."""
    if selected_panels <= 0 or max_panels <= 0:
        return LiveEstimate(max(selected_panels, 0), 0.0, 0, 0.0, 0.0)

    area = max_array_area_m2 or 0.0
    share = selected_panels / max_panels
    generation = area * YIELD_KWH_PER_M2 * share

    return LiveEstimate(
        panel_count=selected_panels,
        generation_kwh=generation,
        panel_area_m2=round(area * share),
        co2_offset_kg=generation * CO2_KG_PER_KWH,
        coverage_pct=share * 100,
    )
