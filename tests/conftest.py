from __future__ import annotations

import numpy as np
import pytest
from rasterio.io import MemoryFile
from rasterio.transform import from_origin


def _write_geotiff(bands, crs="EPSG:4326", transform=None) -> bytes:
    data = np.asarray(bands)
    if data.ndim == 2:
        data = data[np.newaxis, ...]
    count, height, width = data.shape
    profile = {
        "driver": "GTiff",
        "width": width,
        "height": height,
        "count": count,
        "dtype": data.dtype.name,
        "crs": crs,
        "transform": transform or from_origin(-122.42, 37.78, 0.0001, 0.0001),
    }
    with MemoryFile() as memfile:
        with memfile.open(**profile) as dst:
            dst.write(data)
        memfile.seek(0)
        return memfile.read()


@pytest.fixture
def make_geotiff():
    """Build GeoTIFF bytes from a (bands, rows, cols) or (rows, cols) array."""
    return _write_geotiff


@pytest.fixture
def insights_payload() -> dict:
    return {
        "center": {"latitude": 37.7749, "longitude": -122.4194},
        "solarPotential": {
            "maxArrayPanelsCount": 4,
            "maxArrayAreaMeters2": 8.0,
            "solarPanels": [
                {"center": {"latitude": 37.77490, "longitude": -122.41940},
                 "orientation": "LANDSCAPE", "yearlyEnergyDcKwh": 420.0, "segmentIndex": 0},
                {"center": {"latitude": 37.77492, "longitude": -122.41938},
                 "orientation": "PORTRAIT", "yearlyEnergyDcKwh": 900.0, "segmentIndex": 0},
                {"center": {"latitude": 37.77488, "longitude": -122.41942},
                 "orientation": "LANDSCAPE", "yearlyEnergyDcKwh": 150.0, "segmentIndex": 1},
                {"center": {"latitude": 37.77491, "longitude": -122.41936},
                 "yearlyEnergyDcKwh": 610.0, "segmentIndex": 1},
            ],
            "solarPanelConfigs": [
                {"panelsCount": 2, "yearlyEnergyDcKwh": 1300.0, "roofSegmentSummaries": [
                    {"segmentIndex": 0, "panelsCount": 2, "azimuthDegrees": 175.0, "pitchDegrees": 28.0},
                ]},
                {"panelsCount": 4, "yearlyEnergyDcKwh": 2080.0, "roofSegmentSummaries": [
                    {"segmentIndex": 0, "panelsCount": 2, "azimuthDegrees": 175.0, "pitchDegrees": 28.0},
                    {"segmentIndex": 1, "panelsCount": 2, "azimuthDegrees": 355.0, "pitchDegrees": 28.0},
                ]},
            ],
        },
    }
