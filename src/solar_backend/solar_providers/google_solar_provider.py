# solar_backend/solar_providers/google_solar_provider.py

import logging
from typing import Dict, Any, Tuple
from urllib.parse import urlparse

import requests

from solar_backend.errors import ProviderError
from .base_provider import SolarDataProvider

DEFAULT_BASE_URL = "https://solar.googleapis.com/v1"
DEFAULT_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_TIMEOUT = 30


class GoogleSolarProvider(SolarDataProvider):
    """
    Google Solar API provider.
    Building insights and data layers are JSON endpoints; the layers themselves
    are GeoTIFF downloads that need the same API key.
    """

    def authenticate(self):
        """
        Validates the API key and sets up the shared session.
        """
        self.api_key = self.credentials.get("api_key")
        if not self.api_key:
            raise ValueError("Google Solar API key not configured")

        self.base_url = (self.credentials.get("base_url") or DEFAULT_BASE_URL).rstrip("/")
        self.geocode_url = self.credentials.get("geocode_url") or DEFAULT_GEOCODE_URL
        self.timeout = self.credentials.get("timeout") or DEFAULT_TIMEOUT

        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        logging.info("Google Solar provider session configured.")

    def _get(self, url: str, params: Dict[str, Any], stream: bool = False) -> requests.Response:
        params = dict(params, key=self.api_key)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout, stream=stream)
            response.raise_for_status()
            return response
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logging.error(f"Solar API request to {urlparse(url).path} failed with status {status}.")
            raise ProviderError(f"API request failed: {status}", status_code=status) from e
        except requests.exceptions.RequestException as e:
            logging.error(f"Solar API request to {urlparse(url).path} failed: {e}")
            raise ProviderError(f"Failed to connect to solar data provider: {e}") from e

    def building_insights(self, lat: float, lng: float) -> Dict[str, Any]:
        response = self._get(f"{self.base_url}/buildingInsights:findClosest", {
            "location.latitude": lat,
            "location.longitude": lng,
        })
        return response.json()

    def data_layers(self, lat: float, lng: float, radius_meters: int, view: str) -> Dict[str, Any]:
        response = self._get(f"{self.base_url}/dataLayers:get", {
            "location.latitude": lat,
            "location.longitude": lng,
            "radiusMeters": radius_meters,
            "view": view,
        })
        return response.json()

    def fetch_layer(self, url: str) -> Tuple[bytes, str]:
        """
        Downloads a GeoTIFF referenced by a data-layers response.
        Only https URLs on the provider's own host are accepted.
        """
        parsed = urlparse(url)
        allowed_host = urlparse(self.base_url).netloc
        if parsed.scheme != "https" or parsed.netloc != allowed_host:
            raise ValueError(f"Layer URL must point at {allowed_host}")

        response = self._get(url, {})
        content_type = response.headers.get("Content-Type", "application/octet-stream")
        logging.info(f"Fetched layer {parsed.path} ({len(response.content)} bytes, {content_type})")
        return response.content, content_type

    def geocode(self, address: str) -> Dict[str, Any]:
        response = self._get(self.geocode_url, {"address": address})
        return response.json()
