# solar_backend/solar_providers/base_provider.py
from abc import ABC, abstractmethod
from typing import Dict, Any, Tuple


class SolarDataProvider(ABC):
    """
    Abstract Base Class for all solar-data providers.
    It defines the common interface for authenticating and fetching building
    insights, data layers and the raster files those layers point to.
    """

    def __init__(self, credentials: Dict[str, Any]):
        """
        Initializes the provider with the necessary credentials.

        Args:
            credentials (Dict[str, Any]): A dictionary containing the API key,
                                          base URLs and request timeout.
        """
        self.credentials = credentials
        self.authenticate()

    @abstractmethod
    def authenticate(self):
        """
        Handles the authentication for the specific provider.
        Should raise an exception if authentication fails.
        """
        pass

    @abstractmethod
    def building_insights(self, lat: float, lng: float) -> Dict[str, Any]:
        """
        Returns solar potential for the building closest to a location.
        """
        pass

    @abstractmethod
    def data_layers(self, lat: float, lng: float, radius_meters: int, view: str) -> Dict[str, Any]:
        """
        Returns the data-layer description (raster URLs, imagery date, ...)
        for the area around a location.
        """
        pass

    @abstractmethod
    def fetch_layer(self, url: str) -> Tuple[bytes, str]:
        """
        Downloads one raster layer.

        Returns:
            Tuple[bytes, str]: The raw bytes and the upstream content type.
        """
        pass

    @abstractmethod
    def geocode(self, address: str) -> Dict[str, Any]:
        """
        Resolves a free-form address into candidate locations.
        """
        pass
