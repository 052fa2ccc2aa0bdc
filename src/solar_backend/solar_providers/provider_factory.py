# solar_backend/solar_providers/provider_factory.py
from typing import Dict, Any
from .base_provider import SolarDataProvider
from .google_solar_provider import GoogleSolarProvider

PROVIDER_MAP = {
    "google": GoogleSolarProvider,
}

def get_provider(provider_name: str, credentials: Dict[str, Any]) -> SolarDataProvider:
    """
    Factory function to get an instance of a solar-data provider.
    """
    provider_class = PROVIDER_MAP.get(provider_name.lower())
    if not provider_class:
        raise ValueError(f"Unknown solar data provider: '{provider_name}'. Available: {list(PROVIDER_MAP.keys())}")

    return provider_class(credentials)
