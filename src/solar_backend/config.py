# solar_backend/config.py
import os

from dotenv import load_dotenv

load_dotenv()

GOOGLE_SOLAR_API_KEY = os.environ.get("GOOGLE_SOLAR_API_KEY")
SOLAR_PROVIDER = os.environ.get("SOLAR_PROVIDER", "google")
SOLAR_API_BASE_URL = os.environ.get("SOLAR_API_BASE_URL", "https://solar.googleapis.com/v1")
GEOCODE_API_URL = os.environ.get("GEOCODE_API_URL", "https://maps.googleapis.com/maps/api/geocode/json")

# Seconds; applied to every outbound request.
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", 30))

IMAGE_CACHE_MAX_AGE = int(os.environ.get("IMAGE_CACHE_MAX_AGE", 3600))
DATA_LAYERS_RADIUS = int(os.environ.get("DATA_LAYERS_RADIUS", 100))
DATA_LAYERS_VIEW = os.environ.get("DATA_LAYERS_VIEW", "FULL_LAYERS")

PORT = int(os.environ.get("PORT", 3000))


def provider_credentials():
    """Credentials dict handed to the provider factory."""
    return {
        "api_key": GOOGLE_SOLAR_API_KEY,
        "base_url": SOLAR_API_BASE_URL,
        "geocode_url": GEOCODE_API_URL,
        "timeout": REQUEST_TIMEOUT,
    }
