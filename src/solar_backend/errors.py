# solar_backend/errors.py
from typing import Optional


class SolarBackendError(Exception):
    """Base class for all errors raised by the solar backend."""


class DecodeError(SolarBackendError):
    """The input bytes could not be parsed as a raster."""


class UnsupportedFormatError(SolarBackendError):
    """The raster parsed but its band layout cannot be visualised."""

    def __init__(self, band_count: int):
        self.band_count = band_count
        super().__init__(f"Unsupported band count: {band_count} (expected 1 or 3)")


class InvalidBufferError(SolarBackendError):
    """An RGBA buffer does not match its declared dimensions."""


class EmptyInputError(SolarBackendError):
    """No geometry is available to work with."""


class ProviderError(SolarBackendError):
    """The solar-data provider could not satisfy a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
