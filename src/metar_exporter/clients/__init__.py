"""HTTP clients for METAR observation sources."""

from .aviationweather import AviationWeatherClient, ObservationFetchError, ObservationProvider

__all__ = [
    "AviationWeatherClient",
    "ObservationFetchError",
    "ObservationProvider",
]
