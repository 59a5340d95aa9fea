"""METAR Exporter - airport weather observations as Prometheus gauges.

This package periodically fetches the current METAR for a set of airport
stations and republishes the values as station-labeled gauges:

- Scheduler: fires a collection round at startup and every interval
- StationCollector: fetches, converts and publishes one station
- MetricRegistry: last known value per gauge and station

Usage:
    from metar_exporter import MetricRegistry, StationCollector, Scheduler
    from metar_exporter.clients import AviationWeatherClient
"""

__version__ = "0.1.0"

from .collector import StationCollector
from .config import Settings, get_settings
from .registry import MetricName, MetricRegistry
from .scheduler import Scheduler
from .schemas import Observation, SkyCover

__all__ = [
    "MetricName",
    "MetricRegistry",
    "Observation",
    "Scheduler",
    "Settings",
    "SkyCover",
    "StationCollector",
    "get_settings",
]
