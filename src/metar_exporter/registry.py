"""Station-labeled gauge registry backed by prometheus_client."""

import logging
from enum import Enum

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest

logger = logging.getLogger(__name__)

SUBSYSTEM = "metar"
LABEL_NAMES = ("station",)


class MetricName(str, Enum):
    """Names of the exported gauges (without the subsystem prefix)."""

    TEMPERATURE = "temperature"
    SUCCESS = "query_success"
    FETCH_TIME = "fetch_time"
    OBSERVATION_TIME = "observation_time"
    DEWPOINT = "dewpoint"
    WIND_DIRECTION = "wind_direction"
    WIND_SPEED = "wind_speed"
    VISIBILITY = "visibility"
    ALTIMETER = "altimeter"
    SKY_COVER = "skycover"
    WIND_FORCE = "wind_force"


METRIC_HELP: dict[MetricName, str] = {
    MetricName.TEMPERATURE: "Air temperature (celsius)",
    MetricName.SUCCESS: "Indicates whether the last fetch was a success (0/1)",
    MetricName.OBSERVATION_TIME: (
        "Contains the observation time of the current data reported by the station (UTC)"
    ),
    MetricName.DEWPOINT: "Dewpoint temperature (celsius)",
    MetricName.WIND_DIRECTION: (
        "Direction from which the wind is blowing. 0 degrees=variable wind direction."
    ),
    MetricName.WIND_SPEED: "Wind speed; 0 degree wdir and 0 wspd = calm winds (km/h)",
    MetricName.VISIBILITY: "Horizontal visibility (km)",
    MetricName.ALTIMETER: "Altimeter (hPa)",
    MetricName.SKY_COVER: "Sky cover in % (0 = clear, 1 = full cover)",
    MetricName.FETCH_TIME: "Contains the timestamp of the last successful fetch",
    MetricName.WIND_FORCE: "Wind force in Beaufort wind force scale",
}


class MetricRegistry:
    """Holds the last known value of every gauge for every station.

    Owns its own CollectorRegistry so that several instances (e.g. in
    tests) never collide on metric names. Label children are created
    only when a value is set, so stations that were never collected do
    not appear in snapshots or the exposition output.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry(auto_describe=True)
        self._gauges: dict[MetricName, Gauge] = {}

    def register_all(self) -> None:
        """Define all gauges. Calling it again is a no-op."""
        for name, help_text in METRIC_HELP.items():
            if name in self._gauges:
                continue
            self._gauges[name] = Gauge(
                name.value,
                help_text,
                labelnames=LABEL_NAMES,
                subsystem=SUBSYSTEM,
                registry=self.registry,
            )
        logger.debug("Registered %d gauges", len(self._gauges))

    def set(self, name: MetricName | str, station: str, value: float) -> None:
        """Overwrite the current value of a gauge for one station.

        Raises:
            ValueError: If the name is not a known gauge.
            KeyError: If register_all() has not been called.
        """
        gauge = self._gauges[MetricName(name)]
        gauge.labels(station=station).set(value)

    def snapshot(self) -> dict[tuple[MetricName, str], float]:
        """Return every (gauge, station) pair that has been set."""
        values: dict[tuple[MetricName, str], float] = {}
        for name, gauge in self._gauges.items():
            for family in gauge.collect():
                for sample in family.samples:
                    values[(name, sample.labels["station"])] = sample.value
        return values

    def render(self) -> bytes:
        """Serialize all gauges in the Prometheus text exposition format."""
        return generate_latest(self.registry)

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST
