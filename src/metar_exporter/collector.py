"""Per-station fetch, convert and publish cycle."""

import logging
from datetime import datetime, timezone

from .clients import ObservationProvider
from .conversions import (
    inhg_to_hpa,
    knots_to_beaufort,
    knots_to_kmh,
    sky_cover_fraction,
    statute_miles_to_km,
)
from .registry import MetricName, MetricRegistry

logger = logging.getLogger(__name__)


class StationCollector:
    """Fetches one station's observation and writes it into the registry.

    A failed fetch only flips the success gauge to 0; all other gauges for
    the station keep the values of the last successful fetch.
    """

    def __init__(self, provider: ObservationProvider, registry: MetricRegistry) -> None:
        self.provider = provider
        self.registry = registry

    async def collect(self, station: str) -> bool:
        """Run one collection cycle for a station.

        Args:
            station: Station identifier (e.g., "EDDF").

        Returns:
            True if the observation was fetched and published.
        """
        try:
            obs = await self.provider.fetch_observation(station)
        except Exception as e:
            self.registry.set(MetricName.SUCCESS, station, 0)
            logger.error("Unable to fetch data for station %s: %s", station, e)
            return False

        metrics = self.registry
        metrics.set(MetricName.TEMPERATURE, station, obs.temperature_c)
        metrics.set(MetricName.SUCCESS, station, 1)
        metrics.set(
            MetricName.OBSERVATION_TIME,
            station,
            int(obs.observation_time.astimezone(timezone.utc).timestamp()),
        )
        metrics.set(MetricName.DEWPOINT, station, obs.dewpoint_c)
        metrics.set(MetricName.WIND_DIRECTION, station, obs.wind_dir_degrees)
        metrics.set(MetricName.WIND_SPEED, station, knots_to_kmh(obs.wind_speed_kt))
        metrics.set(MetricName.VISIBILITY, station, statute_miles_to_km(obs.visibility_statute_mi))
        metrics.set(MetricName.ALTIMETER, station, inhg_to_hpa(obs.altim_in_hg))

        cover = sky_cover_fraction(obs.sky_cover)
        if cover is not None:
            metrics.set(MetricName.SKY_COVER, station, cover)
        else:
            logger.debug("No sky cover fraction for %s category %r", station, obs.sky_cover)

        metrics.set(MetricName.FETCH_TIME, station, int(datetime.now(timezone.utc).timestamp()))
        metrics.set(MetricName.WIND_FORCE, station, knots_to_beaufort(obs.wind_speed_kt))

        logger.debug("Updated metrics for station %s", station)
        return True
