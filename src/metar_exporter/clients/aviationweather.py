"""aviationweather.gov (NOAA Aviation Weather Center) METAR client."""

import asyncio
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Protocol

import httpx

from ..config import ProviderConfig
from ..schemas import Observation

logger = logging.getLogger(__name__)


class ObservationFetchError(Exception):
    """Raised when no observation could be retrieved for a station."""

    def __init__(self, station: str, reason: str) -> None:
        super().__init__(f"{station}: {reason}")
        self.station = station
        self.reason = reason


class ObservationProvider(Protocol):
    """Protocol for observation sources to allow mocking."""

    async def fetch_observation(self, station: str) -> Observation: ...


def _parse_float(value: str | None) -> float:
    """Parse a numeric field, treating missing values as zero."""
    if value is None or not value.strip():
        return 0.0
    # Visibility above the reporting limit is sent as "10+"
    return float(value.strip().rstrip("+"))


def _parse_wind_dir(value: str | None) -> int:
    """Parse wind direction; variable ("VRB") and missing map to 0."""
    if value is None or not value.strip().isdigit():
        return 0
    return int(value.strip())


class AviationWeatherClient:
    """HTTP client for fetching current METARs from aviationweather.gov.

    Uses the XML output of the data API, which keeps the field layout of
    the legacy text data server (altimeter in inches of mercury,
    visibility in statute miles).
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize aviationweather.gov client.

        Args:
            config: Provider configuration settings.
            http_client: Optional custom HTTP client for testing.
        """
        self.config = config or ProviderConfig()
        self._http_client = http_client
        self._request_semaphore = asyncio.Semaphore(self.config.max_concurrent)

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                follow_redirects=True,
                headers={"User-Agent": self.config.user_agent},
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch_observation(self, station: str) -> Observation:
        """Fetch the most recent observation for a station.

        Args:
            station: ICAO airport code (e.g., "EDDF").

        Returns:
            Parsed Observation.

        Raises:
            ObservationFetchError: On HTTP errors or when the response
                holds no usable report.
        """
        url = f"{self.config.base_url}/api/data/metar"
        params = {"ids": station, "format": "xml"}

        try:
            async with self._request_semaphore:
                response = await self.http_client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ObservationFetchError(station, f"request failed: {e}") from e

        if response.status_code == 204 or not response.text.strip():
            raise ObservationFetchError(station, "no report available")

        return self._parse_response(station, response.text)

    def _parse_response(self, station: str, content: str) -> Observation:
        """Parse a METAR XML document and return its most recent report.

        Raises:
            ObservationFetchError: If the document is malformed or empty.
        """
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise ObservationFetchError(station, f"invalid XML: {e}") from e

        metars = root.findall("./data/METAR")
        if not metars:
            raise ObservationFetchError(station, "no report available")

        latest = max(metars, key=lambda m: m.findtext("observation_time") or "")
        logger.debug("Latest METAR for %s: %s", station, latest.findtext("raw_text"))
        try:
            return self._parse_metar(station, latest)
        except ValueError as e:
            raise ObservationFetchError(station, f"unparsable report: {e}") from e

    def _parse_metar(self, station: str, metar: ET.Element) -> Observation:
        """Convert a single <METAR> element into an Observation."""
        time_str = metar.findtext("observation_time")
        if not time_str:
            raise ValueError("missing observation_time")
        observed_at = datetime.fromisoformat(time_str.strip().replace("Z", "+00:00"))
        if observed_at.tzinfo is None:
            observed_at = observed_at.replace(tzinfo=timezone.utc)
        observed_at = observed_at.astimezone(timezone.utc)

        # Layers are reported bottom-up; the last one is the highest
        sky_cover: str | None = None
        for layer in metar.findall("sky_condition"):
            cover = layer.get("sky_cover")
            if cover:
                sky_cover = cover.strip().upper()

        return Observation(
            station_id=(metar.findtext("station_id") or station).strip(),
            observation_time=observed_at,
            temperature_c=_parse_float(metar.findtext("temp_c")),
            dewpoint_c=_parse_float(metar.findtext("dewpoint_c")),
            wind_dir_degrees=_parse_wind_dir(metar.findtext("wind_dir_degrees")),
            wind_speed_kt=_parse_float(metar.findtext("wind_speed_kt")),
            visibility_statute_mi=_parse_float(metar.findtext("visibility_statute_mi")),
            altim_in_hg=_parse_float(metar.findtext("altim_in_hg")),
            sky_cover=sky_cover,
            raw_text=metar.findtext("raw_text"),
        )
