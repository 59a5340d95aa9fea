"""Configuration settings loaded from environment variables."""

import re
from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings

# Go-style duration units, in seconds
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class ConfigError(ValueError):
    """Raised when the configuration cannot be used to start the exporter."""


def parse_duration(text: str) -> timedelta:
    """Parse a duration string such as ``5m``, ``90s`` or ``1h30m``.

    Raises:
        ValueError: If the string is empty, malformed or not positive.
    """
    value = text.strip()
    if not value:
        raise ValueError("empty duration")

    pos = 0
    seconds = 0.0
    while pos < len(value):
        match = _DURATION_PART.match(value, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if seconds <= 0:
        raise ValueError(f"duration must be positive: {text!r}")
    return timedelta(seconds=seconds)


def parse_listen(text: str) -> tuple[str, int]:
    """Split a ``host:port`` listen address. An empty host binds all interfaces."""
    host, sep, port = text.strip().rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid listen address {text!r}")
    port_num = int(port)
    if not 0 < port_num < 65536:
        raise ValueError(f"port out of range in {text!r}")
    return host.strip("[]") or "0.0.0.0", port_num


class ExporterConfig(BaseSettings):
    """Exporter configuration."""

    listen: str = ":3000"
    stations: str = ""  # Comma-separated airport codes (e.g., "EDDF,KJFK")
    interval: str = "5m"

    model_config = {"env_prefix": "METAR_"}

    def get_stations_list(self) -> list[str]:
        """Parse stations string into list."""
        if not self.stations.strip():
            return []
        return [s.strip().upper() for s in self.stations.split(",") if s.strip()]

    def validate_startup(self) -> timedelta:
        """Check everything needed to start and return the parsed interval.

        Raises:
            ConfigError: On an empty station list or an unparsable
                interval or listen address.
        """
        try:
            interval = parse_duration(self.interval)
        except ValueError as e:
            raise ConfigError(f"Unable to parse interval parameter: {e}") from e

        try:
            parse_listen(self.listen)
        except ValueError as e:
            raise ConfigError(f"Unable to parse listen parameter: {e}") from e

        if not self.get_stations_list():
            raise ConfigError("You need to specify at least one station to fetch data from.")

        return interval


class ProviderConfig(BaseSettings):
    """aviationweather.gov data source configuration."""

    base_url: str = "https://aviationweather.gov"
    user_agent: str = "metar-exporter/0.1.0"
    timeout_seconds: float = 30.0
    max_concurrent: int = 10

    model_config = {"env_prefix": "AVWX_"}


class Settings(BaseSettings):
    """Application settings combining all configs."""

    log_level: str = "INFO"
    exporter: ExporterConfig = Field(default_factory=ExporterConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()
