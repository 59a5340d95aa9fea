"""Unit test fixtures - mocks and sample data."""

from datetime import datetime, timezone

import pytest

from metar_exporter.registry import MetricRegistry
from metar_exporter.schemas import Observation


class FakeProvider:
    """Observation provider returning canned results per station.

    A value that is an exception instance is raised instead of returned.
    """

    def __init__(self, results: dict[str, Observation | Exception] | None = None) -> None:
        self.results = results or {}
        self.calls: list[str] = []

    async def fetch_observation(self, station: str) -> Observation:
        self.calls.append(station)
        result = self.results.get(station)
        if result is None:
            raise RuntimeError(f"no data for {station}")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def sample_observation_data() -> dict:
    """Valid observation data matching the Observation schema."""
    return {
        "station_id": "EDDF",
        "observation_time": datetime(2024, 5, 18, 12, 20, tzinfo=timezone.utc),
        "temperature_c": 18.0,
        "dewpoint_c": 9.0,
        "wind_dir_degrees": 250,
        "wind_speed_kt": 10.0,
        "visibility_statute_mi": 6.0,
        "altim_in_hg": 29.92,
        "sky_cover": "BKN",
        "raw_text": "EDDF 181220Z 25010KT 9999 FEW030 BKN045 18/09 Q1013 NOSIG",
    }


@pytest.fixture
def sample_observation(sample_observation_data: dict) -> Observation:
    """Sample observation for testing."""
    return Observation(**sample_observation_data)


@pytest.fixture
def registry() -> MetricRegistry:
    """Metric registry with all gauges registered."""
    metrics = MetricRegistry()
    metrics.register_all()
    return metrics


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Empty fake provider; tests fill in results."""
    return FakeProvider()
