"""Fixtures for schema unit tests."""

from datetime import datetime, timezone

import pytest


@pytest.fixture
def minimal_observation_data() -> dict:
    """Minimal valid Observation (only required fields)."""
    return {
        "station_id": "KJFK",
        "observation_time": datetime(2024, 5, 18, 12, 51, 0, tzinfo=timezone.utc),
    }
