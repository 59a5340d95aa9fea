"""Shared test fixtures for all tests."""

import pytest


@pytest.fixture
def sample_station_id() -> str:
    """Sample ICAO station ID for testing."""
    return "EDDF"


@pytest.fixture
def sample_us_station_id() -> str:
    """Sample US ICAO station ID for testing."""
    return "KJFK"
