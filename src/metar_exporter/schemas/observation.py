"""Observation schema for METAR reports."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, Field, field_validator


class Observation(BaseModel):
    """Current weather observation for one station, in reported units.

    Units follow the METAR text data server: temperatures in celsius,
    wind in knots, visibility in statute miles, altimeter in inches of
    mercury.
    """

    station_id: Annotated[str, Field(min_length=1)]
    observation_time: datetime

    temperature_c: float = 0.0
    dewpoint_c: float = 0.0
    wind_dir_degrees: int = 0  # 0 = variable or calm
    wind_speed_kt: float = 0.0
    visibility_statute_mi: float = 0.0
    altim_in_hg: float = 0.0

    # Raw category string; unrecognized codes are kept as reported
    sky_cover: str | None = None
    raw_text: str | None = None

    @field_validator("observation_time")
    @classmethod
    def validate_utc_timezone(cls, v: datetime) -> datetime:
        """Ensure observation_time has UTC timezone."""
        if v.tzinfo is None:
            raise ValueError("observation_time must have UTC timezone")
        if v.utcoffset() != timezone.utc.utcoffset(None):
            raise ValueError("observation_time must be in UTC timezone")
        return v
