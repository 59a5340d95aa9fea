"""METAR observation schemas.

Pydantic models for observations returned by the provider.
"""

from .enums import SkyCover
from .observation import Observation

__all__ = [
    "Observation",
    "SkyCover",
]
