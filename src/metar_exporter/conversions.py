"""Unit conversions from METAR reporting units to exported units."""

from bisect import bisect_right

from .schemas import SkyCover

KNOTS_TO_KMH = 1.852
STATUTE_MILES_TO_KM = 1.609344
INHG_TO_HPA = 33.8639

# Lower bound in knots of Beaufort forces 1 through 12
BEAUFORT_THRESHOLDS_KT = (1, 4, 7, 11, 17, 22, 28, 34, 41, 48, 56, 64)

SKY_COVER_FRACTIONS: dict[str, float] = {
    SkyCover.SKC.value: 0.0,
    SkyCover.CLR.value: 0.0,
    SkyCover.NSC.value: 0.0,
    SkyCover.CAVOK.value: 0.0,
    SkyCover.FEW.value: 2.0 / 8.0,
    SkyCover.SCT.value: 4.0 / 8.0,
    SkyCover.BKN.value: 7.0 / 8.0,
    SkyCover.OVC.value: 1.0,
}


def knots_to_kmh(knots: float) -> float:
    return knots * KNOTS_TO_KMH


def statute_miles_to_km(miles: float) -> float:
    return miles * STATUTE_MILES_TO_KM


def inhg_to_hpa(inhg: float) -> float:
    return inhg * INHG_TO_HPA


def knots_to_beaufort(knots: float) -> int:
    """Map a wind speed in knots to Beaufort force 0-12."""
    return bisect_right(BEAUFORT_THRESHOLDS_KT, knots)


def sky_cover_fraction(category: str | None) -> float | None:
    """Map a sky cover category to the covered fraction of the sky.

    Returns None for categories without a defined fraction (including
    OVX and anything unrecognized). Callers decide what a missing value
    means.
    """
    if category is None:
        return None
    return SKY_COVER_FRACTIONS.get(category.strip().upper())
