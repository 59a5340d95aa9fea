"""Enums for METAR observation schemas."""

from enum import Enum


class SkyCover(str, Enum):
    """Sky cover categories reported in a METAR sky condition group."""

    SKC = "SKC"  # Sky clear (manual station)
    CLR = "CLR"  # No clouds below 12,000 ft (automated station)
    NSC = "NSC"  # No significant cloud
    CAVOK = "CAVOK"  # Ceiling and visibility OK
    FEW = "FEW"  # 1-2 oktas
    SCT = "SCT"  # 3-4 oktas
    BKN = "BKN"  # 5-7 oktas
    OVC = "OVC"  # 8 oktas
    OVX = "OVX"  # Sky obscured
