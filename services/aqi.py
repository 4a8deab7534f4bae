"""US EPA PM2.5 Air Quality Index estimation.

The index is a piecewise linear interpolation over a fixed breakpoint table.
The first two bands own their upper edge (``12.0`` and ``35.4`` inclusive);
every later band excludes it, so ``55.5`` belongs to the 151-200 band.
Concentrations at or beyond ``500.5`` fall outside the interpolated range and
are reported as AQI 501.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)


class AqiBreakpoint(NamedTuple):
    low_conc: float
    high_conc: float
    low_aqi: int
    high_aqi: int
    inclusive_high: bool


PM25_BREAKPOINTS: tuple[AqiBreakpoint, ...] = (
    AqiBreakpoint(0.0, 12.0, 0, 50, True),
    AqiBreakpoint(12.0, 35.4, 51, 100, True),
    AqiBreakpoint(35.4, 55.5, 101, 150, False),
    AqiBreakpoint(55.5, 150.5, 151, 200, False),
    AqiBreakpoint(150.5, 250.5, 201, 300, False),
    AqiBreakpoint(250.5, 350.5, 301, 400, False),
    AqiBreakpoint(350.5, 500.5, 401, 500, False),
    AqiBreakpoint(500.5, 99999.9, 501, 999, False),
)

OUT_OF_RANGE_AQI = PM25_BREAKPOINTS[-1].low_aqi

_CATEGORIES = (
    (50, "Good"),
    (100, "Moderate"),
    (150, "Unhealthy for Sensitive Groups"),
    (200, "Unhealthy"),
    (300, "Very Unhealthy"),
)


def _round_half_away_from_zero(value: float) -> int:
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _contains(band: AqiBreakpoint, value: float) -> bool:
    if band.inclusive_high:
        return value <= band.high_conc
    return value < band.high_conc


def _find_band(value: float) -> Optional[AqiBreakpoint]:
    # The open-ended last row is never interpolated.
    for band in PM25_BREAKPOINTS[:-1]:
        if _contains(band, value):
            return band
    return None


def estimate(pm25: float) -> int:
    """Return the AQI for a PM2.5 concentration in ug/m3."""
    value = float(pm25)
    if math.isnan(value) or value < 0:
        value = 0.0
    band = _find_band(value)
    if band is None:
        logger.warning(
            "PM2.5 concentration exceeds the AQI breakpoint table; clamping",
            extra={"pm25": pm25},
        )
        return OUT_OF_RANGE_AQI

    scaled = (band.high_aqi - band.low_aqi) * (value - band.low_conc)
    return _round_half_away_from_zero(
        scaled / (band.high_conc - band.low_conc) + band.low_aqi
    )


def aqi_category(aqi: int) -> str:
    for upper, name in _CATEGORIES:
        if aqi <= upper:
            return name
    return "Hazardous"
