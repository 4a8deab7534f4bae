"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class ParticulateReadings:
    """Raw particle counts and mass concentrations reported by a sensor."""

    p_0_3_um: float
    p_0_5_um: float
    p_1_0_um: float
    p_2_5_um: float
    p_5_0_um: float
    p_10_0_um: float
    pm1_0_cf_1: float
    pm2_5_cf_1: float
    pm10_0_cf_1: float
    pm1_0_atm: float
    pm2_5_atm: float
    pm10_0_atm: float


@dataclass(frozen=True, slots=True)
class SensorSnapshot:
    """One sensor's reading at scrape time.

    Optional readings are ``None`` when the upstream record omits them, which
    is distinct from a reported zero.
    """

    id: int
    label: str
    lat: float
    lon: float
    pm2_5_value: float
    last_seen: int
    particulates: ParticulateReadings
    uptime_seconds: Optional[int] = None
    temperature_fahrenheit: Optional[float] = None
    humidity_percent: Optional[float] = None
    pressure: Optional[float] = None

    @property
    def id_label(self) -> str:
        return str(self.id)
