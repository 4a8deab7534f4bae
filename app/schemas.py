"""Pydantic schemas for the upstream telemetry payload."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SensorPayload(BaseModel):
    """Shape of one element of the upstream ``results`` array.

    Numeric readings arrive as strings and are kept as such here; converting
    them is the decoder's job.
    """

    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore", frozen=True)

    id: int = Field(..., alias="ID")
    label: str = Field(..., alias="Label")
    lat: float = Field(..., alias="Lat")
    lon: float = Field(..., alias="Lon")
    pm2_5_value: str = Field(..., alias="PM2_5Value")
    uptime: Optional[str] = Field(default=None, alias="Uptime")
    last_seen: int = Field(..., alias="LastSeen")

    p_0_3_um: str
    p_0_5_um: str
    p_1_0_um: str
    p_2_5_um: str
    p_5_0_um: str
    p_10_0_um: str

    pm1_0_cf_1: str
    pm2_5_cf_1: str
    pm10_0_cf_1: str

    pm1_0_atm: str
    pm2_5_atm: str
    pm10_0_atm: str

    temp_f: Optional[str] = None
    humidity: Optional[str] = None
    pressure: Optional[str] = None


PARTICULATE_FIELDS = (
    "p_0_3_um",
    "p_0_5_um",
    "p_1_0_um",
    "p_2_5_um",
    "p_5_0_um",
    "p_10_0_um",
    "pm1_0_cf_1",
    "pm2_5_cf_1",
    "pm10_0_cf_1",
    "pm1_0_atm",
    "pm2_5_atm",
    "pm10_0_atm",
)
