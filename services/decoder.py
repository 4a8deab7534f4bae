"""Conversion of raw upstream sensor records into typed snapshots."""

from __future__ import annotations

import math
import re
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from app.schemas import PARTICULATE_FIELDS, SensorPayload
from models.records import ParticulateReadings, SensorSnapshot
from services.errors import SensorDecodeError

_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def parse_decimal(raw: str, field: str, sensor_id: Optional[int] = None) -> float:
    if not _DECIMAL_PATTERN.fullmatch(raw):
        raise SensorDecodeError(
            "invalid decimal value", field=field, sensor_id=sensor_id, value=raw
        )
    value = float(raw)
    if not math.isfinite(value):
        raise SensorDecodeError(
            "decimal value out of range", field=field, sensor_id=sensor_id, value=raw
        )
    return value


def parse_integer(raw: str, field: str, sensor_id: Optional[int] = None) -> int:
    if not _INTEGER_PATTERN.fullmatch(raw):
        raise SensorDecodeError(
            "invalid integer value", field=field, sensor_id=sensor_id, value=raw
        )
    return int(raw)


def _parse_optional_decimal(
    raw: Optional[str], field: str, sensor_id: int
) -> Optional[float]:
    if raw is None:
        return None
    return parse_decimal(raw, field, sensor_id)


def _validate_payload(raw: Any) -> SensorPayload:
    if not isinstance(raw, Mapping):
        raise SensorDecodeError("sensor record is not an object", value=raw)

    try:
        return SensorPayload.model_validate(dict(raw))
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        sensor_id = raw.get("ID")
        if isinstance(sensor_id, bool) or not isinstance(sensor_id, int):
            sensor_id = None
        raise SensorDecodeError(
            first.get("msg", "invalid sensor record"),
            field=location or None,
            sensor_id=sensor_id,
        ) from exc


def decode_sensor(raw: Any) -> SensorSnapshot:
    """Decode one element of the upstream ``results`` array.

    Raises ``SensorDecodeError`` when a required field is missing, has the
    wrong JSON type, or when any numeric string fails to parse.
    """
    payload = _validate_payload(raw)
    sensor_id = payload.id

    particulates = ParticulateReadings(
        **{
            name: parse_decimal(getattr(payload, name), name, sensor_id)
            for name in PARTICULATE_FIELDS
        }
    )

    uptime: Optional[int] = None
    if payload.uptime is not None:
        uptime = parse_integer(payload.uptime, "Uptime", sensor_id)

    return SensorSnapshot(
        id=sensor_id,
        label=payload.label,
        lat=payload.lat,
        lon=payload.lon,
        pm2_5_value=parse_decimal(payload.pm2_5_value, "PM2_5Value", sensor_id),
        last_seen=payload.last_seen,
        particulates=particulates,
        uptime_seconds=uptime,
        temperature_fahrenheit=_parse_optional_decimal(payload.temp_f, "temp_f", sensor_id),
        humidity_percent=_parse_optional_decimal(payload.humidity, "humidity", sensor_id),
        pressure=_parse_optional_decimal(payload.pressure, "pressure", sensor_id),
    )
