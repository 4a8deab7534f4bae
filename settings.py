from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from services.errors import ConfigurationError


_API_URL_ENV = "PURPLEAIR_API_URL"
_REQUEST_TIMEOUT_ENV = "PURPLEAIR_REQUEST_TIMEOUT"
_SENSOR_IDS_ENV = "PURPLEAIR_SENSOR_IDS"
_HOST_ENV = "EXPORTER_HOST"
_PORT_ENV = "EXPORTER_PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    api_url: str
    request_timeout: float
    host: str
    port: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_timeout(default: float) -> float:
    value = os.getenv(_REQUEST_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_port(default: int) -> int:
    value = os.getenv(_PORT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if 0 < parsed < 65536 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


def read_sensor_ids() -> str:
    """Return the configured sensor ID list, read fresh on every call."""
    value = os.getenv(_SENSOR_IDS_ENV)
    candidate = (value or "").strip()
    if not candidate:
        raise ConfigurationError(f"{_SENSOR_IDS_ENV} is not set.")
    return candidate


@lru_cache
def get_settings() -> Settings:
    return Settings(
        api_url=_read_str_env(_API_URL_ENV, "https://www.purpleair.com/json"),
        request_timeout=_read_timeout(10.0),
        host=_read_str_env(_HOST_ENV, "0.0.0.0"),
        port=_read_port(3000),
        log_level=_read_log_level("INFO"),
    )
