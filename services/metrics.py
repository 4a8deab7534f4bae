"""Gauge families published by the exporter and the snapshot projection."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from models.records import SensorSnapshot
from services.aqi import estimate

_COMMON_LABELS = ("id", "sensor_label")


def format_coordinate(value: float) -> str:
    """Render a coordinate label without a trailing ``.0`` (``1.0`` -> ``"1"``)."""
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


class ExporterMetrics:
    """Owns the gauge families registered on a single registry."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self.registry = registry
        self.last_seen = Gauge(
            "purpleair_lastseen_timestamp",
            "UTC timestamp for sensor last seen time",
            _COMMON_LABELS,
            registry=registry,
        )
        self.uptime = Gauge(
            "purpleair_uptime_seconds",
            "Sensor uptime in seconds",
            _COMMON_LABELS,
            registry=registry,
        )
        self.info = Gauge(
            "purpleair_info",
            "Sensor info",
            _COMMON_LABELS + ("lat", "lon"),
            registry=registry,
        )
        self.pm2_5_value = Gauge(
            "purpleair_pm2_5_value",
            "Sensor-reported PM2.5 value particulate mass in ug/m3",
            _COMMON_LABELS,
            registry=registry,
        )
        self.pm2_5_aqi = Gauge(
            "purpleair_pm2_5_aqi",
            "US EPA Air Quality Index estimated from the PM2.5 value",
            _COMMON_LABELS,
            registry=registry,
        )
        self.temperature = Gauge(
            "purpleair_temperature_fahrenheit",
            "Sensor reported temperature in Fahrenheit",
            _COMMON_LABELS,
            registry=registry,
        )
        self.humidity = Gauge(
            "purpleair_humidity",
            "Sensor reported humidity (in percent)",
            _COMMON_LABELS,
            registry=registry,
        )
        self.pressure = Gauge(
            "purpleair_pressure",
            "Sensor reported pressure",
            _COMMON_LABELS,
            registry=registry,
        )

    def project(self, snapshot: SensorSnapshot) -> None:
        """Write every reading of ``snapshot`` into its gauge family.

        Absent optional readings leave the corresponding series untouched.
        """
        labels = (snapshot.id_label, snapshot.label)

        self.last_seen.labels(*labels).set(snapshot.last_seen)
        if snapshot.uptime_seconds is not None:
            self.uptime.labels(*labels).set(snapshot.uptime_seconds)
        self.info.labels(
            *labels,
            format_coordinate(snapshot.lat),
            format_coordinate(snapshot.lon),
        ).set(1)
        self.pm2_5_value.labels(*labels).set(snapshot.pm2_5_value)
        self.pm2_5_aqi.labels(*labels).set(estimate(snapshot.pm2_5_value))

        self._set_optional(self.temperature, labels, snapshot.temperature_fahrenheit)
        self._set_optional(self.humidity, labels, snapshot.humidity_percent)
        self._set_optional(self.pressure, labels, snapshot.pressure)

    def exposition(self) -> bytes:
        return generate_latest(self.registry)

    @staticmethod
    def _set_optional(gauge: Gauge, labels: tuple[str, str], value: Optional[float]) -> None:
        if value is None:
            return
        gauge.labels(*labels).set(value)


@lru_cache
def build_default_metrics() -> ExporterMetrics:
    """Process-wide metrics singleton backed by its own registry."""
    return ExporterMetrics(CollectorRegistry())
