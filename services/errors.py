"""Exception hierarchy for scrape failures."""

from __future__ import annotations

from typing import Any, Optional


class ExporterError(Exception):
    """Base class for failures that turn a scrape into a server error."""


class ConfigurationError(ExporterError):
    """Required configuration is missing at request time."""


class UpstreamError(ExporterError):
    """The telemetry API could not be reached or returned an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SensorDecodeError(ExporterError):
    """A sensor record is missing a required field or holds a malformed value."""

    def __init__(
        self,
        reason: str,
        field: Optional[str] = None,
        sensor_id: Optional[int] = None,
        value: Any = None,
    ) -> None:
        self.reason = reason
        self.field = field
        self.sensor_id = sensor_id
        self.value = value
        super().__init__(self._describe())

    def _describe(self) -> str:
        parts = [self.reason]
        if self.field is not None:
            parts.append(f"field={self.field}")
        if self.sensor_id is not None:
            parts.append(f"sensor_id={self.sensor_id}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        return " ".join(parts)
