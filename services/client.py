"""HTTP client for the PurpleAir JSON telemetry endpoint."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from services.errors import UpstreamError

logger = logging.getLogger(__name__)


class PurpleAirClient:
    """Issues one synchronous GET per scrape against the telemetry API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def fetch(self, sensor_ids: str) -> Any:
        """Return the decoded JSON document for ``sensor_ids`` (comma separated)."""
        show = sensor_ids.replace(",", "|")
        try:
            response = self._client.get(self.base_url, params={"show": show})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"Upstream returned status {exc.response.status_code}.",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamError("Upstream request timed out.") from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Upstream request failed: {exc}") from exc

        try:
            document = response.json()
        except ValueError as exc:
            raise UpstreamError(
                "Upstream response is not valid JSON.",
                status_code=response.status_code,
            ) from exc

        logger.debug(
            "Upstream response received: %s",
            document,
            extra={"status_code": response.status_code, "upstream_url": str(response.url)},
        )
        return document
