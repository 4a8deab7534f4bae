"""Scrape orchestration: fetch, decode, and publish sensor readings."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, List, Optional

from models.records import SensorSnapshot
from services.client import PurpleAirClient
from services.decoder import decode_sensor
from services.errors import SensorDecodeError
from services.metrics import ExporterMetrics, build_default_metrics
from settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScrapeSummary:
    """Outcome of one scrape pass."""

    sensor_count: int
    elapsed_ms: int


def extract_results(document: Any) -> Optional[List[Any]]:
    """Return the ``results`` array, or ``None`` when the envelope lacks one."""
    if not isinstance(document, dict):
        return None
    results = document.get("results")
    if not isinstance(results, list):
        return None
    return results


class ScrapeService:
    """Drives one fetch-decode-publish cycle per call to :meth:`scrape`."""

    def __init__(self, client: PurpleAirClient, metrics: ExporterMetrics) -> None:
        self.client = client
        self.metrics = metrics

    def scrape(self, sensor_ids: str) -> ScrapeSummary:
        start_time = time.perf_counter()
        document = self.client.fetch(sensor_ids)
        snapshots = self.decode(document)

        for snapshot in snapshots:
            self.metrics.project(snapshot)

        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "Scrape completed",
            extra={"sensor_count": len(snapshots), "elapsed_ms": elapsed_ms},
        )
        return ScrapeSummary(sensor_count=len(snapshots), elapsed_ms=elapsed_ms)

    @staticmethod
    def decode(document: Any) -> list[SensorSnapshot]:
        """Decode every record before anything is published.

        A single bad record fails the whole pass.
        """
        results = extract_results(document)
        if results is None:
            logger.warning("results array not found in upstream response")
            return []

        snapshots: list[SensorSnapshot] = []
        for record in results:
            try:
                snapshots.append(decode_sensor(record))
            except SensorDecodeError as exc:
                logger.error(
                    "Failed to decode sensor record: %s",
                    record,
                    extra={"sensor_id": exc.sensor_id, "field": exc.field, "reason": exc.reason},
                )
                raise
        return snapshots

    def shutdown(self) -> None:
        self.client.close()


@lru_cache
def build_default_scraper() -> ScrapeService:
    """Factory that wires the scraper with settings and the shared registry."""
    settings = get_settings()
    client = PurpleAirClient(settings.api_url, timeout=settings.request_timeout)
    return ScrapeService(client=client, metrics=build_default_metrics())
