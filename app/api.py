"""HTTP route definitions for the exporter."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from prometheus_client import CONTENT_TYPE_LATEST

from services.errors import ExporterError
from services.scraper import ScrapeService, build_default_scraper
from settings import read_sensor_ids

logger = logging.getLogger(__name__)

router = APIRouter()


def get_scraper() -> ScrapeService:
    return build_default_scraper()


@router.get(
    "/metrics",
    summary="Scrape the configured sensors and return all gauges.",
    response_class=Response,
)
def metrics(scraper: ScrapeService = Depends(get_scraper)) -> Response:
    logger.info("Handling metrics call")
    try:
        sensor_ids = read_sensor_ids()
        scraper.scrape(sensor_ids)
    except ExporterError as exc:
        logger.error("Scrape failed: %r", exc, extra={"reason": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        ) from exc
    return Response(content=scraper.metrics.exposition(), media_type=CONTENT_TYPE_LATEST)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /metrics for sensor gauges."}
