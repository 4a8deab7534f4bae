from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("services.scraper", logging.ERROR, __file__, 1, "Scrape failed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_contextual_formatter_appends_extra_keys() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    output = formatter.format(_record(sensor_id=7, field="PM2_5Value", reason=None))

    assert output == "ERROR Scrape failed | sensor_id=7 field=PM2_5Value"


def test_contextual_formatter_without_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["sensor_id"])

    assert formatter.format(_record(pm25=600.0)) == "Scrape failed"
