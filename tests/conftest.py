from __future__ import annotations

from typing import Any, Callable, Dict

import pytest

_PARTICULATES = {
    "p_0_3_um": "812.45",
    "p_0_5_um": "240.1",
    "p_1_0_um": "52.3",
    "p_2_5_um": "4.12",
    "p_5_0_um": "1.0",
    "p_10_0_um": "0.0",
    "pm1_0_cf_1": "5.4",
    "pm2_5_cf_1": "8.9",
    "pm10_0_cf_1": "9.6",
    "pm1_0_atm": "5.4",
    "pm2_5_atm": "8.9",
    "pm10_0_atm": "9.6",
}


def make_record(**overrides: Any) -> Dict[str, Any]:
    """Build an upstream sensor record with every required field present."""
    record: Dict[str, Any] = {
        "ID": 1,
        "Label": "A",
        "Lat": 1.0,
        "Lon": 2.0,
        "PM2_5Value": "12.0",
        "LastSeen": 1000,
        **_PARTICULATES,
    }
    record.update(overrides)
    return record


@pytest.fixture()
def sensor_record() -> Callable[..., Dict[str, Any]]:
    return make_record
