from __future__ import annotations

from typing import Any, Iterable, Optional

import typer

from models.records import SensorSnapshot
from services.aqi import aqi_category, estimate


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _optional(value: Optional[float]) -> Any:
    return "n/a" if value is None else value


def render_aqi(pm25: float) -> None:
    aqi = estimate(pm25)
    echo_key_values(
        [
            ("pm2_5", pm25),
            ("aqi", aqi),
            ("category", aqi_category(aqi)),
        ]
    )


def render_snapshot(snapshot: SensorSnapshot) -> None:
    echo_heading(f"Sensor {snapshot.id} ({snapshot.label})")
    aqi = estimate(snapshot.pm2_5_value)
    echo_key_values(
        [
            ("location", f"{snapshot.lat}, {snapshot.lon}"),
            ("last_seen", snapshot.last_seen),
            ("uptime_seconds", _optional(snapshot.uptime_seconds)),
            ("pm2_5", snapshot.pm2_5_value),
            ("aqi", f"{aqi} ({aqi_category(aqi)})"),
            ("temperature_f", _optional(snapshot.temperature_fahrenheit)),
            ("humidity_pct", _optional(snapshot.humidity_percent)),
            ("pressure", _optional(snapshot.pressure)),
        ]
    )


def render_snapshots(snapshots: list[SensorSnapshot]) -> None:
    if not snapshots:
        typer.echo("No sensors reported.")
        return
    for index, snapshot in enumerate(snapshots):
        if index:
            typer.echo()
        render_snapshot(snapshot)


def filter_exposition(text: str, prefix: Optional[str]) -> str:
    """Keep only exposition lines that belong to metrics starting with ``prefix``."""
    if not prefix:
        return text
    kept: list[str] = []
    for line in text.splitlines():
        if line.startswith("# HELP ") or line.startswith("# TYPE "):
            name = line.split(" ", 3)[2]
        else:
            name = line
        if name.startswith(prefix):
            kept.append(line)
    return "\n".join(kept)
