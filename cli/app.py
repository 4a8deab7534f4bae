from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer
import uvicorn

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import filter_exposition, render_aqi, render_snapshots
from services.client import PurpleAirClient
from services.errors import ExporterError
from services.scraper import ScrapeService
from settings import get_settings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for running and inspecting the PurpleAir exporter.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Exporter base URL (defaults to EXPORTER_BASE_URL env or http://localhost:3000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for HTTP responses.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("serve")
def serve_command(
    host: Optional[str] = typer.Option(None, "--host", help="Listen address (defaults to EXPORTER_HOST)."),
    port: Optional[int] = typer.Option(None, "--port", help="Listen port (defaults to EXPORTER_PORT)."),
) -> None:
    """Run the exporter HTTP server."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


@app.command("aqi")
def aqi_command(
    pm25: float = typer.Argument(..., help="PM2.5 concentration in ug/m3."),
) -> None:
    """Estimate the US EPA AQI for a PM2.5 concentration."""
    render_aqi(pm25)


@app.command("sensors")
def sensors_command(
    sensor_ids: str = typer.Argument(..., help="Comma-separated sensor IDs."),
) -> None:
    """Fetch sensors straight from the telemetry API and show decoded readings."""
    settings = get_settings()
    client = PurpleAirClient(settings.api_url, timeout=settings.request_timeout)
    try:
        snapshots = ScrapeService.decode(client.fetch(sensor_ids))
    except ExporterError as exc:
        typer.secho(f"Failed to read sensors: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    finally:
        client.close()
    render_snapshots(snapshots)


@app.command("fetch")
def fetch_command(
    ctx: typer.Context,
    prefix: Optional[str] = typer.Option(
        None,
        "--prefix",
        "-p",
        help="Only print metrics whose name starts with this prefix.",
    ),
) -> None:
    """Trigger a scrape on a running exporter and print the exposition."""
    state = _get_state(ctx)
    text = state.client.get_metrics()
    typer.echo(filter_exposition(text, prefix))
