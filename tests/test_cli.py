from __future__ import annotations

from typing import Any, Dict, List

import pytest
import typer
from typer.testing import CliRunner

from cli.app import app
from cli.render import filter_exposition
from services.errors import UpstreamError

_EXPOSITION = """# HELP purpleair_pm2_5_value Sensor-reported PM2.5 value particulate mass in ug/m3
# TYPE purpleair_pm2_5_value gauge
purpleair_pm2_5_value{id="1",sensor_label="A"} 12.0
# HELP purpleair_humidity Sensor reported humidity (in percent)
# TYPE purpleair_humidity gauge
purpleair_humidity{id="1",sensor_label="A"} 40.0
"""


class StubClient:
    def __init__(self, config, metrics_text: str = _EXPOSITION) -> None:
        self.config = config
        self.metrics_text = metrics_text
        self.fail = False
        self.closed = False

    def get_metrics(self) -> str:
        if self.fail:
            typer.secho("Request failed with status 500: Internal Server Error", err=True)
            raise typer.Exit(code=1)
        return self.metrics_text

    def close(self) -> None:
        self.closed = True


class StubUpstream:
    def __init__(self, document: Any = None, error: Exception | None = None) -> None:
        self.document = document
        self.error = error
        self.fetch_calls: List[str] = []
        self.closed = False

    def __call__(self, base_url: str, timeout: float) -> "StubUpstream":
        return self

    def fetch(self, sensor_ids: str) -> Any:
        self.fetch_calls.append(sensor_ids)
        if self.error is not None:
            raise self.error
        return self.document

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _install_stub(monkeypatch, stub: StubClient) -> None:
    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)


def test_fetch_prints_exposition(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["--base-url", "http://exporter:3000/", "fetch"])

    assert result.exit_code == 0
    assert 'purpleair_humidity{id="1",sensor_label="A"} 40.0' in result.stdout
    assert stub.config.base_url == "http://exporter:3000"
    assert stub.closed is True


def test_fetch_with_prefix_filters_lines(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["fetch", "--prefix", "purpleair_pm2_5"])

    assert result.exit_code == 0
    assert "purpleair_pm2_5_value{" in result.stdout
    assert "purpleair_humidity" not in result.stdout


def test_fetch_failure_exits_non_zero(monkeypatch, runner: CliRunner) -> None:
    stub = StubClient(config=None)
    stub.fail = True
    _install_stub(monkeypatch, stub)

    result = runner.invoke(app, ["fetch"])

    assert result.exit_code == 1
    assert stub.closed is True


def test_aqi_command(monkeypatch, runner: CliRunner) -> None:
    _install_stub(monkeypatch, StubClient(config=None))

    result = runner.invoke(app, ["aqi", "35.5"])

    assert result.exit_code == 0
    assert "aqi: 101" in result.stdout
    assert "category: Unhealthy for Sensitive Groups" in result.stdout


def test_sensors_command_renders_snapshots(monkeypatch, runner: CliRunner, sensor_record) -> None:
    _install_stub(monkeypatch, StubClient(config=None))
    document: Dict[str, Any] = {"results": [sensor_record(temp_f="70.1")]}
    upstream = StubUpstream(document=document)
    monkeypatch.setattr("cli.app.PurpleAirClient", upstream)

    result = runner.invoke(app, ["sensors", "1,2"])

    assert result.exit_code == 0
    assert upstream.fetch_calls == ["1,2"]
    assert upstream.closed is True
    assert "Sensor 1 (A)" in result.stdout
    assert "aqi: 50 (Good)" in result.stdout
    assert "temperature_f: 70.1" in result.stdout
    assert "humidity_pct: n/a" in result.stdout


def test_sensors_command_without_results(monkeypatch, runner: CliRunner) -> None:
    _install_stub(monkeypatch, StubClient(config=None))
    monkeypatch.setattr("cli.app.PurpleAirClient", StubUpstream(document={"other": []}))

    result = runner.invoke(app, ["sensors", "1"])

    assert result.exit_code == 0
    assert "No sensors reported." in result.stdout


def test_sensors_command_upstream_error(monkeypatch, runner: CliRunner) -> None:
    _install_stub(monkeypatch, StubClient(config=None))
    upstream = StubUpstream(error=UpstreamError("Upstream request timed out."))
    monkeypatch.setattr("cli.app.PurpleAirClient", upstream)

    result = runner.invoke(app, ["sensors", "1"])

    assert result.exit_code == 1
    assert upstream.closed is True


def test_serve_command_runs_uvicorn(monkeypatch, runner: CliRunner) -> None:
    _install_stub(monkeypatch, StubClient(config=None))
    calls: List[Dict[str, Any]] = []

    def fake_run(target: str, **kwargs: Any) -> None:
        calls.append({"target": target, **kwargs})

    monkeypatch.setattr("cli.app.uvicorn.run", fake_run)

    result = runner.invoke(app, ["serve", "--port", "9200"])

    assert result.exit_code == 0
    assert calls[0]["target"] == "app.main:app"
    assert calls[0]["port"] == 9200


def test_filter_exposition_without_prefix_is_identity() -> None:
    assert filter_exposition(_EXPOSITION, None) == _EXPOSITION
