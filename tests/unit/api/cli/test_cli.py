"""Tests for the keepalive CLI."""

import logging

import pytest
import structlog
from typer.testing import CliRunner

from keepalive import __version__
from keepalive.api.cli.main import app

runner = CliRunner()


@pytest.fixture
def fast_env(monkeypatch):
    monkeypatch.delenv("KEEPALIVE_CONFIG", raising=False)
    monkeypatch.setenv("KEEPALIVE_PRIME_PADDING_ITERATIONS", "0")
    monkeypatch.setenv("KEEPALIVE_FIBONACCI_PADDING_ITERATIONS", "0")


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_run_raw_prints_one_line_per_ping(fast_env) -> None:
    result = runner.invoke(
        app, ["run", "--workload", "primes", "-n", "3", "-i", "0", "-f", "raw"]
    )
    assert result.exit_code == 0, result.stdout
    lines = [line for line in result.stdout.splitlines() if " - {" in line]
    assert len(lines) == 3


def test_run_text_output(fast_env) -> None:
    result = runner.invoke(app, ["run", "-w", "fibonacci", "-n", "2", "-i", "0"])
    assert result.exit_code == 0, result.stdout
    assert "KEEPALIVE" in result.stdout
    assert "steps=" in result.stdout


def test_run_unknown_workload_exits_with_error(fast_env) -> None:
    result = runner.invoke(app, ["run", "-w", "collatz", "-n", "1"])
    assert result.exit_code == 1


def test_run_rejects_bad_output_format(fast_env) -> None:
    result = runner.invoke(app, ["run", "-f", "yaml"])
    assert result.exit_code != 0


def test_run_with_invalid_config_file(fast_env, tmp_path) -> None:
    config = tmp_path / "keepalive.yaml"
    config.write_text("relay_max_iterations: 0\n", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(config), "run", "-n", "1"])
    assert result.exit_code == 1


def test_watch_unreachable_server_exits_with_error() -> None:
    result = runner.invoke(
        app, ["watch", "http://127.0.0.1:9", "-n", "1", "--timeout", "0.5"]
    )
    assert result.exit_code == 1


def test_run_applies_configured_log_level(fast_env, monkeypatch) -> None:
    monkeypatch.setenv("KEEPALIVE_LOG_LEVEL", "ERROR")
    result = runner.invoke(app, ["run", "-w", "primes", "-n", "1", "-i", "0", "-f", "raw"])
    assert result.exit_code == 0, result.stdout
    assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(
        logging.ERROR
    )


def test_run_debug_flag_overrides_configured_level(fast_env, monkeypatch) -> None:
    monkeypatch.setenv("KEEPALIVE_LOG_LEVEL", "ERROR")
    result = runner.invoke(app, ["--debug", "run", "-n", "1", "-i", "0", "-f", "raw"])
    assert result.exit_code == 0, result.stdout
    assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(
        logging.DEBUG
    )


def test_run_text_output_reports_clean_finish(fast_env) -> None:
    result = runner.invoke(app, ["run", "-w", "primes", "-n", "2", "-i", "0"])
    assert result.exit_code == 0, result.stdout
    assert "Relay finished after 2 pings" in result.stdout


class RecordingDriver:
    """Stands in for KeepAliveDriver and records how it was configured."""

    instances: list["RecordingDriver"] = []

    def __init__(self, host, **kwargs) -> None:
        self.host = host
        self.kwargs = kwargs
        RecordingDriver.instances.append(self)

    async def run(self):
        yield "Error: not connected\n"


class FakeRemote:
    host_id = "remote-1"

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None


@pytest.fixture
def fake_remote(monkeypatch):
    from keepalive.api.cli.commands import watch

    async def create(url, **kwargs):
        return FakeRemote()

    RecordingDriver.instances = []
    monkeypatch.setattr(watch, "create_remote_host", create)
    monkeypatch.setattr(watch, "KeepAliveDriver", RecordingDriver)
    return RecordingDriver


def test_watch_takes_relay_defaults_from_config(fast_env, fake_remote, tmp_path) -> None:
    config = tmp_path / "keepalive.yaml"
    config.write_text(
        "relay_interval_seconds: 0.25\n"
        "relay_max_iterations: 7\n"
        "stop_host_on_relay_end: false\n",
        encoding="utf-8",
    )
    runner.invoke(app, ["--config", str(config), "watch", "http://keepalive.test"])

    (driver,) = fake_remote.instances
    assert driver.kwargs == {
        "interval_seconds": 0.25,
        "max_iterations": 7,
        "stop_on_finish": False,
    }


def test_watch_options_override_config(fast_env, fake_remote) -> None:
    runner.invoke(
        app, ["watch", "http://keepalive.test", "-i", "2", "-n", "5", "--stop"]
    )

    (driver,) = fake_remote.instances
    assert driver.kwargs == {
        "interval_seconds": 2.0,
        "max_iterations": 5,
        "stop_on_finish": True,
    }
