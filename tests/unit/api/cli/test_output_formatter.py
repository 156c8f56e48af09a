"""Tests for relay line rendering."""

from io import StringIO

from rich.console import Console

from keepalive.api.cli.output_formatter import (
    KEEPALIVE_THEME,
    KeepaliveConsole,
    is_error_line,
    parse_relay_line,
)

STATUS_LINE = (
    '2026-10-18T12:00:01.000Z - {"running":true,"state":"running","stepCount":4,'
    '"counts":{"primes":4},"lastValue":7,"memoryEstimateBytes":20,"elapsedSeconds":1}\n'
)


def _console() -> tuple[KeepaliveConsole, StringIO]:
    buffer = StringIO()
    console = Console(file=buffer, theme=KEEPALIVE_THEME, width=200, color_system=None)
    return KeepaliveConsole(console=console), buffer


def test_parse_relay_line() -> None:
    timestamp, data = parse_relay_line(STATUS_LINE)
    assert timestamp == "2026-10-18T12:00:01.000Z"
    assert data["stepCount"] == 4


def test_parse_rejects_non_status_lines() -> None:
    assert parse_relay_line("Error: connection lost\n") is None
    assert parse_relay_line("x - not json") is None
    assert parse_relay_line("x - [1, 2]") is None


def test_is_error_line() -> None:
    assert is_error_line("Error: boom\n")
    assert not is_error_line(STATUS_LINE)


def test_print_status_line() -> None:
    tf_console, buffer = _console()
    tf_console.print_relay_line(STATUS_LINE)
    output = buffer.getvalue()
    assert "steps=4" in output
    assert "primes=4" in output
    assert "last=7" in output


def test_print_error_line() -> None:
    tf_console, buffer = _console()
    tf_console.print_relay_line("Error: connection lost\n")
    assert "connection lost" in buffer.getvalue()
