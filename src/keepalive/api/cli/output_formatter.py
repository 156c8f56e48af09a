"""Rich output formatting for the keepalive CLI.

Renders relay lines (``<timestamp> - <json snapshot>``) as compact,
coloured status rows, and terminal ``Error:`` lines as error panels.
"""

import json
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

KEEPALIVE_THEME = Theme(
    {
        "timestamp": "dim white",
        "running": "bold green",
        "stopped": "bold yellow",
        "error": "bold red",
        "warning": "bold yellow",
        "success": "bold green",
        "debug": "dim white",
        "info": "white",
        "value": "cyan",
    }
)


def parse_relay_line(line: str) -> tuple[str, dict[str, Any]] | None:
    """Split a status line into its timestamp and snapshot payload.

    Returns None for error lines or anything that is not a status line.
    """
    timestamp, sep, payload = line.rstrip("\n").partition(" - ")
    if not sep:
        return None
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        return None
    return (timestamp, data) if isinstance(data, dict) else None


def is_error_line(line: str) -> bool:
    return line.startswith("Error:")


class KeepaliveConsole:
    """Console with keepalive styling for relay output."""

    def __init__(self, debug: bool = False, console: Optional[Console] = None):
        """Initialize console with optional debug mode.

        Args:
            debug: Enable debug output
            console: Optional pre-built rich Console (for tests)
        """
        self.console = console or Console(theme=KEEPALIVE_THEME)
        self.debug_mode = debug

    def print_banner(self, host_id: str, workload: str):
        banner = Text()
        banner.append("=" * 60 + "\n", style="bold blue")
        banner.append("  KEEPALIVE", style="bold cyan")
        banner.append(f" - host {host_id} ({workload})\n", style="bold blue")
        banner.append("=" * 60, style="bold blue")
        self.console.print(banner)

    def print_relay_line(self, line: str):
        """Print one relay line, pretty if it parses, raw otherwise."""
        if is_error_line(line):
            self.print_error(line[len("Error:"):].strip())
            return
        parsed = parse_relay_line(line)
        if parsed is None:
            self.console.print(line.rstrip("\n"), markup=False)
            return
        timestamp, data = parsed
        state_style = "running" if data.get("running") else "stopped"
        counts = ", ".join(f"{k}={v}" for k, v in (data.get("counts") or {}).items())
        row = Text()
        row.append(f"{timestamp} ", style="timestamp")
        row.append(f"{data.get('state', '?'):<8} ", style=state_style)
        row.append(f"steps={data.get('stepCount', 0)} ", style="info")
        if counts:
            row.append(f"[{counts}] ", style="info")
        row.append(f"last={data.get('lastValue')} ", style="value")
        row.append(
            f"mem~{data.get('memoryEstimateBytes', 0)}B "
            f"t={data.get('elapsedSeconds', 0)}s",
            style="info",
        )
        if data.get("error"):
            row.append(f" fault: {data['error']}", style="error")
        self.console.print(row)

    def print_error(self, message: str, exception: Optional[Exception] = None):
        """Print error message with optional exception details.

        Args:
            message: Error message
            exception: Optional exception for debug mode
        """
        error_panel = Panel(
            f"[X] {message}",
            title="[Error]",
            title_align="left",
            border_style="red",
            padding=(0, 1),
        )
        self.console.print(error_panel)

        if exception and self.debug_mode:
            import traceback

            self.console.print("[debug]" + traceback.format_exc() + "[/debug]")

    def print_success(self, message: str):
        self.console.print(f"[success][OK] {message}[/success]")
