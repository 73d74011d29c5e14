"""
Main application class and entry points for the Port Viewer.

Contains:
- PortViewerApp: Main Textual application class
- run_viewer: Run the TUI for one interface and return the exit code
- probe: Resolve and sample once without the TUI
"""

import asyncio
from typing import Optional

from rich.console import Console
from rich.table import Table
from textual.app import App

from src.bandwidth.monitor import PortMonitor
from src.bandwidth.models import TickResult
from src.bandwidth.models import COUNTER_FIELDS
from src.snmp_client.client import SnmpClient
from src.utils.logger import get_logger, suppress_console_logging

from .screens import MonitorScreen
from .styles import get_monitor_css
from .utils import intcomma

logger = get_logger(__name__)


class PortViewerApp(App):
    """Live utilization of one interface on one SNMP agent."""

    TITLE = "SNMP Port Viewer"
    ENABLE_COMMAND_PALETTE = False

    CSS = get_monitor_css()

    SCREENS = {
        "monitor": MonitorScreen,
    }

    def __init__(self, monitor: PortMonitor, max_consecutive_errors: int = 3):
        super().__init__()
        self.monitor = monitor
        self.max_consecutive_errors = max_consecutive_errors

    def on_mount(self) -> None:
        """Called when app is mounted - go straight to the monitor."""
        self.sub_title = f"{self.monitor.client.host} {self.monitor.token}"
        self.push_screen("monitor")

    def on_unmount(self) -> None:
        self.monitor.client.close()


def run_viewer(monitor: PortMonitor, max_consecutive_errors: int = 3) -> int:
    """Run the TUI until the user quits; returns the process exit code."""
    # The TUI owns the terminal - logs still go to file
    suppress_console_logging()

    app = PortViewerApp(monitor, max_consecutive_errors=max_consecutive_errors)
    try:
        app.run()
    except KeyboardInterrupt:
        return 0
    return app.return_code or 0


def render_probe(monitor: PortMonitor, result: Optional[TickResult], console: Console) -> None:
    """Print the resolved interface and one tick's deltas as tables."""
    interface = monitor.interface
    identity = interface.identity

    header = Table(title="Interface", show_header=False)
    header.add_column("Property", style="bold")
    header.add_column("Value")
    header.add_row("sysName", interface.sys_name or "-")
    header.add_row("ifIndex", str(identity.index))
    header.add_row("ifName", identity.name)
    header.add_row("ifAlias", identity.alias or "-")
    header.add_row("ifSpeed", f"{intcomma(identity.speed_mbps)} Mbps")
    console.print(header)

    if result is None or result.delta is None:
        console.print("[yellow]No delta available (single sample)[/yellow]")
        return

    counters = Table(title=f"Deltas over {monitor.interval_seconds}s at {result.sample.taken_at:%H:%M:%S}")
    counters.add_column("Counter", style="bold")
    counters.add_column("Delta", justify="right")
    for name in COUNTER_FIELDS:
        counters.add_row(name, intcomma(getattr(result.delta, name)))
    counters.add_row("rx utilization", f"{result.utilization.rx_percent:.2f}%")
    counters.add_row("tx utilization", f"{result.utilization.tx_percent:.2f}%")
    console.print(counters)


async def probe(monitor: PortMonitor, console: Optional[Console] = None) -> TickResult:
    """Resolve, take two samples one interval apart and print them."""
    console = console or Console()
    client: SnmpClient = monitor.client
    try:
        await monitor.start()
        await monitor.tick()
        await asyncio.sleep(monitor.interval_seconds)
        result = await monitor.tick()
    finally:
        client.close()

    render_probe(monitor, result, console)
    return result
