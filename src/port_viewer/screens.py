"""
Screen classes for the Port Viewer.

Contains:
- MonitorScreen: Resolves the interface, then samples it on a one-second clock
"""

from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.reactive import reactive
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Footer, Static

from src.bandwidth.exceptions import MonitorError, UtilizationConfigError
from src.bandwidth.models import TickResult
from src.snmp_client.exceptions import SnmpError
from src.utils.logger import get_logger

from .constants import CLOCK_PERIOD_SECONDS
from .models import THEME
from .utils import format_elapsed
from .widgets import InterfacePanel, RawDataPanel, UtilizationChart

logger = get_logger(__name__)


class MonitorScreen(Screen):
    """Screen for real-time utilization of a single interface."""

    BINDINGS = [
        Binding("q", "quit_app", "Quit"),
        Binding("p", "toggle_pause", "Pause/Resume"),
        Binding("r", "reset_stats", "Reset Stats"),
        Binding("escape", "quit_app", "Exit"),
    ]

    is_paused = reactive(False)

    def __init__(self):
        super().__init__()
        self.clock_timer: Optional[Timer] = None
        self.elapsed: int = 0
        self.consecutive_errors: int = 0
        self.last_error: Optional[str] = None

    @property
    def monitor(self):
        return self.app.monitor

    def compose(self) -> ComposeResult:
        """Compose the monitoring UI."""
        with Container(id="monitor-container"):
            yield InterfacePanel("[dim]Resolving interface...[/dim]", id="interface-panel")
            yield RawDataPanel("", id="raw-panel")
            with Horizontal(id="charts"):
                yield UtilizationChart("rx", id="rx-chart", classes="utilization-chart")
                yield UtilizationChart("tx", id="tx-chart", classes="utilization-chart")
            with Horizontal(id="status-footer"):
                yield Static(f"[bold {THEME.success}]●[/bold {THEME.success}]", id="status-indicator")
                yield Static("[dim]Initializing...[/dim]", id="status-text")
                yield Static("", id="clock")
        yield Footer()

    async def on_mount(self) -> None:
        """Resolve the interface, take the baseline sample and start the clock."""
        self.query_one("#interface-panel").border_title = "Interface"
        self.query_one("#raw-panel").border_title = "Raw Data"
        self.query_one("#rx-chart").border_title = "Rx Utilization (%)"
        self.query_one("#tx-chart").border_title = "Tx Utilization (%)"
        self.query_one(RawDataPanel).show_delta(None)

        try:
            interface = await self.monitor.start()
        except (MonitorError, SnmpError) as e:
            logger.error(f"Interface resolution failed: {e}")
            self.app.exit(return_code=1, message=f"Error: {e}")
            return

        self.query_one(InterfacePanel).show_interface(interface)

        # Baseline sample right away, like the first draw
        await self._poll_data()
        self._update_clock()
        self.clock_timer = self.set_interval(CLOCK_PERIOD_SECONDS, self._on_clock)

    async def _on_clock(self) -> None:
        """One-second tick: advance the clock and sample every `interval` seconds."""
        self.elapsed += CLOCK_PERIOD_SECONDS
        if self.elapsed % self.monitor.interval_seconds == 0:
            await self._poll_data()
        self._update_clock()

    async def _poll_data(self) -> None:
        """Run one monitor tick and refresh the panels."""
        if self.is_paused:
            return

        try:
            result = await self.monitor.tick()
        except UtilizationConfigError as e:
            logger.error(f"Configuration error: {e}")
            self.app.exit(return_code=1, message=f"Error: {e}")
            return
        except (MonitorError, SnmpError) as e:
            logger.exception("Error polling counters")
            self._handle_polling_error(e)
            return

        self._reset_error_count()
        self._show_result(result)
        self._update_status()

    def _show_result(self, result: TickResult) -> None:
        self.query_one(RawDataPanel).show_delta(result.delta)
        self.query_one("#rx-chart", UtilizationChart).show_series(self.monitor.history.rx_series())
        self.query_one("#tx-chart", UtilizationChart).show_series(self.monitor.history.tx_series())

    def _update_clock(self) -> None:
        self.query_one("#clock", Static).update(
            f"{format_elapsed(self.elapsed):>11} (press q to quit)"
        )

    def _update_status(self) -> None:
        """Update the status footer."""
        status = self.query_one("#status-text", Static)
        indicator = self.query_one("#status-indicator", Static)

        if self.last_error:
            indicator.update(f"[bold {THEME.error}]✗[/bold {THEME.error}]")
            status.update(f"[bold {THEME.error}]Error:[/bold {THEME.error}] {self.last_error}")
        elif self.is_paused:
            indicator.update(f"[bold {THEME.warning}]⏸[/bold {THEME.warning}]")
            status.update(f"[bold {THEME.warning}]PAUSED[/bold {THEME.warning}] [dim]│ Press [bold]P[/bold] to resume[/dim]")
        else:
            indicator.update(f"[bold {THEME.success}]●[/bold {THEME.success}]")
            latest = self.monitor.history.latest()
            if latest is None:
                rates = "[dim]waiting for second sample...[/dim]"
            else:
                rates = (
                    f"[{THEME.rx_green}]Rx {latest.rx_percent:.2f}%[/{THEME.rx_green}] "
                    f"[{THEME.tx_blue}]Tx {latest.tx_percent:.2f}%[/{THEME.tx_blue}]"
                )
            status.update(
                f"[dim]Every[/dim] {self.monitor.interval_seconds}s "
                f"[dim]│ Samples:[/dim] {self.monitor.tick_count} [dim]│[/dim] {rates}"
            )

    def _handle_polling_error(self, error: Exception) -> None:
        """Show the error and auto-pause after repeated failures."""
        self.consecutive_errors += 1
        self.last_error = str(error)

        if self.consecutive_errors >= self.app.max_consecutive_errors:
            if not self.is_paused:
                self.is_paused = True
                self.notify(
                    f"Auto-paused after {self.consecutive_errors} consecutive errors. Press P to resume.",
                    severity="error"
                )
        else:
            self.notify(f"Temporary error ({self.consecutive_errors}/{self.app.max_consecutive_errors})",
                        severity="warning")
        self._update_status()

    def _reset_error_count(self) -> None:
        """Reset consecutive error counter on successful poll."""
        if self.consecutive_errors > 0:
            self.consecutive_errors = 0
            self.last_error = None
            self.notify("Connection restored", severity="information")

    def action_toggle_pause(self) -> None:
        """Toggle pause/resume polling."""
        self.is_paused = not self.is_paused
        if not self.is_paused:
            self.consecutive_errors = 0
            self.last_error = None
            # The old sample is several intervals stale; start a new delta series
            self.monitor.rebaseline()
        self._update_status()
        self.notify(
            "Polling paused" if self.is_paused else "Polling resumed",
            severity="warning" if self.is_paused else "information"
        )

    def action_reset_stats(self) -> None:
        """Clear history and take a new baseline on the next tick."""
        self.monitor.reset()
        self.query_one(RawDataPanel).show_delta(None)
        self.query_one("#rx-chart", UtilizationChart).show_series([])
        self.query_one("#tx-chart", UtilizationChart).show_series([])
        self._update_status()
        self.notify("Statistics reset", severity="information")

    def action_quit_app(self) -> None:
        """Quit the application."""
        if self.clock_timer:
            self.clock_timer.stop()
            self.clock_timer = None
        self.app.exit()
