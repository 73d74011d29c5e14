"""
Custom widgets for the Port Viewer.

Contains:
- InterfacePanel: Device and interface header (set once after resolution)
- RawDataPanel: Per-tick counter deltas
- UtilizationChart: Braille area chart of one utilization series
"""

from typing import List, Optional, Sequence

from rich.markup import escape
from textual.widgets import Static

from src.bandwidth.models import CounterDelta, ResolvedInterface

from .constants import CHART_HEIGHT, DEFAULT_CHART_WIDTH, HEADER_TRIM_WIDTH, RAW_VALUE_WIDTH, Y_CEIL, Y_FLOOR
from .models import THEME, build_area_graph
from .utils import intcomma, trim_text

# (left label, left field, right label, right field)
RAW_ROWS = (
    ("ifHCInOctets:", "in_octets", "ifHCOutOctets:", "out_octets"),
    ("ifInDiscards:", "in_discards", "ifOutDiscards:", "out_discards"),
    ("ifInErrors:", "in_errors", "ifOutErrors:", "out_errors"),
)


def interface_panel_text(resolved: ResolvedInterface) -> str:
    identity = resolved.identity
    sys_name = escape(f"{trim_text(resolved.sys_name, HEADER_TRIM_WIDTH):<{HEADER_TRIM_WIDTH}}")
    alias = escape(f"{trim_text(identity.alias, HEADER_TRIM_WIDTH):<{HEADER_TRIM_WIDTH}}")
    return (
        f"[bold]sysName:[/bold] {sys_name} [bold]ifName:[/bold]  {escape(identity.name)}\n"
        f"[bold]ifAlias:[/bold] {alias} [bold]ifSpeed:[/bold] {intcomma(identity.speed_mbps)} Mbps"
    )


def raw_panel_text(delta: Optional[CounterDelta]) -> str:
    """Counter deltas, or dashes while there is no baseline yet."""
    lines = []
    for left_label, left_field, right_label, right_field in RAW_ROWS:
        left = intcomma(getattr(delta, left_field)) if delta is not None else "-"
        right = intcomma(getattr(delta, right_field)) if delta is not None else "-"
        lines.append(
            f"[bold]{left_label:<14}[/bold] {left:>{RAW_VALUE_WIDTH}}     "
            f"[bold]{right_label:<14}[/bold] {right:>{RAW_VALUE_WIDTH}}"
        )
    return "\n".join(lines)


class InterfacePanel(Static):
    """Header with sysName, ifName, ifAlias and ifSpeed."""

    def show_interface(self, resolved: ResolvedInterface) -> None:
        self.update(interface_panel_text(resolved))


class RawDataPanel(Static):
    """Raw counter deltas of the latest tick."""

    def show_delta(self, delta: Optional[CounterDelta]) -> None:
        self.update(raw_panel_text(delta))


class UtilizationChart(Static):
    """Rolling utilization (%) chart with a fixed 0-100 scale."""

    def __init__(self, direction: str, id: str = None, classes: str = None):
        super().__init__("", id=id, classes=classes)
        self.direction = direction
        self._series: List[float] = []

    def chart_width(self) -> int:
        # Leave room for the 4-cell axis label
        width = self.content_size.width - 5
        return width if width > 0 else DEFAULT_CHART_WIDTH

    def show_series(self, series: Sequence[float]) -> None:
        self._series = list(series)
        self.refresh_chart()

    def refresh_chart(self) -> None:
        rows = build_area_graph(
            self._series, CHART_HEIGHT, self.chart_width(),
            scale_max=Y_CEIL, colors=THEME.gradient(self.direction),
        )
        current = f"{self._series[-1]:.1f}%" if self._series else "-"
        lines = []
        for i, row in enumerate(rows):
            if i == 0:
                axis = f"{int(Y_CEIL):>3}┤"
            elif i == len(rows) - 1:
                axis = f"{int(Y_FLOOR):>3}┤"
            else:
                axis = "   │"
            lines.append(f"[{THEME.text_dim}]{axis}[/{THEME.text_dim}] {row}")
        lines.append(f"[{THEME.text_dim}]now:[/{THEME.text_dim}] [bold]{current}[/bold]")
        self.update("\n".join(lines))

    def on_resize(self) -> None:
        self.refresh_chart()
