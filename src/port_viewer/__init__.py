"""
Port Viewer - Real-time utilization of one interface on an SNMP agent.

Uses the Textual TUI framework; the sampling pipeline lives in src/bandwidth/.
"""

from .app import PortViewerApp, probe, render_probe, run_viewer
from .models import ColorTheme, THEME, build_area_graph
from .constants import CHART_HEIGHT, Y_CEIL, Y_FLOOR

__all__ = [
    # Main app and entry points
    "PortViewerApp",
    "run_viewer",
    "probe",
    "render_probe",
    # Models
    "ColorTheme",
    "THEME",
    "build_area_graph",
    # Constants
    "CHART_HEIGHT",
    "Y_CEIL",
    "Y_FLOOR",
]
