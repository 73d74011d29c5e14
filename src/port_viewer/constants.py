"""
Constants for the Port Viewer display.
"""

# Chart y-axis range in percent
Y_FLOOR: float = 0.0
Y_CEIL: float = 100.0

# Rows of braille characters per utilization chart
CHART_HEIGHT: int = 8

# Chart width used before the widget has been laid out
DEFAULT_CHART_WIDTH: int = 38

# sysName / ifAlias are trimmed to this many cells in the header panel
HEADER_TRIM_WIDTH: int = 31

# Width of each raw counter column
RAW_VALUE_WIDTH: int = 21

# The clock ticks every second; sampling runs every `interval` ticks
CLOCK_PERIOD_SECONDS: int = 1
