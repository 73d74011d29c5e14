"""
Display models for the Port Viewer.

Contains:
- ColorTheme: Centralized color theme management
- get_braille_char / build_area_graph: Braille area charts for utilization
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .constants import Y_CEIL

# Braille vertical bar patterns for graph rendering (bottom-to-top, left column)
# Each character represents a fill level from 0 (empty) to 4 (full)
BRAILLE_BARS_UP = [
    '\u2800',  # Level 0: blank (⠀)
    '\u2840',  # Level 1: dot 7 - bottom (⡀)
    '\u2844',  # Level 2: dots 3,7 (⡄)
    '\u2846',  # Level 3: dots 2,3,7 (⡆)
    '\u2847',  # Level 4: dots 1,2,3,7 - full left column (⡇)
]

BRAILLE_EMPTY = BRAILLE_BARS_UP[0]

# Number of braille levels per row (excluding the empty level)
BRAILLE_LEVELS_PER_ROW = 4


def get_braille_char(fill_level: float) -> str:
    """
    Get the braille character for a given fill level within a row.

    Args:
        fill_level: Value from 0.0 to 1.0 representing how full this row should be

    Returns:
        The appropriate braille character for the fill level
    """
    if fill_level <= 0:
        return BRAILLE_EMPTY

    # Any non-zero value shows at least a single dot
    index = int(fill_level * BRAILLE_LEVELS_PER_ROW)
    index = max(1, min(index, BRAILLE_LEVELS_PER_ROW))
    return BRAILLE_BARS_UP[index]


@dataclass
class ColorTheme:
    """Centralized color theme management."""

    primary: str = "#58a6ff"
    primary_dark: str = "#388bfd"
    primary_light: str = "#79c0ff"

    success: str = "#56d364"
    warning: str = "#d29922"
    error: str = "#f85149"

    # Data colors
    rx_green: str = "#56d364"
    tx_blue: str = "#58a6ff"

    # UI colors
    background: str = "#0d1117"
    surface: str = "#161b22"
    surface_light: str = "#21262d"

    text: str = "#c9d1d9"
    text_dim: str = "#8b949e"

    border: str = "#30363d"

    # Graph gradients, darkest at the baseline
    rx_gradient: List[str] = field(default_factory=lambda: [
        "#2ea043", "#3fb950", "#56d364", "#7ee787", "#aff5b4", "#d3f9d8"
    ])

    tx_gradient: List[str] = field(default_factory=lambda: [
        "#1f6feb", "#388bfd", "#58a6ff", "#79c0ff", "#a5d6ff", "#cae8ff"
    ])

    def gradient(self, direction: str) -> List[str]:
        return list(self.rx_gradient if direction == "rx" else self.tx_gradient)


# Global theme instance
THEME = ColorTheme()


def build_area_graph(history: Iterable[float], height: int, width: int,
                     scale_max: float = Y_CEIL, colors: Optional[List[str]] = None) -> List[str]:
    """
    Create a multi-row filled area graph using braille characters.

    The newest value is in the right-most column; columns without data yet
    are blank. Values above ``scale_max`` are drawn as a full column, the
    data itself is never modified.

    Args:
        history: Values, oldest first
        height: Number of rows for the graph
        width: Number of columns
        scale_max: Value drawn as a full column
        colors: Optional per-row colors from the baseline upward; rows are
            returned as rich markup when given

    Returns:
        List of strings, top row first
    """
    data = list(history)
    if len(data) > width:
        data = data[-width:]

    # Right-align: None marks "no data yet" as opposed to a real zero
    data = [None] * (width - len(data)) + data

    total_levels = height * BRAILLE_LEVELS_PER_ROW
    normalized = []
    for val in data:
        if val is None:
            normalized.append(None)
        else:
            norm = (val / scale_max) * total_levels if scale_max > 0 else 0
            normalized.append(min(total_levels, max(0, norm)))

    if colors:
        colors = list(colors)
        while len(colors) < height:
            colors.append(colors[-1])

    rows = []
    for row_num in range(height, 0, -1):
        row_base = (row_num - 1) * BRAILLE_LEVELS_PER_ROW
        row_top = row_num * BRAILLE_LEVELS_PER_ROW

        row_chars = []
        for val in normalized:
            if val is None or val <= row_base:
                row_chars.append(BRAILLE_EMPTY)
            elif val >= row_top:
                row_chars.append(get_braille_char(1.0))
            else:
                row_chars.append(get_braille_char((val - row_base) / BRAILLE_LEVELS_PER_ROW))

        row_str = "".join(row_chars)
        if colors:
            color = colors[min(row_num - 1, len(colors) - 1)]
            row_str = f"[{color}]{row_str}[/{color}]"
        rows.append(row_str)

    return rows
