"""
CSS styles for the Port Viewer.

Contains:
- get_monitor_css: CSS for the monitor screen
"""

from .models import ColorTheme, THEME


def get_monitor_css(theme: ColorTheme = THEME) -> str:
    """Generate CSS for the monitor screen using theme colors."""
    return f"""
MonitorScreen {{
    background: {theme.background};
}}

#monitor-container {{
    width: 100%;
    height: 1fr;
    padding: 0 1;
}}

/* Header panels */
#interface-panel {{
    height: 4;
    border: round {theme.border};
    border-title-color: {theme.primary_light};
    background: {theme.surface};
    color: {theme.text};
    padding: 0 1;
}}

#raw-panel {{
    height: 5;
    border: round {theme.border};
    border-title-color: {theme.primary_light};
    background: {theme.surface};
    color: {theme.text};
    padding: 0 1;
}}

/* Utilization charts side by side */
#charts {{
    height: auto;
}}

.utilization-chart {{
    width: 1fr;
    height: auto;
    border: round {theme.border};
    background: {theme.surface};
    padding: 0 1;
}}

#rx-chart {{
    border-title-color: {theme.rx_green};
}}

#tx-chart {{
    border-title-color: {theme.tx_blue};
}}

/* Status line */
#status-footer {{
    height: 1;
    background: {theme.surface_light};
    padding: 0 1;
    color: {theme.text};
}}

#status-indicator {{
    width: auto;
    padding: 0 1 0 0;
    color: {theme.text_dim};
}}

#status-text {{
    width: 1fr;
}}

#clock {{
    width: auto;
    color: {theme.text_dim};
}}
"""
