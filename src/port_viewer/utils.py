"""
Formatting helpers for the Port Viewer.

Contains:
- intcomma: Thousands-grouped integers for counters and speeds
- trim_text: Cut long labels to a fixed cell width
- format_elapsed: Elapsed seconds as a compact duration ("1h2m5s")
"""

ELLIPSIS = "…"


def intcomma(value: int) -> str:
    """Group digits by thousands: 1234567 -> '1,234,567'."""
    return f"{int(value):,}"


def trim_text(text: str, width: int) -> str:
    """Trim ``text`` to ``width`` cells, ending with an ellipsis when cut."""
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    return text[:width - 1] + ELLIPSIS


def format_elapsed(seconds: int) -> str:
    """Format whole seconds the way Go prints a time.Duration.

    0 -> '0s', 45 -> '45s', 65 -> '1m5s', 3600 -> '1h0m0s'
    """
    seconds = int(seconds)
    if seconds <= 0:
        return "0s"

    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)

    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"
