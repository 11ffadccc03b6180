# Project: climate-outlook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
chart.py — ASCII chart and table rendering for outlook output.

Uses only the Python standard library (os).
All rendering functions return strings ready to print.
"""

import os

from climate_outlook.utils import fmt_value

FALLBACK_TERMINAL_WIDTH: int = 80
BAR_LABEL_RESERVE: int = 30  # characters reserved for label + value outside the bar
SPARK_LEVELS = "▁▂▃▄▅▆▇█"
MISSING_MARK = "·"


def _terminal_bar_width() -> int:
    try:
        terminal_width = os.get_terminal_size().columns
    except OSError:
        terminal_width = FALLBACK_TERMINAL_WIDTH
    return max(10, terminal_width - BAR_LABEL_RESERVE)


def render_outlook_table(cards: list[dict], location_line: str) -> str:
    """Render predicted values for each displayed variable as a fixed-width table.

    Args:
        cards: Display cards from units.display_series.
        location_line: Header text (place and date).

    Returns:
        Multi-line string containing the formatted table.
    """
    sep = "─" * 62
    lines = [
        f"📍 {location_line}",
        sep,
        f"{'Variable':<15} {'Predicted':>16}  {'Status':<14} {'Years':>5}",
        sep,
    ]
    for card in cards:
        present = sum(1 for v in card["values"] if v is not None)
        lines.append(
            f"{card['title']:<15} {fmt_value(card['prediction'], card['unit']):>16}  "
            f"{card['status']:<14} {present:>2}/{len(card['values']):<2}"
        )
    lines.append(sep)
    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────
# Series chart helpers
# ─────────────────────────────────────────────────────────────

def _bar(value: float, min_value: float, max_value: float, bar_width: int) -> str:
    """Render a single filled/empty bar scaled to bar_width.

    Args:
        value: The data value to represent.
        min_value: Value that maps to an empty bar.
        max_value: Value that maps to a full bar.
        bar_width: Total character width of the bar.

    Returns:
        String of '█' and '░' characters of length bar_width.
    """
    span = max_value - min_value
    if span == 0:
        filled = bar_width if max_value != 0 else 0
    else:
        filled = round(((value - min_value) / span) * bar_width)
    filled = max(0, min(filled, bar_width))
    return "█" * filled + "░" * (bar_width - filled)


def render_bar_chart(
    labels: list[str],
    values: list[float | None],
    title: str,
    unit: str = "",
    bar_width: int | None = None,
) -> str:
    """Render a labelled horizontal bar chart; missing values show an empty row.

    Negative values are handled by shifting the scale so the minimum maps
    to an empty bar.
    """
    if bar_width is None:
        bar_width = _terminal_bar_width()

    present = [v for v in values if v is not None]
    low = min(min(present), 0) if present else 0
    high = max(present) if present else 0

    label_w = max(len(lbl) for lbl in labels) if labels else 3
    lines = [title]
    for label, value in zip(labels, values):
        if value is None:
            lines.append(f"  {label:<{label_w}} │{' ' * bar_width}│ {'—':>8}")
            continue
        bar = _bar(value, low, high, bar_width)
        lines.append(f"  {label:<{label_w}} │{bar}│ {fmt_value(value, unit, 1):>8}")

    return "\n".join(lines)


def sparkline(values: list[float | None]) -> str:
    """One character per value from ▁ to █; missing values render as '·'."""
    present = [v for v in values if v is not None]
    if not present:
        return MISSING_MARK * len(values)
    low, high = min(present), max(present)
    span = high - low
    top = len(SPARK_LEVELS) - 1
    chars = []
    for v in values:
        if v is None:
            chars.append(MISSING_MARK)
        elif span == 0:
            chars.append(SPARK_LEVELS[top // 2])
        else:
            chars.append(SPARK_LEVELS[round((v - low) / span * top)])
    return "".join(chars)


def render_line_chart(labels: list[str], values: list[float | None], title: str, unit: str = "") -> str:
    """Render a compact sparkline with the first/last year and value range."""
    present = [v for v in values if v is not None]
    if present:
        span = f"{fmt_value(min(present), unit, 1)} – {fmt_value(max(present), unit, 1)}"
    else:
        span = "no data"
    first = labels[0] if labels else ""
    last = labels[-1] if labels else ""
    return f"{title}\n  {first} {sparkline(values)} {last}   ({span})"


def render_trend_line(summary: dict, unit: str = "") -> str:
    """One-line trend description for a series_summary result."""
    if summary["count"] == 0:
        return "  trend: no data"
    trend = summary["trend"]
    sign = "+" if trend["slope"] >= 0 else ""
    return (
        f"  trend: {trend['label']} ({sign}{trend['slope']:.2f}/yr), "
        f"mean {fmt_value(summary['mean'], unit, 1)}, "
        f"next by trend {fmt_value(summary['next'], unit, 1)}"
    )


def render_card_chart(card: dict) -> str:
    """Render one display card's history using its configured graph type."""
    title = f"{card['title']} — same day each year"
    if card["graph_type"] == "bar":
        return render_bar_chart(card["labels"], card["values"], title, unit=card["unit"])
    return render_line_chart(card["labels"], card["values"], title, unit=card["unit"])
