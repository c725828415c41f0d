"""Matplotlib renderer for the `png` command.

Takes a ChartView and returns a BytesIO PNG (150 DPI).
Uses the Agg backend (headless).
"""

from __future__ import annotations

import io
from datetime import datetime, timezone

import matplotlib
matplotlib.use("Agg")
import matplotlib.dates as mdates
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

from utils.series import ChartView, format_amount

# Dark terminal-ish theme
BG = "#1E1E1E"
FG = "#FFFFFF"
GRID = "#3C3C3C"
ACCENT = "#E0E0E0"
SECONDARY = "#2ECC71"


def _apply_dark_style(ax, fig):
    """Apply dark styling to a figure and axes."""
    fig.patch.set_facecolor(BG)
    ax.set_facecolor(BG)
    ax.tick_params(colors=FG, which="both")
    ax.xaxis.label.set_color(FG)
    ax.yaxis.label.set_color(FG)
    ax.title.set_color(FG)
    for spine in ax.spines.values():
        spine.set_color(GRID)
    ax.grid(True, color=GRID, alpha=0.5, linestyle="--", linewidth=0.5)


def _save(fig) -> io.BytesIO:
    """Save figure to BytesIO PNG and close."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=150, bbox_inches="tight", facecolor=fig.get_facecolor())
    buf.seek(0)
    plt.close(fig)
    return buf


def _to_dates(xs):
    return [datetime.fromtimestamp(x, tz=timezone.utc) for x in xs]


def render_skill_progress(view: ChartView, player_name: str) -> io.BytesIO:
    """Line chart of the selected skill with the fixed comparison skill overlaid."""
    fig, ax = plt.subplots(figsize=(10, 5))
    _apply_dark_style(ax, fig)

    xs = _to_dates([p[0] for p in view.series])
    ys = [p[1] for p in view.series]
    ax.plot(xs, ys, color=ACCENT, linewidth=2, label=view.skill_name)

    if view.secondary:
        sx = _to_dates([p[0] for p in view.secondary])
        sy = [p[1] for p in view.secondary]
        ax.plot(sx, sy, color=SECONDARY, linewidth=1.5, label=view.secondary_name)

    x0, x1 = _to_dates(view.bounds.x)
    if x0 != x1:
        ax.set_xlim(x0, x1)
    y0, y1 = view.bounds.y
    if y1 > y0:
        ax.set_ylim(y0, y1)

    ax.xaxis.set_major_formatter(mdates.DateFormatter("%Y-%m-%d"))
    ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _pos: format_amount(v)))
    fig.autofmt_xdate()

    ax.set_xlabel("Time", fontsize=11)
    ax.set_ylabel("Experience", fontsize=11)
    ax.legend(loc="upper left", facecolor=BG, edgecolor=GRID, labelcolor=FG)
    ax.set_title(f"{player_name} \u2014 {view.skill_name}", fontsize=13, color=FG, pad=12)

    return _save(fig)
