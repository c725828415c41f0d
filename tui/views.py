from __future__ import annotations

import curses
from typing import List, Optional, Sequence, Tuple

from chart_state import ChartState
from tui.input import InputBuffer
from utils.series import ChartBounds, ChartView, Series
from utils.skills import SKILL_NAMES

LIST_WIDTH = 15
PRIMARY_MARK = "*"
SECONDARY_MARK = "+"

# color pairs
PAIR_HIGHLIGHT = 1
PAIR_SECONDARY = 2
PAIR_AXIS = 3
PAIR_ERROR = 4


def init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(PAIR_HIGHLIGHT, curses.COLOR_BLACK, curses.COLOR_GREEN)
    curses.init_pair(PAIR_SECONDARY, curses.COLOR_GREEN, -1)
    curses.init_pair(PAIR_AXIS, curses.COLOR_WHITE, -1)
    curses.init_pair(PAIR_ERROR, curses.COLOR_RED, -1)


def _cell(x: float, y: float, bounds: ChartBounds, width: int, height: int) -> Optional[Tuple[int, int]]:
    x0, x1 = bounds.x
    y0, y1 = bounds.y
    col = 0 if x1 == x0 else round((x - x0) / (x1 - x0) * (width - 1))
    row_f = 0.0 if y1 == y0 else (y - y0) / (y1 - y0)
    if not 0 <= col < width or not 0.0 <= row_f <= 1.0:
        return None
    return height - 1 - round(row_f * (height - 1)), col


def rasterize(view: ChartView, width: int, height: int) -> List[str]:
    """Plot both series into `height` strings of `width` characters.

    Points outside the bounds (the comparison skill above the selected one's
    last value, typically) are dropped. The selected skill wins shared cells.
    """
    if width <= 0 or height <= 0:
        return []
    grid = [[" "] * width for _ in range(height)]

    def plot(series: Series, mark: str) -> None:
        for x, y in series:
            cell = _cell(x, y, view.bounds, width, height)
            if cell is not None:
                grid[cell[0]][cell[1]] = mark

    plot(view.secondary, SECONDARY_MARK)
    plot(view.series, PRIMARY_MARK)
    return ["".join(row) for row in grid]


def spread_labels(labels: Sequence[str], width: int) -> str:
    """Left, centre and right aligned x-axis labels on one line."""
    if width <= 0 or not labels:
        return ""
    line = [" "] * width
    slots = len(labels)
    for i, label in enumerate(labels):
        if slots == 1:
            start = 0
        else:
            anchor = round(i * (width - 1) / (slots - 1))
            start = anchor - len(label) // 2
            start = max(0, min(width - len(label), start))
        for j, ch in enumerate(label[: width]):
            if 0 <= start + j < width:
                line[start + j] = ch
    return "".join(line)


def safe_addstr(win, y: int, x: int, text: str, attr: int = 0) -> None:
    h, w = win.getmaxyx()
    if y < 0 or y >= h or x >= w:
        return
    try:
        win.addstr(y, x, text[: max(0, w - x - 1)], attr)
    except curses.error:
        pass


def draw_skill_list(win, state: ChartState, height: int) -> None:
    safe_addstr(win, 0, 0, "Skill".ljust(LIST_WIDTH - 1), curses.A_BOLD)
    selected = state.selection.selected
    visible = max(1, height - 2)
    top = 0 if selected is None else max(0, selected - visible + 1)
    for row, name in enumerate(SKILL_NAMES[top : top + visible], start=1):
        idx = top + row - 1
        attr = curses.color_pair(PAIR_HIGHLIGHT) | curses.A_BOLD if idx == selected else 0
        safe_addstr(win, row, 0, name.ljust(LIST_WIDTH - 1), attr)


def draw_chart(win, view: ChartView, top: int, left: int, width: int, height: int) -> None:
    label_w = max(len(s) for s in view.y_labels) + 1
    plot_w = width - label_w - 1
    plot_h = height - 3
    if plot_w < 4 or plot_h < 2:
        safe_addstr(win, top, left, "Window too small")
        return

    legend = f"{PRIMARY_MARK} {view.skill_name}   {SECONDARY_MARK} {view.secondary_name}"
    safe_addstr(win, top, left, legend, curses.A_BOLD)

    axis = curses.color_pair(PAIR_AXIS)
    safe_addstr(win, top + 1, left, view.y_labels[-1], axis)
    safe_addstr(win, top + plot_h, left, view.y_labels[0], axis)

    for i, line in enumerate(rasterize(view, plot_w, plot_h)):
        y = top + 1 + i
        safe_addstr(win, y, left + label_w, "|", axis)
        for j, ch in enumerate(line):
            if ch == SECONDARY_MARK:
                safe_addstr(win, y, left + label_w + 1 + j, ch, curses.color_pair(PAIR_SECONDARY))
            elif ch != " ":
                safe_addstr(win, y, left + label_w + 1 + j, ch)

    safe_addstr(win, top + plot_h + 1, left + label_w, "+" + "-" * plot_w, axis)
    safe_addstr(win, top + plot_h + 2, left + label_w + 1, spread_labels(view.x_labels, plot_w), axis)


def status_text(state: ChartState, notice: Optional[str] = None) -> str:
    """Bottom line while browsing. `notice` replaces the state summary."""
    return f"{notice or state.status_line()}  [/] player  [q] quit"


def draw(win, state: ChartState, prompt: InputBuffer, notice: Optional[str] = None) -> None:
    win.erase()
    h, w = win.getmaxyx()

    draw_skill_list(win, state, h - 1)

    view = state.chart()
    if view is not None:
        draw_chart(win, view, 0, LIST_WIDTH, w - LIST_WIDTH, h - 1)
    elif state.selection.selected is not None:
        safe_addstr(win, 1, LIST_WIDTH, "No data to plot.")

    if prompt.active:
        safe_addstr(win, h - 1, 0, f"Player: {prompt.text}", curses.A_BOLD)
        try:
            win.move(h - 1, min(w - 1, len("Player: ") + prompt.cursor))
        except curses.error:
            pass
    else:
        attr = curses.color_pair(PAIR_ERROR) if state.error and not notice else 0
        safe_addstr(win, h - 1, 0, status_text(state, notice), attr)

    win.refresh()
