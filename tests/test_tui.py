"""Terminal front-end pieces that do not need a real screen."""

import curses

from helpers import FakeClient, T1, T2, T3, make_dataset

from chart_state import ChartState
from tui.app import KEY_ESC, handle_browse_key, handle_prompt_key
from tui.input import InputBuffer
from tui.views import PRIMARY_MARK, SECONDARY_MARK, draw, rasterize, spread_labels, status_text
from utils.series import build_chart


class TestInputBuffer:

    def test_typing_and_submit(self):
        buf = InputBuffer()
        buf.open()
        for ch in "Zezima":
            buf.insert(ch)
        assert buf.submit() == "Zezima"
        assert not buf.active
        assert buf.text == ""

    def test_cursor_editing(self):
        buf = InputBuffer()
        buf.open("Zeima")
        buf.left()
        buf.left()
        buf.insert("z")
        assert buf.text == "Zezima"
        buf.home()
        buf.delete()
        assert buf.text == "ezima"
        buf.end()
        buf.backspace()
        assert buf.text == "ezim"

    def test_max_length(self):
        buf = InputBuffer(max_len=3)
        buf.open()
        for ch in "abcdef":
            buf.insert(ch)
        assert buf.text == "abc"

    def test_blank_submit_is_none(self):
        buf = InputBuffer()
        buf.open("   ")
        assert buf.submit() is None


class TestKeys:

    def test_enter_submits(self):
        buf = InputBuffer()
        buf.open("Lynx")
        assert handle_prompt_key(buf, 10) == "Lynx"

    def test_esc_cancels_prompt(self):
        buf = InputBuffer()
        buf.open("Lynx")
        assert handle_prompt_key(buf, KEY_ESC) is None
        assert not buf.active

    def test_printable_inserted(self):
        buf = InputBuffer()
        buf.open()
        handle_prompt_key(buf, ord("a"))
        assert buf.text == "a"

    def test_browse_navigation(self):
        state = ChartState(FakeClient())
        buf = InputBuffer()
        assert handle_browse_key(state, buf, curses.KEY_DOWN)
        assert state.selection.selected == 0
        handle_browse_key(state, buf, curses.KEY_UP)
        assert state.selection.selected == 23
        handle_browse_key(state, buf, KEY_ESC)
        assert state.selection.selected is None

    def test_slash_opens_prompt_and_q_quits(self):
        state = ChartState(FakeClient())
        buf = InputBuffer()
        handle_browse_key(state, buf, ord("/"))
        assert buf.active
        assert handle_browse_key(state, InputBuffer(), ord("q")) is False


class TestRasterize:

    def _view(self, points):
        return build_chart(make_dataset(points), 0)

    def test_corners(self):
        view = self._view([(T1, {"Overall": 0, "Hunter": 0}), (T3, {"Overall": 100, "Hunter": 0})])
        rows = rasterize(view, 10, 5)
        assert len(rows) == 5
        assert all(len(r) == 10 for r in rows)
        assert rows[0][9] == PRIMARY_MARK
        assert rows[4][0] == PRIMARY_MARK
        assert SECONDARY_MARK in rows[4]

    def test_secondary_above_bounds_dropped(self):
        view = self._view([(T1, {"Overall": 10, "Hunter": 500}), (T2, {"Overall": 20, "Hunter": 900})])
        assert all(SECONDARY_MARK not in r for r in rasterize(view, 8, 4))

    def test_single_point_does_not_crash(self):
        view = self._view([(T1, {"Overall": 5})])
        rows = rasterize(view, 6, 3)
        assert rows[0][0] == PRIMARY_MARK

    def test_zero_size(self):
        view = self._view([(T1, {})])
        assert rasterize(view, 0, 3) == []


class TestSpreadLabels:

    def test_three_labels(self):
        line = spread_labels(["a", "b", "c"], 11)
        assert line == "a    b    c"

    def test_width_is_respected(self):
        line = spread_labels(["2023-01-01", "2023-06-01", "2023-12-31"], 20)
        assert len(line) == 20


class FakeWindow:
    """Records addstr calls; enough of a curses window for draw()."""

    def __init__(self, height=20, width=80):
        self.size = (height, width)
        self.lines = {}

    def getmaxyx(self):
        return self.size

    def erase(self):
        self.lines.clear()

    def addstr(self, y, x, text, attr=0):
        self.lines[y] = text

    def move(self, y, x):
        pass

    def refresh(self):
        pass


class TestStatusText:

    def test_state_summary_by_default(self):
        state = ChartState(FakeClient())
        assert status_text(state).startswith("No player loaded.")
        assert status_text(state).endswith("[q] quit")

    def test_notice_replaces_summary(self):
        state = ChartState(FakeClient())
        line = status_text(state, "Fetching Zezima...")
        assert line.startswith("Fetching Zezima...")
        assert "No player loaded" not in line

    def test_draw_shows_notice_before_fetch(self):
        win = FakeWindow()
        draw(win, ChartState(FakeClient()), InputBuffer(), notice="Fetching Zezima...")
        assert win.lines[19].startswith("Fetching Zezima...")
