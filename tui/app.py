from __future__ import annotations

import asyncio
import curses
from typing import Optional

from chart_state import ChartState
from tui.input import InputBuffer
from tui.views import draw, init_colors
from utils.logger import log_sync, set_console

KEY_ESC = 27
KEY_ENTER = (curses.KEY_ENTER, 10, 13)
KEY_BACKSPACE = (curses.KEY_BACKSPACE, 127, 8)


def handle_prompt_key(prompt: InputBuffer, key: int) -> Optional[str]:
    """Edit the prompt; returns a username when Enter submits a non-blank one."""
    if key == KEY_ESC:
        prompt.cancel()
    elif key in KEY_ENTER:
        return prompt.submit()
    elif key in KEY_BACKSPACE:
        prompt.backspace()
    elif key == curses.KEY_DC:
        prompt.delete()
    elif key == curses.KEY_LEFT:
        prompt.left()
    elif key == curses.KEY_RIGHT:
        prompt.right()
    elif key == curses.KEY_HOME:
        prompt.home()
    elif key == curses.KEY_END:
        prompt.end()
    elif 32 <= key < 127:
        prompt.insert(chr(key))
    return None


def handle_browse_key(state: ChartState, prompt: InputBuffer, key: int) -> bool:
    """Skill navigation keys. Returns False when the app should quit."""
    if key in (ord("q"), ord("Q")):
        return False
    if key in (curses.KEY_DOWN, ord("j")):
        state.selection.next()
    elif key in (curses.KEY_UP, ord("k")):
        state.selection.previous()
    elif key == KEY_ESC:
        state.selection.unselect()
    elif key in (ord("/"), ord("u")):
        prompt.open()
    return True


async def run_app(stdscr, state: ChartState) -> None:
    curses.curs_set(0)
    stdscr.keypad(True)
    if hasattr(curses, "set_escdelay"):
        curses.set_escdelay(25)
    init_colors()
    prompt = InputBuffer()

    while True:
        draw(stdscr, state, prompt)
        # blocking read; nothing else runs on this loop while we wait
        key = stdscr.getch()

        if key == curses.KEY_RESIZE:
            continue

        if prompt.active:
            name = handle_prompt_key(prompt, key)
            curses.curs_set(1 if prompt.active else 0)
            if name:
                # the loop is blocked until the fetch returns
                draw(stdscr, state, prompt, notice=f"Fetching {name}...")
                await state.refresh(name)
            continue

        if not handle_browse_key(state, prompt, key):
            return
        if prompt.active:
            curses.curs_set(1)


def run(state: ChartState) -> None:
    """Take over the terminal until the user quits."""
    set_console(False)
    try:
        curses.wrapper(lambda stdscr: asyncio.run(run_app(stdscr, state)))
    finally:
        set_console(True)
        log_sync("[tui] closed")
