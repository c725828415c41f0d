# utils/logger.py
from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import IO, Optional, Tuple

from utils.console import c

# ---- central mapping (shared by all files) ----

PREFIX_COLORS = {
    "temple": "yellow",
    "state": "cyan",
    "tui": "blue",
    "png": "magenta",
    "info": "green",
    "settings": "grey",
}

LEVEL_COLORS = {
    "debug": "grey",
    "info": "white",
    "ok": "green",
    "warn": "yellow",
    "error": "red",
}

LEVEL_ORDER = {"debug": 10, "info": 20, "ok": 20, "warn": 30, "error": 40}


def split_prefix(text: str) -> Tuple[Optional[str], str]:
    t = (text or "").strip()
    if not t.startswith("["):
        return None, t
    end = t.find("]")
    if end <= 1:
        return None, t
    prefix = t[1:end].strip()
    rest = t[end + 1 :].lstrip()
    return prefix, rest


def format_console(text: str, *, level: str = "info") -> str:
    prefix, rest = split_prefix(text)
    lvl = (level or "info").lower()
    lvl_color = LEVEL_COLORS.get(lvl, "white")

    if prefix:
        p_color = PREFIX_COLORS.get(prefix.lower(), lvl_color)
        return f"{c(f'[{prefix}]', p_color, bold=True)} {c(rest, lvl_color)}" if rest else c(f"[{prefix}]", p_color, bold=True)

    return c(text, lvl_color)


def format_file(text: str, *, level: str = "info") -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    return f"{stamp} {(level or 'info').upper():<5} {str(text or '').strip()}"


class Logger:
    """
    Shared logger for the tracker:
      - coloured console lines on a stream (stderr by default)
      - plain timestamped lines appended to a log file, if configured
    While the curses screen owns the terminal the console sink is muted.
    """

    def __init__(self, *, stream: Optional[IO[str]] = None, path: str = "", level: str = "info"):
        self._stream = stream
        self.path = path
        self.level = level
        self.console = True

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stderr

    def enabled_for(self, level: str) -> bool:
        return LEVEL_ORDER.get(level, 20) >= LEVEL_ORDER.get(self.level, 20)

    def log(self, text: str, *, level: str = "info") -> None:
        raw = str(text or "")
        if not self.enabled_for(level):
            return

        if self.console:
            try:
                print(format_console(raw, level=level), file=self.stream)
            except Exception:
                print(raw, file=self.stream)

        if self.path:
            try:
                with open(self.path, "a", encoding="utf-8") as fh:
                    fh.write(format_file(raw, level=level) + "\n")
            except OSError as e:
                if self.console:
                    print(f"[logger] cannot write {self.path}: {e}", file=self.stream)

    # convenience level methods
    def debug(self, text: str): return self.log(text, level="debug")
    def info(self, text: str):  return self.log(text, level="info")
    def ok(self, text: str):    return self.log(text, level="ok")
    def warn(self, text: str):  return self.log(text, level="warn")
    def error(self, text: str): return self.log(text, level="error")


_LOGGER = Logger()


def get_logger() -> Logger:
    return _LOGGER


def configure(*, stream: Optional[IO[str]] = None, path: Optional[str] = None, level: Optional[str] = None) -> Logger:
    if stream is not None:
        _LOGGER._stream = stream
    if path is not None:
        _LOGGER.path = path
    if level is not None:
        _LOGGER.level = level
    return _LOGGER


def set_console(enabled: bool) -> None:
    _LOGGER.console = bool(enabled)


def log_debug(text: str) -> None:
    _LOGGER.debug(text)


def log_sync(text: str) -> None:
    _LOGGER.info(text)


def log_ok(text: str) -> None:
    _LOGGER.ok(text)


def log_warn(text: str) -> None:
    _LOGGER.warn(text)


def log_error(text: str) -> None:
    _LOGGER.error(text)
