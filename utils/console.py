# utils/console.py
from __future__ import annotations

from colorama import Fore, Style, just_fix_windows_console

# Safe to call multiple times; fixes Windows terminal ANSI handling.
just_fix_windows_console()

RESET = Style.RESET_ALL

PALETTE = {
    "grey": Fore.LIGHTBLACK_EX,
    "red": Fore.LIGHTRED_EX,
    "green": Fore.LIGHTGREEN_EX,
    "yellow": Fore.LIGHTYELLOW_EX,
    "blue": Fore.LIGHTBLUE_EX,
    "magenta": Fore.LIGHTMAGENTA_EX,
    "cyan": Fore.LIGHTCYAN_EX,
    "white": Fore.WHITE,
}

# flipped off when output goes to a file or a non-tty
_ENABLED = True


def set_color_enabled(enabled: bool) -> None:
    global _ENABLED
    _ENABLED = bool(enabled)


def color_enabled() -> bool:
    return _ENABLED


def c(text: str, color: str | None = None, *, bold: bool = False) -> str:
    if not color or not _ENABLED:
        return text
    code = PALETTE.get(color.lower(), "")
    if not code:
        return text
    b = Style.BRIGHT if bold else ""
    return f"{b}{code}{text}{RESET}"


def field_line(label: str, value: object, *, color: str = "white", width: int = 18) -> str:
    """'label ......: value' with the label dimmed, used by the info command."""
    return f"{c(f'{label:<{width}}', 'grey')} {c(str(value), color)}"
