from __future__ import annotations

from typing import Optional


class InputBuffer:
    """Username prompt text + cursor. Knows nothing about datasets or fetching."""

    def __init__(self, max_len: int = 12) -> None:
        # OSRS display names are at most 12 characters
        self.max_len = int(max_len)
        self.text = ""
        self.cursor = 0
        self.active = False

    def open(self, initial: str = "") -> None:
        self.text = (initial or "")[: self.max_len]
        self.cursor = len(self.text)
        self.active = True

    def cancel(self) -> None:
        self.text = ""
        self.cursor = 0
        self.active = False

    def insert(self, ch: str) -> None:
        if not ch or len(self.text) >= self.max_len:
            return
        self.text = self.text[: self.cursor] + ch + self.text[self.cursor :]
        self.cursor += len(ch)

    def backspace(self) -> None:
        if self.cursor == 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def delete(self) -> None:
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def right(self) -> None:
        self.cursor = min(len(self.text), self.cursor + 1)

    def home(self) -> None:
        self.cursor = 0

    def end(self) -> None:
        self.cursor = len(self.text)

    def submit(self) -> Optional[str]:
        """Close the prompt and return the trimmed name, or None if it was blank."""
        name = self.text.strip()
        self.cancel()
        return name or None
