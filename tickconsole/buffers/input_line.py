#!/usr/bin/env python3
# tickconsole/buffers/input_line.py
from __future__ import annotations

"""
Editable input line.

Invariant: 0 <= cursor <= len(text) <= max_len. Every edit that would break
it is a no-op. The prompt prefix is display-only and never part of `text`.
"""


class TextEditBuffer:
    """Current input line plus cursor position."""

    __slots__ = ("max_len", "prefix", "_text", "_cursor")

    def __init__(self, max_len: int, prefix: str = "") -> None:
        if max_len < 1:
            raise ValueError("max_len must be >= 1")
        self.max_len = max_len
        self.prefix = prefix
        self._text = ""
        self._cursor = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._text)

    def add_char(self, char: str) -> bool:
        """Insert one character at the cursor. Returns False at the length cap."""
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        if len(self._text) >= self.max_len:
            return False
        self._text = self._text[:self._cursor] + char + self._text[self._cursor:]
        self._cursor += 1
        return True

    def backspace(self) -> bool:
        """Delete the character before the cursor."""
        if self._cursor == 0:
            return False
        self._text = self._text[:self._cursor - 1] + self._text[self._cursor:]
        self._cursor -= 1
        return True

    def delete(self) -> bool:
        """Delete the character under the cursor."""
        if self._cursor >= len(self._text):
            return False
        self._text = self._text[:self._cursor] + self._text[self._cursor + 1:]
        return True

    def move_cursor(self, left: bool) -> None:
        if left:
            self._cursor = max(0, self._cursor - 1)
        else:
            self._cursor = min(len(self._text), self._cursor + 1)

    def home(self) -> None:
        self._cursor = 0

    def end(self) -> None:
        self._cursor = len(self._text)

    def set_text(self, text: str) -> None:
        """Replace the content (truncated to the cap) and park the cursor at the end."""
        self._text = text[:self.max_len]
        self._cursor = len(self._text)

    def clear(self) -> None:
        self._text = ""
        self._cursor = 0

    def take(self) -> str:
        """Return the content and clear the buffer (the submit path)."""
        text = self._text
        self.clear()
        return text

    def display(self) -> str:
        return f"{self.prefix}{self._text}"

    def __repr__(self) -> str:
        return f"TextEditBuffer(text={self._text!r}, cursor={self._cursor}, max_len={self.max_len})"
