#!/usr/bin/env python3
# tickconsole/buffers/scroll_log.py
from __future__ import annotations

"""
Bounded FIFO of text lines with an independent scroll cursor.

The cursor is an index into the ring (0 = oldest). While it sits on the
newest line it follows new writes; once parked on an older line it keeps
pointing at that line as older entries are evicted. If the parked line itself
is evicted, the cursor clamps to the new oldest entry.
"""

from collections import deque
from typing import Iterator


class ScrollableLog:
    """Ring buffer of lines used for console output and command history."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._lines: deque[str] = deque(maxlen=capacity)
        self._position = -1
        self._following = True

    # ---------------- Mutation ----------------

    def write(self, line: str) -> None:
        """Append a line, evicting the oldest one first when full."""
        evicting = len(self._lines) == self.capacity
        self._lines.append(line)

        if self._following:
            self._position = len(self._lines) - 1
        elif evicting:
            self._position = max(0, self._position - 1)

    def clear(self) -> None:
        self._lines.clear()
        self._position = -1
        self._following = True

    # ---------------- Scrolling ----------------

    def scroll(self, up: bool) -> bool:
        """Move the cursor one line older (up) or newer (down). Returns False at either end."""
        if not self._lines:
            return False
        newest = len(self._lines) - 1
        target = self._position - 1 if up else self._position + 1
        target = max(0, min(newest, target))
        moved = target != self._position
        self._position = target
        self._following = target == newest
        return moved

    def scroll_to_newest(self) -> None:
        self._position = len(self._lines) - 1
        self._following = True

    # ---------------- Queries ----------------

    @property
    def cursor(self) -> int | None:
        """Index of the line under the scroll cursor, or None when empty."""
        return self._position if self._lines else None

    @property
    def at_newest(self) -> bool:
        return self._following

    def current(self) -> str | None:
        return self._lines[self._position] if self._lines else None

    def newest(self) -> str | None:
        return self._lines[-1] if self._lines else None

    def window(self, rows: int) -> list[str]:
        """Return up to `rows` lines ending at the cursor, oldest first."""
        if not self._lines or rows <= 0:
            return []
        end = self._position + 1
        start = max(0, end - rows)
        return [self._lines[i] for i in range(start, end)]

    def lines(self) -> list[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def __repr__(self) -> str:
        return f"ScrollableLog(len={len(self._lines)}, capacity={self.capacity}, cursor={self.cursor})"
