#!/usr/bin/env python3
# tickconsole/scheduler/queue.py
from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator


class CommandQueue:
    """FIFO of raw lines waiting to be dispatched, one per eligible tick."""

    def __init__(self) -> None:
        self._lines: deque[str] = deque()

    def extend(self, lines: Iterable[str]) -> int:
        before = len(self._lines)
        self._lines.extend(lines)
        return len(self._lines) - before

    def append(self, line: str) -> None:
        self._lines.append(line)

    def pop(self) -> str:
        """Remove and return the oldest pending line."""
        return self._lines.popleft()

    def peek(self) -> str | None:
        return self._lines[0] if self._lines else None

    def clear(self) -> int:
        dropped = len(self._lines)
        self._lines.clear()
        return dropped

    def __len__(self) -> int:
        return len(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)
