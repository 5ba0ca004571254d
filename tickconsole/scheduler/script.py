#!/usr/bin/env python3
# tickconsole/scheduler/script.py
from __future__ import annotations

"""
Script loading.

A script is any named resource yielding text lines with the same syntax as
interactive input. Where the lines come from is decided by the line source;
the default one reads UTF-8 files relative to a base directory.

Loading is all-or-nothing: the whole source is read before anything is
enqueued, so a read failure leaves the queue untouched.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Sequence

from tickconsole.scheduler.queue import CommandQueue

logger = logging.getLogger(__name__)

LineSource = Callable[[str], Iterable[str]]

DEFAULT_COMMENT_PREFIXES: tuple[str, ...] = ("#", "//")


class ScriptOpenError(OSError):
    """A script could not be opened or read."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Could not open script '{name}': {reason}")
        self.name = name
        self.reason = reason


def file_line_source(base: Path | str | None = None) -> LineSource:
    """Return a line source reading UTF-8 files, resolving relative names under `base`."""
    base_path = Path(base) if base is not None else None

    def _read(name: str) -> list[str]:
        path = Path(os.path.expandvars(os.path.expanduser(name)))
        if not path.is_absolute() and base_path is not None:
            path = base_path / path
        with path.open("r", encoding="utf-8") as handle:
            return handle.read().splitlines()

    return _read


class ScriptLoader:
    """Reads scripts from a line source into the command queue."""

    def __init__(
        self,
        queue: CommandQueue,
        line_source: LineSource | None = None,
        comment_prefixes: Sequence[str] = DEFAULT_COMMENT_PREFIXES,
    ) -> None:
        self.queue = queue
        self.line_source = line_source or file_line_source()
        self.comment_prefixes = tuple(p for p in comment_prefixes if p)

    def _is_skipped(self, line: str) -> bool:
        return not line or line.startswith(self.comment_prefixes)

    def filter_lines(self, lines: Iterable[str]) -> list[str]:
        """Strip lines and drop blanks and comments, keeping file order."""
        kept: list[str] = []
        for raw in lines:
            line = raw.strip()
            if not self._is_skipped(line):
                kept.append(line)
        return kept

    def load_lines(self, lines: Iterable[str], origin: str = "<lines>") -> int:
        """Enqueue an in-memory script. Returns the number of lines queued."""
        kept = self.filter_lines(lines)
        self.queue.extend(kept)
        logger.debug("Queued %d line(s) from %s (%d pending)",
                     len(kept), origin, len(self.queue))
        return len(kept)

    def load_script(self, name: str) -> int:
        """Read `name` through the line source and enqueue it. Raises ScriptOpenError."""
        try:
            lines = list(self.line_source(name))
        except (OSError, UnicodeDecodeError) as exc:
            reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
            logger.info("Script %r failed to load: %s", name, reason)
            raise ScriptOpenError(name, reason) from exc
        return self.load_lines(lines, origin=name)
