#!/usr/bin/env python3
# tickconsole/ui/utils/console.py
from __future__ import annotations

import sys
import threading

# Single shared print mutex for boot output and log handlers.
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Thread-safe single-line print."""
    stream = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()
