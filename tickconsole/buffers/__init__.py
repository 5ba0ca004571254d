#!/usr/bin/env python3
# tickconsole/buffers/__init__.py
from __future__ import annotations

"""
Text buffers owned by the console.

Exports:
- TextEditBuffer: the editable input line with its cursor.
- ScrollableLog: bounded FIFO with a scroll cursor (output and history logs).
"""

from .input_line import TextEditBuffer
from .scroll_log import ScrollableLog

__all__ = ["TextEditBuffer", "ScrollableLog"]
