#!/usr/bin/env python3
# tickconsole/scheduler/__init__.py
from __future__ import annotations

"""
Deferred execution: wait state machine, command queue and script loader.

Exports:
- WaitScheduler / WaitState and the typed wait variants.
- CommandQueue: pending raw lines.
- ScriptLoader, ScriptOpenError, file_line_source.
"""

from .queue import CommandQueue
from .script import (
    DEFAULT_COMMENT_PREFIXES,
    LineSource,
    ScriptLoader,
    ScriptOpenError,
    file_line_source,
)
from .wait import (
    RUNNING,
    TICKS,
    Running,
    WaitCondition,
    WaitConditionError,
    WaitConditionSpec,
    WaitScheduler,
    WaitState,
    WaitTicks,
    WaitVariant,
)

__all__ = [
    "CommandQueue",
    "DEFAULT_COMMENT_PREFIXES",
    "LineSource",
    "ScriptLoader",
    "ScriptOpenError",
    "file_line_source",
    "RUNNING",
    "TICKS",
    "Running",
    "WaitCondition",
    "WaitConditionError",
    "WaitConditionSpec",
    "WaitScheduler",
    "WaitState",
    "WaitTicks",
    "WaitVariant",
]
