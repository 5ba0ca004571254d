#!/usr/bin/env python3
# tickconsole/__init__.py
from __future__ import annotations
"""
Embedded developer console core.

A command line overlaid on a running program: registered commands and
aliases, an editable input line, bounded output/history logs, and a
tick-driven scheduler that replays scripts without blocking the host loop.
"""

from tickconsole.commands import (
    Command,
    CommandResult,
    DuplicateNameError,
    NotFoundError,
    command,
)
from tickconsole.config import ConsoleConfig, load_config
from tickconsole.context import ConsoleContext, init_console
from tickconsole.interface import CommandNotFound, load_commands, register_commands
from tickconsole.scheduler import ScriptOpenError

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CommandResult",
    "DuplicateNameError",
    "NotFoundError",
    "command",
    "ConsoleConfig",
    "load_config",
    "ConsoleContext",
    "init_console",
    "CommandNotFound",
    "load_commands",
    "register_commands",
    "ScriptOpenError",
    "__version__",
]
