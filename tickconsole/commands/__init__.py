#!/usr/bin/env python3
# tickconsole/commands/__init__.py
from __future__ import annotations

"""
Package for command management and registration.

Provides:
- Data structures and protocols (`Command`, `Alias`, `CommandResult`, `CommandCallback`).
- Case-insensitive registries (`CommandRegistry`, `AliasRegistry`).
- The `command` decorator used by command modules.
"""


from .command_types import Alias, Command, CommandCallback, CommandResult
from .commands import (
    COMMAND_ATTR,
    AliasRegistry,
    CommandRegistry,
    DuplicateNameError,
    NotFoundError,
    command,
)

__all__ = [
    "Alias",
    "Command",
    "CommandCallback",
    "CommandResult",
    "COMMAND_ATTR",
    "AliasRegistry",
    "CommandRegistry",
    "DuplicateNameError",
    "NotFoundError",
    "command",
]
