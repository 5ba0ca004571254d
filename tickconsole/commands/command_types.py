#!/usr/bin/env python3
# tickconsole/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- CommandCallback: the callable protocol for any console command.
- CommandResult: a normalized result container for command outputs.
- Command: a registered command with metadata and a callable.
- Alias: a secondary name resolving to exactly one command name.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, Sequence

if TYPE_CHECKING:
    from tickconsole.context import ConsoleContext


class CommandCallback(Protocol):
    """Protocol for any command function."""

    def __call__(self, console: "ConsoleContext", args: Sequence[str]) -> Any:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command execution.

    Attributes:
        ok: True if the command completed successfully.
        message: Human-readable output, may span several lines.
    """
    ok: bool = True
    message: str = ""

    def __str__(self) -> str:
        if not self.ok:
            return f"[error] {self.message}" if self.message else "[error]"
        return self.message


@dataclass(frozen=True, slots=True)
class Command:
    """
    A registered console command.

    Important fields:
        name: Primary unique command name (compared case-insensitively).
        help: One-line help entry shown by 'help' and 'cmdlist'.
        callback: Function implementing the command.
        example: One-line example usage string (optional).
        category: Logical group for help output.
        aliases: Extra names registered into the alias table with the command.
        module: Python module path where the command is defined.
    """

    name: str
    help: str
    callback: CommandCallback
    example: str = ""
    category: str = "general"
    aliases: tuple[str, ...] = ()
    module: str = field(default="", repr=False)

    def invoke(self, console: "ConsoleContext", args: Sequence[str]) -> Any:
        """Execute the underlying command callback with the argument tokens."""
        return self.callback(console, list(args))


@dataclass(frozen=True, slots=True)
class Alias:
    """Single-hop alias: `name` resolves to the command called `target`."""

    name: str
    target: str
