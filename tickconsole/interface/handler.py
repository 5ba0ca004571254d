#!/usr/bin/env python3
# tickconsole/interface/handler.py
from __future__ import annotations

"""
Command dispatch and help formatting.

Dispatch path for one line:
  strip -> (empty: no-op) -> history -> tokenize -> alias -> lookup -> invoke

Nothing raised by a lookup or a callback escapes `call_command`: failures are
written to the output log and the console keeps running.
"""

import logging
from typing import TYPE_CHECKING, Any, Iterable

from tickconsole.commands import CommandResult, NotFoundError
from tickconsole.interface.completion import suggest
from tickconsole.interface.parser import split_command, strip_whitespace
from tickconsole.ui import format_table

if TYPE_CHECKING:
    from tickconsole.context import ConsoleContext

logger = logging.getLogger(__name__)

# Short hint used in unknown command errors
HELP_TEXT = "Type 'help' for a list of commands."


class CommandNotFound(NotFoundError):
    """Dispatch-time miss, including aliases whose target is not registered."""

    def __init__(self, name: str, target: str | None = None) -> None:
        super().__init__(name)
        self.target = target

    def __str__(self) -> str:
        if self.target is not None:
            return f"Unknown command: {self.target} (via alias '{self.name}')"
        return f"Unknown command: {self.name}"


# ---------------------------------------------------------------------------
# Output normalization
# ---------------------------------------------------------------------------


def _emit_result(console: "ConsoleContext", result: Any) -> bool:
    """Write a callback's return value to the output log. Returns success."""
    if result is None:
        return True
    if isinstance(result, CommandResult):
        text = str(result)
        if text:
            console.write_output(text)
        return result.ok
    if isinstance(result, str):
        console.write_output(result)
        return not result.lstrip().lower().startswith("[error]")
    if isinstance(result, (bytes, bytearray)):
        console.write_output(bytes(result).decode("utf-8", errors="replace"))
        return True
    if isinstance(result, Iterable):
        for line in result:
            console.write_output(str(line))
        return True
    console.write_output(str(result))
    return True


def _report_not_found(console: "ConsoleContext", error: CommandNotFound) -> None:
    message = str(error)
    if console.config.suggest_on_miss:
        matches = [m for m in suggest(console.commands, console.aliases, error.name)
                   if m.casefold() != error.name.casefold()]
        if matches:
            message += f" Did you mean: {', '.join(matches[:5])}?"
    console.write_output(f"{message} {HELP_TEXT}")
    logger.info("%s", error)


# ---------------------------------------------------------------------------
# Core execution
# ---------------------------------------------------------------------------


def call_command(console: "ConsoleContext", line: str) -> bool:
    """Resolve and run one command line (no history). Returns success."""
    parts = split_command(line)
    if parts is None:
        return False
    name, args = parts

    target = console.aliases.resolve(name)
    try:
        command_obj = console.commands.lookup(target)
    except NotFoundError:
        via_alias = target if target != name else None
        _report_not_found(console, CommandNotFound(name, via_alias))
        return False

    logger.debug("Dispatch %s %s", command_obj.name, args)
    try:
        result = command_obj.invoke(console, args)
    except Exception as exc:
        logger.exception("Command '%s' failed", command_obj.name)
        console.write_output(f"[error] {type(exc).__name__}: {exc}")
        return False
    return _emit_result(console, result)


def parse_input(console: "ConsoleContext", raw_line: str) -> bool:
    """
    Parse and execute one input line.

    Blank lines are ignored entirely. Anything else is recorded in the
    history log as typed, before dispatch, whether or not it succeeds.
    """
    line = strip_whitespace(raw_line)
    if not line:
        return False
    console.write_history(raw_line.rstrip("\r\n"))
    return call_command(console, line)


# ---------------------------------------------------------------------------
# Help formatting
# ---------------------------------------------------------------------------


def list_commands(console: "ConsoleContext") -> list[str]:
    """Render all commands, sorted case-insensitively, as table lines."""
    console.sort()
    rows = []
    for command_obj in console.commands:
        alias_names = console.aliases.aliases_for(command_obj.name)
        rows.append([command_obj.name, ", ".join(alias_names) or "-",
                     command_obj.help or ""])
    if not rows:
        return ["No commands registered."]
    return format_table(rows, headers=["Command", "Aliases", "Help"])


def list_aliases(console: "ConsoleContext") -> list[str]:
    console.sort()
    rows = []
    for entry in console.aliases.all():
        status = "" if entry.target in console.commands else "(missing)"
        rows.append([entry.name, entry.target, status])
    if not rows:
        return ["No aliases defined."]
    return format_table(rows, headers=["Alias", "Command", ""])


def format_command_help(console: "ConsoleContext", name: str) -> list[str]:
    """Render help for a command (aliases resolve) or a category."""
    command_obj = console.get_command(name)
    if command_obj is None:
        categories = console.commands.categories()
        matched = next((c for c in categories if c.casefold() == name.casefold()), None)
        if matched is None:
            return [f"No such command or category: {name}"]
        lines = []
        description = console.category_descriptions.get(matched, "")
        if description:
            lines.append(description)
        for cmd in sorted(categories[matched], key=lambda c: c.name.casefold()):
            lines.append(f"  {cmd.name:<12} {cmd.help}")
        return lines

    alias_names = console.aliases.aliases_for(command_obj.name)
    return [
        f"Name:     {command_obj.name}",
        f"Aliases:  {', '.join(alias_names) if alias_names else '(none)'}",
        f"Category: {command_obj.category}",
        f"Help:     {command_obj.help or '(none)'}",
        f"Example:  {command_obj.example or '(none)'}",
    ]


def list_categories(console: "ConsoleContext") -> list[str]:
    categories = console.commands.categories()
    if not categories:
        return ["No commands registered."]
    rows = []
    for category_name in sorted(categories, key=str.casefold):
        count = len(categories[category_name])
        rows.append([category_name,
                     f"{count} command{'s' if count != 1 else ''}",
                     console.category_descriptions.get(category_name, "")])
    return format_table(rows, headers=["Category", "Commands", "Description"])
