#!/usr/bin/env python3
# tickconsole/commands/commands.py
from __future__ import annotations

"""
Command and alias registries plus the decorator used by command modules.

This module provides:
- CommandRegistry: case-insensitive table of commands.
- AliasRegistry: case-insensitive table of alias -> command name pairs.
- command: decorator tagging a function with a Command for the loader.
- Registry errors (DuplicateNameError, NotFoundError).
"""

from typing import Any, Callable, Iterable, Iterator

from tickconsole.commands.command_types import Alias, Command, CommandCallback

# Attribute set by @command; the loader scans modules for it
COMMAND_ATTR = "__console_command__"


class DuplicateNameError(ValueError):
    """A name is already registered (case-insensitive)."""


class NotFoundError(LookupError):
    """A command lookup failed."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown command: {self.name}"


def _key(name: str) -> str:
    return name.casefold()


class CommandRegistry:
    """Holds all command definitions and provides lookup utilities."""

    def __init__(self) -> None:
        # Folded name -> Command
        self._commands_by_name: dict[str, Command] = {}

    # ---------------- Registration ----------------

    def register(
        self,
        name: str | Command,
        callback: CommandCallback | None = None,
        help: str = "",
    ) -> Command:
        """Register a command; accepts a prebuilt Command or (name, callback, help)."""
        if isinstance(name, Command):
            command_obj = name
        else:
            if callback is None:
                raise TypeError(f"Command '{name}' needs a callback.")
            command_obj = Command(name=name, help=help, callback=callback)

        if not command_obj.name or any(ch.isspace() for ch in command_obj.name):
            raise ValueError(f"Invalid command name: {command_obj.name!r}")

        key = _key(command_obj.name)
        if key in self._commands_by_name:
            raise DuplicateNameError(
                f"Command '{command_obj.name}' already registered.")
        self._commands_by_name[key] = command_obj
        return command_obj

    # ---------------- Lookup ----------------

    def lookup(self, name: str) -> Command:
        """Return the command for `name` or raise NotFoundError."""
        try:
            return self._commands_by_name[_key(name)]
        except KeyError:
            raise NotFoundError(name) from None

    def get(self, name: str) -> Command | None:
        """Return the command by name, or None if not found."""
        return self._commands_by_name.get(_key(name))

    def sort(self) -> None:
        """Reorder entries case-insensitively for deterministic listings."""
        self._commands_by_name = dict(sorted(self._commands_by_name.items()))

    def all(self) -> list[Command]:
        return list(self._commands_by_name.values())

    def names(self) -> list[str]:
        """Return display names of all commands in registry order."""
        return [cmd.name for cmd in self._commands_by_name.values()]

    def categories(self) -> dict[str, list[Command]]:
        """Group commands by category for help output."""
        grouped: dict[str, list[Command]] = {}
        for cmd in self._commands_by_name.values():
            grouped.setdefault(cmd.category, []).append(cmd)
        return grouped

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _key(name) in self._commands_by_name

    def __iter__(self) -> Iterator[Command]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._commands_by_name)


class AliasRegistry:
    """Alias name -> target command name. Resolution is a single hop."""

    def __init__(self) -> None:
        self._aliases: dict[str, Alias] = {}

    def register(self, alias: str, target: str) -> Alias:
        if not alias or any(ch.isspace() for ch in alias):
            raise ValueError(f"Invalid alias name: {alias!r}")
        key = _key(alias)
        if key in self._aliases:
            raise DuplicateNameError(f"Alias '{alias}' already registered.")
        entry = Alias(name=alias, target=target)
        self._aliases[key] = entry
        return entry

    def lookup(self, alias: str) -> Alias:
        try:
            return self._aliases[_key(alias)]
        except KeyError:
            raise NotFoundError(alias) from None

    def resolve(self, name: str) -> str:
        """Return the target name for an alias, or `name` unchanged."""
        entry = self._aliases.get(_key(name))
        return entry.target if entry else name

    def is_alias(self, name: str) -> bool:
        return _key(name) in self._aliases

    def sort(self) -> None:
        self._aliases = dict(sorted(self._aliases.items()))

    def all(self) -> list[Alias]:
        return list(self._aliases.values())

    def names(self) -> list[str]:
        return [entry.name for entry in self._aliases.values()]

    def aliases_for(self, target: str) -> list[str]:
        """Return alias names pointing at `target`."""
        key = _key(target)
        return [a.name for a in self._aliases.values() if _key(a.target) == key]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_alias(name)

    def __len__(self) -> int:
        return len(self._aliases)


def command(
    *,
    name: str | None = None,
    help: str | None = None,
    example: str | None = None,
    category: str | None = None,
    aliases: Iterable[str] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator tagging a function as a console command.

    - Function name is transformed from snake_case to kebab-case for `name` if not provided.
    - Help text falls back to the first line of the docstring.
    - Registration happens when the loader imports the module.
    """

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        doc_line = (func.__doc__ or "").strip().splitlines()
        command_obj = Command(
            name=(name or func.__name__).replace("_", "-"),
            help=(help or (doc_line[0] if doc_line else "")).strip(),
            callback=func,
            example=example or "",
            category=category or "general",
            aliases=tuple(aliases or ()),
            module=func.__module__,
        )
        setattr(func, COMMAND_ATTR, command_obj)
        return func

    return wrapper
