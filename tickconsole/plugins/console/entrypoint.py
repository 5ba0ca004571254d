#!/usr/bin/env python3
# tickconsole/plugins/console/entrypoint.py
from __future__ import annotations

from typing import Sequence

from tickconsole.commands import CommandResult, DuplicateNameError, command
from tickconsole.context import ConsoleContext
from tickconsole.interface import (
    format_command_help,
    list_aliases,
    list_categories,
    list_commands,
)


@command(
    name="echo",
    help="Write the arguments to the console output.",
    example="echo hello world",
)
def echo(console: ConsoleContext, args: Sequence[str]) -> str:
    return " ".join(args)


@command(
    name="help",
    help="List categories, or show help for a command or category.",
    example="help exec",
    aliases=["?"],
)
def help_(console: ConsoleContext, args: Sequence[str]) -> list[str]:
    if not args:
        return list_categories(console) + ["Type 'help <command>' or 'cmdlist' for details."]
    return format_command_help(console, args[0])


@command(
    name="cmdlist",
    help="List every registered command.",
    aliases=["commands"],
)
def cmdlist(console: ConsoleContext, args: Sequence[str]) -> list[str]:
    return list_commands(console)


@command(name="aliaslist", help="List every alias and its target.")
def aliaslist(console: ConsoleContext, args: Sequence[str]) -> list[str]:
    return list_aliases(console)


@command(
    name="alias",
    help="Define an alias for a command.",
    example="alias q quit",
)
def alias(console: ConsoleContext, args: Sequence[str]) -> CommandResult:
    if len(args) != 2:
        return CommandResult(ok=False, message="usage: alias <name> <command>")
    name, target = args
    if console.aliases.is_alias(target):
        return CommandResult(ok=False, message=f"'{target}' is itself an alias; aliases cannot chain.")
    try:
        console.register_alias(name, target)
    except (DuplicateNameError, ValueError) as exc:
        return CommandResult(ok=False, message=str(exc))
    return CommandResult(message=f"{name} -> {target}")


@command(name="clear", help="Clear the console output.", aliases=["cls"])
def clear(console: ConsoleContext, args: Sequence[str]) -> None:
    console.clear_output()


@command(name="clearhist", help="Clear the command history.")
def clearhist(console: ConsoleContext, args: Sequence[str]) -> None:
    console.clear_history()
