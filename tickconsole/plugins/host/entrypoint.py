#!/usr/bin/env python3
# tickconsole/plugins/host/entrypoint.py
from __future__ import annotations

import logging
from typing import Sequence

from tickconsole.commands import CommandResult, command
from tickconsole.context import ConsoleContext

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@command(name="quit", help="Ask the host program to exit.", aliases=["exit"])
def quit_(console: ConsoleContext, args: Sequence[str]) -> None:
    console.request_quit()


@command(name="ticks", help="Show how many host ticks have elapsed.")
def ticks(console: ConsoleContext, args: Sequence[str]) -> str:
    return f"{console.ticks} tick(s)"


@command(name="toggle", help="Show or hide the console panel.")
def toggle(console: ConsoleContext, args: Sequence[str]) -> None:
    console.toggle()


@command(
    name="loglevel",
    help="Get or set the console log level.",
    example="loglevel DEBUG",
)
def loglevel(console: ConsoleContext, args: Sequence[str]) -> CommandResult:
    logger = logging.getLogger("tickconsole")
    if not args:
        return CommandResult(message=f"Current log level: {logging.getLevelName(logger.getEffectiveLevel())}")

    level = args[0].upper()
    if level not in _LEVELS:
        return CommandResult(
            ok=False,
            message=f"Invalid log level '{args[0]}'. Valid options are: {', '.join(_LEVELS)}",
        )
    logger.setLevel(level)
    for handler in logger.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
    return CommandResult(message=f"Log level set to {level}")
