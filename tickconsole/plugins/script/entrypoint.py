#!/usr/bin/env python3
# tickconsole/plugins/script/entrypoint.py
from __future__ import annotations

from typing import Sequence

from tickconsole.commands import CommandResult, command
from tickconsole.context import ConsoleContext
from tickconsole.scheduler import TICKS, ScriptOpenError


def _parse_count(text: str) -> int | None:
    try:
        value = int(text)
    except ValueError:
        return None
    return value if value >= 0 else None


@command(
    name="exec",
    help="Queue the lines of a script file for execution.",
    example="exec autoexec.cfg",
    aliases=["run"],
)
def exec_script(console: ConsoleContext, args: Sequence[str]) -> CommandResult:
    if len(args) != 1:
        return CommandResult(ok=False, message="usage: exec <file>")
    try:
        queued = console.load_script(args[0])
    except ScriptOpenError as exc:
        return CommandResult(ok=False, message=str(exc))
    return CommandResult(message=f"Queued {queued} line(s) from {args[0]}.")


@command(
    name="wait",
    help="Pause queued script lines for a number of ticks.",
    example="wait 10",
)
def wait(console: ConsoleContext, args: Sequence[str]) -> CommandResult | None:
    ticks = _parse_count(args[0]) if len(args) == 1 else None
    if ticks is None:
        return CommandResult(ok=False, message="usage: wait <ticks>")
    console.set_wait_mode(TICKS, ticks)
    return None


@command(
    name="waitfor",
    help="Pause queued script lines until a host condition is met.",
    example="waitfor level_loaded",
)
def waitfor(console: ConsoleContext, args: Sequence[str]) -> CommandResult | None:
    if not args or len(args) > 2:
        known = ", ".join(spec.tag for spec in console.scheduler.conditions()) or "none"
        return CommandResult(ok=False, message=f"usage: waitfor <condition> [value] (known: {known})")
    parameter = 0
    if len(args) == 2:
        parsed = _parse_count(args[1])
        if parsed is None:
            return CommandResult(ok=False, message=f"Invalid value: {args[1]}")
        parameter = parsed
    try:
        console.scheduler.wait_for(args[0], parameter)
    except KeyError as exc:
        return CommandResult(ok=False, message=str(exc.args[0]))
    return None


@command(name="resume", help="Cancel the current wait and continue the script.")
def resume(console: ConsoleContext, args: Sequence[str]) -> None:
    console.set_wait_mode(0, 0)


@command(name="abort", help="Drop all queued script lines and any pending wait.")
def abort(console: ConsoleContext, args: Sequence[str]) -> str:
    dropped = console.abort_script()
    return f"Aborted; {dropped} queued line(s) dropped."


@command(name="queue", help="Show the pending script lines and wait state.")
def queue(console: ConsoleContext, args: Sequence[str]) -> list[str]:
    state = console.wait_state
    if state.running:
        lines = ["Wait: running"]
    elif state.condition is not None:
        lines = [f"Wait: {state.condition} (value {state.remaining})"]
    else:
        lines = [f"Wait: {state.remaining} of {state.initial} tick(s) left"]
    lines.append(f"Pending: {len(console.queue)} line(s)")
    lines.extend(f"  {line}" for line in console.queue)
    return lines
