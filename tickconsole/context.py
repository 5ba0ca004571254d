#!/usr/bin/env python3
# tickconsole/context.py
from __future__ import annotations

"""
Console context.

A single explicitly owned object holding every piece of console state:
registries, input line, output/history logs, command queue and wait state.
The host drives it through three seams:

- key events   -> input_add_char / input_backspace / move_cursor / submit ...
- each frame   -> run_command_queue()
- rendering    -> reads `output`, `history`, `input`, `enabled`

Everything runs on the caller's thread; no method blocks.
"""

import dataclasses
import logging
from typing import Any, Callable, Iterable

from tickconsole.buffers import ScrollableLog, TextEditBuffer
from tickconsole.commands import (
    Alias,
    AliasRegistry,
    Command,
    CommandCallback,
    CommandRegistry,
    DuplicateNameError,
)
from tickconsole.config import ConsoleConfig
from tickconsole.interface import completion, handler
from tickconsole.scheduler import (
    CommandQueue,
    LineSource,
    ScriptLoader,
    WaitConditionError,
    WaitConditionSpec,
    WaitScheduler,
    WaitState,
    file_line_source,
)

logger = logging.getLogger(__name__)


class ConsoleContext:
    """Command interpretation and scheduling engine for one console."""

    def __init__(
        self,
        config: ConsoleConfig | None = None,
        *,
        line_source: LineSource | None = None,
    ) -> None:
        self.config = config or ConsoleConfig()

        self.commands = CommandRegistry()
        self.aliases = AliasRegistry()
        self.category_descriptions: dict[str, str] = {}

        self.input = TextEditBuffer(self.config.max_input_len, self.config.input_prefix)
        self.output = ScrollableLog(self.config.max_out_lines)
        self.history = ScrollableLog(self.config.max_hist_lines)

        self.queue = CommandQueue()
        self.scheduler = WaitScheduler()
        self.loader = ScriptLoader(
            self.queue,
            line_source or file_line_source(self.config.script_path),
            self.config.comment_prefixes,
        )

        self.enabled = True
        self.quit_requested = False
        self.ticks = 0
        # Host objects shared with command callbacks (simulation handles etc.)
        self.services: dict[str, Any] = {}

        self._recalling = False

    # ---------------- Registration ----------------

    def register_command(
        self,
        name: str | Command,
        callback: CommandCallback | None = None,
        help: str = "",
    ) -> Command:
        """Register a command and its aliases. Raises DuplicateNameError on any collision."""
        if isinstance(name, Command):
            command_obj = name
        else:
            if callback is None:
                raise TypeError(f"Command '{name}' needs a callback.")
            command_obj = Command(name=name, help=help, callback=callback)

        seen: set[str] = set()
        for alias in command_obj.aliases:
            if not alias or any(ch.isspace() for ch in alias):
                raise ValueError(f"Invalid alias name: {alias!r}")
            if alias.casefold() in seen:
                raise DuplicateNameError(
                    f"Alias '{alias}' is listed twice for '{command_obj.name}'.")
            seen.add(alias.casefold())

        if command_obj.name in self.aliases:
            raise DuplicateNameError(
                f"Command '{command_obj.name}' collides with an existing alias.")
        for alias in command_obj.aliases:
            if alias in self.aliases or alias in self.commands or alias.casefold() == command_obj.name.casefold():
                raise DuplicateNameError(
                    f"Alias '{alias}' for '{command_obj.name}' collides with an existing name.")

        self.commands.register(command_obj)
        for alias in command_obj.aliases:
            self.aliases.register(alias, command_obj.name)
        return command_obj

    def register_alias(self, alias: str, target: str) -> Alias:
        """Add an alias. The target is only checked when the alias is dispatched."""
        if alias in self.commands:
            raise DuplicateNameError(f"Alias '{alias}' collides with a command name.")
        return self.aliases.register(alias, target)

    def lookup(self, name: str) -> Command:
        """Return the command for `name` (no alias resolution) or raise NotFoundError."""
        return self.commands.lookup(name)

    def resolve_alias(self, name: str) -> str:
        return self.aliases.resolve(name)

    def get_command(self, name: str) -> Command | None:
        """Return the command `name` refers to, following one alias hop."""
        return self.commands.get(self.aliases.resolve(name))

    def sort(self) -> None:
        self.commands.sort()
        self.aliases.sort()

    # ---------------- Output / history ----------------

    def write_output(self, text: str) -> None:
        """Append text to the output log, one entry per line."""
        for line in str(text).split("\n"):
            self.output.write(line.rstrip("\r"))

    def write_history(self, line: str) -> None:
        self.history.write(line)

    def clear_output(self) -> None:
        self.output.clear()

    def clear_history(self) -> None:
        self.history.clear()
        self._recalling = False

    def scroll_output(self, up: bool) -> bool:
        return self.output.scroll(up)

    def scroll_history(self, up: bool) -> bool:
        """
        Step through history and recall the entry under the cursor into the input line.

        The first 'up' recalls the newest entry; 'down' past the newest leaves
        recall mode and clears the line.
        """
        if not len(self.history):
            return False
        if not self._recalling:
            if not up:
                return False
            self.history.scroll_to_newest()
            self._recalling = True
        elif not up and self.history.at_newest:
            self._recalling = False
            self.input.clear()
            return True
        elif not self.history.scroll(up):
            return False
        self.input.set_text(self.history.current() or "")
        return True

    # ---------------- Input line ----------------

    def input_add_char(self, char: str) -> bool:
        return self.input.add_char(char)

    def input_backspace(self) -> bool:
        return self.input.backspace()

    def input_delete(self) -> bool:
        return self.input.delete()

    def move_cursor(self, left: bool) -> None:
        self.input.move_cursor(left)

    @property
    def prefix(self) -> str:
        return self.input.prefix

    def submit(self) -> bool:
        """Dispatch the current input line, then clear it."""
        line = self.input.take()
        self._recalling = False
        self.history.scroll_to_newest()
        self.output.scroll_to_newest()
        if self.config.echo_input and line.strip():
            self.write_output(f"{self.input.prefix}{line}")
        return self.parse_input(line)

    def suggest_command(self) -> list[str]:
        """Complete the command name being typed; lists candidates when ambiguous."""
        replacement, candidates = completion.complete_line(
            self.commands, self.aliases, self.input.text)
        if replacement is not None:
            self.input.set_text(replacement)
        if len(candidates) > 1:
            self.write_output("  ".join(candidates))
        return candidates

    # ---------------- Dispatch ----------------

    def parse_input(self, line: str | None = None) -> bool:
        """Dispatch `line` (history + command). With no argument, submits the input line."""
        if line is None:
            return self.submit()
        return handler.parse_input(self, line)

    def call_command(self, line: str) -> bool:
        """Dispatch without touching history."""
        return handler.call_command(self, line)

    # ---------------- Scripts & scheduling ----------------

    def load_script(self, name: str) -> int:
        """Queue a script's lines. Raises ScriptOpenError, leaving the queue untouched."""
        return self.loader.load_script(name)

    def load_lines(self, lines: Iterable[str], origin: str = "<lines>") -> int:
        return self.loader.load_lines(lines, origin)

    @property
    def wait_state(self) -> WaitState:
        return self.scheduler.state

    def set_wait_mode(self, mode: int, delay: int = 0) -> None:
        self.scheduler.set_wait_mode(mode, delay)

    def check_wait_mode(self) -> bool:
        return self.scheduler.check_wait_mode()

    def register_condition(
        self,
        code: int,
        tag: str,
        predicate: Callable[[WaitState], bool] | None = None,
    ) -> WaitConditionSpec:
        return self.scheduler.register_condition(code, tag, predicate)

    def run_command_queue(self) -> bool:
        """
        Host tick entry point. Advances the wait state, then dispatches at most
        one queued line. Returns True if a line was dispatched.
        """
        self.ticks += 1
        try:
            running = self.scheduler.check_wait_mode()
        except WaitConditionError as exc:
            self.write_output(f"[error] {exc}")
            return False
        if not running or not self.queue:
            return False
        self.parse_input(self.queue.pop())
        return True

    def abort_script(self) -> int:
        """Drop pending lines and any wait in progress. Returns the number dropped."""
        dropped = self.queue.clear()
        self.scheduler.clear()
        if dropped:
            logger.info("Script aborted, %d line(s) dropped", dropped)
        return dropped

    def reset(self) -> None:
        """Clear logs, input, queue and wait state."""
        self.abort_script()
        self.clear_output()
        self.clear_history()
        self.input.clear()

    # ---------------- Host helpers ----------------

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled

    def request_quit(self) -> None:
        self.quit_requested = True


def init_console(
    max_input_len: int,
    max_hist_lines: int,
    max_out_lines: int,
    *,
    config: ConsoleConfig | None = None,
    line_source: LineSource | None = None,
) -> ConsoleContext:
    """Create a console with the given bounds (other settings from `config`)."""
    base = config or ConsoleConfig()
    sized = dataclasses.replace(
        base,
        max_input_len=max_input_len,
        max_hist_lines=max_hist_lines,
        max_out_lines=max_out_lines,
    )
    for label, value in (("max_input_len", max_input_len),
                         ("max_hist_lines", max_hist_lines),
                         ("max_out_lines", max_out_lines)):
        if value < 1:
            raise ValueError(f"{label} must be >= 1")
    return ConsoleContext(sized, line_source=line_source)
