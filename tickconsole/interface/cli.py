#!/usr/bin/env python3
# tickconsole/interface/cli.py
from __future__ import annotations

"""
Interactive frontend.

A full-screen prompt_toolkit application standing in for the host program:
it forwards raw key events to the console, ticks the command queue at a
fixed rate from an asyncio task, and redraws the output log plus the input
line after every tick.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import ConditionalContainer, HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.styles import Style

if TYPE_CHECKING:
    from tickconsole.context import ConsoleContext

logger = logging.getLogger(__name__)

STYLE = Style.from_dict({
    "output": "",
    "error": "ansired",
    "marker": "ansibrightblack",
    "prompt": "ansicyan bold",
    "status": "reverse",
})


def render_fragments(console: "ConsoleContext", rows: int) -> StyleAndTextTuples:
    """
    Build the console panel: the output window ending at the scroll cursor,
    a marker when scrolled back, then the prompt and input line with the
    cursor placed by a [SetCursorPosition] fragment.
    """
    fragments: StyleAndTextTuples = []
    body_rows = max(0, rows - 1)
    scrolled = not console.output.at_newest
    if scrolled and body_rows:
        body_rows -= 1

    for line in console.output.window(body_rows):
        style = "class:error" if line.lstrip().lower().startswith("[error]") else "class:output"
        fragments.append((style, line))
        fragments.append(("", "\n"))

    if scrolled:
        hidden = len(console.output) - 1 - (console.output.cursor or 0)
        fragments.append(("class:marker", f"-- {hidden} more line(s) below --"))
        fragments.append(("", "\n"))

    text, cursor = console.input.text, console.input.cursor
    fragments.append(("class:prompt", console.prefix))
    fragments.append(("", text[:cursor]))
    fragments.append(("[SetCursorPosition]", ""))
    fragments.append(("", text[cursor:]))
    return fragments


def render_status(console: "ConsoleContext") -> StyleAndTextTuples:
    state = console.wait_state
    if state.running:
        wait_text = "running"
    elif state.condition is not None:
        wait_text = f"waiting for {state.condition}"
    else:
        wait_text = f"waiting {state.remaining}/{state.initial}"
    return [(
        "class:status",
        f" tick {console.ticks} | {wait_text} | queued {len(console.queue)} | ctrl-t hide, ctrl-c quit ",
    )]


class ConsoleApp:
    """prompt_toolkit host driving a ConsoleContext once per tick."""

    def __init__(self, console: "ConsoleContext", tick_rate: int | None = None) -> None:
        self.console = console
        self.tick_rate = tick_rate or console.config.tick_rate
        self._page = 5

        panel = Window(
            FormattedTextControl(self._panel_fragments, show_cursor=True),
            wrap_lines=False,
        )
        status = Window(FormattedTextControl(lambda: render_status(self.console)), height=1)
        hidden = Window(FormattedTextControl(
            [("class:marker", "console hidden (ctrl-t to show)")]), height=1)

        visible = Condition(lambda: self.console.enabled)
        root = HSplit([
            ConditionalContainer(panel, filter=visible),
            ConditionalContainer(hidden, filter=~visible),
            status,
        ])
        self.app: Application[None] = Application(
            layout=Layout(root),
            key_bindings=self._key_bindings(),
            style=STYLE,
            full_screen=True,
        )

    def _panel_fragments(self) -> StyleAndTextTuples:
        rows = self.app.output.get_size().rows - 1
        self._page = max(1, rows // 2)
        return render_fragments(self.console, rows)

    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()
        console = self.console
        active = Condition(lambda: console.enabled)

        @kb.add(Keys.Any, filter=active)
        def _(event: KeyPressEvent) -> None:
            for char in event.data:
                if char.isprintable():
                    console.input_add_char(char)

        @kb.add("backspace", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.input_backspace()

        @kb.add("delete", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.input_delete()

        @kb.add("left", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.move_cursor(left=True)

        @kb.add("right", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.move_cursor(left=False)

        @kb.add("home", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.input.home()

        @kb.add("end", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.input.end()

        @kb.add("up", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.scroll_history(up=True)

        @kb.add("down", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.scroll_history(up=False)

        @kb.add("pageup", filter=active)
        def _(event: KeyPressEvent) -> None:
            for _step in range(self._page):
                console.scroll_output(up=True)

        @kb.add("pagedown", filter=active)
        def _(event: KeyPressEvent) -> None:
            for _step in range(self._page):
                console.scroll_output(up=False)

        @kb.add("tab", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.suggest_command()

        @kb.add("enter", filter=active)
        def _(event: KeyPressEvent) -> None:
            console.submit()

        @kb.add("c-t")
        def _(event: KeyPressEvent) -> None:
            console.toggle()

        @kb.add("c-c")
        @kb.add("c-d")
        def _(event: KeyPressEvent) -> None:
            event.app.exit()

        return kb

    async def _tick_loop(self) -> None:
        interval = 1.0 / self.tick_rate
        while True:
            self.console.run_command_queue()
            if self.console.quit_requested:
                self.app.exit()
                return
            self.app.invalidate()
            await asyncio.sleep(interval)

    def _start_ticking(self) -> None:
        self.app.create_background_task(self._tick_loop())

    def run(self) -> None:
        logger.debug("Frontend started at %d ticks/s", self.tick_rate)
        self.app.run(pre_run=self._start_ticking)
