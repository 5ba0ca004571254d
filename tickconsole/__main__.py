#!/usr/bin/env python3
# tickconsole/__main__.py
from __future__ import annotations
"""Demo host for the console."""

import argparse
import dataclasses
import sys

from tickconsole.boot import boot_sequence
from tickconsole.config import load_config
from tickconsole.interface import ConsoleApp
from tickconsole.scheduler import ScriptOpenError

DESCRIPTION = "Boot the console and run it in a full-screen terminal app."


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="tickconsole", description=DESCRIPTION)
    parser.add_argument("scripts", nargs="*", help="script files to queue at start-up")
    parser.add_argument("--tick-rate", type=int, help="host ticks per second")
    args = parser.parse_args(argv)

    config = load_config()
    if args.tick_rate:
        config = dataclasses.replace(config, tick_rate=max(1, args.tick_rate))

    state = boot_sequence(config)
    console = state.console
    for name in args.scripts:
        try:
            console.load_script(name)
        except ScriptOpenError as exc:
            console.write_output(f"[error] {exc}")

    console.write_output("Console ready. Type 'help' for a list of commands.")
    ConsoleApp(console).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
