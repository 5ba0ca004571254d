#!/usr/bin/env python3
# tickconsole/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the console.

Each step prints a Linux-style [  OK  ] / [FAILED] status line. A failed
step is reported and re-raised; the autoexec script is the exception, since
a missing script must not stop the host from starting.
"""

import logging
import platform
from dataclasses import dataclass
from typing import Any, Callable, Optional, TextIO

from tickconsole.config import ConsoleConfig, load_config
from tickconsole.context import ConsoleContext, init_console
from tickconsole.interface import load_commands
from tickconsole.scheduler import LineSource, ScriptOpenError
from tickconsole.ui import colorize, enable_windows_vt, init_logger, print_line


@dataclass(slots=True)
class BootState:
    console: ConsoleContext
    logger: logging.Logger
    config: ConsoleConfig
    loaded_count: int


def _step(label: str, fn: Callable[[], Any], *, file: Optional[TextIO] = None) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red"), file=file
        )
        raise
    print_line(colorize(f"[  OK  ] {label}", "green"), file=file)
    return out


def boot_sequence(
    config: Optional[ConsoleConfig] = None,
    *,
    line_source: Optional[LineSource] = None,
    file: Optional[TextIO] = None,
) -> BootState:
    # ---------- terminal + env ----------
    _step("Enable ANSI sequences", enable_windows_vt, file=file)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        file=file,
    )

    # ---------- config ----------
    if config is None:
        config = _step("Load configuration", load_config, file=file)

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "tickconsole",
            level=config.log_level or logging.WARNING,
            logfile=config.log_file_path,
        ),
        file=file,
    )

    # ---------- console ----------
    console = _step(
        f"Initialize console (input {config.max_input_len}, "
        f"history {config.max_hist_lines}, output {config.max_out_lines})",
        lambda: init_console(
            config.max_input_len,
            config.max_hist_lines,
            config.max_out_lines,
            config=config,
            line_source=line_source,
        ),
        file=file,
    )

    loaded_count = _step(
        f"Register commands from '{config.commands_package}'",
        lambda: load_commands(console, config.commands_package),
        file=file,
    )

    if config.autoexec:
        try:
            queued = console.load_script(config.autoexec)
        except ScriptOpenError as exc:
            print_line(colorize(f"[ WARN ] {exc}", "yellow"), file=file)
            console.write_output(f"[error] {exc}")
        else:
            print_line(colorize(
                f"[  OK  ] Queue autoexec '{config.autoexec}' ({queued} line(s))", "green"), file=file)

    _step("Boot complete", lambda: None, file=file)

    return BootState(
        console=console,
        logger=logger,
        config=config,
        loaded_count=loaded_count,
    )
