#!/usr/bin/env python3
# tickconsole/interface/__init__.py
from __future__ import annotations

"""
Package for line parsing, command dispatch and the interactive frontend.

Provides:
- Whitespace tokenizer.
- Stateless prefix completion over the registries.
- Command dispatcher and help formatting.
- Dynamic command loader for the built-in commands package.
- prompt_toolkit frontend acting as a demo host.
"""


from .parser import split_command, strip_whitespace, tokenize
from .completion import common_prefix, complete_line, suggest
from .handler import (
    HELP_TEXT,
    CommandNotFound,
    call_command,
    format_command_help,
    list_aliases,
    list_categories,
    list_commands,
    parse_input,
)
from .loader import DEFAULT_COMMANDS_PACKAGE, load_commands, register_commands
from .cli import ConsoleApp, render_fragments, render_status

__all__ = [
    # parser
    "split_command",
    "strip_whitespace",
    "tokenize",
    # completion
    "common_prefix",
    "complete_line",
    "suggest",
    # handler
    "HELP_TEXT",
    "CommandNotFound",
    "call_command",
    "format_command_help",
    "list_aliases",
    "list_categories",
    "list_commands",
    "parse_input",
    # loader
    "DEFAULT_COMMANDS_PACKAGE",
    "load_commands",
    "register_commands",
    # cli
    "ConsoleApp",
    "render_fragments",
    "render_status",
]
