#!/usr/bin/env python3
# tickconsole/interface/parser.py
from __future__ import annotations

"""
Line tokenizing helpers.

Console lines are split on runs of whitespace only: no quoting, no escapes.
The first token is the command name and every other token is handed to the
callback verbatim as a string.
"""


def strip_whitespace(line: str) -> str:
    """Trim leading and trailing whitespace (including stray CR/LF)."""
    return line.strip()


def tokenize(command_line: str) -> list[str]:
    """Split a raw command line into whitespace-separated tokens."""
    return command_line.split()


def split_command(command_line: str) -> tuple[str, list[str]] | None:
    """Return (name, args) for a line, or None when it holds no tokens."""
    tokens = tokenize(command_line)
    if not tokens:
        return None
    name, *args = tokens
    return name, args
