#!/usr/bin/env python3
# tickconsole/interface/completion.py
from __future__ import annotations

"""
Command name completion.

Suggestions are a pure query over the registries: case-insensitive prefix
matching against command names and aliases, returned in sorted order. No
state is kept between calls.
"""

from typing import Iterable

from tickconsole.commands import AliasRegistry, CommandRegistry


def suggest(
    commands: CommandRegistry,
    aliases: AliasRegistry | None,
    partial: str,
) -> list[str]:
    """Return command names and aliases starting with `partial`, sorted case-insensitively."""
    prefix = partial.casefold()
    universe = [*commands.names(), *(aliases.names() if aliases else [])]
    seen: set[str] = set()
    matches: list[str] = []
    for word in universe:
        key = word.casefold()
        if key.startswith(prefix) and key not in seen:
            seen.add(key)
            matches.append(word)
    return sorted(matches, key=str.casefold)


def common_prefix(words: Iterable[str]) -> str:
    """Longest case-insensitive common prefix, spelled as in the first word."""
    items = list(words)
    if not items:
        return ""
    first = items[0]
    length = len(first)
    for word in items[1:]:
        i = 0
        limit = min(length, len(word))
        while i < limit and first[i].casefold() == word[i].casefold():
            i += 1
        length = i
    return first[:length]


def complete_line(
    commands: CommandRegistry,
    aliases: AliasRegistry | None,
    text: str,
) -> tuple[str | None, list[str]]:
    """
    Complete the command-name token of `text`.

    Returns (replacement, candidates). `replacement` is the new input text, or
    None when nothing can be completed (argument positions are not completed).
    """
    stripped = text.lstrip()
    if not stripped or any(ch.isspace() for ch in stripped):
        return None, []

    candidates = suggest(commands, aliases, stripped)
    if not candidates:
        return None, []
    if len(candidates) == 1:
        return candidates[0] + " ", candidates

    prefix = common_prefix(candidates)
    if len(prefix) > len(stripped):
        return prefix, candidates
    return None, candidates
