from __future__ import annotations

from typing import Iterable

import pytest

from tickconsole import ConsoleContext, init_console


@pytest.fixture
def scripts() -> dict[str, list[str]]:
    """In-memory script files served by the console's line source."""
    return {}


@pytest.fixture
def console(scripts: dict[str, list[str]]) -> ConsoleContext:
    def source(name: str) -> Iterable[str]:
        try:
            return list(scripts[name])
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", name) from None

    return init_console(128, 50, 100, line_source=source)


@pytest.fixture
def loaded_console(console: ConsoleContext) -> ConsoleContext:
    from tickconsole.interface import load_commands

    load_commands(console)
    return console
