from __future__ import annotations

import io
import logging
from typing import Iterator

import pytest

from tickconsole.boot import boot_sequence
from tickconsole.config import config_from_mapping


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    logger = logging.getLogger("tickconsole")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def _missing(name: str) -> list[str]:
    raise FileNotFoundError(2, "No such file or directory", name)


def test_boot_registers_builtins_and_reports_steps() -> None:
    out = io.StringIO()
    state = boot_sequence(config_from_mapping({}), line_source=_missing, file=out)

    assert state.loaded_count == len(state.console.commands)
    assert "echo" in state.console.commands
    assert "[  OK  ] Boot complete" in out.getvalue()
    assert "[FAILED]" not in out.getvalue()


def test_boot_queues_autoexec() -> None:
    out = io.StringIO()
    state = boot_sequence(
        config_from_mapping({"AUTOEXEC": "autoexec.cfg"}),
        line_source=lambda name: ["echo booted", "# comment"],
        file=out,
    )

    assert list(state.console.queue) == ["echo booted"]
    state.console.run_command_queue()
    assert state.console.output.newest() == "booted"


def test_missing_autoexec_does_not_stop_boot() -> None:
    out = io.StringIO()
    state = boot_sequence(
        config_from_mapping({"AUTOEXEC": "autoexec.cfg"}),
        line_source=_missing,
        file=out,
    )

    assert "[ WARN ]" in out.getvalue()
    assert "Boot complete" in out.getvalue()
    assert state.console.output.newest().startswith("[error] Could not open script 'autoexec.cfg'")
    assert len(state.console.queue) == 0


def test_failed_step_is_reported_and_raised() -> None:
    out = io.StringIO()
    with pytest.raises(ModuleNotFoundError):
        boot_sequence(
            config_from_mapping({"COMMANDS_PACKAGE": "tickconsole_missing_commands"}),
            file=out,
        )
    assert "[FAILED] Register commands" in out.getvalue()
