from __future__ import annotations

import pytest

from tickconsole import ConsoleContext
from tickconsole.scheduler import (
    TICKS,
    Running,
    WaitCondition,
    WaitConditionError,
    WaitScheduler,
    WaitTicks,
)


def test_tick_wait_counts_down_then_resumes() -> None:
    scheduler = WaitScheduler()
    scheduler.set_wait_mode(TICKS, 3)

    seen = []
    for _ in range(3):
        assert scheduler.check_wait_mode() is False
        seen.append(scheduler.state.remaining)
    assert seen == [2, 1, 0]

    assert scheduler.check_wait_mode() is True
    assert scheduler.state.variant == Running()


def test_zero_tick_wait_resumes_next_check() -> None:
    scheduler = WaitScheduler()
    scheduler.set_wait_mode(TICKS, 0)
    assert scheduler.state.variant == WaitTicks(0)
    assert scheduler.check_wait_mode() is True


def test_mode_zero_forces_resume() -> None:
    scheduler = WaitScheduler()
    scheduler.set_wait_mode(TICKS, 50)
    scheduler.set_wait_mode(0, 0)
    assert scheduler.state.running
    assert scheduler.check_wait_mode() is True


def test_rejects_unknown_and_reserved_modes() -> None:
    scheduler = WaitScheduler()
    with pytest.raises(ValueError):
        scheduler.set_wait_mode(7, 1)
    with pytest.raises(ValueError):
        scheduler.set_wait_mode(TICKS, -1)
    with pytest.raises(ValueError):
        scheduler.register_condition(1, "ticks")
    scheduler.register_condition(2, "loaded")
    with pytest.raises(ValueError):
        scheduler.register_condition(3, "LOADED")
    with pytest.raises(KeyError):
        scheduler.condition_code("missing")


def test_condition_with_predicate_releases_when_true() -> None:
    flags = {"loaded": False}
    scheduler = WaitScheduler()
    scheduler.register_condition(2, "loaded", lambda state: flags["loaded"])
    scheduler.wait_for("loaded")

    assert scheduler.state.variant == WaitCondition("loaded")
    assert scheduler.check_wait_mode() is False
    assert scheduler.check_wait_mode() is False
    flags["loaded"] = True
    assert scheduler.check_wait_mode() is True
    assert not scheduler.waiting


def test_condition_without_predicate_waits_for_satisfy() -> None:
    scheduler = WaitScheduler()
    scheduler.register_condition(5, "door")
    scheduler.set_wait_mode(5, 2)
    assert scheduler.state.remaining == 2

    assert scheduler.check_wait_mode() is False
    assert scheduler.satisfy("window") is False
    assert scheduler.satisfy("Door") is True
    assert scheduler.check_wait_mode() is True


def test_queue_held_for_armed_ticks(console: ConsoleContext) -> None:
    ran = []
    console.register_command("pause", lambda c, a: c.set_wait_mode(TICKS, 3))
    console.register_command("mark", lambda c, a: ran.append(a[0]))
    console.load_lines(["pause", "mark after"])

    assert console.run_command_queue() is True

    remaining = []
    for _ in range(3):
        assert console.run_command_queue() is False
        remaining.append(console.wait_state.remaining)
    assert remaining == [2, 1, 0]
    assert ran == []

    assert console.run_command_queue() is True
    assert ran == ["after"]
    assert console.wait_state.running
    assert console.ticks == 5


def test_one_line_per_tick(console: ConsoleContext) -> None:
    ran = []
    console.register_command("mark", lambda c, a: ran.append(a[0]))
    console.load_lines(["mark 1", "mark 2", "mark 3"])

    console.run_command_queue()
    assert ran == ["1"]
    console.run_command_queue()
    console.run_command_queue()
    assert ran == ["1", "2", "3"]
    assert console.run_command_queue() is False


def test_trailing_tick_wait_holds_next_script(console: ConsoleContext) -> None:
    ran = []
    console.register_command("pause", lambda c, a: c.set_wait_mode(TICKS, 5))
    console.register_command("mark", lambda c, a: ran.append(a[0]))
    console.load_lines(["pause"])

    console.run_command_queue()
    console.run_command_queue()
    console.run_command_queue()
    assert console.wait_state.remaining == 3

    console.load_lines(["mark next"])
    assert console.run_command_queue() is False
    assert ran == []
    assert console.wait_state.remaining == 2

    for _ in range(3):
        console.run_command_queue()
    assert ran == ["next"]


def test_trailing_condition_wait_survives_empty_queue(console: ConsoleContext) -> None:
    console.register_condition(2, "ready")
    console.load_lines(["waitfor-ready"])
    console.register_command("waitfor-ready", lambda c, a: c.scheduler.wait_for("ready"))

    console.run_command_queue()
    for _ in range(5):
        assert console.run_command_queue() is False
    assert console.wait_state.condition == "ready"

    console.scheduler.satisfy("ready")
    assert console.wait_state.running


def test_raising_condition_is_reported_once_and_stays_armed(console: ConsoleContext) -> None:
    def broken(state):
        raise RuntimeError("sim gone")

    ran = []
    console.register_command("mark", lambda c, a: ran.append(a[0]))
    console.register_condition(2, "ready", broken)
    console.scheduler.wait_for("ready")
    console.load_lines(["mark after"])

    assert console.run_command_queue() is False
    assert console.output.newest() == "[error] Wait condition 'ready' failed: RuntimeError: sim gone"
    assert console.wait_state.condition == "ready"

    assert console.run_command_queue() is False
    assert len(console.output) == 1
    assert ran == []

    console.set_wait_mode(0, 0)
    assert console.run_command_queue() is True
    assert ran == ["after"]


def test_scheduler_wraps_predicate_errors() -> None:
    scheduler = WaitScheduler()
    scheduler.register_condition(3, "loaded", lambda state: 1 / 0)
    scheduler.wait_for("loaded")

    with pytest.raises(WaitConditionError) as info:
        scheduler.check_wait_mode()
    assert info.value.tag == "loaded"
    assert isinstance(info.value.cause, ZeroDivisionError)
    assert scheduler.state.faulted

    assert scheduler.check_wait_mode() is False
    scheduler.wait_for("loaded")
    assert not scheduler.state.faulted


def test_scripts_loaded_during_wait_append_without_touching_it(console: ConsoleContext) -> None:
    console.load_lines(["a", "b"])
    console.set_wait_mode(TICKS, 4)

    console.load_lines(["c"])

    assert list(console.queue) == ["a", "b", "c"]
    assert console.wait_state.remaining == 4


def test_abort_script_drops_queue_and_wait(console: ConsoleContext) -> None:
    console.load_lines(["a", "b"])
    console.set_wait_mode(TICKS, 4)

    assert console.abort_script() == 2
    assert len(console.queue) == 0
    assert console.wait_state.running
