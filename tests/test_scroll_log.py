from __future__ import annotations

from tickconsole.buffers import ScrollableLog


def _filled(capacity: int, count: int) -> ScrollableLog:
    log = ScrollableLog(capacity)
    for i in range(count):
        log.write(f"line {i}")
    return log


def test_keeps_last_lines_in_order() -> None:
    log = _filled(5, 12)
    assert len(log) == 5
    assert log.lines() == [f"line {i}" for i in range(7, 12)]


def test_cursor_follows_newest_while_at_bottom() -> None:
    log = _filled(3, 2)
    assert log.current() == "line 1"
    log.write("line 2")
    assert log.current() == "line 2"
    assert log.at_newest


def test_scroll_up_stops_at_oldest() -> None:
    log = _filled(4, 4)
    assert log.scroll(up=True)
    assert log.scroll(up=True)
    assert log.scroll(up=True)
    assert log.current() == "line 0"
    assert log.scroll(up=True) is False
    assert log.current() == "line 0"
    assert log.lines() == [f"line {i}" for i in range(4)]


def test_scroll_down_stops_at_newest() -> None:
    log = _filled(4, 4)
    assert log.scroll(up=False) is False
    log.scroll(up=True)
    assert log.scroll(up=False) is True
    assert log.at_newest
    assert log.scroll(up=False) is False


def test_scroll_on_empty_log_is_noop() -> None:
    log = ScrollableLog(3)
    assert log.scroll(up=True) is False
    assert log.cursor is None
    assert log.current() is None


def test_parked_cursor_keeps_its_line_when_older_lines_evict() -> None:
    log = _filled(3, 3)
    log.scroll(up=True)
    assert log.current() == "line 1"

    log.write("line 3")
    assert log.current() == "line 1"
    assert log.cursor == 0
    assert not log.at_newest


def test_cursor_clamps_forward_when_its_line_is_evicted() -> None:
    log = _filled(3, 3)
    log.scroll(up=True)
    log.scroll(up=True)
    assert log.current() == "line 0"

    log.write("line 3")
    assert log.cursor == 0
    assert log.current() == "line 1"

    log.write("line 4")
    assert log.current() == "line 2"


def test_clear_resets_cursor() -> None:
    log = _filled(3, 3)
    log.scroll(up=True)
    log.clear()
    assert len(log) == 0
    assert log.at_newest
    log.write("fresh")
    assert log.current() == "fresh"


def test_window_ends_at_cursor() -> None:
    log = _filled(10, 6)
    assert log.window(3) == ["line 3", "line 4", "line 5"]
    log.scroll(up=True)
    log.scroll(up=True)
    assert log.window(3) == ["line 1", "line 2", "line 3"]
    assert log.window(0) == []
