from __future__ import annotations

from pathlib import Path

import pytest

from tickconsole import ConsoleContext
from tickconsole.scheduler import (
    CommandQueue,
    ScriptLoader,
    ScriptOpenError,
    file_line_source,
)


def test_blank_lines_are_skipped(console: ConsoleContext, scripts: dict[str, list[str]]) -> None:
    scripts["setup.cfg"] = ["one", "", "two", "three", "   ", "four", "five"]

    assert console.load_script("setup.cfg") == 5
    assert list(console.queue) == ["one", "two", "three", "four", "five"]


def test_comments_are_skipped_and_lines_trimmed(console: ConsoleContext, scripts: dict[str, list[str]]) -> None:
    scripts["setup.cfg"] = ["# header", "  echo a  ", "// note", "echo b"]

    assert console.load_script("setup.cfg") == 2
    assert list(console.queue) == ["echo a", "echo b"]


def test_missing_script_leaves_queue_unchanged(console: ConsoleContext) -> None:
    console.load_lines(["pending"])

    with pytest.raises(ScriptOpenError) as info:
        console.load_script("missing.cfg")

    assert info.value.name == "missing.cfg"
    assert "missing.cfg" in str(info.value)
    assert list(console.queue) == ["pending"]


def test_file_source_reads_relative_to_base(tmp_path: Path) -> None:
    (tmp_path / "boot.cfg").write_text("echo one\n\n# skip\necho two\r\n", encoding="utf-8")
    queue = CommandQueue()
    loader = ScriptLoader(queue, file_line_source(tmp_path))

    assert loader.load_script("boot.cfg") == 2
    assert list(queue) == ["echo one", "echo two"]


def test_undecodable_file_is_an_open_error(tmp_path: Path) -> None:
    (tmp_path / "bad.cfg").write_bytes(b"echo \xff\xfe\n")
    queue = CommandQueue()
    loader = ScriptLoader(queue, file_line_source(tmp_path))

    with pytest.raises(ScriptOpenError):
        loader.load_script("bad.cfg")
    assert len(queue) == 0


def test_custom_comment_prefixes() -> None:
    queue = CommandQueue()
    loader = ScriptLoader(queue, lambda name: [], comment_prefixes=(";",))
    assert loader.filter_lines(["; note", "# kept", "x"]) == ["# kept", "x"]


def test_queue_is_fifo() -> None:
    queue = CommandQueue()
    assert queue.extend(["a", "b"]) == 2
    queue.append("c")
    assert queue.peek() == "a"
    assert [queue.pop(), queue.pop(), queue.pop()] == ["a", "b", "c"]
    assert not queue
