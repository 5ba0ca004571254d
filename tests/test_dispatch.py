from __future__ import annotations

from tickconsole import ConsoleContext, init_console
from tickconsole.commands import CommandResult


def _echo(console: ConsoleContext, args) -> None:
    console.write_output(args[0])


def test_echo_end_to_end() -> None:
    console = init_console(128, 50, 100)
    console.register_command("echo", _echo, "Write one argument.")

    assert console.parse_input("echo hello") is True
    assert console.output.newest() == "hello"
    assert console.history.newest() == "echo hello"


def test_blank_lines_dispatch_nothing(console: ConsoleContext) -> None:
    calls = []
    console.register_command("probe", lambda c, a: calls.append(a))

    assert console.parse_input("") is False
    assert console.parse_input("   ") is False
    assert console.parse_input("\t\r\n") is False
    assert calls == []
    assert len(console.history) == 0
    assert len(console.output) == 0


def test_surrounding_whitespace_is_stripped(console: ConsoleContext) -> None:
    calls = []
    console.register_command("probe", lambda c, a: calls.append(list(a)))

    console.parse_input("   probe  one   two  ")
    assert calls == [["one", "two"]]


def test_command_names_are_case_insensitive(console: ConsoleContext) -> None:
    console.register_command("echo", _echo)
    console.parse_input("ECHO loud")
    assert console.output.newest() == "loud"


def test_alias_dispatches_like_its_target(console: ConsoleContext) -> None:
    console.register_command("quit", lambda c, a: c.write_output("bye"))
    console.register_alias("q", "quit")

    console.parse_input("quit")
    console.parse_input("q")

    assert console.output.lines() == ["bye", "bye"]
    assert console.history.lines() == ["quit", "q"]


def test_unknown_command_reports_and_keeps_history(console: ConsoleContext) -> None:
    assert console.parse_input("frobnicate now") is False
    assert console.output.newest().startswith("Unknown command: frobnicate")
    assert "Type 'help'" in console.output.newest()
    assert console.history.newest() == "frobnicate now"


def test_alias_to_missing_target_reports_not_found(console: ConsoleContext) -> None:
    console.register_alias("zz", "sleep")
    assert console.parse_input("zz") is False
    assert "Unknown command: sleep (via alias 'zz')" in console.output.newest()


def test_unknown_command_suggests_close_names(console: ConsoleContext) -> None:
    console.register_command("echo", _echo)
    console.register_command("echoall", _echo)
    console.parse_input("ech")
    assert "Did you mean: echo, echoall?" in console.output.newest()


def test_callback_exception_is_reported(console: ConsoleContext) -> None:
    def boom(c, args):
        raise RuntimeError("boom")

    console.register_command("boom", boom)
    assert console.parse_input("boom") is False
    assert console.output.newest() == "[error] RuntimeError: boom"

    console.register_command("echo", _echo)
    assert console.parse_input("echo still-alive") is True
    assert console.output.newest() == "still-alive"


def test_return_values_are_written(console: ConsoleContext) -> None:
    console.register_command("one", lambda c, a: "single")
    console.register_command("many", lambda c, a: ["a", "b"])
    console.register_command("fail", lambda c, a: CommandResult(ok=False, message="nope"))

    assert console.parse_input("one") is True
    assert console.parse_input("many") is True
    assert console.parse_input("fail") is False
    assert console.output.lines() == ["single", "a", "b", "[error] nope"]


def test_multiline_output_splits_into_entries(console: ConsoleContext) -> None:
    console.write_output("first\nsecond")
    assert console.output.lines() == ["first", "second"]


def test_submit_echoes_and_clears_input(console: ConsoleContext) -> None:
    console.register_command("echo", _echo)
    for ch in "echo hi":
        console.input_add_char(ch)

    assert console.parse_input() is True
    assert console.output.lines() == ["> echo hi", "hi"]
    assert console.input.text == ""
    assert console.history.newest() == "echo hi"


def test_history_recall(console: ConsoleContext) -> None:
    console.register_command("echo", _echo)
    console.parse_input("echo a")
    console.parse_input("echo b")

    assert console.scroll_history(up=True)
    assert console.input.text == "echo b"
    assert console.scroll_history(up=True)
    assert console.input.text == "echo a"
    assert console.scroll_history(up=True) is False
    assert console.input.text == "echo a"

    assert console.scroll_history(up=False)
    assert console.input.text == "echo b"
    assert console.scroll_history(up=False)
    assert console.input.text == ""


def test_suggest_command_completes_input(loaded_console: ConsoleContext) -> None:
    console = loaded_console
    console.input.set_text("cm")
    assert console.suggest_command() == ["cmdlist"]
    assert console.input.text == "cmdlist "

    console.input.set_text("clea")
    assert console.suggest_command() == ["clear", "clearhist"]
    assert console.input.text == "clear"
    assert console.output.newest() == "clear  clearhist"


def test_reset_clears_everything(console: ConsoleContext) -> None:
    console.register_command("echo", _echo)
    console.parse_input("echo x")
    console.load_lines(["echo y"])
    console.set_wait_mode(1, 5)
    console.input.set_text("partial")

    console.reset()

    assert len(console.output) == 0
    assert len(console.history) == 0
    assert len(console.queue) == 0
    assert console.wait_state.running
    assert console.input.text == ""


def test_bytes_result_is_decoded(console: ConsoleContext) -> None:
    console.register_command("raw", lambda c, a: b"caf\xc3\xa9 \xff")
    assert console.parse_input("raw") is True
    assert console.output.newest() == "caf\u00e9 \ufffd"
